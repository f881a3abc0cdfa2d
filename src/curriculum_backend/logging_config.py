import logging

from curriculum_backend.settings import settings


def setup_logging():
    """
    Console logging for the API process and the CLI.
    Security events go to their own logger so they can be routed separately.
    """
    level = settings.LOG_LEVEL

    fmt = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"

    root = logging.getLogger()
    root.setLevel(level)

    # Prevent duplicate handlers
    if root.handlers:
        return

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter(fmt=fmt, datefmt=datefmt))

    root.addHandler(console)
    logging.getLogger("curriculum_backend.security").setLevel(logging.INFO)
