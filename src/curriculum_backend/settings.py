import os
import threading

class BackendSettings:
    _instance = None
    _lock = threading.Lock()

    def __init__(self):
        self.DEBUG_MODE = os.environ.get("DEBUG_MODE","development")
        self.LOG_LEVEL = os.environ.get("LOG_LEVEL","INFO").upper()
        # Login that bypasses enrollment ownership scoping
        self.ADMIN_LOGIN = os.environ.get("ADMIN_LOGIN","admin")
        # Secondary search index backend: "memory" or "redis"
        self.SEARCH_INDEX_BACKEND = os.environ.get("SEARCH_INDEX_BACKEND","memory").lower()

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super(BackendSettings, cls).__new__(cls)
        return cls._instance

settings = BackendSettings()
