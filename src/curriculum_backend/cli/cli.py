import click

from curriculum_backend.logging_config import setup_logging
from .admin import create_user, init_db, reindex

@click.group()
def cli():
    setup_logging()

cli.add_command(init_db,"init-db")
cli.add_command(create_user,"create-user")
cli.add_command(reindex,"reindex")

if __name__ == '__main__':
    cli()
