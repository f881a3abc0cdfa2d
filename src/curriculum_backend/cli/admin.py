import asyncio
import click

from curriculum_backend.database import get_db, get_engine
from curriculum_backend.interface import ENTITY_INTERFACES
from curriculum_backend.interface.tokens import encrypt_password
from curriculum_backend.model.base import Base
from curriculum_backend.model.role import KNOWN_ROLE_IDS, ROLE_USER
from curriculum_backend.redis_cache import get_redis_client
from curriculum_backend.repositories.base import ConstraintError, DuplicateError
from curriculum_backend.repositories.user import UserRepository
from curriculum_backend.search.index import SearchIndex


AVAILABLE_ENDPOINTS = [interface.endpoint for interface in ENTITY_INTERFACES]


@click.command()
def init_db():
    """Create all tables and the USER/ADMIN roles."""
    Base.metadata.create_all(bind=get_engine())

    with next(get_db()) as db:
        UserRepository(db).ensure_roles(KNOWN_ROLE_IDS)

    click.echo("Database initialized")


@click.command()
@click.option("--login", "-l", "login", prompt=True)
@click.option("--password", "-p", "password", prompt=True, hide_input=True, confirmation_prompt=True)
@click.option("--email", "-e", "email", default=None)
@click.option("--first-name", "first_name", default=None)
@click.option("--last-name", "last_name", default=None)
@click.option("--role", "-r", "roles", multiple=True, type=click.Choice(KNOWN_ROLE_IDS), default=[ROLE_USER], show_default=True)
def create_user(login, password, email, first_name, last_name, roles):
    """Create an account, e.g. the reserved admin login on a fresh install."""

    with next(get_db()) as db:
        repository = UserRepository(db)

        if repository.find_by_login(login) is not None:
            raise click.ClickException(f"User [{login}] already exists")

        try:
            user = repository.create({
                "login": login,
                "password": encrypt_password(password),
                "email": email,
                "first_name": first_name,
                "last_name": last_name,
            })
        except (DuplicateError, ConstraintError) as e:
            raise click.ClickException(str(e))

        repository.grant_roles(user, roles)

        click.echo(f"Created user [{user.login}] with roles {sorted(user.role_ids)}")


async def reindex_interface(db, interface, cache) -> int:
    search_index = SearchIndex(cache, interface.endpoint)
    await search_index.clear()

    count = 0
    for item in interface.repository(db).list_with_relationships():
        document = interface.get.model_validate(item, from_attributes=True)
        await search_index.index(document.id, document.model_dump(mode="json"))
        count += 1
    return count


async def reindex_all(endpoints) -> dict:
    cache = await get_redis_client()
    counts = {}

    with next(get_db()) as db:
        for interface in ENTITY_INTERFACES:
            if interface.endpoint not in endpoints or not interface.indexed:
                continue
            counts[interface.endpoint] = await reindex_interface(db, interface, cache)

    return counts


@click.command()
@click.option("--entity", "-t", "entities", multiple=True, type=click.Choice(AVAILABLE_ENDPOINTS))
def reindex(entities):
    """Rebuild the search index from the store (all entity types by default)."""
    endpoints = list(entities) if entities else AVAILABLE_ENDPOINTS

    counts = asyncio.run(reindex_all(endpoints))

    for endpoint, count in counts.items():
        click.echo(f"{endpoint}: {count} documents indexed")
