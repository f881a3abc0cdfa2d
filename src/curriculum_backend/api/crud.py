"""
Access-controlled query engine.

Every read and write on Program, Course and Enrollment goes through
these functions. Each one passes the permission gate first, then talks
to the entity's repository and, for writes, to the search index.
"""

import logging
from typing import Any, List, Optional, Tuple, Type

from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from curriculum_backend.api.exceptions import (
    BadRequestException,
    InternalServerException,
    NotFoundException,
    ValidationException,
)
from curriculum_backend.interface.base import EntityInterface, ListQuery
from curriculum_backend.permissions.auth import get_current_login
from curriculum_backend.permissions.core import check_entity_access, check_permissions
from curriculum_backend.permissions.principal import Principal
from curriculum_backend.repositories.base import ConstraintError, DuplicateError, NotFoundError, RepositoryError
from curriculum_backend.search.index import SearchIndex

logger = logging.getLogger(__name__)


async def index_entity(search_index: Optional[SearchIndex], interface: Type[EntityInterface], entity: BaseModel):
    """Best-effort upsert into the search index; the store write already happened."""
    if search_index is None or not interface.indexed:
        return

    try:
        await search_index.index(entity.id, entity.model_dump(mode="json"))
    except Exception:
        logger.warning(f"Search index upsert failed for {interface.entity_name} {entity.id}", exc_info=True)


async def unindex_entity(search_index: Optional[SearchIndex], interface: Type[EntityInterface], id: Any):
    """Best-effort delete from the search index; a failure leaves the index stale."""
    if search_index is None or not interface.indexed:
        return

    try:
        await search_index.delete_by_id(id)
    except Exception:
        logger.warning(f"Search index delete failed for {interface.entity_name} {id}", exc_info=True)


def _run_validator(permissions: Principal, entity: BaseModel, interface: Type[EntityInterface], validator: Any):
    validator = validator if validator is not None else interface.validator
    if validator is not None:
        validator.check(entity, get_current_login(permissions))


async def create_db(permissions: Principal, db: Session, entity: BaseModel, interface: Type[EntityInterface],
                    search_index: Optional[SearchIndex] = None, validator: Any = None):

    logger.debug(f"Request to save {interface.entity_name} : {entity}")

    check_permissions(permissions, interface.model, "create")

    if entity.id is not None:
        raise ValidationException(
            f"A new {interface.entity_name} cannot already have an ID", interface.entity_name, "idexists"
        )

    _run_validator(permissions, entity, interface, validator)

    model_dump = entity.model_dump(exclude_unset=True)
    model_dump.pop("id", None)

    try:
        db_item = interface.repository(db).create(model_dump)
        response = interface.get.model_validate(db_item, from_attributes=True)
    except (DuplicateError, ConstraintError) as e:
        raise BadRequestException(detail=str(e))
    except NotFoundError as e:
        raise NotFoundException(detail=str(e))
    except RepositoryError as e:
        logger.error(f"Failed to create {interface.entity_name}: {e}")
        raise InternalServerException(detail=f"Failed to create {interface.entity_name}")

    await index_entity(search_index, interface, response)

    return response


async def update_db(permissions: Principal, db: Session, entity: BaseModel, interface: Type[EntityInterface],
                    search_index: Optional[SearchIndex] = None, validator: Any = None):

    logger.debug(f"Request to update {interface.entity_name} : {entity}")

    check_permissions(permissions, interface.model, "update")

    if entity.id is None:
        raise ValidationException("Invalid id", interface.entity_name, "idnull")

    _run_validator(permissions, entity, interface, validator)

    model_dump = entity.model_dump(exclude_unset=True)
    model_dump.pop("id", None)

    try:
        db_item = interface.repository(db).update(entity.id, model_dump)
        response = interface.get.model_validate(db_item, from_attributes=True)
    except NotFoundError as e:
        raise NotFoundException(detail=str(e))
    except (DuplicateError, ConstraintError) as e:
        raise BadRequestException(detail=str(e))
    except RepositoryError as e:
        logger.error(f"Failed to update {interface.entity_name}: {e}")
        raise InternalServerException(detail=f"Failed to update {interface.entity_name}")

    await index_entity(search_index, interface, response)

    return response


async def get_id_db(permissions: Principal, db: Session, id: int, interface: Type[EntityInterface]):

    logger.debug(f"Request to get {interface.entity_name} : {id}")

    check_permissions(permissions, interface.model, "get")

    item = interface.repository(db).get_with_relationships(id)

    check_entity_access(permissions, interface.model, "get", item)

    if item is None:
        raise NotFoundException(detail=f"{interface.model.__name__} with id [{id}] not found")

    return interface.get.model_validate(item, from_attributes=True)


async def list_db(permissions: Principal, db: Session, params: Optional[ListQuery],
                  interface: Type[EntityInterface]) -> Tuple[List[BaseModel], int]:

    logger.debug(f"Request to get all {interface.endpoint}")

    handler = check_permissions(permissions, interface.model, "list")
    owner_login = handler.owner_scope(permissions, "list")

    limit = params.limit if params is not None else None
    skip = params.skip if params is not None else None

    repository = interface.repository(db)

    if owner_login is None:
        items = repository.list_with_relationships(limit=limit, offset=skip)
        total = repository.count()
    else:
        items = repository.list_owned_by(owner_login, limit=limit, offset=skip)
        total = repository.count_owned_by(owner_login)

    return [interface.list.model_validate(item, from_attributes=True) for item in items], total


async def delete_db(permissions: Principal, db: Session, id: int, interface: Type[EntityInterface],
                    search_index: Optional[SearchIndex] = None):

    logger.debug(f"Request to delete {interface.entity_name} : {id}")

    check_permissions(permissions, interface.model, "delete")

    try:
        interface.repository(db).delete(id)
    except NotFoundError as e:
        raise NotFoundException(detail=str(e))
    except RepositoryError as e:
        logger.error(f"Failed to delete {interface.entity_name} {id}: {e}")
        raise BadRequestException(
            detail=f"Cannot delete this {interface.entity_name} because other records depend on it."
        )

    await unindex_entity(search_index, interface, id)

    return {"ok": True}


async def search_db(permissions: Principal, db: Session, query: str, interface: Type[EntityInterface]) -> List[BaseModel]:

    logger.debug(f"Request to search {interface.endpoint} for query {query}")

    check_permissions(permissions, interface.model, "search")

    try:
        items = interface.repository(db).search(interface.search_field, query)
        return [interface.list.model_validate(item, from_attributes=True) for item in items]
    except SQLAlchemyError as e:
        logger.error(f"Search on {interface.endpoint} failed: {e}", exc_info=True)
        return []
