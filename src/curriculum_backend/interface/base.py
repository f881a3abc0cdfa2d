from abc import ABC
from datetime import datetime
from typing import Optional, Any
from pydantic import BaseModel, Field

class ListQuery(BaseModel):
    skip: Optional[int] = Field(None, ge=0)
    limit: Optional[int] = Field(None, ge=1)

class EntityInterface(ABC):
    create: BaseModel = None
    get: BaseModel = None
    list: BaseModel = None
    update: BaseModel = None
    query: BaseModel = ListQuery
    endpoint: str = None
    entity_name: str = None
    model: Any = None
    repository: Any = None

    # Text column matched by the search operation
    search_field: str = None
    # Mirror writes into the secondary search index
    indexed: bool = True
    # Object with check(entity, login) run before create/update
    validator: Any = None

class BaseEntityList(BaseModel):
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Update timestamp")

class BaseEntityGet(BaseEntityList):
    pass
