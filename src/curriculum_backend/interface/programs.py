from pydantic import BaseModel, ConfigDict
from typing import Optional
from curriculum_backend.interface.base import BaseEntityGet, EntityInterface, ListQuery
from curriculum_backend.model.program import Program
from curriculum_backend.repositories.program import ProgramRepository

class ProgramCreate(BaseModel):
    id: Optional[int] = None
    name: str
    description: Optional[str] = None
    url: Optional[str] = None

class ProgramUpdate(BaseModel):
    id: Optional[int] = None
    name: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None

class ProgramGet(BaseEntityGet):
    id: int
    name: str
    description: Optional[str] = None
    url: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

class ProgramList(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    url: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

class ProgramInterface(EntityInterface):
    create = ProgramCreate
    get = ProgramGet
    list = ProgramList
    update = ProgramUpdate
    query = ListQuery
    endpoint = "programs"
    entity_name = "program"
    model = Program
    repository = ProgramRepository
    search_field = "name"
