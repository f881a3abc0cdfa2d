from pydantic import BaseModel, ConfigDict
from typing import Optional
from curriculum_backend.interface.base import BaseEntityGet, EntityInterface, ListQuery
from curriculum_backend.interface.programs import ProgramList
from curriculum_backend.model.course import Course
from curriculum_backend.repositories.course import CourseRepository
from curriculum_backend.validation.course import CourseValidator
from curriculum_backend.validation.events import LoggingSecurityEventObserver

class CourseCreate(BaseModel):
    id: Optional[int] = None
    title: str
    description: Optional[str] = None
    program_id: Optional[int] = None

class CourseUpdate(BaseModel):
    id: Optional[int] = None
    title: Optional[str] = None
    description: Optional[str] = None
    program_id: Optional[int] = None

class CourseGet(BaseEntityGet):
    id: int
    title: str
    description: Optional[str] = None
    program_id: Optional[int] = None

    program: Optional[ProgramList] = None

    model_config = ConfigDict(from_attributes=True)

class CourseList(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    program_id: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)

class CourseInterface(EntityInterface):
    create = CourseCreate
    get = CourseGet
    list = CourseGet
    update = CourseUpdate
    query = ListQuery
    endpoint = "courses"
    entity_name = "course"
    model = Course
    repository = CourseRepository
    search_field = "description"
    validator = CourseValidator(LoggingSecurityEventObserver())
