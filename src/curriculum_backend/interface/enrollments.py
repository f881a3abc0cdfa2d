from datetime import date
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Literal, Optional
from curriculum_backend.interface.base import BaseEntityGet, EntityInterface, ListQuery
from curriculum_backend.interface.courses import CourseList
from curriculum_backend.interface.programs import ProgramList
from curriculum_backend.interface.users import UserList
from curriculum_backend.model.enrollment import Enrollment
from curriculum_backend.repositories.enrollment import EnrollmentRepository

EnrollmentStatus = Literal['PENDING', 'ACTIVE', 'COMPLETED', 'WITHDRAWN']

class EnrollmentCreate(BaseModel):
    id: Optional[int] = None
    user_id: Optional[int] = None
    program_id: Optional[int] = None
    course_ids: Optional[List[int]] = None
    comments: Optional[str] = None
    status: Optional[EnrollmentStatus] = None
    enrolled_at: Optional[date] = None

class EnrollmentUpdate(EnrollmentCreate):
    pass

class EnrollmentGet(BaseEntityGet):
    id: int
    user_id: Optional[int] = None
    program_id: Optional[int] = None
    comments: Optional[str] = None
    status: Optional[EnrollmentStatus] = None
    enrolled_at: Optional[date] = None

    user: Optional[UserList] = None
    program: Optional[ProgramList] = None
    courses: List[CourseList] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)

class EnrollmentInterface(EntityInterface):
    create = EnrollmentCreate
    get = EnrollmentGet
    list = EnrollmentGet
    update = EnrollmentUpdate
    query = ListQuery
    endpoint = "enrollments"
    entity_name = "enrollment"
    model = Enrollment
    repository = EnrollmentRepository
    search_field = "comments"
