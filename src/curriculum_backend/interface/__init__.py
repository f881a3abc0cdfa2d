from .base import EntityInterface, ListQuery
from .programs import ProgramInterface
from .courses import CourseInterface
from .enrollments import EnrollmentInterface

ENTITY_INTERFACES = (ProgramInterface, CourseInterface, EnrollmentInterface)
