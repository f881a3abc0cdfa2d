from .base import Base, metadata
from .auth import User
from .role import Role, UserRole, ROLE_USER, ROLE_ADMIN
from .program import Program
from .course import Course, enrollment_course
from .enrollment import Enrollment, ENROLLMENT_STATUSES

# Import all models to ensure relationships are properly set up
from . import auth, role, program, course, enrollment

__all__ = [
    'Base',
    'metadata',
    # Auth models
    'User',
    'Role',
    'UserRole',
    'ROLE_USER',
    'ROLE_ADMIN',
    # Academic models
    'Program',
    'Course',
    'enrollment_course',
    'Enrollment',
    'ENROLLMENT_STATUSES',
]
