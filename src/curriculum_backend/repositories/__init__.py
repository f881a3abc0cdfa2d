"""
Repository pattern implementation for direct database access.

One repository per entity type forms the entity store used by the
access-controlled query engine.
"""

from .base import (
    BaseRepository,
    RepositoryError,
    NotFoundError,
    DuplicateError,
    ConstraintError,
)
from .program import ProgramRepository
from .course import CourseRepository
from .enrollment import EnrollmentRepository
from .user import UserRepository

__all__ = [
    "BaseRepository",
    "RepositoryError",
    "NotFoundError",
    "DuplicateError",
    "ConstraintError",
    "ProgramRepository",
    "CourseRepository",
    "EnrollmentRepository",
    "UserRepository",
]
