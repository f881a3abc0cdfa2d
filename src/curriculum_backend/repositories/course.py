from sqlalchemy.orm import Session

from .base import BaseRepository
from ..model.course import Course


class CourseRepository(BaseRepository[Course]):
    """Repository for Course entity database operations."""

    eager_relationships = ("program",)

    def __init__(self, db: Session):
        super().__init__(db, Course)
