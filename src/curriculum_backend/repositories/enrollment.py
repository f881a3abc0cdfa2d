"""
Enrollment repository.

Enrollments carry the only owned rows in the system, so this
repository adds the owner-scoped listing and resolves the
``course_ids`` write shortcut into the many-to-many relationship.
"""

from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session

from .base import BaseRepository, NotFoundError, ids_or_empty
from ..model.auth import User
from ..model.course import Course
from ..model.enrollment import Enrollment


class EnrollmentRepository(BaseRepository[Enrollment]):
    """Repository for Enrollment entity database operations."""

    eager_relationships = ("user", "program", "courses")

    def __init__(self, db: Session):
        super().__init__(db, Enrollment)

    def list_owned_by(
        self,
        login: str,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[Enrollment]:
        """
        List enrollments whose owner has the given login.

        Args:
            login: Owner login to match
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            Enrollments with relationships loaded
        """
        query = (
            self._query(with_relationships=True)
            .join(User, User.id == Enrollment.user_id)
            .filter(User.login == login)
            .order_by(Enrollment.id)
        )
        return self._paginate(query, limit, offset).all()

    def count_owned_by(self, login: str) -> int:
        return (
            self._query()
            .join(User, User.id == Enrollment.user_id)
            .filter(User.login == login)
            .count()
        )

    def assign(self, entity: Enrollment, values: Dict[str, Any]) -> Enrollment:
        values = dict(values)
        if "course_ids" in values:
            entity.courses = self._resolve_courses(values.pop("course_ids"))
        return super().assign(entity, values)

    def _resolve_courses(self, course_ids) -> List[Course]:
        course_ids = ids_or_empty(course_ids)
        if not course_ids:
            return []

        courses = self.db.query(Course).filter(Course.id.in_(course_ids)).all()
        missing = set(course_ids) - {course.id for course in courses}
        if missing:
            raise NotFoundError(Course.__name__, sorted(missing))
        return courses
