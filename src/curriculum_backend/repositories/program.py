from sqlalchemy.orm import Session

from .base import BaseRepository
from ..model.program import Program


class ProgramRepository(BaseRepository[Program]):
    """Repository for Program entity database operations."""

    def __init__(self, db: Session):
        super().__init__(db, Program)
