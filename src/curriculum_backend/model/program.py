from sqlalchemy import Column, DateTime, Integer, String, func
from sqlalchemy.orm import relationship

from .base import Base


class Program(Base):
    __tablename__ = 'program'

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    description = Column(String(4096))
    url = Column(String(2048))
    created_at = Column(DateTime(True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(True), nullable=False, server_default=func.now(), onupdate=func.now())

    # Relationships
    courses = relationship('Course', back_populates='program')
    enrollments = relationship('Enrollment', back_populates='program')
