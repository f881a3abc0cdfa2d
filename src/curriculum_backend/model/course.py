from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Table, func
from sqlalchemy.orm import relationship

from .base import Base, metadata

enrollment_course = Table(
    'enrollment_course',
    metadata,
    Column('enrollment_id', ForeignKey('enrollment.id', ondelete='CASCADE'), primary_key=True),
    Column('course_id', ForeignKey('course.id', ondelete='CASCADE'), primary_key=True),
)


class Course(Base):
    __tablename__ = 'course'

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(String(4096))
    program_id = Column(ForeignKey('program.id', ondelete='SET NULL'))
    created_at = Column(DateTime(True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(True), nullable=False, server_default=func.now(), onupdate=func.now())

    # Relationships
    program = relationship('Program', back_populates='courses')
    enrollments = relationship('Enrollment', secondary=enrollment_course, back_populates='courses')
