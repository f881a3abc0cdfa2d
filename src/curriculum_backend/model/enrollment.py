from sqlalchemy import Column, Date, DateTime, Enum, ForeignKey, Integer, String, func, text
from sqlalchemy.orm import relationship

from .base import Base
from .course import enrollment_course

ENROLLMENT_STATUSES = ('PENDING', 'ACTIVE', 'COMPLETED', 'WITHDRAWN')


class Enrollment(Base):
    __tablename__ = 'enrollment'

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(ForeignKey('user.id', ondelete='SET NULL'))
    program_id = Column(ForeignKey('program.id', ondelete='SET NULL'))
    comments = Column(String(4096))
    status = Column(Enum(*ENROLLMENT_STATUSES, name='enrollment_status'), nullable=False, server_default=text("'PENDING'"))
    enrolled_at = Column(Date)
    created_at = Column(DateTime(True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(True), nullable=False, server_default=func.now(), onupdate=func.now())

    # Relationships
    user = relationship('User', back_populates='enrollments')
    program = relationship('Program', back_populates='enrollments')
    courses = relationship('Course', secondary=enrollment_course, back_populates='enrollments')
