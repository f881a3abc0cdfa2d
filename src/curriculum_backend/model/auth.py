from sqlalchemy import Boolean, Column, DateTime, Integer, String, func, text
from sqlalchemy.orm import relationship

from .base import Base


class User(Base):
    __tablename__ = 'user'

    id = Column(Integer, primary_key=True, autoincrement=True)
    login = Column(String(50), nullable=False, unique=True)
    password = Column(String(1024))
    first_name = Column(String(50))
    last_name = Column(String(50))
    email = Column(String(254), unique=True)
    activated = Column(Boolean, nullable=False, server_default=text("true"))
    created_at = Column(DateTime(True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(True), nullable=False, server_default=func.now(), onupdate=func.now())

    # Relationships
    user_roles = relationship('UserRole', back_populates='user', cascade='all, delete-orphan')
    enrollments = relationship('Enrollment', back_populates='user')

    @property
    def role_ids(self) -> list[str]:
        return [user_role.role_id for user_role in self.user_roles]
