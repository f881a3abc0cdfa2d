from sqlalchemy import Column, DateTime, ForeignKey, String, func
from sqlalchemy.orm import relationship

from .base import Base

ROLE_USER = "USER"
ROLE_ADMIN = "ADMIN"
KNOWN_ROLE_IDS = [ROLE_USER, ROLE_ADMIN]


class Role(Base):
    __tablename__ = 'role'

    id = Column(String(50), primary_key=True)
    title = Column(String(255))

    # Relationships
    user_roles = relationship('UserRole', back_populates='role')


class UserRole(Base):
    __tablename__ = 'user_role'

    user_id = Column(ForeignKey('user.id', ondelete='CASCADE'), primary_key=True, nullable=False)
    role_id = Column(ForeignKey('role.id', ondelete='RESTRICT', onupdate='CASCADE'), primary_key=True, nullable=False)
    created_at = Column(DateTime(True), nullable=False, server_default=func.now())

    role = relationship('Role', back_populates='user_roles')
    user = relationship('User', back_populates='user_roles')
