from typing import Iterable, Optional
from sqlalchemy.orm import Session, selectinload

from .base import BaseRepository
from ..model.auth import User
from ..model.role import Role, UserRole


class UserRepository(BaseRepository[User]):
    """Repository for User lookups used by authentication and bootstrap."""

    eager_relationships = ("user_roles",)

    def __init__(self, db: Session):
        super().__init__(db, User)

    def find_by_login(self, login: str) -> Optional[User]:
        """Return the user with the given login, roles loaded, or None."""
        return (
            self.db.query(User)
            .options(selectinload(User.user_roles))
            .filter(User.login == login)
            .first()
        )

    def ensure_roles(self, role_ids: Iterable[str]) -> None:
        """Create missing Role rows."""
        for role_id in role_ids:
            if self.db.get(Role, role_id) is None:
                self.db.add(Role(id=role_id, title=role_id.capitalize()))
        self.db.commit()

    def grant_roles(self, user: User, role_ids: Iterable[str]) -> User:
        """Attach roles to a user, skipping the ones already held."""
        role_ids = list(role_ids)
        self.ensure_roles(role_ids)
        held = set(user.role_ids)
        for role_id in role_ids:
            if role_id not in held:
                user.user_roles.append(UserRole(role_id=role_id))
        self.db.commit()
        self.db.refresh(user)
        return user
