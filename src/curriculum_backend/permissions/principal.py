from typing import Optional, List, Set
from pydantic import BaseModel, Field, model_validator

from curriculum_backend.model.role import ROLE_ADMIN
from curriculum_backend.settings import settings


class Principal(BaseModel):
    """The resolved caller of a request: login plus role set.

    An anonymous principal has no login and no roles. Resolving one
    never fails; the permission gate decides what anonymity is worth.
    """

    is_admin: bool = False
    user_id: Optional[int] = None
    login: Optional[str] = None

    roles: List[str] = Field(default_factory=list)

    @model_validator(mode='after')
    def set_is_admin_from_roles(self):
        """Automatically set admin flag based on roles"""
        if ROLE_ADMIN in self.roles:
            self.is_admin = True
        return self

    @classmethod
    def anonymous(cls) -> "Principal":
        return cls()

    @property
    def is_authenticated(self) -> bool:
        return self.login is not None

    def get_login(self) -> Optional[str]:
        """Current caller login, or None when the request carries no authentication"""
        return self.login

    def get_login_or_empty(self) -> str:
        return self.login or ""

    def get_roles(self) -> Set[str]:
        roles = set(self.roles)
        if self.is_admin:
            roles.add(ROLE_ADMIN)
        return roles

    def has_any_role(self, roles: Set[str]) -> bool:
        return bool(self.get_roles() & set(roles))

    def is_reserved_admin_login(self) -> bool:
        """True only for the distinguished super-user account, not for every ADMIN role holder"""
        return self.get_login_or_empty() == settings.ADMIN_LOGIN

    def owns(self, owner_login: Optional[str]) -> bool:
        return owner_login == self.get_login_or_empty()


