from typing import Any, Optional

from curriculum_backend.model.role import ROLE_ADMIN, ROLE_USER
from curriculum_backend.permissions.handlers import ANY_AUTHENTICATED, PermissionHandler
from curriculum_backend.permissions.principal import Principal

ADMIN_ONLY = frozenset({ROLE_ADMIN})
USER_OR_ADMIN = frozenset({ROLE_USER, ROLE_ADMIN})


class ProgramPermissionHandler(PermissionHandler):
    """Programs are readable by every USER/ADMIN, writable by ADMIN"""

    ACTION_ROLES = {
        "create": ADMIN_ONLY,
        "update": ADMIN_ONLY,
        "delete": ADMIN_ONLY,
        "list": USER_OR_ADMIN,
        "get": USER_OR_ADMIN,
        "search": ANY_AUTHENTICATED,
    }


class CoursePermissionHandler(PermissionHandler):
    """Courses are ADMIN territory except for search"""

    ACTION_ROLES = {
        "create": ADMIN_ONLY,
        "update": ADMIN_ONLY,
        "delete": ADMIN_ONLY,
        "list": ADMIN_ONLY,
        "get": ADMIN_ONLY,
        "search": ANY_AUTHENTICATED,
    }


class EnrollmentPermissionHandler(PermissionHandler):
    """Permission handler for Enrollment entity

    Reads are open to any authenticated caller but scoped to the rows
    they own. The reserved admin login (not the ADMIN role) sees all.
    """

    ACTION_ROLES = {
        "create": ADMIN_ONLY,
        "update": ADMIN_ONLY,
        "delete": ADMIN_ONLY,
        "list": ANY_AUTHENTICATED,
        "get": ANY_AUTHENTICATED,
        "search": ANY_AUTHENTICATED,
    }

    OWNER_SCOPED_ACTIONS = ("list", "get")

    def owner_scope(self, principal: Principal, action: str) -> Optional[str]:
        if action not in self.OWNER_SCOPED_ACTIONS or principal.is_reserved_admin_login():
            return None
        return principal.get_login_or_empty()

    def can_access_entity(self, principal: Principal, action: str, item: Any) -> bool:
        if action not in self.OWNER_SCOPED_ACTIONS or principal.is_reserved_admin_login():
            return True

        if item is None or item.user is None:
            return True

        return principal.owns(item.user.login)
