"""
Permission checking entry points.

Handlers are registered once per entity on import; callers go through
``check_permissions`` (role gate) and ``check_entity_access``
(ownership gate on fetched rows).
"""

from typing import Any, Optional

from curriculum_backend.api.exceptions import ForbiddenException
from curriculum_backend.permissions.handlers import PermissionHandler, permission_registry
from curriculum_backend.permissions.handlers_impl import (
    ProgramPermissionHandler,
    CoursePermissionHandler,
    EnrollmentPermissionHandler,
)
from curriculum_backend.permissions.principal import Principal

from curriculum_backend.model.program import Program
from curriculum_backend.model.course import Course
from curriculum_backend.model.enrollment import Enrollment


def initialize_permission_handlers():
    """Initialize and register all permission handlers"""

    permission_registry.register(Program, ProgramPermissionHandler(Program))
    permission_registry.register(Course, CoursePermissionHandler(Course))
    permission_registry.register(Enrollment, EnrollmentPermissionHandler(Enrollment))


def check_permissions(permissions: Principal, entity: Any, action: str) -> PermissionHandler:
    """
    Main entry point for permission checking.
    Raises UnauthorizedException/ForbiddenException, returns the handler otherwise.
    """
    return permission_registry.authorize(permissions, entity, action)


def check_entity_access(permissions: Principal, entity: Any, action: str, item: Optional[Any]) -> None:
    """Reject a fetched row the caller may not see; 403 is kept distinct from 404."""
    handler = permission_registry.get_handler(entity)
    if handler is None or item is None:
        return

    if not handler.can_access_entity(permissions, action, item):
        raise ForbiddenException(detail={"entity": handler.resource_name, "id": getattr(item, "id", None)})


# Initialize handlers on module import
initialize_permission_handlers()
