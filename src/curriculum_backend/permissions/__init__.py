"""
Permission system for the curriculum backend.

Main components:
- principal: the resolved caller (login plus roles)
- handlers: base permission handler with declarative action/role tables, and the registry
- handlers_impl: Program, Course and Enrollment handlers
- core: handler registration and the check functions used by the query engine
- auth: identity context resolving a Principal from the request
"""

from .principal import Principal

from .handlers import (
    ANY_AUTHENTICATED,
    PermissionHandler,
    PermissionRegistry,
    permission_registry,
)

from .core import (
    check_permissions,
    check_entity_access,
    initialize_permission_handlers,
)

__all__ = [
    "Principal",

    # Handlers
    "ANY_AUTHENTICATED",
    "PermissionHandler",
    "PermissionRegistry",
    "permission_registry",

    # Core permission functions
    "check_permissions",
    "check_entity_access",
    "initialize_permission_handlers",
]
