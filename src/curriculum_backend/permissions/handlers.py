from typing import Any, Dict, FrozenSet, Optional, Type
from curriculum_backend.permissions.principal import Principal
from curriculum_backend.api.exceptions import ForbiddenException, UnauthorizedException

# Marker for actions open to every authenticated caller, whatever their roles
ANY_AUTHENTICATED: Optional[FrozenSet[str]] = None


class PermissionHandler:
    """Base class for entity-specific permission handlers

    Subclasses declare ``ACTION_ROLES``: action name -> role set allowed
    to perform it, or ``ANY_AUTHENTICATED``. Actions missing from the
    table are denied to everyone.
    """

    ACTION_ROLES: Dict[str, Optional[FrozenSet[str]]] = {}

    def __init__(self, entity: Type[Any]):
        self.entity = entity
        self.resource_name = entity.__tablename__

    def can_perform_action(self, principal: Principal, action: str) -> bool:
        """Check if principal can perform an action on this resource type."""
        if not principal.is_authenticated:
            return False

        if action not in self.ACTION_ROLES:
            return False

        required_roles = self.ACTION_ROLES[action]
        if required_roles is ANY_AUTHENTICATED:
            return True

        return principal.has_any_role(required_roles)

    def owner_scope(self, principal: Principal, action: str) -> Optional[str]:
        """Login that result rows must be owned by, or None when unrestricted."""
        return None

    def can_access_entity(self, principal: Principal, action: str, item: Any) -> bool:
        """Post-fetch check on a single row. Defaults to visible."""
        return True

    def authorize(self, principal: Principal, action: str) -> None:
        if not principal.is_authenticated:
            raise UnauthorizedException(detail={"entity": self.resource_name, "action": action})

        if not self.can_perform_action(principal, action):
            raise ForbiddenException(detail={"entity": self.resource_name, "action": action})


class PermissionRegistry:
    """Registry for managing entity permission handlers"""

    _instance = None
    _handlers: Dict[Type[Any], PermissionHandler] = {}

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def register(self, entity: Type[Any], handler: PermissionHandler):
        """Register a permission handler for an entity"""
        self._handlers[entity] = handler

    def get_handler(self, entity: Type[Any]) -> Optional[PermissionHandler]:
        """Get the permission handler for an entity"""
        return self._handlers.get(entity)

    def authorize(self, principal: Principal, entity: Type[Any], action: str) -> PermissionHandler:
        """Gate every operation: raise on denial, return the handler on success"""
        handler = self.get_handler(entity)
        if not handler:
            # Fallback to admin-only if no handler registered
            if not principal.is_authenticated:
                raise UnauthorizedException(detail={"entity": entity.__tablename__})
            if not principal.is_admin:
                raise ForbiddenException(detail={"entity": entity.__tablename__})
            return PermissionHandler(entity)

        handler.authorize(principal, action)
        return handler


# Global registry instance
permission_registry = PermissionRegistry()
