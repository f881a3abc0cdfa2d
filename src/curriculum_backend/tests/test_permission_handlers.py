"""
Handler-level permission tests

The authorization table is exercised cell by cell through the registry,
with lightweight principals and no database.
"""

from types import SimpleNamespace

import pytest

from curriculum_backend.api.exceptions import ForbiddenException, UnauthorizedException
from curriculum_backend.model.course import Course
from curriculum_backend.model.enrollment import Enrollment
from curriculum_backend.model.program import Program
from curriculum_backend.model.role import Role
from curriculum_backend.permissions.core import check_entity_access, check_permissions
from curriculum_backend.permissions.handlers import permission_registry
from curriculum_backend.permissions.handlers_impl import EnrollmentPermissionHandler
from curriculum_backend.permissions.principal import Principal

ADMIN = Principal(login="ops", roles=["ADMIN"])
USER = Principal(login="alice", roles=["USER"])
GUEST = Principal(login="guest", roles=[])

WRITES = ("create", "update", "delete")


def allowed(principal, entity, action) -> bool:
    try:
        check_permissions(principal, entity, action)
        return True
    except ForbiddenException:
        return False


@pytest.mark.unit
class TestAuthorizationTable:

    @pytest.mark.parametrize("entity", [Program, Course, Enrollment])
    @pytest.mark.parametrize("action", WRITES)
    def test_writes_are_admin_only(self, entity, action):
        assert allowed(ADMIN, entity, action)
        assert not allowed(USER, entity, action)
        assert not allowed(GUEST, entity, action)

    @pytest.mark.parametrize("action", ["list", "get"])
    def test_program_reads_need_user_or_admin(self, action):
        assert allowed(ADMIN, Program, action)
        assert allowed(USER, Program, action)
        assert not allowed(GUEST, Program, action)

    @pytest.mark.parametrize("action", ["list", "get"])
    def test_course_reads_are_admin_only(self, action):
        assert allowed(ADMIN, Course, action)
        assert not allowed(USER, Course, action)

    @pytest.mark.parametrize("action", ["list", "get"])
    def test_enrollment_reads_need_authentication_only(self, action):
        assert allowed(GUEST, Enrollment, action)
        assert allowed(USER, Enrollment, action)

    @pytest.mark.parametrize("entity", [Program, Course, Enrollment])
    def test_search_is_open_to_any_authenticated(self, entity):
        assert allowed(GUEST, entity, "search")

    @pytest.mark.parametrize("entity", [Program, Course, Enrollment])
    @pytest.mark.parametrize("action", ["create", "list", "get", "search", "delete"])
    def test_anonymous_is_unauthorized(self, entity, action):
        with pytest.raises(UnauthorizedException):
            check_permissions(Principal.anonymous(), entity, action)

    def test_unknown_action_is_denied(self):
        assert not allowed(ADMIN, Program, "export")

    def test_unregistered_entity_falls_back_to_admin(self):
        assert permission_registry.get_handler(Role) is None
        assert allowed(ADMIN, Role, "list")
        assert not allowed(USER, Role, "list")


@pytest.mark.unit
class TestEnrollmentOwnership:

    def setup_method(self):
        self.handler = EnrollmentPermissionHandler(Enrollment)

    def owned_by(self, login):
        return SimpleNamespace(id=7, user=SimpleNamespace(login=login))

    def test_reserved_admin_is_unscoped(self):
        admin = Principal(login="admin", roles=["ADMIN"])
        assert self.handler.owner_scope(admin, "list") is None
        assert self.handler.can_access_entity(admin, "get", self.owned_by("alice"))

    def test_admin_role_without_reserved_login_is_scoped(self):
        assert self.handler.owner_scope(ADMIN, "list") == "ops"
        assert not self.handler.can_access_entity(ADMIN, "get", self.owned_by("alice"))

    def test_user_is_scoped_to_own_login(self):
        assert self.handler.owner_scope(USER, "list") == "alice"
        assert self.handler.can_access_entity(USER, "get", self.owned_by("alice"))
        assert not self.handler.can_access_entity(USER, "get", self.owned_by("bob"))

    def test_ownerless_row_is_visible(self):
        assert self.handler.can_access_entity(USER, "get", SimpleNamespace(id=8, user=None))

    def test_search_is_not_scoped(self):
        assert self.handler.owner_scope(USER, "search") is None

    def test_check_entity_access_raises_forbidden(self):
        with pytest.raises(ForbiddenException):
            check_entity_access(USER, Enrollment, "get", self.owned_by("bob"))

    def test_check_entity_access_ignores_missing_rows(self):
        check_entity_access(USER, Enrollment, "get", None)

