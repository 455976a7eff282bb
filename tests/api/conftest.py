"""Fixtures for API tests."""

import pytest
from falcon.testing import TestClient

from schoolauthz.application.use_cases.audit.get_permission_audit import GetPermissionAuditUseCase
from schoolauthz.application.use_cases.check.check_permissions import CheckPermissionsUseCase
from schoolauthz.application.use_cases.override.add_permission_override import (
    AddPermissionOverrideUseCase,
)
from schoolauthz.application.use_cases.override.get_user_permissions import (
    GetUserPermissionsUseCase,
)
from schoolauthz.application.use_cases.override.remove_permission_override import (
    RemovePermissionOverrideUseCase,
)
from schoolauthz.application.use_cases.role_permission.add_role_permission import (
    AddRolePermissionUseCase,
)
from schoolauthz.application.use_cases.role_permission.bulk_apply_permissions import (
    BulkApplyPermissionsUseCase,
)
from schoolauthz.application.use_cases.role_permission.bulk_copy_permissions import (
    BulkCopyPermissionsUseCase,
)
from schoolauthz.application.use_cases.role_permission.get_role_permissions import (
    GetRolePermissionsUseCase,
)
from schoolauthz.application.use_cases.role_permission.remove_role_permission import (
    RemoveRolePermissionUseCase,
)
from schoolauthz.application.use_cases.role_permission.update_role_permission_scope import (
    UpdateRolePermissionScopeUseCase,
)
from schoolauthz.domain.value_objects import StaffRole
from schoolauthz.infrastructure.cache.effective_cache import EffectivePermissionCache
from schoolauthz.infrastructure.permission.permission_checker import SchoolPermissionChecker
from schoolauthz.interfaces.api.app import create_app
from schoolauthz.interfaces.api.middleware.auth import RequestUser
from schoolauthz.interfaces.api.resources.audit import PermissionAuditResource
from schoolauthz.interfaces.api.resources.health import HealthResource
from schoolauthz.interfaces.api.resources.permission_checks import (
    PermissionCheckBatchResource,
    PermissionCheckResource,
)
from schoolauthz.interfaces.api.resources.role_permissions import (
    RolePermissionResource,
    RolePermissionsBulkResource,
    RolePermissionsCopyResource,
    RolePermissionsResource,
)
from schoolauthz.interfaces.api.resources.user_permissions import (
    UserPermissionOverrideResource,
    UserPermissionsResource,
)


class AuthBypassMiddleware:
    """Middleware that trusts the X-Test-User header (no header means anonymous)."""

    async def process_request(self, req, resp):
        user_id = req.get_header("X-Test-User")
        req.context.user = RequestUser(user_id=user_id) if user_id else None


@pytest.fixture
def app(fake_uow, uow_factory):
    """Falcon ASGI app wired to the in-memory store and the real checker."""
    fake_uow.staff_users.add_user("compta-1", StaffRole.COMPTABLE)
    fake_uow.staff_users.add_user("prof-1", StaffRole.ENSEIGNANT)

    cache = EffectivePermissionCache(ttl_seconds=60)
    checker = SchoolPermissionChecker(uow_factory, cache=cache)
    check_permissions = CheckPermissionsUseCase(checker)
    return create_app(
        role_permissions_resource=RolePermissionsResource(
            GetRolePermissionsUseCase(uow_factory, checker),
            AddRolePermissionUseCase(uow_factory, checker, cache),
        ),
        role_permission_resource=RolePermissionResource(
            UpdateRolePermissionScopeUseCase(uow_factory, checker, cache),
            RemoveRolePermissionUseCase(uow_factory, checker, cache),
        ),
        role_permissions_copy_resource=RolePermissionsCopyResource(
            BulkCopyPermissionsUseCase(uow_factory, checker, cache)
        ),
        role_permissions_bulk_resource=RolePermissionsBulkResource(
            BulkApplyPermissionsUseCase(uow_factory, checker, cache)
        ),
        user_permissions_resource=UserPermissionsResource(
            GetUserPermissionsUseCase(uow_factory, checker),
            AddPermissionOverrideUseCase(uow_factory, checker, cache),
        ),
        user_override_resource=UserPermissionOverrideResource(
            RemovePermissionOverrideUseCase(uow_factory, checker, cache)
        ),
        check_resource=PermissionCheckResource(check_permissions),
        check_batch_resource=PermissionCheckBatchResource(check_permissions),
        audit_resource=PermissionAuditResource(
            GetPermissionAuditUseCase(uow_factory, checker)
        ),
        health_resource=HealthResource(),
        middleware=[AuthBypassMiddleware()],
    )


@pytest.fixture
def client(app):
    """Falcon ASGI test client."""
    return TestClient(app)
