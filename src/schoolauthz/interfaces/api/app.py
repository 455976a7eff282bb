"""Falcon ASGI application."""

import falcon.asgi
from falcon.asgi import App

from schoolauthz.interfaces.api.errors import log_unhandled_exception
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


def create_app(
    role_permissions_resource: RolePermissionsResource,
    role_permission_resource: RolePermissionResource,
    role_permissions_copy_resource: RolePermissionsCopyResource,
    role_permissions_bulk_resource: RolePermissionsBulkResource,
    user_permissions_resource: UserPermissionsResource,
    user_override_resource: UserPermissionOverrideResource,
    check_resource: PermissionCheckResource,
    check_batch_resource: PermissionCheckBatchResource,
    audit_resource: PermissionAuditResource,
    health_resource: HealthResource,
    middleware: list | None = None,
) -> App:
    """Create Falcon ASGI app with routes."""
    app = falcon.asgi.App(middleware=middleware or [])
    app.add_error_handler(Exception, log_unhandled_exception)
    app.add_route("/v1/health", health_resource)
    app.add_route("/v1/health/ready", health_resource, suffix="ready")
    app.add_route("/v1/roles/{role}/permissions", role_permissions_resource)
    app.add_route("/v1/roles/{role}/permissions/copy", role_permissions_copy_resource)
    app.add_route("/v1/roles/{role}/permissions/bulk", role_permissions_bulk_resource)
    app.add_route("/v1/roles/{role}/permissions/{permission_id}", role_permission_resource)
    app.add_route("/v1/users/{user_id}/permissions", user_permissions_resource)
    app.add_route("/v1/users/{user_id}/permissions/{override_id}", user_override_resource)
    app.add_route("/v1/permissions/check", check_resource)
    app.add_route("/v1/permissions/check-batch", check_batch_resource)
    app.add_route("/v1/permissions/audit", audit_resource)
    return app
