"""Role permission API resources."""

from uuid import UUID

import falcon.asgi

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
from schoolauthz.domain.exceptions import SchoolAuthzError
from schoolauthz.interfaces.api.errors import apply_error, bad_request, unauthorized
from schoolauthz.interfaces.api.serializers import (
    bulk_apply_to_dict,
    bulk_copy_to_dict,
    role_permission_to_dict,
    role_view_to_dict,
)


class RolePermissionsResource:
    """GET/POST /v1/roles/{role}/permissions - list and add role permissions."""

    def __init__(
        self,
        get_role_permissions: GetRolePermissionsUseCase,
        add_role_permission: AddRolePermissionUseCase,
    ) -> None:
        self._get_role_permissions = get_role_permissions
        self._add_role_permission = add_role_permission

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role: str) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            unauthorized(resp)
            return

        try:
            view = await self._get_role_permissions.execute(user.user_id, role)
        except SchoolAuthzError as e:
            apply_error(resp, e)
            return
        resp.media = role_view_to_dict(view)
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role: str) -> None:
        """Add one (resource, action, scope) to the role."""
        user = getattr(req.context, "user", None)
        if not user:
            unauthorized(resp)
            return

        try:
            body = await req.get_media()
            resource = body["resource"]
            action = body["action"]
            scope = body["scope"]
        except (KeyError, TypeError) as e:
            bad_request(resp, f"Missing field: {e}")
            return

        try:
            created = await self._add_role_permission.execute(
                user.user_id, role, resource, action, scope
            )
        except SchoolAuthzError as e:
            apply_error(resp, e)
            return
        resp.media = role_permission_to_dict(created)
        resp.status = falcon.HTTP_201


class RolePermissionResource:
    """PUT/DELETE /v1/roles/{role}/permissions/{permission_id}."""

    def __init__(
        self,
        update_scope: UpdateRolePermissionScopeUseCase,
        remove_role_permission: RemoveRolePermissionUseCase,
    ) -> None:
        self._update_scope = update_scope
        self._remove_role_permission = remove_role_permission

    async def on_put(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        role: str,
        permission_id: str,
    ) -> None:
        """Change the scope of an existing role permission."""
        user = getattr(req.context, "user", None)
        if not user:
            unauthorized(resp)
            return

        try:
            pid = UUID(permission_id)
        except ValueError:
            bad_request(resp, "Invalid permission id")
            return
        try:
            body = await req.get_media()
            scope = body["scope"]
        except (KeyError, TypeError) as e:
            bad_request(resp, f"Missing field: {e}")
            return

        try:
            updated = await self._update_scope.execute(user.user_id, pid, scope, role=role)
        except SchoolAuthzError as e:
            apply_error(resp, e)
            return
        resp.media = role_permission_to_dict(updated)
        resp.status = falcon.HTTP_200

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        role: str,
        permission_id: str,
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            unauthorized(resp)
            return

        try:
            pid = UUID(permission_id)
        except ValueError:
            bad_request(resp, "Invalid permission id")
            return

        try:
            await self._remove_role_permission.execute(user.user_id, pid, role=role)
        except SchoolAuthzError as e:
            apply_error(resp, e)
            return
        resp.status = falcon.HTTP_204


class RolePermissionsCopyResource:
    """POST /v1/roles/{role}/permissions/copy - copy another role's set into this one."""

    def __init__(self, bulk_copy: BulkCopyPermissionsUseCase) -> None:
        self._bulk_copy = bulk_copy

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role: str) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            unauthorized(resp)
            return

        try:
            body = await req.get_media()
            source_role = body["sourceRole"]
        except (KeyError, TypeError) as e:
            bad_request(resp, f"Missing field: {e}")
            return

        try:
            result = await self._bulk_copy.execute(user.user_id, source_role, role)
        except SchoolAuthzError as e:
            apply_error(resp, e)
            return
        resp.media = bulk_copy_to_dict(result)
        resp.status = falcon.HTTP_200


class RolePermissionsBulkResource:
    """POST /v1/roles/{role}/permissions/bulk - add and remove in one request."""

    def __init__(self, bulk_apply: BulkApplyPermissionsUseCase) -> None:
        self._bulk_apply = bulk_apply

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role: str) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            unauthorized(resp)
            return

        body = await req.get_media()
        if not isinstance(body, dict):
            bad_request(resp, "Expected a JSON object")
            return
        add = body.get("add") or []
        remove = body.get("remove") or []
        if not isinstance(add, list) or not isinstance(remove, list):
            bad_request(resp, "add and remove must be arrays")
            return
        if not add and not remove:
            bad_request(resp, "Nothing to add or remove")
            return
        if not all(isinstance(item, dict) for item in add):
            bad_request(resp, "add entries must be objects")
            return

        try:
            result = await self._bulk_apply.execute(user.user_id, role, add=add, remove=remove)
        except SchoolAuthzError as e:
            apply_error(resp, e)
            return
        resp.media = bulk_apply_to_dict(result)
        resp.status = falcon.HTTP_200
