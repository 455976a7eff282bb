"""User permission and override API resources."""

from datetime import UTC, datetime
from uuid import UUID

import falcon.asgi

from schoolauthz.application.dto.user_permissions_dto import OverrideCreateInput
from schoolauthz.application.use_cases.override.add_permission_override import (
    AddPermissionOverrideUseCase,
)
from schoolauthz.application.use_cases.override.get_user_permissions import (
    GetUserPermissionsUseCase,
)
from schoolauthz.application.use_cases.override.remove_permission_override import (
    RemovePermissionOverrideUseCase,
)
from schoolauthz.domain.exceptions import SchoolAuthzError
from schoolauthz.interfaces.api.errors import apply_error, bad_request, unauthorized
from schoolauthz.interfaces.api.serializers import override_to_dict, user_view_to_dict


def _parse_expiry(value: str | None) -> datetime | None:
    if not value:
        return None
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


class UserPermissionsResource:
    """GET/POST /v1/users/{user_id}/permissions - effective view and new overrides."""

    def __init__(
        self,
        get_user_permissions: GetUserPermissionsUseCase,
        add_override: AddPermissionOverrideUseCase,
    ) -> None:
        self._get_user_permissions = get_user_permissions
        self._add_override = add_override

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str) -> None:
        """Role baseline, overrides and the resolved effective set."""
        user = getattr(req.context, "user", None)
        if not user:
            unauthorized(resp)
            return

        try:
            view = await self._get_user_permissions.execute(user.user_id, user_id)
        except SchoolAuthzError as e:
            apply_error(resp, e)
            return
        resp.media = user_view_to_dict(view)
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str) -> None:
        """Grant or deny one capability to the user."""
        user = getattr(req.context, "user", None)
        if not user:
            unauthorized(resp)
            return

        try:
            body = await req.get_media()
            input_data = OverrideCreateInput(
                user_id=user_id,
                resource=body["resource"],
                action=body["action"],
                scope=body["scope"],
                effect=body["effect"],
                reason=body.get("reason") or "",
                expires_at=_parse_expiry(body.get("expiresAt")),
            )
        except (KeyError, TypeError) as e:
            bad_request(resp, f"Missing field: {e}")
            return
        except ValueError:
            bad_request(resp, "expiresAt must be an ISO 8601 timestamp")
            return
        for field, value in (("effect", input_data.effect), ("reason", input_data.reason)):
            if not isinstance(value, str):
                bad_request(resp, f"{field} must be a string")
                return

        try:
            created = await self._add_override.execute(user.user_id, input_data)
        except SchoolAuthzError as e:
            apply_error(resp, e)
            return
        resp.media = override_to_dict(created)
        resp.status = falcon.HTTP_201


class UserPermissionOverrideResource:
    """DELETE /v1/users/{user_id}/permissions/{override_id}."""

    def __init__(self, remove_override: RemovePermissionOverrideUseCase) -> None:
        self._remove_override = remove_override

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        user_id: str,
        override_id: str,
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            unauthorized(resp)
            return

        try:
            oid = UUID(override_id)
        except ValueError:
            bad_request(resp, "Invalid override id")
            return

        try:
            await self._remove_override.execute(user.user_id, oid, user_id=user_id)
        except SchoolAuthzError as e:
            apply_error(resp, e)
            return
        resp.status = falcon.HTTP_204
