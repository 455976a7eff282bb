"""Permission check API resources."""

import falcon.asgi

from schoolauthz.application.use_cases.check.check_permissions import CheckPermissionsUseCase
from schoolauthz.domain.exceptions import SchoolAuthzError
from schoolauthz.interfaces.api.errors import apply_error, bad_request, unauthorized
from schoolauthz.interfaces.api.serializers import check_result_to_dict

MAX_BATCH_CHECKS = 200


class PermissionCheckResource:
    """POST /v1/permissions/check - one (resource, action, scope) for one user."""

    def __init__(self, check_permissions: CheckPermissionsUseCase) -> None:
        self._check_permissions = check_permissions

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            unauthorized(resp)
            return

        try:
            body = await req.get_media()
            target = body.get("userId") or user.user_id
            resource = body["resource"]
            action = body["action"]
            scope = body.get("scope") or "all"
        except (KeyError, TypeError, AttributeError) as e:
            bad_request(resp, f"Missing field: {e}")
            return

        try:
            granted = await self._check_permissions.execute(
                user.user_id, target, resource, action, scope
            )
        except SchoolAuthzError as e:
            apply_error(resp, e)
            return
        resp.media = {"userId": target, "granted": granted}
        resp.status = falcon.HTTP_200


class PermissionCheckBatchResource:
    """POST /v1/permissions/check-batch - many tuples against one effective set."""

    def __init__(self, check_permissions: CheckPermissionsUseCase) -> None:
        self._check_permissions = check_permissions

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            unauthorized(resp)
            return

        body = await req.get_media()
        if not isinstance(body, dict):
            bad_request(resp, "Expected a JSON object")
            return
        checks = body.get("checks")
        if not isinstance(checks, list) or not checks:
            bad_request(resp, "checks must be a non-empty array")
            return
        if len(checks) > MAX_BATCH_CHECKS:
            bad_request(resp, f"At most {MAX_BATCH_CHECKS} checks per request")
            return
        checks = [c if isinstance(c, dict) else {} for c in checks]
        target = body.get("userId") or user.user_id

        try:
            results = await self._check_permissions.execute_batch(user.user_id, target, checks)
        except SchoolAuthzError as e:
            apply_error(resp, e)
            return
        resp.media = {
            "userId": target,
            "results": [check_result_to_dict(r) for r in results],
        }
        resp.status = falcon.HTTP_200
