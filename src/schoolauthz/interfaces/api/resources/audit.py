"""Permission audit resource."""

import falcon.asgi

from schoolauthz.application.use_cases.audit.get_permission_audit import GetPermissionAuditUseCase
from schoolauthz.domain.exceptions import SchoolAuthzError
from schoolauthz.interfaces.api.errors import apply_error, unauthorized
from schoolauthz.interfaces.api.serializers import audit_to_dict


class PermissionAuditResource:
    """GET /v1/permissions/audit - per-role stats and override counts."""

    def __init__(self, get_audit: GetPermissionAuditUseCase) -> None:
        self._get_audit = get_audit

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            unauthorized(resp)
            return

        try:
            view = await self._get_audit.execute(user.user_id)
        except SchoolAuthzError as e:
            apply_error(resp, e)
            return
        resp.media = audit_to_dict(view)
        resp.status = falcon.HTTP_200
