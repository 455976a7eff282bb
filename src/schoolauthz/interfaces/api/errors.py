"""Mapping of domain exceptions to HTTP responses."""

import logging

import falcon
import falcon.asgi

from schoolauthz.domain.exceptions import (
    AuthorizationError,
    DuplicateOverride,
    DuplicatePermission,
    NotFound,
    SchoolAuthzError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def apply_error(resp: falcon.asgi.Response, exc: SchoolAuthzError) -> None:
    """Set status and JSON body for a domain exception."""
    body: dict = {"error": type(exc).__name__, "message": str(exc)}
    if isinstance(exc, ValidationError):
        resp.status = falcon.HTTP_400
        if exc.field:
            body["field"] = exc.field
        if exc.value is not None:
            body["value"] = exc.value
    elif isinstance(exc, DuplicatePermission | DuplicateOverride):
        resp.status = falcon.HTTP_409
        body["conflict"] = {
            "resource": exc.key.resource.value,
            "action": exc.key.action.value,
            "scope": exc.key.scope.value,
            "existingId": str(exc.existing_id) if exc.existing_id else None,
        }
    elif isinstance(exc, NotFound):
        resp.status = falcon.HTTP_404
    elif isinstance(exc, AuthorizationError):
        resp.status = falcon.HTTP_403
    else:
        resp.status = falcon.HTTP_400
    resp.media = body


def unauthorized(resp: falcon.asgi.Response) -> None:
    resp.status = falcon.HTTP_401
    resp.media = {"error": "Unauthorized"}


def bad_request(resp: falcon.asgi.Response, message: str) -> None:
    resp.status = falcon.HTTP_400
    resp.media = {"error": "ValidationError", "message": message}


async def log_unhandled_exception(req, resp, ex, params) -> None:
    """Last-resort handler: log and answer 500 without leaking details."""
    logger.exception("Unhandled error on %s %s", req.method, req.path, exc_info=ex)
    resp.status = falcon.HTTP_500
    resp.media = {"error": "Internal Server Error"}
