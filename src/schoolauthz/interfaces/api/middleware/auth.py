"""Auth middleware - identifies the staff user behind the bearer token."""

from dataclasses import dataclass

import falcon.asgi

from schoolauthz.infrastructure.auth.keycloak_provider import KeycloakProvider


@dataclass
class RequestUser:
    """User from request context."""

    user_id: str
    email: str | None = None
    username: str | None = None


class AuthMiddleware:
    """Sets req.context.user, or None when no valid token was presented."""

    def __init__(self, keycloak_provider: KeycloakProvider | None = None) -> None:
        self._keycloak = keycloak_provider

    async def process_request(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        req.context.user = None
        auth = req.get_header("Authorization")
        if not auth or not auth.startswith("Bearer ") or not self._keycloak:
            return
        identity = await self._keycloak.identify(auth[7:])
        if identity:
            req.context.user = RequestUser(
                user_id=identity.user_id,
                email=identity.email,
                username=identity.username,
            )
