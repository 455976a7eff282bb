"""Keycloak OIDC provider - identifies the staff user behind a bearer token."""

import asyncio
import logging
from dataclasses import dataclass

from keycloak import KeycloakOpenID
from keycloak.exceptions import KeycloakError

logger = logging.getLogger(__name__)


@dataclass
class TokenIdentity:
    """Identity claims from an active access token."""

    user_id: str
    email: str | None
    username: str | None


class KeycloakProvider:
    """Introspects access tokens; login itself happens elsewhere."""

    def __init__(
        self,
        server_url: str,
        realm: str,
        client_id: str,
        client_secret: str = "",
    ) -> None:
        self._keycloak = KeycloakOpenID(
            server_url=server_url,
            realm_name=realm,
            client_id=client_id,
            client_secret_key=client_secret,
        )

    async def identify(self, token: str) -> TokenIdentity | None:
        """Return identity for an active token, None for inactive or rejected tokens.

        Introspection is a blocking HTTP call, so it runs in a worker thread.
        """
        try:
            token_info = await asyncio.to_thread(self._keycloak.introspect, token)
        except KeycloakError as e:
            logger.warning("Token introspection failed: %s", e)
            return None
        if not token_info.get("active") or not token_info.get("sub"):
            return None
        return TokenIdentity(
            user_id=token_info["sub"],
            email=token_info.get("email"),
            username=token_info.get("preferred_username"),
        )
