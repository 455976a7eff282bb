"""Unit tests for token introspection and the auth middleware."""

import threading
from unittest.mock import MagicMock

import falcon
import falcon.asgi
import falcon.testing
import pytest
from keycloak.exceptions import KeycloakError

from schoolauthz.infrastructure.auth.keycloak_provider import KeycloakProvider, TokenIdentity
from schoolauthz.interfaces.api.middleware.auth import AuthMiddleware


@pytest.fixture
def provider() -> KeycloakProvider:
    p = KeycloakProvider(server_url="http://keycloak.test", realm="school", client_id="authz")
    p._keycloak = MagicMock()
    return p


@pytest.mark.asyncio
async def test_identify_active_token(provider) -> None:
    provider._keycloak.introspect.return_value = {
        "active": True,
        "sub": "compta-1",
        "email": "compta@ecole.test",
        "preferred_username": "compta",
    }
    identity = await provider.identify("tok")
    assert identity == TokenIdentity("compta-1", "compta@ecole.test", "compta")
    provider._keycloak.introspect.assert_called_once_with("tok")


@pytest.mark.asyncio
async def test_identify_inactive_token(provider) -> None:
    provider._keycloak.introspect.return_value = {"active": False}
    assert await provider.identify("tok") is None


@pytest.mark.asyncio
async def test_identify_rejected_token(provider) -> None:
    provider._keycloak.introspect.side_effect = KeycloakError("unreachable")
    assert await provider.identify("tok") is None


@pytest.mark.asyncio
async def test_introspection_runs_off_the_event_loop_thread(provider) -> None:
    loop_thread = threading.get_ident()
    seen = []

    def introspect(token):
        seen.append(threading.get_ident())
        return {"active": True, "sub": "compta-1"}

    provider._keycloak.introspect.side_effect = introspect
    await provider.identify("tok")
    assert seen and seen[0] != loop_thread


class FakeProvider:
    async def identify(self, token: str) -> TokenIdentity | None:
        if token == "good":
            return TokenIdentity("compta-1", None, "compta")
        return None


class WhoAmIResource:
    async def on_get(self, req, resp) -> None:
        user = req.context.user
        resp.media = {"user": user.user_id if user else None}


def _client(provider) -> falcon.testing.TestClient:
    app = falcon.asgi.App(middleware=[AuthMiddleware(provider)])
    app.add_route("/whoami", WhoAmIResource())
    return falcon.testing.TestClient(app)


@pytest.mark.parametrize(
    ("headers", "expected"),
    [
        ({"Authorization": "Bearer good"}, "compta-1"),
        ({"Authorization": "Bearer bad"}, None),
        ({"Authorization": "Basic good"}, None),
        ({}, None),
    ],
)
def test_middleware_sets_context_user(headers, expected) -> None:
    result = _client(FakeProvider()).simulate_get("/whoami", headers=headers)
    assert result.json == {"user": expected}


def test_middleware_without_provider() -> None:
    result = _client(None).simulate_get("/whoami", headers={"Authorization": "Bearer good"})
    assert result.json == {"user": None}
