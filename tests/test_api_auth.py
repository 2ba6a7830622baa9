"""
Tests for the /api/auth endpoints and the auth dependencies.

The Discord OAuth client is replaced with an in-memory fake through
FastAPI dependency overrides, so no network calls are made.
"""

from urllib.parse import parse_qs, urlparse

import pytest
from fastapi.security import HTTPAuthorizationCredentials
from unittest.mock import MagicMock

from aerox.api.dependencies import require_auth, require_owner
from aerox.api.errors import APIError, ErrorCode
from aerox.api.routers.auth import get_oauth_client
from aerox.api.services.auth import get_auth_service
from aerox.api.services.discord_oauth import OAuthError


OAUTH_ENV = {
    "DISCORD_CLIENT_ID": "123",
    "DISCORD_CLIENT_SECRET": "shh",
    "SESSION_SECRET": "test-secret",
    "OWNER_IDS": "42",
    "DASHBOARD_URL": "https://dash.example.com",
}


class FakeOAuthClient:
    """Stands in for DiscordOAuthClient."""

    def __init__(self, user_id: str = "1001", fail_exchange: bool = False) -> None:
        self.user_id = user_id
        self.fail_exchange = fail_exchange
        self.codes = []

    def authorize_url(self, state: str) -> str:
        return f"https://discord.com/oauth2/authorize?state={state}"

    async def exchange_code(self, code: str):
        self.codes.append(code)
        if self.fail_exchange:
            raise OAuthError("invalid_grant", 400)
        return {"access_token": "discord-token", "refresh_token": "discord-refresh"}

    async def fetch_user(self, access_token: str):
        return {"id": self.user_id, "username": "tester", "global_name": "Tester", "avatar": None, "extra": 1}

    async def fetch_guilds(self, access_token: str):
        return [
            {"id": "111", "name": "Test Guild", "icon": None, "owner": False, "permissions": "32"},
            {"id": "333", "name": "Member Only", "icon": None, "owner": False, "permissions": "1024"},
        ]


@pytest.fixture
def fake_oauth() -> FakeOAuthClient:
    return FakeOAuthClient()


@pytest.fixture
def oauth_client(make_client, fake_oauth):
    client = make_client(**OAUTH_ENV)
    client.app.dependency_overrides[get_oauth_client] = lambda: fake_oauth
    return client


# =============================================================================
# Login
# =============================================================================

class TestLogin:
    """Tests for GET /api/auth/login."""

    def test_not_configured(self, client):
        response = client.get("/api/auth/login", follow_redirects=False)
        assert response.status_code == 503
        assert response.json()["error_code"] == ErrorCode.AUTH_OAUTH_NOT_CONFIGURED.value

    def test_redirects_to_discord(self, make_client):
        client = make_client(**OAUTH_ENV)
        response = client.get("/api/auth/login", follow_redirects=False)
        assert response.status_code == 307
        location = urlparse(response.headers["location"])
        query = parse_qs(location.query)
        assert location.netloc == "discord.com"
        assert query["scope"] == ["identify guilds"]
        assert get_auth_service().consume_state(query["state"][0]) is False

    def test_redirect_flag_stored_in_state(self, make_client):
        client = make_client(**OAUTH_ENV)
        response = client.get("/api/auth/login", params={"redirect": "1"}, follow_redirects=False)
        state = parse_qs(urlparse(response.headers["location"]).query)["state"][0]
        assert get_auth_service().consume_state(state) is True


# =============================================================================
# Callback
# =============================================================================

class TestCallback:
    """Tests for GET /api/auth/callback."""

    def test_returns_token(self, oauth_client, fake_oauth):
        state = get_auth_service().create_state()
        response = oauth_client.get("/api/auth/callback", params={"code": "abc", "state": state})
        assert response.status_code == 200
        body = response.json()
        assert body["tokenType"] == "bearer"
        assert body["expiresAt"]
        assert fake_oauth.codes == ["abc"]

        payload = get_auth_service().get_token_payload(body["accessToken"])
        assert payload.sub == 1001
        session = get_auth_service().get_session(1001)
        assert session.discord_refresh_token == "discord-refresh"
        assert [g.id for g in session.guilds] == ["111", "333"]

    def test_redirect_puts_token_in_fragment(self, oauth_client):
        state = get_auth_service().create_state(redirect=True)
        response = oauth_client.get(
            "/api/auth/callback",
            params={"code": "abc", "state": state},
            follow_redirects=False,
        )
        assert response.status_code == 307
        location = urlparse(response.headers["location"])
        assert location.netloc == "dash.example.com"
        fragment = parse_qs(location.fragment)
        assert get_auth_service().get_token_payload(fragment["access_token"][0]) is not None

    def test_owner_gets_owner_permission(self, make_client):
        client = make_client(**OAUTH_ENV)
        client.app.dependency_overrides[get_oauth_client] = lambda: FakeOAuthClient(user_id="42")
        state = get_auth_service().create_state()
        token = client.get("/api/auth/callback", params={"code": "abc", "state": state}).json()["accessToken"]
        assert get_auth_service().get_token_payload(token).is_owner

    def test_invalid_state(self, oauth_client):
        response = oauth_client.get("/api/auth/callback", params={"code": "abc", "state": "nope"})
        assert response.status_code == 400
        assert response.json()["error_code"] == ErrorCode.AUTH_INVALID_STATE.value

    def test_discord_error_param(self, oauth_client):
        state = get_auth_service().create_state()
        response = oauth_client.get("/api/auth/callback", params={"error": "access_denied", "state": state})
        assert response.status_code == 401
        assert response.json()["details"] == {"reason": "access_denied"}

    def test_exchange_failure(self, make_client):
        client = make_client(**OAUTH_ENV)
        client.app.dependency_overrides[get_oauth_client] = lambda: FakeOAuthClient(fail_exchange=True)
        state = get_auth_service().create_state()
        response = client.get("/api/auth/callback", params={"code": "bad", "state": state})
        assert response.status_code == 401
        assert response.json()["error_code"] == ErrorCode.AUTH_OAUTH_FAILED.value
        assert response.json()["details"] == {"reason": "invalid_grant"}


# =============================================================================
# Session Endpoints
# =============================================================================

class TestSessionEndpoints:
    """Tests for /api/auth/me and /api/auth/logout."""

    def test_me_requires_token(self, client):
        response = client.get("/api/auth/me")
        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"
        assert response.json() == {
            "success": False,
            "error_code": "AUTH_MISSING_TOKEN",
            "message": "Authentication required",
            "details": None,
        }

    def test_me_invalid_token(self, client):
        response = client.get("/api/auth/me", headers={"Authorization": "Bearer junk"})
        assert response.status_code == 401
        assert response.json()["error_code"] == "AUTH_INVALID_TOKEN"

    def test_me(self, client, login):
        body = client.get("/api/auth/me", headers=login()).json()
        assert body["user"]["id"] == "1001"
        assert body["isOwner"] is False
        assert len(body["guilds"]) == 3

    def test_logout(self, client, login):
        headers = login()
        assert client.post("/api/auth/logout", headers=headers).status_code == 200
        response = client.get("/api/auth/me", headers=headers)
        assert response.status_code == 401

    def test_session_dropped_after_restart(self, client, login):
        headers = login()
        get_auth_service()._sessions.clear()
        response = client.get("/api/auth/me", headers=headers)
        assert response.json()["error_code"] == "AUTH_SESSION_EXPIRED"


# =============================================================================
# Dependencies
# =============================================================================

class TestAuthDependencies:
    """Direct tests for require_auth and require_owner."""

    @staticmethod
    def _credentials(token: str) -> HTTPAuthorizationCredentials:
        return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)

    @pytest.mark.asyncio
    async def test_require_auth_sets_user_id(self, login):
        token = login(user_id=77)["Authorization"].split()[1]
        request = MagicMock()
        payload = await require_auth(request, self._credentials(token))
        assert payload.sub == 77
        assert request.state.user_id == 77

    @pytest.mark.asyncio
    async def test_require_auth_missing(self):
        with pytest.raises(APIError) as exc_info:
            await require_auth(MagicMock(), None)
        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_require_owner_rejects_non_owner(self, login):
        token = login()["Authorization"].split()[1]
        payload = get_auth_service().get_token_payload(token)
        with pytest.raises(APIError) as exc_info:
            await require_owner(payload)
        assert exc_info.value.status_code == 403
        assert exc_info.value.error_code is ErrorCode.AUTH_NOT_OWNER

    @pytest.mark.asyncio
    async def test_require_owner_accepts_owner(self, configure, login):
        configure(OWNER_IDS="42")
        token = login(user_id=42)["Authorization"].split()[1]
        payload = get_auth_service().get_token_payload(token)
        assert await require_owner(payload) is payload
