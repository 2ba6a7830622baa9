"""
Tests for the /api/guilds endpoints.

Covers the manageable-guild filter, guild access checks, and lookups
against a mocked bot cache.
"""

from aerox.api.routers.guilds import icon_url
from aerox.api.models.auth import PartialGuild


# =============================================================================
# GET /api/guilds
# =============================================================================

class TestListGuilds:
    """Tests for GET /api/guilds."""

    def test_requires_auth(self, client):
        assert client.get("/api/guilds").status_code == 401

    def test_only_manageable_guilds(self, make_client, mock_bot, login):
        client = make_client(bot=mock_bot)
        guilds = client.get("/api/guilds", headers=login()).json()["guilds"]
        assert [g["id"] for g in guilds] == ["111", "222"]

    def test_bot_present_flag(self, make_client, mock_bot, login):
        client = make_client(bot=mock_bot)
        guilds = {g["id"]: g for g in client.get("/api/guilds", headers=login()).json()["guilds"]}
        assert guilds["111"]["botPresent"] is True
        assert guilds["222"]["botPresent"] is False

    def test_without_bot(self, client, login):
        guilds = client.get("/api/guilds", headers=login()).json()["guilds"]
        assert all(g["botPresent"] is False for g in guilds)

    def test_icon_urls(self, client, login):
        guilds = {g["id"]: g for g in client.get("/api/guilds", headers=login()).json()["guilds"]}
        assert guilds["111"]["icon"] == "https://cdn.discordapp.com/icons/111/abc.png"
        assert guilds["222"]["icon"] == "https://cdn.discordapp.com/icons/222/a_anim.gif"

    def test_icon_url_none(self):
        assert icon_url(PartialGuild(id="1", name="g")) is None


# =============================================================================
# Guild Lookups
# =============================================================================

class TestGuildChannels:
    """Tests for GET /api/guilds/{guild_id}/channels."""

    def test_channels(self, make_client, mock_bot, login):
        client = make_client(bot=mock_bot)
        channels = client.get("/api/guilds/111/channels", headers=login()).json()["channels"]
        assert channels == [
            {"id": "500", "name": "General", "type": "category", "parentId": None},
            {"id": "501", "name": "chat", "type": "text", "parentId": "500"},
        ]

    def test_no_manage_permission(self, make_client, mock_bot, login):
        client = make_client(bot=mock_bot)
        response = client.get("/api/guilds/333/channels", headers=login())
        assert response.status_code == 403
        assert response.json()["error_code"] == "AUTH_NO_GUILD_ACCESS"

    def test_guild_not_in_session(self, make_client, mock_bot, login):
        client = make_client(bot=mock_bot)
        assert client.get("/api/guilds/999/channels", headers=login()).status_code == 403

    def test_bot_not_in_guild(self, make_client, mock_bot, login):
        client = make_client(bot=mock_bot)
        response = client.get("/api/guilds/222/channels", headers=login())
        assert response.status_code == 404
        assert response.json()["error_code"] == "GUILD_NOT_FOUND"

    def test_no_bot_attached(self, client, login):
        response = client.get("/api/guilds/111/channels", headers=login())
        assert response.status_code == 503
        assert response.json()["error_code"] == "BOT_NOT_INITIALIZED"

    def test_owner_can_access_any_guild(self, make_client, mock_bot, login):
        client = make_client(bot=mock_bot, OWNER_IDS="42")
        headers = login(user_id=42, guilds=[])
        assert client.get("/api/guilds/111/channels", headers=headers).status_code == 200


class TestGuildRoles:
    """Tests for GET /api/guilds/{guild_id}/roles."""

    def test_roles_sorted_without_everyone(self, make_client, mock_bot, login):
        client = make_client(bot=mock_bot)
        roles = client.get("/api/guilds/111/roles", headers=login()).json()["roles"]
        assert roles == [
            {"id": "602", "name": "Admin", "color": "#ff0000", "position": 5},
            {"id": "601", "name": "Member", "color": "#00ff00", "position": 1},
        ]

    def test_bot_not_in_guild(self, make_client, mock_bot, login):
        client = make_client(bot=mock_bot)
        assert client.get("/api/guilds/222/roles", headers=login()).status_code == 404
