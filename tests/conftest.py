"""
AeroX Dashboard - Test Fixtures
===============================

Shared fixtures for all tests.
"""

import os
from pathlib import Path
from typing import Optional
from unittest.mock import MagicMock

import pytest

# Set up test environment before importing modules
os.environ["AEROX_LOG_TO_FILE"] = "false"
os.environ.pop("DEBUG", None)

from fastapi.testclient import TestClient  # noqa: E402

from aerox.core.config import reset_config  # noqa: E402
from aerox.api.config import reset_api_config  # noqa: E402
from aerox.api.models.auth import DiscordUser, PartialGuild  # noqa: E402
from aerox.api.services.auth import get_auth_service, reset_auth_service  # noqa: E402
from aerox.services.features import FeatureIndexCache  # noqa: E402


ENV_KEYS = (
    "DISCORD_CLIENT_ID",
    "DISCORD_CLIENT_SECRET",
    "OWNER_IDS",
    "AEROX_COMMANDS_DIR",
    "AEROX_COMMAND_EXTENSION",
    "AEROX_DOCS_DIR",
    "DASHBOARD_URL",
    "LOG_WEBHOOK_URL",
    "AEROX_TIMEZONE",
    "SESSION_SECRET",
    "AEROX_API_HOST",
    "AEROX_API_DEBUG",
    "AEROX_CORS_ORIGINS",
    "AEROX_JWT_EXPIRY_HOURS",
    "AEROX_FEATURES_CACHE_TTL_MS",
    "AEROX_SLOW_REQUEST_MS",
    "DASHBOARD_PORT",
    "DASHBOARD_CALLBACK_URL",
)


# =============================================================================
# Command Source Helpers
# =============================================================================

def command_source(
    name: Optional[str] = None,
    description: Optional[str] = None,
    **fields,
) -> str:
    """Render a command module the way the bot declares them."""
    lines = ["module.exports = {"]
    if name is not None:
        lines.append(f"    name: '{name}',")
    if description is not None:
        lines.append(f"    description: '{description}',")
    for key, value in fields.items():
        if isinstance(value, bool):
            lines.append(f"    {key}: {'true' if value else 'false'},")
        elif isinstance(value, int):
            lines.append(f"    {key}: {value},")
        elif isinstance(value, (list, tuple)):
            tokens = ", ".join(f"'{v}'" for v in value)
            lines.append(f"    {key}: [{tokens}],")
        else:
            lines.append(f"    {key}: '{value}',")
    lines.append("    async execute(message, args) {},")
    lines.append("};")
    return "\n".join(lines) + "\n"


def write_command(root: Path, relative: str, text: str) -> Path:
    path = root.joinpath(*relative.split("/"))
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


# =============================================================================
# Environment
# =============================================================================

@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Isolate every test from the host environment and cached singletons."""
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    reset_config()
    reset_api_config()
    reset_auth_service()
    yield
    reset_config()
    reset_api_config()
    reset_auth_service()


@pytest.fixture
def configure(monkeypatch):
    """Set environment variables and drop cached config."""
    def _configure(**env):
        for key, value in env.items():
            monkeypatch.setenv(key, value)
        reset_config()
        reset_api_config()
        reset_auth_service()
    return _configure


# =============================================================================
# Command Trees
# =============================================================================

@pytest.fixture
def commands_root(tmp_path) -> Path:
    """
    A small command tree:

        music/play.js                     (slash, aliases, usage)
        music/queue.js
        music/filters/nightcore.js        -> subcategory "filters"
        music/filters/eq/bassboost.js     -> subcategory "filters/eq"
        utility/ping.js                   (explicit category "info")
        utility/broken.js                 (no description, skipped)
        about.js                          (root level, uncategorized)
        utility/README.md                 (not a command file)
    """
    root = tmp_path / "commands"
    write_command(root, "music/play.js", command_source(
        "play", "Play a song", usage="play <query>", aliases=["p", "pl"], enabledSlash=True,
    ))
    write_command(root, "music/queue.js", command_source("queue", "Show the queue"))
    write_command(root, "music/filters/nightcore.js", command_source(
        "nightcore", "Nightcore filter", enabledSlash=False,
    ))
    write_command(root, "music/filters/eq/bassboost.js", command_source(
        "bassboost", "Boost the bass", enabledSlash=True,
    ))
    write_command(root, "utility/ping.js", command_source(
        "ping", "Check latency", category="info", cooldown=5,
    ))
    write_command(root, "utility/broken.js", command_source("broken"))
    write_command(root, "about.js", command_source("about", "About the bot"))
    write_command(root, "utility/README.md", "name: 'readme', description: 'not code'")
    return root


# =============================================================================
# Application
# =============================================================================

@pytest.fixture
def features_cache(commands_root) -> FeatureIndexCache:
    return FeatureIndexCache(commands_root)


@pytest.fixture
def make_client(configure, commands_root, features_cache):
    """Build a TestClient for an app with an optional bot attached."""
    from aerox.api.app import create_app

    clients = []

    def _make(bot=None, **env):
        configure(AEROX_COMMANDS_DIR=str(commands_root), **env)
        app = create_app(bot=bot, features_cache=features_cache)
        client = TestClient(app, raise_server_exceptions=False)
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client) -> TestClient:
    return make_client()


# =============================================================================
# Discord Mocks
# =============================================================================

def _named(mock: MagicMock, name: str) -> MagicMock:
    # MagicMock(name=...) names the mock itself, not the attribute
    mock.name = name
    return mock


@pytest.fixture
def mock_guild():
    """Guild 111 as seen in the bot's cache."""
    guild = _named(MagicMock(), "Test Guild")
    guild.id = 111
    guild.member_count = 42

    category = _named(MagicMock(), "General")
    category.id = 500
    category.type = "category"
    category.category_id = None

    text = _named(MagicMock(), "chat")
    text.id = 501
    text.type = "text"
    text.category_id = 500

    guild.channels = [category, text]

    everyone = _named(MagicMock(), "@everyone")
    everyone.id = 111
    everyone.position = 0
    everyone.color = "#000000"
    everyone.is_default.return_value = True

    member = _named(MagicMock(), "Member")
    member.id = 601
    member.position = 1
    member.color = "#00ff00"
    member.is_default.return_value = False

    admin = _named(MagicMock(), "Admin")
    admin.id = 602
    admin.position = 5
    admin.color = "#ff0000"
    admin.is_default.return_value = False

    guild.roles = [everyone, member, admin]
    return guild


@pytest.fixture
def mock_bot(mock_guild):
    """A ready bot that is only in guild 111."""
    bot = MagicMock()
    bot.is_ready.return_value = True
    bot.guilds = [mock_guild]
    bot.latency = 0.042
    bot.shard_count = None
    bot.get_guild.side_effect = lambda gid: mock_guild if gid == mock_guild.id else None
    return bot


# =============================================================================
# Sessions
# =============================================================================

MANAGE_GUILD = str(0x20)

SESSION_GUILDS = [
    PartialGuild(id="111", name="Test Guild", icon="abc", permissions=MANAGE_GUILD),
    PartialGuild(id="222", name="Other Guild", icon="a_anim", owner=True, permissions=str(0x20 | 0x8)),
    PartialGuild(id="333", name="Member Only", permissions=str(0x400)),
]


@pytest.fixture
def login():
    """Create a dashboard session and return bearer headers."""
    def _login(user_id: int = 1001, guilds=None):
        user = DiscordUser(id=str(user_id), username=f"user{user_id}")
        token, _ = get_auth_service().login(user, list(SESSION_GUILDS if guilds is None else guilds))
        return {"Authorization": f"Bearer {token}"}
    return _login
