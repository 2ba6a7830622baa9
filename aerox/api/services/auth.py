"""
AeroX Dashboard - Auth Service
==============================

Dashboard sessions backed by Discord OAuth and JWT access tokens.

DESIGN:
    Discord OAuth proves who the operator is; the dashboard then issues
    its own JWT so the frontend can call the API with a bearer token.
    The user's guild list (with permission bits) is too large for the
    token, so it lives in an in-memory session keyed by Discord ID.
    A restart drops every session and tokens issued before it stop
    working, which is the same lifetime the original cookie sessions had.
"""

import hashlib
import secrets
import time
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Tuple

import discord
import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError

from aerox.core.config import is_owner as is_bot_owner
from aerox.core.logger import logger
from aerox.api.config import get_api_config
from aerox.api.models.auth import DiscordUser, PartialGuild, TokenPayload


# =============================================================================
# Constants
# =============================================================================

TOKEN_TYPE_ACCESS = "access"
PERMISSION_OWNER = "owner"

STATE_TTL_SECONDS = 600  # OAuth round trip must finish within 10 minutes


# =============================================================================
# Session Model
# =============================================================================

@dataclass
class DashboardSession:
    """What the dashboard knows about a logged-in operator."""

    user: DiscordUser
    guilds: List[PartialGuild] = field(default_factory=list)
    is_owner: bool = False
    discord_access_token: Optional[str] = None
    discord_refresh_token: Optional[str] = None
    created_at: float = field(default_factory=time.time)

    @property
    def user_id(self) -> int:
        return int(self.user.id)

    def find_guild(self, guild_id: str) -> Optional[PartialGuild]:
        for guild in self.guilds:
            if guild.id == guild_id:
                return guild
        return None


def can_manage_guild(guild: PartialGuild) -> bool:
    """Whether the guild's permission bits include MANAGE_GUILD (0x20)."""
    try:
        bits = int(guild.permissions)
    except ValueError:
        return False
    return discord.Permissions(bits).manage_guild


# =============================================================================
# Auth Service
# =============================================================================

class AuthService:
    """
    Handles authentication for the dashboard.

    Features:
    - OAuth state generation and one-time validation
    - JWT token generation and validation
    - In-memory session store with guild permissions
    - Token revocation on logout (hash blacklist)
    """

    def __init__(self) -> None:
        self._config = get_api_config()
        self._secret = self._config.jwt_secret or secrets.token_hex(32)
        if not self._config.jwt_secret:
            logger.warning("SESSION_SECRET Not Set", [
                ("Effect", "Tokens are signed with a per-process key"),
            ])
        self._sessions: Dict[int, DashboardSession] = {}
        self._pending_states: Dict[str, Tuple[float, bool]] = {}  # state -> (created, redirect)
        self._revoked_tokens: Dict[str, float] = {}  # sha256 -> exp timestamp

    # =========================================================================
    # OAuth State
    # =========================================================================

    def create_state(self, redirect: bool = False) -> str:
        """Create a one-time OAuth state value."""
        self._purge_states()
        state = secrets.token_urlsafe(24)
        self._pending_states[state] = (time.time(), redirect)
        return state

    def consume_state(self, state: Optional[str]) -> Optional[bool]:
        """
        Validate and discard an OAuth state.

        Returns:
            The redirect flag the state was created with, or None if the
            state is unknown or expired.
        """
        if not state:
            return None
        entry = self._pending_states.pop(state, None)
        if entry is None:
            return None
        created, redirect = entry
        if time.time() - created > STATE_TTL_SECONDS:
            return None
        return redirect

    def _purge_states(self) -> None:
        cutoff = time.time() - STATE_TTL_SECONDS
        for state, (created, _) in list(self._pending_states.items()):
            if created < cutoff:
                self._pending_states.pop(state, None)

    # =========================================================================
    # Sessions
    # =========================================================================

    def login(
        self,
        user: DiscordUser,
        guilds: List[PartialGuild],
        discord_access_token: Optional[str] = None,
        discord_refresh_token: Optional[str] = None,
    ) -> Tuple[str, datetime]:
        """
        Store a session for a user and issue an access token.

        Returns:
            Tuple of (token, expires_at).
        """
        user_id = int(user.id)
        is_owner = is_bot_owner(user_id)

        self._sessions[user_id] = DashboardSession(
            user=user,
            guilds=guilds,
            is_owner=is_owner,
            discord_access_token=discord_access_token,
            discord_refresh_token=discord_refresh_token,
        )

        permissions = [PERMISSION_OWNER] if is_owner else []
        token, expires_at = self._generate_token(user_id, permissions)

        logger.tree("Dashboard Login", [
            ("User", f"{user.username} ({user.id})"),
            ("Guilds", str(len(guilds))),
            ("Owner", "✅" if is_owner else "❌"),
        ], emoji="🔐")

        return token, expires_at

    def get_session(self, user_id: int) -> Optional[DashboardSession]:
        return self._sessions.get(user_id)

    def logout(self, token: str) -> bool:
        """Revoke a token and drop its session."""
        payload = self.get_token_payload(token)
        if payload is None:
            return False
        self._purge_revoked()
        self._revoked_tokens[self._hash(token)] = payload.exp.timestamp()
        self._sessions.pop(payload.sub, None)
        logger.info("Dashboard Logout", [("User ID", str(payload.sub))])
        return True

    @property
    def session_count(self) -> int:
        return len(self._sessions)

    # =========================================================================
    # Token Management
    # =========================================================================

    @staticmethod
    def _hash(token: str) -> str:
        return hashlib.sha256(token.encode()).hexdigest()

    def _purge_revoked(self) -> None:
        """Forget revoked tokens that have expired on their own."""
        now = time.time()
        for token_hash, exp in list(self._revoked_tokens.items()):
            if exp < now:
                self._revoked_tokens.pop(token_hash, None)

    def _generate_token(self, user_id: int, permissions: List[str]) -> Tuple[str, datetime]:
        now = datetime.now(timezone.utc)
        expires_at = now + timedelta(hours=self._config.jwt_expiry_hours)

        payload = {
            "sub": str(user_id),  # JWT requires sub to be string
            "iat": now,
            "exp": expires_at,
            "type": TOKEN_TYPE_ACCESS,
            "permissions": permissions,
        }

        token = jwt.encode(payload, self._secret, algorithm=self._config.jwt_algorithm)
        return token, expires_at

    def get_token_payload(self, token: str) -> Optional[TokenPayload]:
        """Decode a token, or None if it is invalid, expired, or revoked."""
        if not token or self._hash(token) in self._revoked_tokens:
            return None

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._config.jwt_algorithm],
            )
            if payload.get("type") != TOKEN_TYPE_ACCESS:
                return None

            return TokenPayload(
                sub=int(payload["sub"]),
                exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
                iat=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
                type=payload["type"],
                permissions=payload.get("permissions", []),
            )
        except (ExpiredSignatureError, InvalidTokenError, KeyError, ValueError, TypeError):
            return None


# =============================================================================
# Singleton
# =============================================================================

_auth_service: Optional[AuthService] = None


def get_auth_service() -> AuthService:
    """Get the auth service singleton."""
    global _auth_service
    if _auth_service is None:
        _auth_service = AuthService()
    return _auth_service


def reset_auth_service() -> None:
    global _auth_service
    _auth_service = None


__all__ = [
    "AuthService",
    "DashboardSession",
    "PERMISSION_OWNER",
    "can_manage_guild",
    "get_auth_service",
    "reset_auth_service",
]
