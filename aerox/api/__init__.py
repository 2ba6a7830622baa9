"""
AeroX Dashboard - API Package
=============================

FastAPI-based REST API for the dashboard and documentation site.

Features:
- Cached features index of every command (GET /api/features)
- Discord OAuth login with JWT access tokens
- Guild, channel and role lookups through the attached bot
- Request logging

Usage with bot:
    from aerox.api import APIService

    api_service = APIService(bot)
    await api_service.start()

    # On shutdown
    await api_service.stop()

Standalone (for development):
    uvicorn aerox.api.app:app --reload
"""

import asyncio
from typing import Any, Optional

import uvicorn

from aerox.core.logger import logger
from aerox.api.config import get_api_config
from aerox.api.app import create_app
from aerox.api.services.auth import get_auth_service, AuthService
from aerox.services.features import FeatureIndexCache


# =============================================================================
# API Service
# =============================================================================

class APIService:
    """
    Manages the FastAPI server lifecycle next to a Discord bot.

    This service runs the API server in a background task, allowing
    the bot and API to run concurrently.
    """

    def __init__(self, bot: Optional[Any] = None) -> None:
        """
        Initialize the API service.

        Args:
            bot: The Discord bot instance, if any
        """
        self._bot = bot
        self._config = get_api_config()
        self._app = create_app(bot)
        self._server: Optional[uvicorn.Server] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def app(self):
        return self._app

    @property
    def is_running(self) -> bool:
        """Check if the API server is running."""
        return self._task is not None and not self._task.done()

    @property
    def auth_service(self) -> AuthService:
        return get_auth_service()

    @property
    def features_cache(self) -> FeatureIndexCache:
        return self._app.state.features_cache

    async def start(self) -> None:
        """Start the API server in a background task."""
        if self.is_running:
            logger.warning("API Already Running", [])
            return

        config = uvicorn.Config(
            app=self._app,
            host=self._config.host,
            port=self._config.port,
            log_level="warning",  # Reduce uvicorn logging
            access_log=False,  # We have our own logging middleware
        )

        self._server = uvicorn.Server(config)
        self._task = asyncio.create_task(self._run_server())

        logger.tree("API Service Started", [
            ("Host", self._config.host),
            ("Port", str(self._config.port)),
            ("Debug", str(self._config.debug)),
        ], emoji="🌐")

    async def _run_server(self) -> None:
        """Run the uvicorn server."""
        try:
            await self._server.serve()
        except asyncio.CancelledError:
            logger.debug("API Server Cancelled", [])
        except Exception as e:
            logger.error("API Server Error", [
                ("Error Type", type(e).__name__),
                ("Error", str(e)[:100]),
            ])

    async def stop(self) -> None:
        """Stop the API server gracefully."""
        if not self.is_running:
            return

        logger.tree("API Service Stopping", [], emoji="🛑")

        # Signal server to stop
        if self._server:
            self._server.should_exit = True

        # Wait for task to complete
        if self._task:
            try:
                await asyncio.wait_for(self._task, timeout=5.0)
            except asyncio.TimeoutError:
                self._task.cancel()
                try:
                    await self._task
                except asyncio.CancelledError:
                    pass

        self._server = None
        self._task = None

        logger.tree("API Service Stopped", [], emoji="✅")


__all__ = ["APIService", "create_app"]
