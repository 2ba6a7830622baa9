#!/usr/bin/env python3
"""
AeroX Dashboard - Entry Point
=============================

Serves the dashboard API and documentation site without a bot attached.
When running alongside the bot, use aerox.api.APIService instead.

Features:
- Features index of every command (GET /api/features)
- Command catalogue and bot stats
- Discord OAuth login for guild management
- Static documentation site at /docs
"""

import sys

from dotenv import load_dotenv

# Logger and config read the environment at import time
load_dotenv()

import uvicorn  # noqa: E402

from aerox import __version__  # noqa: E402
from aerox.core.config import ConfigValidationError, get_config, validate_and_log_config  # noqa: E402
from aerox.core.logger import logger  # noqa: E402
from aerox.api.config import get_api_config  # noqa: E402


def main() -> None:
    """
    Validate configuration and serve the API with uvicorn.

    Raises:
        SystemExit: If configuration is malformed
    """
    logger.tree("AEROX DASHBOARD STARTING", [
        ("Version", __version__),
    ], "🚀")

    try:
        validate_and_log_config()
    except ConfigValidationError as e:
        logger.critical(f"Invalid Configuration: {e}")
        sys.exit(1)

    logger.set_webhook(get_config().log_webhook_url)

    from aerox.api.app import create_app

    api_config = get_api_config()
    uvicorn.run(
        create_app(),
        host=api_config.host,
        port=api_config.port,
        log_level="warning",
        access_log=False,
    )


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        logger.warning("Dashboard stopped by user (Ctrl+C)")
