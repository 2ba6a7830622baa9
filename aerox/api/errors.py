"""
AeroX Dashboard - API Error System
==================================

Centralized error codes and exception handling for consistent API responses.
"""

from enum import Enum
from typing import Any, Dict, Optional

from fastapi import HTTPException
from fastapi.responses import JSONResponse
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
    HTTP_502_BAD_GATEWAY,
    HTTP_503_SERVICE_UNAVAILABLE,
)


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCode(str, Enum):
    """
    Centralized error codes for the API.

    Format: CATEGORY_SPECIFIC_ERROR

    Categories:
    - AUTH: Authentication/authorization errors
    - GUILD: Guild lookup errors
    - BOT: Bot availability errors
    - VALIDATION: Input validation errors
    - SERVER: Server-side errors
    """

    # Authentication errors (401, 403)
    AUTH_MISSING_TOKEN = "AUTH_MISSING_TOKEN"
    AUTH_INVALID_TOKEN = "AUTH_INVALID_TOKEN"
    AUTH_SESSION_EXPIRED = "AUTH_SESSION_EXPIRED"
    AUTH_NOT_OWNER = "AUTH_NOT_OWNER"
    AUTH_NO_GUILD_ACCESS = "AUTH_NO_GUILD_ACCESS"
    AUTH_OAUTH_FAILED = "AUTH_OAUTH_FAILED"
    AUTH_OAUTH_NOT_CONFIGURED = "AUTH_OAUTH_NOT_CONFIGURED"
    AUTH_INVALID_STATE = "AUTH_INVALID_STATE"

    # Guild errors (404)
    GUILD_NOT_FOUND = "GUILD_NOT_FOUND"

    # Bot errors (503)
    BOT_NOT_INITIALIZED = "BOT_NOT_INITIALIZED"

    # Validation errors (400, 422)
    VALIDATION_FAILED = "VALIDATION_FAILED"

    # Server errors (500, 502)
    SERVER_ERROR = "SERVER_ERROR"
    SERVER_DISCORD_ERROR = "SERVER_DISCORD_ERROR"


# =============================================================================
# Error Messages
# =============================================================================

ERROR_MESSAGES: Dict[ErrorCode, str] = {
    # Auth
    ErrorCode.AUTH_MISSING_TOKEN: "Authentication required",
    ErrorCode.AUTH_INVALID_TOKEN: "Invalid or expired authentication token",
    ErrorCode.AUTH_SESSION_EXPIRED: "Dashboard session has expired, please log in again",
    ErrorCode.AUTH_NOT_OWNER: "Owner access required",
    ErrorCode.AUTH_NO_GUILD_ACCESS: "No permission to manage this guild",
    ErrorCode.AUTH_OAUTH_FAILED: "Discord OAuth authentication failed",
    ErrorCode.AUTH_OAUTH_NOT_CONFIGURED: "Discord OAuth is not configured",
    ErrorCode.AUTH_INVALID_STATE: "OAuth state is missing or invalid",

    # Guilds
    ErrorCode.GUILD_NOT_FOUND: "Bot is not in this guild",

    # Bot
    ErrorCode.BOT_NOT_INITIALIZED: "Bot is not initialized",

    # Validation
    ErrorCode.VALIDATION_FAILED: "Request validation failed",

    # Server
    ErrorCode.SERVER_ERROR: "An internal server error occurred",
    ErrorCode.SERVER_DISCORD_ERROR: "Failed to communicate with Discord",
}


# =============================================================================
# Default Status Codes
# =============================================================================

ERROR_STATUS_CODES: Dict[ErrorCode, int] = {
    # Auth - 401/403
    ErrorCode.AUTH_MISSING_TOKEN: HTTP_401_UNAUTHORIZED,
    ErrorCode.AUTH_INVALID_TOKEN: HTTP_401_UNAUTHORIZED,
    ErrorCode.AUTH_SESSION_EXPIRED: HTTP_401_UNAUTHORIZED,
    ErrorCode.AUTH_NOT_OWNER: HTTP_403_FORBIDDEN,
    ErrorCode.AUTH_NO_GUILD_ACCESS: HTTP_403_FORBIDDEN,
    ErrorCode.AUTH_OAUTH_FAILED: HTTP_401_UNAUTHORIZED,
    ErrorCode.AUTH_OAUTH_NOT_CONFIGURED: HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.AUTH_INVALID_STATE: HTTP_400_BAD_REQUEST,

    # Guilds - 404
    ErrorCode.GUILD_NOT_FOUND: HTTP_404_NOT_FOUND,

    # Bot - 503
    ErrorCode.BOT_NOT_INITIALIZED: HTTP_503_SERVICE_UNAVAILABLE,

    # Validation - 400/422
    ErrorCode.VALIDATION_FAILED: 422,

    # Server - 500/502
    ErrorCode.SERVER_ERROR: HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.SERVER_DISCORD_ERROR: HTTP_502_BAD_GATEWAY,
}


# =============================================================================
# API Error Exception
# =============================================================================

class APIError(HTTPException):
    """
    Custom API exception with error codes.

    Usage:
        raise APIError(ErrorCode.GUILD_NOT_FOUND)
        raise APIError(ErrorCode.AUTH_OAUTH_FAILED, details={"reason": "invalid_grant"})
        raise APIError(ErrorCode.AUTH_MISSING_TOKEN, headers={"WWW-Authenticate": "Bearer"})
    """

    def __init__(
        self,
        code: ErrorCode,
        status_code: Optional[int] = None,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.error_code = code
        self.error_message = message or ERROR_MESSAGES.get(code, "An error occurred")
        self.error_details = details

        if status_code is None:
            status_code = ERROR_STATUS_CODES.get(code, HTTP_400_BAD_REQUEST)

        super().__init__(
            status_code=status_code,
            detail={
                "success": False,
                "error_code": code.value,
                "message": self.error_message,
                "details": details,
            },
            headers=headers,
        )


# =============================================================================
# Helper Functions
# =============================================================================

def error_response(
    code: ErrorCode,
    status_code: Optional[int] = None,
    message: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    """
    Create a JSON error response without raising an exception.

    Useful for returning errors in exception handlers.
    """
    if status_code is None:
        status_code = ERROR_STATUS_CODES.get(code, HTTP_400_BAD_REQUEST)

    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error_code": code.value,
            "message": message or ERROR_MESSAGES.get(code, "An error occurred"),
            "details": details,
        },
    )


def unauthorized(code: ErrorCode = ErrorCode.AUTH_MISSING_TOKEN) -> APIError:
    """Shorthand for 401 errors with a Bearer challenge."""
    return APIError(code, headers={"WWW-Authenticate": "Bearer"})


def forbidden(code: ErrorCode = ErrorCode.AUTH_NO_GUILD_ACCESS, message: Optional[str] = None) -> APIError:
    """Shorthand for 403 errors."""
    return APIError(code, message=message)


__all__ = [
    "ErrorCode",
    "ERROR_MESSAGES",
    "ERROR_STATUS_CODES",
    "APIError",
    "error_response",
    "unauthorized",
    "forbidden",
]
