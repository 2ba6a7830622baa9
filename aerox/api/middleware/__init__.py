"""
AeroX Dashboard - API Middleware
================================

Middleware components for the FastAPI application.
"""

from .logging import LoggingMiddleware, REQUEST_ID_HEADER

__all__ = [
    "LoggingMiddleware",
    "REQUEST_ID_HEADER",
]
