"""HTTP middleware for the URL shortener application."""

from shortener.middleware.logging import RequestLoggingMiddleware

__all__ = ["RequestLoggingMiddleware"]
