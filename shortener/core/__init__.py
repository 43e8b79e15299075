"""Core module for the URL shortener application."""

from shortener.core.config import settings
from shortener.core.digest import derive_id

__all__ = ["settings", "derive_id"]
