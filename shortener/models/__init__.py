"""
Data models for the URL shortener application.

This module imports and exports all SQLModel models used in the application.
"""

# First import SQLModel itself to ensure metadata is initialized
from sqlmodel import SQLModel

from shortener.models.url import UrlMapping, UrlMappingRead

__all__ = [
    "SQLModel",
    "UrlMapping",
    "UrlMappingRead",
]
