"""API request and response schemas.

This module contains Pydantic models for API request validation
and response serialization.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class ShortenRequest(BaseModel):
    """Request schema for creating a short link.

    The URL is stored as given, the empty string included; only its
    presence and type are checked.
    """
    url: str = Field(description="Destination to shorten")


class ShortenResponse(BaseModel):
    """Response schema for a created short link."""
    short_url: str


class ErrorResponse(BaseModel):
    """Response schema for errors."""
    detail: str
    errors: Optional[List[Dict[str, Any]]] = None
