"""URL mapping data models.

This module defines the UrlMapping model for storing id -> URL mappings
in the database.
"""
from datetime import datetime
from typing import Optional

from sqlalchemy import Column, DateTime, String, Text, func
from sqlmodel import Field, SQLModel

from shortener.core.digest import ID_LENGTH


class UrlMapping(SQLModel, table=True):
    """
    Stored mapping between an identifier and its original URL.

    Rows are written once and never updated or deleted. ``created_at`` maps
    onto the ``creation_date`` column and is filled in by the database.
    """

    __tablename__ = "urls"

    id: str = Field(
        sa_column=Column(String(ID_LENGTH), primary_key=True),
        description="Hash-derived identifier used as the short path segment",
    )
    original_url: str = Field(
        sa_column=Column(Text, nullable=False),
        description="The destination the short link redirects to",
    )
    created_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(
            "creation_date",
            DateTime(timezone=True),
            nullable=False,
            server_default=func.now(),
        ),
    )


class UrlMappingRead(SQLModel):
    """Schema for reading a URL mapping."""
    id: str
    original_url: str
    created_at: Optional[datetime] = None
