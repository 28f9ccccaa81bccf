"""Cache data models for aicommitmessage.

Contains Pydantic models for cache entries:
- CacheEntry: A cached backend response and its integrity data
"""

from datetime import datetime

from pydantic import BaseModel


class CacheEntry(BaseModel):
    """A backend response stored on disk."""

    model: str
    response: str
    checksum: str  # sha256 of "model|response"
    timestamp: datetime  # UTC time the response was stored
