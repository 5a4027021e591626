"""
Data models for links and their recorded hits.
"""

from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class Link(BaseModel):
    """
    A registered destination and its content-addressed identifier.

    The identifier is always the digest of the destination, so two links
    with the same destination are the same link.
    """

    identifier: str = Field(..., description="Hex digest of the destination")
    destination: str = Field(..., description="The URL this link points to")

    model_config = ConfigDict(frozen=True)


class HitRecord(BaseModel):
    """
    One recorded visit of a link.

    Stored on disk as a single line: <prefix><timestamp> <client_signature>
    """

    timestamp: datetime = Field(..., description="When the hit occurred (UTC, second resolution)")
    client_signature: str = Field("", description="Opaque client signature, usually the user agent")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "timestamp": "2026-10-18T10:30:00Z",
                "client_signature": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) Chrome/120.0",
            }
        }
    )


class LinkAnalytics(BaseModel):
    """Full hit history of a link: raw storage content plus parsed hits"""

    link: Link
    history: bytes = Field(..., description="Raw content of the storage unit")
    hits: List[HitRecord] = Field(default_factory=list)

    @property
    def total_hits(self) -> int:
        return len(self.hits)
