from datetime import datetime
from typing import List

from pydantic import BaseModel, Field, computed_field, ConfigDict, field_validator
from linkanalytics_app.config import settings
from linkanalytics_app.models.link import LinkAnalytics


class LinkCreate(BaseModel):
    destination: str = Field(..., description="The destination URL to shorten")

    @field_validator("destination")
    @classmethod
    def strip_destination(cls, value: str) -> str:
        """Identifiers are derived from the exact bytes, so trim first"""
        value = value.strip()
        if not value:
            raise ValueError("destination must not be empty")
        return value


class LinkResponse(BaseModel):
    """Response schema built straight from a Link model

    from_attributes=True lets FastAPI serialize the domain model directly.
    """
    identifier: str
    destination: str

    @computed_field
    @property
    def short_url(self) -> str:
        return f"{settings.base_url}/go/{self.identifier}"

    @computed_field
    @property
    def analytics_url(self) -> str:
        return f"{settings.base_url}/api/v1/links/{self.identifier}/analytics"

    model_config = ConfigDict(from_attributes=True)


class HitResponse(BaseModel):
    timestamp: datetime
    client_signature: str

    model_config = ConfigDict(from_attributes=True)


class AnalyticsResponse(BaseModel):
    identifier: str
    destination: str
    total_hits: int
    hits: List[HitResponse]
    history: str = Field(..., description="Raw content of the link's storage file")

    @classmethod
    def from_analytics(cls, analytics: LinkAnalytics) -> "AnalyticsResponse":
        return cls(
            identifier=analytics.link.identifier,
            destination=analytics.link.destination,
            total_hits=analytics.total_hits,
            hits=[HitResponse.model_validate(hit, from_attributes=True) for hit in analytics.hits],
            history=analytics.history.decode("utf-8", errors="replace"),
        )
