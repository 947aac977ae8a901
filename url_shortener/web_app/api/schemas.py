"""Pydantic schemas for API responses."""

from pydantic import BaseModel, ConfigDict, Field


class ShortenResponse(BaseModel):
    """Response after shortening a URL."""

    model_config = ConfigDict(populate_by_name=True)

    short_url: str = Field(..., alias="shortUrl", description="The complete short URL")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")


class StatisticsResponse(BaseModel):
    """Statistics response."""

    model_config = ConfigDict(populate_by_name=True)

    total_links: int = Field(..., alias="totalLinks", description="Number of stored short links")
