"""Base mixins and shared utilities for event schemas."""

from django.conf import settings
from ninja import Schema
from pydantic import Field

from common.schema import UpToTwoHundredString


def ensure_url(value: str) -> str:
    """Make a storage URL absolute using the configured service URL."""
    if not value.startswith("http"):
        return settings.SERVICE_URL.rstrip("/") + value
    return value


class LocationEditMixin(Schema):
    location_name: UpToTwoHundredString | None = None
    location_lat: float | None = Field(None, ge=-90, le=90)
    location_lng: float | None = Field(None, ge=-180, le=180)


class LocationRetrieveMixin(Schema):
    location_name: str
    location_lat: float | None = None
    location_lng: float | None = None
