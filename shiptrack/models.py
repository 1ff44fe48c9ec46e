"""
Data models for shiptrack.
Defines the credentials handed to the carrier and the tracking details it returns.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class UPSCredentials(BaseModel):
    """Credentials for the UPS XML services (AccessRequest block)."""

    access_license_number: str
    user_id: str
    password: str

    class Config:
        frozen = True


class TrackingEvent(BaseModel):
    """A single recorded status change for a shipment."""

    name: Optional[str] = None  # status description, e.g. "Delivered"
    type: Optional[str] = None  # status code
    occurred_at: Optional[datetime] = None

    # Location
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None

    class Config:
        frozen = True


class TrackingResult(BaseModel):
    """Tracking details for one tracking number."""

    # Origin
    origin_city: Optional[str] = None
    origin_state: Optional[str] = None
    origin_country: Optional[str] = None

    # Destination
    destination_city: Optional[str] = None
    destination_state: Optional[str] = None
    destination_zip: Optional[str] = None
    destination_country: Optional[str] = None

    # Status
    signature_name: Optional[str] = None
    service_type: str
    status: Optional[str] = None

    # Dates (carrier local time)
    ship_date: Optional[datetime] = None
    estimated_delivery_at: Optional[datetime] = None
    delivery_at: Optional[datetime] = None

    # Most recent first
    events: list[TrackingEvent] = Field(default_factory=list)

    # UPS does not report duplicate waybills, always None
    duplicated_waybill: Optional[str] = None

    class Config:
        frozen = True

    @property
    def last_event(self) -> Optional[TrackingEvent]:
        """The most recent event, if any were reported."""
        return self.events[0] if self.events else None

    @property
    def delivered(self) -> bool:
        return self.delivery_at is not None
