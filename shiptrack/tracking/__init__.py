"""
Tracking integration module.
Pulls tracking details for a shipment from the UPS XML tracking service.
"""

from shiptrack.tracking.errors import (
    TrackingError,
    TransportError,
    CarrierError,
    MalformedResponse,
)
from shiptrack.tracking.transport import Transport, HTTPTransport
from shiptrack.tracking.ups import UPS, TrackService

__all__ = [
    "TrackingError",
    "TransportError",
    "CarrierError",
    "MalformedResponse",
    "Transport",
    "HTTPTransport",
    "UPS",
    "TrackService",
]
