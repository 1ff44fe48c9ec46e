"""
Errors raised while tracking a shipment.
"""

from typing import Optional


class TrackingError(Exception):
    """Base class for tracking failures."""
    pass


class TransportError(TrackingError):
    """The request could not be delivered or the carrier rejected it."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class CarrierError(TransportError):
    """UPS answered, but with a failed ResponseStatusCode."""

    def __init__(self, message: str, code: Optional[str] = None, response: Optional[dict] = None):
        super().__init__(message)
        self.code = code
        self.response = response or {}


class MalformedResponse(TrackingError):
    """The response arrived but does not have the expected shape."""
    pass
