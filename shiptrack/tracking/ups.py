"""
UPS tracking service.

Example::

    ups = UPS(UPSCredentials(access_license_number="key", user_id="account", password="secret"))
    service = ups.track("1Z12345E0291980793")

    details = await service.details()
    details.status
    # => "Delivered"
    details.signature_name
    # => "KKING"

UPS can also locate packages by reference number and other means; only
tracking numbers are supported here.
"""

import asyncio
from typing import Optional
from loguru import logger

from shiptrack.config import TrackerConfig
from shiptrack.models import TrackingResult, UPSCredentials
from shiptrack.tracking.parser import parse_track_response
from shiptrack.tracking.transport import HTTPTransport, Transport
from shiptrack.tracking.xml_codec import build_request_body


class UPS:
    """Entry point for the UPS services."""

    def __init__(
        self,
        credentials: UPSCredentials,
        test: bool = False,
        transport: Optional[Transport] = None,
        timeout: float = 30,
    ):
        self.credentials = credentials
        self.test = test
        self.transport = transport or HTTPTransport(
            base_url=HTTPTransport.TEST_URL if test else HTTPTransport.LIVE_URL,
            timeout=timeout,
        )

    @classmethod
    def from_config(cls, config: TrackerConfig, transport: Optional[Transport] = None) -> "UPS":
        """Build a UPS client from loaded configuration."""
        credentials = UPSCredentials(
            access_license_number=config.ups_access_license_number,
            user_id=config.ups_user_id,
            password=config.ups_password,
        )
        if transport is None and config.ups_base_url:
            transport = HTTPTransport(base_url=config.ups_base_url, timeout=config.request_timeout)
        return cls(
            credentials,
            test=config.ups_test_mode,
            transport=transport,
            timeout=config.request_timeout,
        )

    def track(self, tracking_number: str) -> "TrackService":
        """Create a tracking service for one tracking number."""
        return TrackService(self, tracking_number)


class TrackService:
    """
    Tracks a single tracking number.

    The request is only sent on the first call to ``details()``; the result
    is kept for the lifetime of the service. Create a new service to re-fetch.
    """

    path = "/Track"

    def __init__(self, ups: UPS, tracking_number: str):
        self.ups = ups
        self.tracking_number = tracking_number
        self._details: Optional[TrackingResult] = None
        self._lock = asyncio.Lock()

    async def details(self) -> TrackingResult:
        """
        Get tracking details, fetching them from UPS on first access.

        Raises:
            TransportError: network, HTTP or UPS-reported failure
            MalformedResponse: the response is missing required fields
        """
        if self._details is not None:
            return self._details

        async with self._lock:
            if self._details is None:
                self._details = await self._fetch()
        return self._details

    async def _fetch(self) -> TrackingResult:
        body = build_request_body(self.ups.credentials, self.tracking_number)
        logger.debug(f"Requesting UPS tracking for {self.tracking_number}")

        response = await self.ups.transport.send(self.path, body)
        result = parse_track_response(response)

        logger.info(f"Tracking {self.tracking_number}: {result.status or 'no status'}")
        return result
