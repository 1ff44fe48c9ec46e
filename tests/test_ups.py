"""Tests for the UPS tracking service."""

import asyncio

import pytest

from shiptrack.config import TrackerConfig
from shiptrack.models import TrackingResult
from shiptrack.tracking import UPS, TrackService, HTTPTransport
from shiptrack.tracking.errors import MalformedResponse, TransportError
from shiptrack.tracking.xml_codec import decode_response


class TestUPS:
    """Tests for the UPS entry point."""

    def test_default_transport_is_live(self, credentials):
        ups = UPS(credentials)
        assert isinstance(ups.transport, HTTPTransport)
        assert ups.transport.base_url == HTTPTransport.LIVE_URL

    def test_test_mode_transport(self, credentials):
        ups = UPS(credentials, test=True, timeout=5)
        assert ups.transport.base_url == HTTPTransport.TEST_URL
        assert ups.transport.timeout == 5

    def test_from_config(self):
        config = TrackerConfig(
            ups_access_license_number="KEY",
            ups_user_id="user",
            ups_password="pass",
            ups_base_url="http://localhost:8080/xml/",
            request_timeout=3,
        )
        ups = UPS.from_config(config)

        assert ups.credentials.access_license_number == "KEY"
        assert ups.transport.base_url == "http://localhost:8080/xml"
        assert ups.transport.timeout == 3

    def test_track_returns_service(self, credentials):
        service = UPS(credentials).track("1Z999")

        assert isinstance(service, TrackService)
        assert service.tracking_number == "1Z999"
        assert service.path == "/Track"


class TestTrackService:
    """Tests for fetching tracking details."""

    @pytest.mark.asyncio
    async def test_details(self, credentials, delivered_xml, make_transport):
        transport = make_transport(response=decode_response(delivered_xml))
        service = UPS(credentials, transport=transport).track("1Z12345E0291980793")

        details = await service.details()

        assert isinstance(details, TrackingResult)
        assert details.status == "Delivered"
        assert details.signature_name == "KKING"

        path, body = transport.requests[0]
        assert path == "/Track"
        assert "<TrackingNumber>1Z12345E0291980793</TrackingNumber>" in body
        assert "<AccessLicenseNumber>TESTKEY</AccessLicenseNumber>" in body

    @pytest.mark.asyncio
    async def test_details_memoized(self, credentials, delivered_xml, make_transport):
        """Test the request is only sent once per service."""
        transport = make_transport(response=decode_response(delivered_xml))
        service = UPS(credentials, transport=transport).track("1Z999")

        first = await service.details()
        second = await service.details()

        assert first is second
        assert len(transport.requests) == 1

    @pytest.mark.asyncio
    async def test_concurrent_first_access(self, credentials, delivered_xml, make_transport):
        transport = make_transport(response=decode_response(delivered_xml))
        service = UPS(credentials, transport=transport).track("1Z999")

        results = await asyncio.gather(service.details(), service.details(), service.details())

        assert results[0] is results[1] is results[2]
        assert len(transport.requests) == 1

    @pytest.mark.asyncio
    async def test_new_service_refetches(self, credentials, delivered_xml, make_transport):
        transport = make_transport(response=decode_response(delivered_xml))
        ups = UPS(credentials, transport=transport)

        await ups.track("1Z999").details()
        await ups.track("1Z999").details()

        assert len(transport.requests) == 2

    @pytest.mark.asyncio
    async def test_transport_error_propagates(self, credentials, make_transport):
        error = TransportError("UPS returned HTTP 503", status=503)
        service = UPS(credentials, transport=make_transport(error=error)).track("1Z999")

        with pytest.raises(TransportError) as exc_info:
            await service.details()

        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_malformed_response_propagates(self, credentials, make_transport):
        transport = make_transport(response={"shipment": {"service": {}}})
        service = UPS(credentials, transport=transport).track("1Z999")

        with pytest.raises(MalformedResponse):
            await service.details()

    @pytest.mark.asyncio
    async def test_failure_is_not_cached(self, credentials, delivered_xml, make_transport):
        """Test a failed fetch leaves the service able to try again."""
        transport = make_transport(error=TransportError("timeout"))
        service = UPS(credentials, transport=transport).track("1Z999")

        with pytest.raises(TransportError):
            await service.details()

        transport.error = None
        transport.response = decode_response(delivered_xml)
        details = await service.details()

        assert details.service_type == "GROUND"
        assert len(transport.requests) == 2
