"""
Transport for the UPS XML services.
Sends request documents over HTTP and decodes the XML that comes back.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Any
import aiohttp
from loguru import logger

from shiptrack.tracking.errors import CarrierError, TransportError
from shiptrack.tracking.xml_codec import decode_response, find


class Transport(ABC):
    """Base class for delivering a request document to the carrier."""

    @abstractmethod
    async def send(self, path: str, body: str) -> dict[str, Any]:
        """POST the body to the given path and return the decoded response."""
        pass


class HTTPTransport(Transport):
    """
    aiohttp transport for the UPS XML gateway.

    A new session is opened for each request; tracking is one round trip.
    """

    LIVE_URL = "https://onlinetools.ups.com/ups.app/xml"
    TEST_URL = "https://wwwcie.ups.com/ups.app/xml"

    def __init__(self, base_url: str = LIVE_URL, timeout: float = 30):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def send(self, path: str, body: str) -> dict[str, Any]:
        url = f"{self.base_url}{path}"
        logger.debug(f"POST {url}")

        try:
            async with aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            ) as session:
                async with session.post(
                    url,
                    data=body.encode("utf-8"),
                    headers={"Content-Type": "application/x-www-form-urlencoded"},
                ) as resp:
                    # Raw bytes, so the XML declaration decides the encoding
                    content = await resp.read()
                    if resp.status != 200:
                        snippet = content[:200].decode("utf-8", errors="replace")
                        logger.warning(f"UPS request failed with HTTP {resp.status}: {snippet}")
                        raise TransportError(f"UPS returned HTTP {resp.status}", status=resp.status)

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"UPS request to {url} failed: {e!r}")
            raise TransportError(f"UPS request failed: {e!r}") from e

        response = decode_response(content)
        self._check_status(response)
        return response

    @staticmethod
    def _check_status(response: dict[str, Any]):
        """Raise CarrierError unless UPS reports ResponseStatusCode 1."""
        status_code = find(response, "response", "response_status_code")
        if status_code == "1":
            return

        error = find(response, "response", "error")
        if isinstance(error, list):
            error = error[0]
        error = error if isinstance(error, dict) else {}

        code = error.get("error_code")
        description = error.get("error_description") or "The response from UPS was not successful"
        logger.warning(f"UPS error {code}: {description}")
        raise CarrierError(description, code=code, response=response)
