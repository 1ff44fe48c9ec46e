"""Shared fixtures for tests."""

import os

import pytest

from shiptrack import config as config_module
from shiptrack.models import UPSCredentials
from shiptrack.tracking.transport import Transport


DELIVERED_RESPONSE = """<?xml version="1.0"?>
<TrackResponse>
  <Response>
    <TransactionReference><CustomerContext>test</CustomerContext></TransactionReference>
    <ResponseStatusCode>1</ResponseStatusCode>
    <ResponseStatusDescription>Success</ResponseStatusDescription>
  </Response>
  <Shipment>
    <Shipper>
      <ShipperNumber>12345E</ShipperNumber>
      <Address>
        <AddressLine1>2311 YORK RD</AddressLine1>
        <City>TIMONIUM</City>
        <StateProvinceCode>MD</StateProvinceCode>
        <PostalCode>21093</PostalCode>
        <CountryCode>US</CountryCode>
      </Address>
    </Shipper>
    <ShipTo>
      <Address>
        <City>SACRAMENTO</City>
        <StateProvinceCode>CA</StateProvinceCode>
        <PostalCode>95817</PostalCode>
        <CountryCode>US</CountryCode>
      </Address>
    </ShipTo>
    <PickupDate>20081201</PickupDate>
    <Service>
      <Code>003</Code>
      <Description>GROUND</Description>
    </Service>
    <CurrentStatus>
      <Code>011</Code>
      <Description>Delivered</Description>
    </CurrentStatus>
    <EstimatedDeliveryDetails>
      <Date>20081205</Date>
      <Time>143000</Time>
    </EstimatedDeliveryDetails>
    <DeliveryDetails>
      <DeliveryDate>
        <Date>20081208</Date>
        <Time>104337</Time>
      </DeliveryDate>
    </DeliveryDetails>
    <Activity>
      <ActivityLocation>
        <Address>
          <City>SACRAMENTO</City>
          <StateProvinceCode>CA</StateProvinceCode>
          <PostalCode>95817</PostalCode>
          <CountryCode>US</CountryCode>
        </Address>
      </ActivityLocation>
      <Status>
        <StatusType>
          <Code>D</Code>
          <Description>DELIVERED</Description>
        </StatusType>
      </Status>
      <SignedForByName>KKING</SignedForByName>
      <Date>20081208</Date>
      <Time>104337</Time>
    </Activity>
    <Activity>
      <ActivityLocation>
        <Address>
          <City>WEST SACRAMENTO</City>
          <StateProvinceCode>CA</StateProvinceCode>
          <CountryCode>US</CountryCode>
        </Address>
      </ActivityLocation>
      <Status>
        <StatusType>
          <Code>I</Code>
          <Description>OUT FOR DELIVERY</Description>
        </StatusType>
      </Status>
      <Date>20081208</Date>
      <Time>061500</Time>
    </Activity>
  </Shipment>
</TrackResponse>
"""

FAILURE_RESPONSE = """<?xml version="1.0"?>
<TrackResponse>
  <Response>
    <ResponseStatusCode>0</ResponseStatusCode>
    <ResponseStatusDescription>Failure</ResponseStatusDescription>
    <Error>
      <ErrorSeverity>Hard</ErrorSeverity>
      <ErrorCode>151018</ErrorCode>
      <ErrorDescription>Invalid tracking number</ErrorDescription>
    </Error>
  </Response>
</TrackResponse>
"""


class FakeTransport(Transport):
    """Records requests and answers with a canned decoded response."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    async def send(self, path, body):
        self.requests.append((path, body))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def credentials():
    """Test UPS credentials."""
    return UPSCredentials(
        access_license_number="TESTKEY",
        user_id="test-user",
        password="test-pass",
    )


@pytest.fixture
def delivered_xml():
    return DELIVERED_RESPONSE


@pytest.fixture
def failure_xml():
    return FAILURE_RESPONSE


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep real UPS settings out of the tests, and .env loads from leaking."""
    monkeypatch.setattr(os, "environ", os.environ.copy())
    monkeypatch.setattr(config_module, "_config", None)
    for name in (
        "UPS_ACCESS_LICENSE_NUMBER",
        "UPS_USER_ID",
        "UPS_PASSWORD",
        "UPS_TEST_MODE",
        "UPS_BASE_URL",
        "REQUEST_TIMEOUT",
        "LOG_LEVEL",
        "LOG_FILE",
    ):
        os.environ.pop(name, None)


@pytest.fixture
def make_transport():
    """Factory for in-memory transports."""
    return FakeTransport
