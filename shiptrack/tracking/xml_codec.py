"""
XML codec for the UPS tracking service.

Builds the AccessRequest + TrackRequest documents that UPS expects and
decodes the TrackResponse into nested dicts with snake_case keys, e.g.::

    <TrackResponse><Shipment><ShipTo>...</ShipTo></Shipment></TrackResponse>

becomes ``{"shipment": {"ship_to": {...}}}``. Repeated sibling elements
(such as ``Activity``) are grouped into a list.
"""

import re
import xml.etree.ElementTree as ET
from typing import Any, Optional, Union

from shiptrack.models import UPSCredentials
from shiptrack.tracking.errors import MalformedResponse

XML_DECLARATION = '<?xml version="1.0"?>\n'


def _to_xml(root: ET.Element) -> str:
    return XML_DECLARATION + ET.tostring(root, encoding="unicode")


def build_authentication(credentials: UPSCredentials) -> str:
    """Build the AccessRequest document sent ahead of every UPS request."""
    root = ET.Element("AccessRequest")
    ET.SubElement(root, "AccessLicenseNumber").text = credentials.access_license_number
    ET.SubElement(root, "UserId").text = credentials.user_id
    ET.SubElement(root, "Password").text = credentials.password
    return _to_xml(root)


def build_track_request(tracking_number: str) -> str:
    """
    Build the TrackRequest document for one tracking number.

    The tracking number is sent as-is; escaping is left to ElementTree.
    """
    root = ET.Element("TrackRequest")

    request = ET.SubElement(root, "Request")
    ET.SubElement(request, "RequestAction").text = "Track"
    ET.SubElement(request, "RequestOption").text = "activity"

    ET.SubElement(root, "IncludeFreight").text = "01"
    ET.SubElement(root, "TrackingNumber").text = tracking_number
    return _to_xml(root)


def build_request_body(credentials: UPSCredentials, tracking_number: str) -> str:
    """UPS wants both documents in one POST body, authentication first."""
    return build_authentication(credentials) + build_track_request(tracking_number)


def snake_case(name: str) -> str:
    """Convert an XML element name such as ``StateProvinceCode`` to snake_case."""
    # Drop any namespace
    if "}" in name:
        name = name.split("}", 1)[1]
    name = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    name = re.sub(r"([a-z\d])([A-Z])", r"\1_\2", name)
    return name.lower()


def _decode_element(element: ET.Element) -> Any:
    children = list(element)
    if not children:
        text = (element.text or "").strip()
        return text or None

    result: dict[str, Any] = {}
    for child in children:
        key = snake_case(child.tag)
        value = _decode_element(child)
        if key in result:
            existing = result[key]
            if isinstance(existing, list):
                existing.append(value)
            else:
                result[key] = [existing, value]
        else:
            result[key] = value
    return result


def decode_response(text: Union[str, bytes]) -> dict[str, Any]:
    """
    Decode a UPS XML response into nested dicts.

    The root element itself is dropped; the returned dict holds its children.
    Pass bytes to let the XML declaration choose the encoding.

    Raises:
        MalformedResponse: if the text is not well-formed XML
    """
    try:
        root = ET.fromstring(text)
    except (ET.ParseError, LookupError, ValueError) as e:
        raise MalformedResponse(f"Response is not valid XML: {e}") from e

    decoded = _decode_element(root)
    return decoded if isinstance(decoded, dict) else {}


def find(data: Optional[dict], *path: str) -> Any:
    """Walk nested dicts, returning None as soon as a key is missing."""
    current: Any = data
    for key in path:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current
