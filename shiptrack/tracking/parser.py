"""
Maps a decoded UPS TrackResponse into a TrackingResult.
"""

import re
from datetime import datetime
from typing import Any, Optional
from loguru import logger

from shiptrack.models import TrackingEvent, TrackingResult
from shiptrack.tracking.errors import MalformedResponse
from shiptrack.tracking.xml_codec import find

DATE_FORMAT = "%Y%m%d"
TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"

# strptime accepts single-digit fields, so the width is checked first
DATE_PATTERN = re.compile(r"\d{8}")
TIME_PATTERN = re.compile(r"\d{6}")


def parse_date(value: Any) -> datetime:
    """Parse a UPS ``YYYYMMDD`` date."""
    if not isinstance(value, str) or not DATE_PATTERN.fullmatch(value):
        raise MalformedResponse(f"Invalid date {value!r}")
    try:
        return datetime.strptime(value, DATE_FORMAT)
    except ValueError as e:
        raise MalformedResponse(f"Invalid date {value!r}") from e


def parse_timestamp(date: Any, time: Any) -> datetime:
    """Parse a UPS ``YYYYMMDD`` date plus ``HHMMSS`` time, as reported (local time)."""
    if (
        not isinstance(date, str)
        or not isinstance(time, str)
        or not DATE_PATTERN.fullmatch(date)
        or not TIME_PATTERN.fullmatch(time)
    ):
        raise MalformedResponse(f"Invalid date/time {date!r} {time!r}")
    try:
        return datetime.strptime(date + time, TIMESTAMP_FORMAT)
    except ValueError as e:
        raise MalformedResponse(f"Invalid date/time {date!r} {time!r}") from e


def text(node: Any, *path: str) -> Optional[str]:
    """Like ``find``, but only text values count; lists and elements are treated as missing."""
    value = find(node, *path)
    return value if isinstance(value, str) else None


def _mapping(node: Any) -> dict:
    return node if isinstance(node, dict) else {}


def _optional_timestamp(node: Any) -> Optional[datetime]:
    if not isinstance(node, dict):
        return None
    date, time = node.get("date"), node.get("time")
    if not date or not time:
        return None
    return parse_timestamp(date, time)


def _activities(details: dict) -> list[dict]:
    activity = details.get("activity")
    if isinstance(activity, list):
        return [a for a in activity if isinstance(a, dict)]
    if isinstance(activity, dict):
        return [activity]
    return []


def parse_event(activity: dict) -> TrackingEvent:
    """Map one Activity element to a TrackingEvent."""
    status = _mapping(find(activity, "status", "status_type"))
    location = _mapping(find(activity, "activity_location", "address"))

    return TrackingEvent(
        name=text(status, "description"),
        type=text(status, "code"),
        occurred_at=_optional_timestamp(activity),
        city=text(location, "city"),
        state=text(location, "state_province_code"),
        postal_code=text(location, "postal_code"),
        country=text(location, "country_code"),
    )


def parse_track_response(response: dict) -> TrackingResult:
    """
    Build a TrackingResult from a decoded TrackResponse.

    Args:
        response: Decoded response, as returned by ``decode_response``

    Returns:
        TrackingResult

    Raises:
        MalformedResponse: if the service description is missing or a
            date/time field cannot be parsed
    """
    details = response.get("shipment") or {}
    if isinstance(details, list):
        # Only one shipment is ever requested
        details = details[0] if details else {}
    details = _mapping(details)

    fields: dict[str, Any] = {}

    origin = find(details, "shipper", "address")
    if isinstance(origin, dict):
        fields["origin_city"] = text(origin, "city")
        fields["origin_state"] = text(origin, "state_province_code")
        fields["origin_country"] = text(origin, "country_code")

    destination = find(details, "ship_to", "address")
    if isinstance(destination, dict):
        fields["destination_city"] = text(destination, "city")
        fields["destination_state"] = text(destination, "state_province_code")
        fields["destination_zip"] = text(destination, "postal_code")
        fields["destination_country"] = text(destination, "country_code")

    activities = _activities(details)
    last_event = activities[0] if activities else None
    if last_event:
        fields["signature_name"] = text(last_event, "signed_for_by_name")

    service_type = find(details, "service", "description")
    if not isinstance(service_type, str) or not service_type:
        raise MalformedResponse("Response has no single Shipment/Service/Description")
    fields["service_type"] = service_type

    fields["status"] = text(details, "current_status", "description")

    pickup_date = details.get("pickup_date")
    if pickup_date:
        fields["ship_date"] = parse_date(pickup_date)

    fields["estimated_delivery_at"] = _optional_timestamp(details.get("estimated_delivery_details"))
    fields["delivery_at"] = _optional_timestamp(find(details, "delivery_details", "delivery_date"))

    fields["events"] = [parse_event(activity) for activity in activities]

    logger.debug(f"Parsed shipment: {service_type}, {len(activities)} event(s)")
    return TrackingResult(**fields)
