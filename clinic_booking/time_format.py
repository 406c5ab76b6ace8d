from __future__ import annotations

from datetime import datetime, timezone
from typing import Tuple, Union

from dateutil import parser as date_parser
from dateutil import tz

DISPLAY_FORMAT = "%Y-%m-%d %H:%M"
DISPLAY_TIMEZONE = tz.gettz("Asia/Tokyo")

Instant = Union[datetime, str]


def parse_instant(value: Instant) -> datetime:
    """Return an aware datetime; naive values and strings without offset are UTC."""
    if isinstance(value, str):
        value = date_parser.isoparse(value)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def format_instant(instant: Instant, tzinfo=None) -> str:
    """Render ``instant`` as ``YYYY-MM-DD HH:MM`` (24h) in the display zone."""
    target = tzinfo or DISPLAY_TIMEZONE
    return parse_instant(instant).astimezone(target).strftime(DISPLAY_FORMAT)


def parse_display(text: str, tzinfo=None) -> datetime:
    target = tzinfo or DISPLAY_TIMEZONE
    return datetime.strptime(text, DISPLAY_FORMAT).replace(tzinfo=target)


def split_display(text: str) -> Tuple[str, str]:
    date_part, time_part = text.split(" ")
    return date_part, time_part
