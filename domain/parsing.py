"""Parsing of identifiers and dates supplied by external callers."""

import re
import uuid
from datetime import date, datetime
from typing import Optional

from core.exceptions import ParseError

# fromisoformat before 3.11 takes exactly 3 or 6 fractional digits
_FRACTION = re.compile(r"(\d{2}:\d{2}:\d{2})\.(\d+)")


def parse_uuid(value: str, field: str = "id") -> uuid.UUID:
    """Parse a UUID string, raising ParseError on malformed input."""
    try:
        return uuid.UUID(str(value))
    except (ValueError, AttributeError, TypeError) as exc:
        raise ParseError(f"Invalid {field} format", field=field, value=str(value)) from exc


def parse_date(value: str, field: str = "date") -> date:
    """Parse a ``YYYY-MM-DD`` calendar date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (ValueError, TypeError) as exc:
        raise ParseError(f"Invalid {field} format. Expected YYYY-MM-DD", field=field, value=str(value)) from exc


def parse_optional_date(value: Optional[str], field: str = "date") -> Optional[date]:
    if value is None or not value.strip():
        return None
    return parse_date(value, field)


def parse_timestamp(value: str, field: str = "timestamp") -> datetime:
    """Parse an ISO 8601 / RFC 3339 timestamp.

    A trailing ``Z`` is accepted, and fractional seconds of any length are
    cut or padded to microseconds (nanosecond timestamps lose their last
    three digits).
    """
    text = value.strip() if isinstance(value, str) else value
    if isinstance(text, str):
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        text = _FRACTION.sub(lambda m: f"{m.group(1)}.{m.group(2)[:6].ljust(6, '0')}", text, count=1)
    try:
        return datetime.fromisoformat(text)
    except (ValueError, TypeError) as exc:
        raise ParseError(f"Invalid {field} format", field=field, value=str(value)) from exc
