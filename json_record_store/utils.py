from __future__ import annotations
import json
import re
from datetime import date, datetime, timezone
from typing import Any, Optional, Union

from .errors import InvalidDateError, SerializationError

DateLike = Union[str, datetime, date]

# Reduced-precision ISO-8601: "2024" and "2024-01" mean the first instant of the period
_YEAR_MONTH = re.compile(r"^(\d{4})(?:-(\d{2}))?$")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def now_iso() -> str:
    """
    Current UTC time, millisecond precision, Z suffix: 2024-01-01T00:00:00.000Z
    """
    return utc_now().isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_iso_datetime(value: DateLike) -> datetime:
    """
    Parse an ISO-8601 string (or pass through a date/datetime) into an aware UTC datetime.

    Accepts a Z suffix, explicit offsets, date-only values and the reduced
    forms YYYY and YYYY-MM. Naive values are taken as UTC. Anything else raises InvalidDateError.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        s = value.strip()
        m = _YEAR_MONTH.match(s)
        if m:
            s = f"{m.group(1)}-{m.group(2) or '01'}-01"
        if s.endswith(("Z", "z")):
            s = s[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(s)
        except ValueError as e:
            raise InvalidDateError(f"not an ISO-8601 date-time: {value!r}") from e
    else:
        raise InvalidDateError(f"expected ISO string or datetime, got {type(value).__name__}")
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def dumps(obj: Any, indent: Optional[int] = None) -> str:
    try:
        return json.dumps(obj, ensure_ascii=False, indent=indent)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"value is not JSON-serializable: {e}") from e


def canonical_json(obj: Any) -> str:
    # Compact form, no whitespace after separators: {"a":1}
    return json.dumps(obj, ensure_ascii=False, separators=(",", ":"))
