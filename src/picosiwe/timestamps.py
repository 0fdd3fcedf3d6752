"""
Fixed-layout timestamps: YYYY-MM-DDThh:mm:ss.sss followed by Z or +hh:mm / -hh:mm.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

from .errors import InvalidTimestamp

TIME_FORMAT = "YYYY-MM-DDThh:mm:ss.sssZ"

_TIMESTAMP_RE = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})\.(\d{3})"
    r"(?:(Z)|([+-])(\d{2}):(\d{2}))",
    re.ASCII,
)


def parse_timestamp(text: str) -> datetime:
    """
    Parse a timestamp in the fixed layout.

    The zone offset is preserved on the returned datetime so that
    format_timestamp() reproduces the input.

    Raises:
        InvalidTimestamp: if `text` does not match the layout or is out of range.
    """
    m = _TIMESTAMP_RE.fullmatch(text)
    if m is None:
        raise InvalidTimestamp(f"timestamp {text!r} does not match {TIME_FORMAT}")
    year, month, day, hour, minute, second, millis = (int(g) for g in m.groups()[:7])
    try:
        if m.group(8):
            tz = timezone.utc
        else:
            off_hours, off_minutes = int(m.group(10)), int(m.group(11))
            if off_hours > 23 or off_minutes > 59:
                raise ValueError(f"zone offset {off_hours:02d}:{off_minutes:02d} out of range")
            offset = timedelta(hours=off_hours, minutes=off_minutes)
            tz = timezone(-offset if m.group(9) == "-" else offset)
        return datetime(year, month, day, hour, minute, second, millis * 1000, tzinfo=tz)
    except ValueError as e:
        raise InvalidTimestamp(f"timestamp {text!r} out of range: {e}") from e


def format_timestamp(value: datetime) -> str:
    """Render `value` with millisecond precision (truncated) and its zone offset."""
    offset = value.utcoffset()
    if offset is None:
        raise InvalidTimestamp("timestamp must be timezone-aware")
    out = (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
        f".{value.microsecond // 1000:03d}"
    )
    if not offset:
        return out + "Z"
    sign = "-" if offset < timedelta(0) else "+"
    minutes = abs(offset) // timedelta(minutes=1)
    return f"{out}{sign}{minutes // 60:02d}:{minutes % 60:02d}"


__all__: tuple[str, ...] = ("TIME_FORMAT", "format_timestamp", "parse_timestamp")
