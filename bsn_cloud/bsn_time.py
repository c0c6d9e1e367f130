"""Timestamp codec for BSN.cloud payloads.

BSN.cloud mixes RFC 3339 timestamps with timestamps that carry no
timezone at all. The latter are always UTC. Outgoing timestamps use the
offset-less form with millisecond precision.
"""

import re
from datetime import UTC, datetime
from typing import Any

from .exceptions import InvalidTimestampError

BSN_ZERO_TIME = datetime.min.replace(tzinfo=UTC)

_OFFSET_FORMATS = (
    "%Y-%m-%dT%H:%M:%S.%f%z",
    "%Y-%m-%dT%H:%M:%S%z",
)
_NAIVE_FORMATS = (
    "%Y-%m-%dT%H:%M:%S.%f",
    "%Y-%m-%dT%H:%M:%S",
)
_WIRE_FORMAT = "%Y-%m-%dT%H:%M:%S"
# strptime reads at most 6 fraction digits, the API may send 7
_EXTRA_FRACTION_DIGITS = re.compile(r"(\.\d{6})\d+")


def is_zero_time(value: datetime | None) -> bool:
    """Check if a timestamp is the zero instant.

    Args:
        value: Timestamp to check.

    Returns:
        True for None and for the minimum datetime, False otherwise.

    """
    if value is None:
        return True
    if value.tzinfo is None:
        return value == datetime.min
    return value == BSN_ZERO_TIME


def decode_bsn_time(raw: Any) -> datetime:
    """Decode a wire timestamp.

    Args:
        raw: Raw JSON value. None, the empty string and the literal
            "null" all decode to the zero instant.

    Returns:
        An aware datetime. Offsets embedded in the value are preserved,
        values without an offset are UTC.

    Raises:
        InvalidTimestampError: If the value is not a string or matches
            none of the accepted formats.

    """
    if raw is None:
        return BSN_ZERO_TIME

    if not isinstance(raw, str):
        error_msg = f"Timestamp must be a string, got {type(raw).__name__}"
        raise InvalidTimestampError(error_msg)

    text = raw.strip()
    if text in ("", "null"):
        return BSN_ZERO_TIME

    text = _EXTRA_FRACTION_DIGITS.sub(r"\1", text)
    for fmt in _OFFSET_FORMATS:
        try:
            return datetime.strptime(text, fmt)  # noqa: DTZ007
        except ValueError:
            continue

    for fmt in _NAIVE_FORMATS:
        try:
            return datetime.strptime(text, fmt).replace(tzinfo=UTC)  # noqa: DTZ007
        except ValueError:
            continue

    error_msg = f"Could not parse timestamp: {raw!r}"
    raise InvalidTimestampError(error_msg)


def decode_optional_bsn_time(raw: Any) -> datetime | None:
    """Decode a timestamp field that may be absent.

    Returns:
        None when the field is absent or null, the decoded value otherwise.

    """
    if raw is None:
        return None
    return decode_bsn_time(raw)


def encode_bsn_time(value: datetime | None) -> str | None:
    """Encode a timestamp for the wire.

    Args:
        value: Timestamp to encode. Naive values are taken as UTC.

    Returns:
        None for the zero instant, so that it serializes to a JSON null,
        otherwise "YYYY-MM-DDTHH:MM:SS.mmm" in UTC without a suffix.

    """
    if is_zero_time(value):
        return None

    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    value = value.astimezone(UTC)
    return f"{value.strftime(_WIRE_FORMAT)}.{value.microsecond // 1000:03d}"
