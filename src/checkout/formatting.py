"""Input masking for checkout fields.

Every formatter accepts whatever the user typed (including None), strips the
noise and returns the canonical string. Applying a formatter to its own
output returns the same value.
"""

from __future__ import annotations

import re
from typing import Any

COUNTRY_PREFIX = "254"
LOCAL_PHONE_LENGTH = 10
CARD_GROUP_SIZE = 4

_NON_DIGIT_RE = re.compile(r"\D")


def digits_only(value: Any) -> str:
    if value is None:
        return ""
    return _NON_DIGIT_RE.sub("", str(value))


def format_phone_number(value: Any) -> str:
    """Display form used while typing: digits only, at most 10 of them."""
    return digits_only(value)[:LOCAL_PHONE_LENGTH]


def to_international_phone_number(value: Any) -> str:
    """Transmission form sent to the gateway, e.g. 0712345678 -> 254712345678.

    No leading "+". A number already carrying the 254 prefix is left alone.
    """
    cleaned = digits_only(value)
    if cleaned.startswith("0"):
        cleaned = COUNTRY_PREFIX + cleaned[1:]
    if not cleaned.startswith(COUNTRY_PREFIX):
        cleaned = COUNTRY_PREFIX + cleaned
    return cleaned


def format_card_number(value: Any) -> str:
    cleaned = digits_only(value)
    groups = [cleaned[i:i + CARD_GROUP_SIZE] for i in range(0, len(cleaned), CARD_GROUP_SIZE)]
    return " ".join(groups)


def format_expiry(value: Any) -> str:
    """MM/YY masking. "1" -> "1", "12" -> "12/", "1226" -> "12/26"."""
    cleaned = digits_only(value)
    if len(cleaned) >= 2:
        return f"{cleaned[:2]}/{cleaned[2:4]}"
    return cleaned
