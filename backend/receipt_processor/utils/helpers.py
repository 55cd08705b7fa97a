"""Miscellaneous helper functions."""

from __future__ import annotations

import re
import uuid
from typing import Optional

AMOUNT_PATTERN = r"^[0-9]{1,15}\.[0-9]{2}$"
_AMOUNT_RE = re.compile(AMOUNT_PATTERN)

_CANONICAL_UUID_RE = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)


def parse_cents(value: str) -> int:
    """Parse a monetary amount such as ``"12.34"`` into integer cents.

    Only the ``digits.dd`` form with at most 15 integer digits is
    accepted: no sign, no currency symbol,
    no thousands separators and exactly two fractional digits. Working
    in cents keeps quarter checks and fractional point rounding exact.

    :raises ValueError: if ``value`` is not a well formed amount.
    """
    if not isinstance(value, str) or not _AMOUNT_RE.fullmatch(value):
        raise ValueError(f"malformed amount {value!r}")
    dollars, cents = value.split(".")
    return int(dollars) * 100 + int(cents)


def parse_receipt_id(value: str | None) -> Optional[uuid.UUID]:
    """Parse a receipt identifier given in canonical 8-4-4-4-12 form.

    ``uuid.UUID`` alone also accepts braces, ``urn:uuid:`` prefixes and
    unhyphenated hex; those are rejected here and ``None`` is returned.
    """
    if not value or not _CANONICAL_UUID_RE.fullmatch(value):
        return None
    return uuid.UUID(value)
