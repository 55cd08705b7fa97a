"""Fixed rule engine for scoring receipts.

The engine applies an ordered set of point rules to a validated
``Receipt`` and sums the result. Each rule is a small handler that
returns the points it awards together with a short reasoning string;
handlers are registered in ``HANDLERS`` keyed by
:class:`receipt_processor.models.enums.ScoringRule`.

Rules, in evaluation order:

* ``retailer_name`` – one point for every ASCII alphanumeric character
  (``A-Z``, ``a-z``, ``0-9``) in the retailer name.
* ``round_dollar`` – 50 points if the total has no cents.
* ``quarter_multiple`` – 25 points if the total is a multiple of
  ``0.25``. Round totals satisfy both this and ``round_dollar``.
* ``item_pairs`` – 5 points for every two items on the receipt.
* ``item_description`` – for each item whose trimmed description
  length is a multiple of 3, the price multiplied by ``0.2`` and
  rounded up to the nearest integer.
* ``odd_day`` – 6 points if the day of the purchase date is odd.
* ``afternoon`` – 10 points if the purchase time is after 14:00 and
  before 16:00, both bounds exclusive.

All money arithmetic happens on integer cents so results never depend
on binary floating point. The engine holds no state and performs no
I/O; it is safe to call from any number of threads.
"""

from __future__ import annotations

import datetime as dt
import logging
import re
from typing import Callable, Dict, List, Tuple

from receipt_processor.models.enums import ScoringRule
from receipt_processor.models.schemas import Receipt
from receipt_processor.utils.helpers import parse_cents


logger = logging.getLogger(__name__)

_ALNUM_RE = re.compile(r"[A-Za-z0-9]")
_FRACTION_RE = re.compile(r"[0-9]{2}")
_DESCRIPTION_WHITESPACE = " \t\n\r"

_AFTERNOON_START = dt.time(14, 0)
_AFTERNOON_END = dt.time(16, 0)


class InvalidReceipt(ValueError):
    """Raised when a numeric field of a receipt cannot be parsed."""


def _cents(value: str, field: str) -> int:
    try:
        return parse_cents(value)
    except ValueError as exc:
        raise InvalidReceipt(f"{field} is not a valid amount") from exc


def _total_fraction(receipt: Receipt) -> int:
    """Return the cents of the total, read from the two digits after the ``.``."""
    _, separator, fraction = receipt.total.partition(".")
    if not separator or not _FRACTION_RE.fullmatch(fraction):
        raise InvalidReceipt("total is not a valid amount")
    return int(fraction)


def _evaluate_retailer_name(receipt: Receipt) -> Tuple[int, str]:
    points = len(_ALNUM_RE.findall(receipt.retailer))
    return points, f"{points} alphanumeric characters in retailer {receipt.retailer!r}"


def _evaluate_round_dollar(receipt: Receipt) -> Tuple[int, str]:
    round_dollar = _total_fraction(receipt) == 0
    return (50 if round_dollar else 0), f"total {receipt.total} round dollar -> {round_dollar}"


def _evaluate_quarter_multiple(receipt: Receipt) -> Tuple[int, str]:
    multiple = _total_fraction(receipt) % 25 == 0
    return (25 if multiple else 0), f"total {receipt.total} multiple of 0.25 -> {multiple}"


def _evaluate_item_pairs(receipt: Receipt) -> Tuple[int, str]:
    pairs = len(receipt.items) // 2
    return pairs * 5, f"{len(receipt.items)} items, {pairs} pairs"


def _evaluate_item_description(receipt: Receipt) -> Tuple[int, str]:
    """Award ``ceil(price * 0.2)`` for items with a description length divisible by 3.

    ``price * 0.2`` in dollars is ``cents / 500``; ceiling division on the
    integer cent value gives the exact rounded-up result.
    """
    points = 0
    matched: List[str] = []
    for index, item in enumerate(receipt.items):
        description = item.short_description.strip(_DESCRIPTION_WHITESPACE)
        if len(description) % 3 != 0:
            continue
        cents = _cents(item.price, f"items[{index}].price")
        points += -(-cents // 500)
        matched.append(description)
    return points, f"descriptions {matched} -> {points}"


def _evaluate_odd_day(receipt: Receipt) -> Tuple[int, str]:
    day = receipt.purchase_date.day
    odd = day % 2 == 1
    return (6 if odd else 0), f"day {day} odd -> {odd}"


def _evaluate_afternoon(receipt: Receipt) -> Tuple[int, str]:
    purchase_time = receipt.purchase_time.replace(second=0, microsecond=0)
    inside = _AFTERNOON_START < purchase_time < _AFTERNOON_END
    return (10 if inside else 0), f"time {purchase_time:%H:%M} between 14:00 and 16:00 -> {inside}"


HANDLERS: Dict[ScoringRule, Callable[[Receipt], Tuple[int, str]]] = {
    ScoringRule.RETAILER_NAME: _evaluate_retailer_name,
    ScoringRule.ROUND_DOLLAR: _evaluate_round_dollar,
    ScoringRule.QUARTER_MULTIPLE: _evaluate_quarter_multiple,
    ScoringRule.ITEM_PAIRS: _evaluate_item_pairs,
    ScoringRule.ITEM_DESCRIPTION: _evaluate_item_description,
    ScoringRule.ODD_DAY: _evaluate_odd_day,
    ScoringRule.AFTERNOON: _evaluate_afternoon,
}


def evaluate_rules(receipt: Receipt) -> Tuple[Dict[str, int], List[str], int]:
    """Evaluate every scoring rule against a receipt.

    :param receipt: A validated receipt.
    :returns: A tuple of (breakdown, reasons, total) where ``breakdown``
        maps each rule name to the points it awarded, ``reasons`` is a
        list of reasoning strings in evaluation order, and ``total`` is
        the sum of all awarded points.
    :raises InvalidReceipt: if ``total`` or an item price is malformed.
    """
    breakdown: Dict[str, int] = {}
    reasons: List[str] = []
    for rule in ScoringRule:
        points, reason = HANDLERS[rule](receipt)
        breakdown[rule.value] = points
        reasons.append(f"{rule.value}: {reason} (+{points})")
    return breakdown, reasons, sum(breakdown.values())


def score(receipt: Receipt) -> int:
    """Return the points awarded to ``receipt``."""
    _, reasons, total = evaluate_rules(receipt)
    if logger.isEnabledFor(logging.DEBUG):
        for reason in reasons:
            logger.debug("score %s", reason)
    return total


__all__ = ["HANDLERS", "InvalidReceipt", "evaluate_rules", "score"]
