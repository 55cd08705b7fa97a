"""Enumeration types used throughout the receipt points API.

Enumerations make it easier to constrain the values that flow through
the scoring engine and improve readability when reporting which rule
awarded which points.
"""

from enum import Enum


class ScoringRule(str, Enum):
    """Rules applied by the scoring engine, in evaluation order."""

    RETAILER_NAME = "retailer_name"
    ROUND_DOLLAR = "round_dollar"
    QUARTER_MULTIPLE = "quarter_multiple"
    ITEM_PAIRS = "item_pairs"
    ITEM_DESCRIPTION = "item_description"
    ODD_DAY = "odd_day"
    AFTERNOON = "afternoon"
