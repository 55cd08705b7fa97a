"""Pydantic schemas for request and response models.

Pydantic models validate everything that crosses the API boundary so
that only well formed receipts reach the registry and the scoring
engine. Wire names are camelCase (``purchaseDate``) and are mapped to
snake_case attributes through aliases; both spellings are accepted when
constructing models in Python code.

Stored receipts are frozen: once a receipt has been validated it is
never mutated again.
"""

from __future__ import annotations

import datetime as dt
import re
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from receipt_processor.utils.helpers import AMOUNT_PATTERN

_DATE_RE = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")
_TIME_RE = re.compile(r"^[0-9]{2}:[0-9]{2}$")


# ---------------------------------------------------------------------------
# Domain schemas


class Item(BaseModel):
    """Individual line item on a receipt."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    short_description: str = Field(
        alias="shortDescription",
        description="The short product description for the item.",
        examples=["Mountain Dew 12PK"],
    )
    price: str = Field(
        description="The total price paid for this item.",
        examples=["6.49"],
        pattern=AMOUNT_PATTERN,
    )


class Receipt(BaseModel):
    """A submitted purchase record."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    retailer: str = Field(
        min_length=1,
        description="The name of the retailer or store the receipt is from.",
        examples=["M&M Corner Market"],
    )
    purchase_date: dt.date = Field(
        alias="purchaseDate",
        description="The date of the purchase printed on the receipt (YYYY-MM-DD).",
        examples=["2022-01-01"],
    )
    purchase_time: dt.time = Field(
        alias="purchaseTime",
        description="The time of the purchase printed on the receipt. 24-hour HH:MM.",
        examples=["13:01"],
    )
    items: List[Item] = Field(min_length=1)
    total: str = Field(
        description="The total amount paid on the receipt.",
        examples=["6.49"],
        pattern=AMOUNT_PATTERN,
    )

    @field_validator("purchase_date", mode="before")
    @classmethod
    def _parse_purchase_date(cls, value: Any) -> Any:
        # YYYY-MM-DD only: no unix timestamps, no datetime strings
        if isinstance(value, dt.date) and not isinstance(value, dt.datetime):
            return value
        if not isinstance(value, str) or not _DATE_RE.fullmatch(value):
            raise ValueError("purchaseDate must be formatted as YYYY-MM-DD")
        return dt.date.fromisoformat(value)

    @field_validator("purchase_time", mode="before")
    @classmethod
    def _parse_purchase_time(cls, value: Any) -> Any:
        if isinstance(value, dt.time):
            return value.replace(second=0, microsecond=0)
        if not isinstance(value, str) or not _TIME_RE.fullmatch(value):
            raise ValueError("purchaseTime must be formatted as HH:MM")
        hour, minute = value.split(":")
        return dt.time(int(hour), int(minute))


# ---------------------------------------------------------------------------
# API response schemas


class ReceiptIdResponse(BaseModel):
    id: str


class PointsResponse(BaseModel):
    points: int
