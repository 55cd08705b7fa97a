from __future__ import annotations

import copy
import sys
from pathlib import Path

import pytest

# Add backend folder to sys.path so `import receipt_processor...` works in tests when running from the repo root
BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from fastapi.testclient import TestClient  # noqa: E402

from receipt_processor.api.dependencies import get_registry  # noqa: E402
from receipt_processor.api.main import app  # noqa: E402
from receipt_processor.services.registry import ReceiptRegistry  # noqa: E402


TARGET_RECEIPT = {
    "retailer": "Target",
    "purchaseDate": "2022-01-01",
    "purchaseTime": "13:01",
    "items": [
        {"shortDescription": "Mountain Dew 12PK", "price": "6.49"},
        {"shortDescription": "Emils Cheese Pizza", "price": "12.25"},
        {"shortDescription": "Knorr Creamy Chicken", "price": "1.26"},
        {"shortDescription": "Doritos Nacho Cheese", "price": "3.35"},
        {"shortDescription": "   Klarbrunn 12-PK 12 FL OZ  ", "price": "12.00"},
    ],
    "total": "35.35",
}

CORNER_MARKET_RECEIPT = {
    "retailer": "M&M Corner Market",
    "purchaseDate": "2022-03-20",
    "purchaseTime": "14:33",
    "items": [
        {"shortDescription": "Gatorade", "price": "2.25"},
        {"shortDescription": "Gatorade", "price": "2.25"},
        {"shortDescription": "Gatorade", "price": "2.25"},
        {"shortDescription": "Gatorade", "price": "2.25"},
    ],
    "total": "9.00",
}

# Odd day, round total, inside the afternoon window: 100 points
ROUND_TOTAL_RECEIPT = {
    "retailer": "A1",
    "purchaseDate": "2023-05-01",
    "purchaseTime": "15:30",
    "items": [
        {"shortDescription": "abc", "price": "1.00"},
        {"shortDescription": "def", "price": "1.00"},
    ],
    "total": "2.00",
}


@pytest.fixture
def target_payload():
    return copy.deepcopy(TARGET_RECEIPT)


@pytest.fixture
def corner_market_payload():
    return copy.deepcopy(CORNER_MARKET_RECEIPT)


@pytest.fixture
def make_payload():
    """Return a factory building the round-total receipt with field overrides."""

    def _make(**overrides):
        payload = copy.deepcopy(ROUND_TOTAL_RECEIPT)
        payload.update(overrides)
        return payload

    return _make


@pytest.fixture
def registry():
    return ReceiptRegistry()


@pytest.fixture
def client(registry):
    app.dependency_overrides[get_registry] = lambda: registry
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()
