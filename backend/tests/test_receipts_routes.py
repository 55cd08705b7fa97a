from __future__ import annotations

import json
import uuid

import pytest
from starlette.requests import ClientDisconnect, Request

from receipt_processor.models.schemas import Receipt
from receipt_processor.services.rule_engine import score
from receipt_processor.utils.helpers import parse_receipt_id


def _submit(client, payload):
    return client.post("/receipts/process", json=payload)


def _points(client, receipt_id):
    return client.get(f"/receipts/{receipt_id}/points")


def test_process_returns_canonical_uuid(client, target_payload, registry):
    resp = _submit(client, target_payload)
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("application/json")
    receipt_id = resp.json()["id"]
    assert len(receipt_id) == 36
    assert parse_receipt_id(receipt_id) is not None
    assert uuid.UUID(receipt_id) in registry


@pytest.mark.parametrize(
    "fixture_name, expected",
    [("target_payload", 28), ("corner_market_payload", 109)],
)
def test_round_trip_points(client, request, fixture_name, expected):
    payload = request.getfixturevalue(fixture_name)
    receipt_id = _submit(client, payload).json()["id"]
    resp = _points(client, receipt_id)
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("application/json")
    assert resp.json() == {"points": expected}
    assert expected == score(Receipt.model_validate(payload))


@pytest.mark.parametrize("purchase_time, expected", [("15:30", 100), ("14:00", 90), ("16:00", 90)])
def test_round_trip_afternoon_boundaries(client, make_payload, purchase_time, expected):
    receipt_id = _submit(client, make_payload(purchaseTime=purchase_time)).json()["id"]
    assert _points(client, receipt_id).json() == {"points": expected}


def test_each_submit_gets_fresh_id(client, target_payload):
    ids = {_submit(client, target_payload).json()["id"] for _ in range(10)}
    assert len(ids) == 10


def test_repeated_gets_are_identical(client, corner_market_payload):
    receipt_id = _submit(client, corner_market_payload).json()["id"]
    results = [_points(client, receipt_id).json() for _ in range(5)]
    assert results == [{"points": 109}] * 5


def test_uppercase_id_is_accepted(client, target_payload):
    receipt_id = _submit(client, target_payload).json()["id"]
    assert _points(client, receipt_id.upper()).json() == {"points": 28}


def test_total_without_decimal_point_is_rejected(client, make_payload, registry):
    resp = _submit(client, make_payload(total="2"))
    assert resp.status_code == 400
    assert resp.headers["content-type"].startswith("text/plain")
    assert resp.text == "The receipt is invalid."
    assert len(registry) == 0


@pytest.mark.parametrize(
    "overrides",
    [
        {"items": []},
        {"purchaseDate": "2022-1-1"},
        {"purchaseDate": "January 1st"},
        {"purchaseTime": "1:01 PM"},
        {"purchaseTime": "13:01:00"},
        {"retailer": ""},
        {"total": "abc"},
    ],
)
def test_invalid_receipts_are_rejected(client, make_payload, overrides):
    assert _submit(client, make_payload(**overrides)).status_code == 400


@pytest.mark.parametrize("body", [b"", b"{", b"not json", b"[]", b"null", b'"receipt"'])
def test_unparseable_body_is_rejected(client, body):
    resp = client.post("/receipts/process", content=body, headers={"content-type": "application/json"})
    assert resp.status_code == 400
    assert "Traceback" not in resp.text


def test_body_read_failure_is_internal_error(client, make_payload, monkeypatch):
    async def broken_body(self):
        raise ClientDisconnect()

    monkeypatch.setattr(Request, "body", broken_body)
    resp = client.post("/receipts/process", content=json.dumps(make_payload()))
    assert resp.status_code == 500
    assert resp.text == "Error reading request body"


def test_unknown_id_returns_404(client):
    resp = _points(client, uuid.uuid4())
    assert resp.status_code == 404
    assert resp.text == "No receipt found for that ID."


@pytest.mark.parametrize(
    "receipt_id",
    [
        "abc",
        "12345",
        "7fb1377bb22349d9a31a5a02701dd310",
        "{7fb1377b-b223-49d9-a31a-5a02701dd310}",
        "7fb1377b-b223-49d9-a31a-5a02701dd31g",
    ],
)
def test_malformed_id_returns_400(client, receipt_id):
    resp = _points(client, receipt_id)
    assert resp.status_code == 400
    assert resp.text == "Invalid receipt ID"


def test_scoring_failure_returns_500(client, registry, make_payload):
    stored = Receipt.model_validate(make_payload())
    broken = stored.model_copy(update={"total": "2"})
    receipt_id = registry.insert(broken)
    resp = _points(client, receipt_id)
    assert resp.status_code == 500
    assert resp.text == "Error calculating receipt points"


@pytest.mark.parametrize("method", ["GET", "PUT", "PATCH", "DELETE"])
def test_process_rejects_other_methods(client, method):
    resp = client.request(method, "/receipts/process")
    assert resp.status_code == 405
    assert "POST" in resp.headers["allow"]


@pytest.mark.parametrize("method", ["POST", "PUT", "PATCH", "DELETE"])
def test_points_rejects_other_methods(client, target_payload, method):
    receipt_id = _submit(client, target_payload).json()["id"]
    resp = client.request(method, f"/receipts/{receipt_id}/points")
    assert resp.status_code == 405
    assert "GET" in resp.headers["allow"]


@pytest.mark.parametrize("path", ["/", "/receipts", "/receipts/process/extra", "/docs", "/openapi.json", "/health"])
def test_unknown_routes_return_404(client, path):
    assert client.get(path, follow_redirects=False).status_code == 404


def test_trailing_slash_paths_are_not_redirected(client, make_payload):
    resp = client.post("/receipts/process/", json=make_payload(), follow_redirects=False)
    assert resp.status_code == 404
    assert "location" not in resp.headers

    receipt_id = _submit(client, make_payload()).json()["id"]
    resp = client.get(f"/receipts/{receipt_id}/points/", follow_redirects=False)
    assert resp.status_code == 404
    assert "location" not in resp.headers


def test_oversized_total_is_rejected_at_submit(client, make_payload, registry):
    resp = _submit(client, make_payload(total="1" * 5000 + ".00"))
    assert resp.status_code == 400
    assert len(registry) == 0


def test_oversized_price_is_rejected_at_submit(client, make_payload, registry):
    items = [{"shortDescription": "abc", "price": "9" * 16 + ".99"}]
    assert _submit(client, make_payload(items=items)).status_code == 400
    assert len(registry) == 0


def test_largest_accepted_amounts_score(client, make_payload):
    items = [{"shortDescription": "abc", "price": "9" * 15 + ".99"}]
    receipt_id = _submit(client, make_payload(total="9" * 15 + ".75", items=items)).json()["id"]
    resp = _points(client, receipt_id)
    assert resp.status_code == 200
    # A1 (2) + quarter (25) + price 999999999999999.99 * 0.2 rounded up (200000000000000) + odd day (6) + afternoon (10)
    assert resp.json() == {"points": 2 + 25 + 200000000000000 + 6 + 10}
