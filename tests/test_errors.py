"""
Tests for error handling: structured error responses, HTTP status codes,
and the custom exception classes.
"""
import pytest
from datetime import date

from app.core.errors import (
    FutureDateError,
    GridFeedError,
    InvalidInputError,
    InvalidRangeError,
    NotFoundError,
)


# ---------------------------------------------------------------------------
# Unit tests on exception classes
# ---------------------------------------------------------------------------

class TestExceptionClasses:
    def test_invalid_input_error(self):
        err = InvalidInputError("amount must be greater than zero.", field="amount", value=-1)
        assert err.http_status == 422
        assert err.code == "INVALID_INPUT"
        d = err.to_dict()
        assert d["details"] == {"field": "amount", "value": "-1"}

    def test_invalid_range_error(self):
        err = InvalidRangeError("2025-13 is not a valid calendar month.")
        assert err.http_status == 422
        assert err.code == "INVALID_RANGE"

    def test_future_date_is_a_range_error(self):
        err = FutureDateError(day=date(2030, 1, 2), today=date(2030, 1, 1))
        assert isinstance(err, InvalidRangeError)
        assert err.code == "INVALID_RANGE"
        assert err.details["day"] == "2030-01-02"

    def test_not_found_error(self):
        err = NotFoundError("No owner context.")
        assert err.http_status == 404
        assert err.code == "NOT_FOUND"

    def test_grid_feed_error(self):
        err = GridFeedError("no rows")
        assert err.http_status == 502
        assert err.code == "GRID_FEED_ERROR"

    def test_to_dict_without_details(self):
        d = NotFoundError("missing").to_dict()
        assert d == {"code": "NOT_FOUND", "message": "missing"}


# ---------------------------------------------------------------------------
# Integration tests on HTTP error responses
# ---------------------------------------------------------------------------

class TestHttpErrors:
    def test_missing_owner_header(self, client):
        r = client.get("/dashboard")
        assert r.status_code == 404
        body = r.json()
        assert body["code"] == "NOT_FOUND"
        assert body["details"]["header"] == "X-Owner-Id"

    def test_blank_owner_header(self, client):
        r = client.get("/activities", headers={"X-Owner-Id": "   "})
        assert r.status_code == 404

    def test_non_numeric_amount_is_validation_error(self, client, headers):
        r = client.post("/activities", json={"category": "driving", "amount": "lots"}, headers=headers)
        assert r.status_code == 422
        body = r.json()
        assert body["code"] == "VALIDATION_ERROR"
        assert any(e["field"] == "amount" for e in body["details"]["errors"])

    def test_negative_amount_is_invalid_input(self, client, headers):
        r = client.post("/activities", json={"category": "driving", "amount": -3}, headers=headers)
        assert r.status_code == 422
        assert r.json()["code"] == "INVALID_INPUT"

    def test_unknown_category_is_invalid_input(self, client, headers):
        r = client.post("/activities", json={"category": "flying", "amount": 3}, headers=headers)
        assert r.status_code == 422
        assert r.json()["details"]["field"] == "category"

    def test_failed_create_writes_nothing(self, client, headers):
        client.post("/activities", json={"category": "driving", "amount": 0}, headers=headers)
        assert client.get("/activities", headers=headers).json() == []

    @pytest.mark.parametrize("month", [0, 13])
    def test_export_invalid_month(self, client, headers, month):
        r = client.get(f"/export?year=2025&month={month}", headers=headers)
        assert r.status_code == 422
        assert r.json()["code"] == "INVALID_RANGE"

    def test_export_missing_month_is_validation_error(self, client, headers):
        r = client.get("/export?year=2025", headers=headers)
        assert r.status_code == 422
        assert r.json()["code"] == "VALIDATION_ERROR"

    def test_dashboard_future_date(self, client, headers):
        r = client.get("/dashboard?date=2999-01-01", headers=headers)
        assert r.status_code == 422
        assert r.json()["code"] == "INVALID_RANGE"

    def test_grid_negative_intensity_rejected(self, client):
        r = client.put("/grid-intensity/2024-01-01", json={"intensity": -0.1})
        assert r.status_code == 422
