"""
Tests for the daily grid intensity ingestion (feed parsing, upsert
policy and the CLI job). requests.get is stubbed; no network access.
"""
import pytest
import requests
from datetime import date
from decimal import Decimal

from app.core.errors import GridFeedError
from app.jobs import fetch_grid_intensity as job
from app.models.grid_intensity import GridIntensity
from app.services import grid_feed
from app.services.grid import upsert_grid_sample


class _FakeResponse:
    def __init__(self, payload, status_code=200):
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self._payload


@pytest.fixture()
def fake_feed(monkeypatch):
    """Replace requests.get; returns the list of captured calls."""
    calls = []

    def install(payload, status_code=200):
        def _get(url, params=None, timeout=None):
            calls.append({"url": url, "params": params, "timeout": timeout})
            return _FakeResponse(payload, status_code)
        monkeypatch.setattr(grid_feed.requests, "get", _get)
        return calls

    return install


class TestAverageIntensity:
    def test_grams_averaged_and_converted_to_kg(self):
        payload = {"Rows": [{"Value": 200}, {"Value": 300}]}
        assert grid_feed.average_intensity(payload) == Decimal("0.2500")

    def test_null_values_skipped(self):
        payload = {"Rows": [{"Value": 240}, {"Value": None}, {"Value": 260}]}
        assert grid_feed.average_intensity(payload) == Decimal("0.2500")

    def test_missing_rows_raises(self):
        with pytest.raises(GridFeedError):
            grid_feed.average_intensity({"Series": []})

    def test_no_readings_raises(self):
        with pytest.raises(GridFeedError):
            grid_feed.average_intensity({"Rows": [{"Value": None}]})


class TestFetch:
    def test_feed_date_format(self):
        assert grid_feed.feed_date(date(2025, 5, 3)) == "03-May-2025"

    def test_request_params(self, fake_feed):
        calls = fake_feed({"Rows": [{"Value": 250}]})
        assert grid_feed.fetch_daily_intensity(date(2025, 5, 23)) == Decimal("0.2500")
        params = calls[0]["params"]
        assert params["dateFrom"] == params["dateTo"] == "23-May-2025"
        assert params["chartType"] == "co2"
        assert calls[0]["timeout"] is not None

    def test_http_error_wrapped(self, fake_feed):
        fake_feed({}, status_code=503)
        with pytest.raises(GridFeedError) as exc_info:
            grid_feed.fetch_daily_intensity(date(2025, 5, 23))
        assert exc_info.value.details["day"] == "2025-05-23"


class TestUpsertPolicy:
    _DAY = date(2022, 3, 14)

    def test_second_write_overwrites(self, db):
        upsert_grid_sample(db, self._DAY, Decimal("0.2"))
        upsert_grid_sample(db, self._DAY, Decimal("0.35"))
        rows = db.query(GridIntensity).filter(GridIntensity.date == self._DAY).all()
        assert len(rows) == 1
        assert rows[0].intensity == Decimal("0.35")

    def test_ingest_day_stores_average(self, db, fake_feed):
        fake_feed({"Rows": [{"Value": 100}, {"Value": 300}]})
        sample = grid_feed.ingest_day(db, date(2022, 3, 15))
        assert sample.date == date(2022, 3, 15)
        assert sample.intensity == Decimal("0.2")


class TestJob:
    def test_success_exit_code(self, fake_feed):
        fake_feed({"Rows": [{"Value": 310}]})
        assert job.main(["--day", "2022-04-01"]) == 0

    def test_failure_exit_code(self, fake_feed):
        fake_feed({"Rows": []})
        assert job.main(["--day", "2022-04-02"]) == 1

    def test_bad_day_argument(self):
        with pytest.raises(SystemExit):
            job.main(["--day", "not-a-date"])
