"""
Tests for watchlist_radar/ingestion/loaders.py.

What we test
------------
load_watchlist():
  - Parses stocks with nested dividend history into model objects.
  - Invalid stocks are reported together in one ValueError.
  - Missing file / non-array JSON raise.

load_dividend_history():
  - CSV and JSON formats.
  - Unparseable rows are skipped; blank fields become None.
  - Missing columns raise.
"""

from __future__ import annotations

import json
from datetime import date
from decimal import Decimal

import pytest

from watchlist_radar.ingestion.loaders import (
    load_dividend_history,
    load_watchlist,
    parse_dividend_row,
)


def _write(path, text):
    path.write_text(text, encoding="utf-8")
    return path


class TestLoadWatchlist:
    def test_parses_stocks(self, tmp_path):
        path = _write(tmp_path / "w.json", json.dumps([
            {
                "symbol": "ko", "price": "61.20", "target_price": "58.00", "dividend": "2.04",
                "dividends": [{"date": "2025-03-13", "amount": "0.51"}, {"date": "bad", "amount": "1"}],
            },
            {"symbol": "MSFT", "price": 410.5, "target_price": None},
        ]))
        stocks = load_watchlist(path)
        assert [s.symbol for s in stocks] == ["KO", "MSFT"]
        assert stocks[0].target_price == Decimal("58.00")
        assert len(stocks[0].dividends) == 1
        assert stocks[0].dividends[0].date == date(2025, 3, 13)
        assert stocks[1].target_price is None

    def test_invalid_stocks_collected(self, tmp_path):
        path = _write(tmp_path / "w.json", json.dumps([
            {"symbol": "A", "price": -1},
            {"symbol": "B", "price": 1},
            "nonsense",
        ]))
        with pytest.raises(ValueError, match="2 row"):
            load_watchlist(path)

    def test_not_an_array(self, tmp_path):
        path = _write(tmp_path / "w.json", json.dumps({"symbol": "A"}))
        with pytest.raises(ValueError, match="JSON array"):
            load_watchlist(path)

    def test_invalid_json(self, tmp_path):
        path = _write(tmp_path / "w.json", "[{")
        with pytest.raises(ValueError, match="Invalid JSON"):
            load_watchlist(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_watchlist(tmp_path / "nope.json")


class TestLoadDividendHistory:
    def test_csv(self, tmp_path):
        path = _write(
            tmp_path / "h.csv",
            "date,amount\n2024-03-14,0.485\n2024-06-13,0.485\nnot-a-date,0.5\n2024-09-12,\n",
        )
        events = load_dividend_history(path)
        assert len(events) == 3
        assert events[0].amount == Decimal("0.485")
        assert events[2].amount is None

    def test_csv_missing_columns(self, tmp_path):
        path = _write(tmp_path / "h.csv", "when,amount\n2024-03-14,1\n")
        with pytest.raises(ValueError, match="missing required columns"):
            load_dividend_history(path)

    def test_csv_empty(self, tmp_path):
        path = _write(tmp_path / "h.csv", "")
        with pytest.raises(ValueError, match="no header"):
            load_dividend_history(path)

    def test_json(self, tmp_path):
        path = _write(tmp_path / "h.json", json.dumps([
            {"date": "2024-09-01", "amount": 5.0},
            {"date": None, "amount": 5.0},
            [1, 2],
        ]))
        events = load_dividend_history(path)
        assert len(events) == 2
        assert events[0].amount == Decimal("5.0")
        assert events[1].date is None

    def test_json_not_array(self, tmp_path):
        path = _write(tmp_path / "h.json", json.dumps({"date": "2024-09-01"}))
        with pytest.raises(ValueError, match="array"):
            load_dividend_history(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_dividend_history(tmp_path / "h.csv")


class TestParseDividendRow:
    @pytest.mark.parametrize(
        "row",
        [
            {"date": "2024-13-01", "amount": "1"},
            {"date": "2024-01-01", "amount": "abc"},
            {"date": "2024-01-01", "amount": "NaN"},
            "2024-01-01,1",
        ],
    )
    def test_unparseable(self, row):
        assert parse_dividend_row(row) is None

    def test_datetime_string_truncated_to_date(self):
        event = parse_dividend_row({"date": "2024-01-05T00:00:00Z", "amount": "0.2"})
        assert event.date == date(2024, 1, 5)
