"""Tests for profile/metric/news summaries and the status log."""

from datetime import date

import pytest

from stock_dashboard.models import RawSeriesBundle
from stock_dashboard.ui.summary import (
    StatusLog,
    build_metric_cards,
    build_news_items,
    build_summary,
    format_market_cap,
)


def test_build_summary(bundle):
    summary = build_summary(bundle, "AAPL")

    assert summary.name == "Apple Inc"
    assert summary.ticker == "AAPL"
    assert summary.chart_title == "Apple Inc Daily Chart"
    assert summary.industry == "Technology"
    assert summary.website == "https://www.apple.com/"
    assert summary.exchange.startswith("NASDAQ")


def test_build_summary_empty_profile(payloads):
    payloads["profile"] = {}
    summary = build_summary(RawSeriesBundle.from_results(payloads), "ZZZZ")

    assert summary.name == "Company Name"
    assert summary.ticker == "ZZZZ"
    assert summary.chart_title == "ZZZZ Daily Chart"
    assert summary.industry == "N/A"


def test_metric_cards(payloads):
    cards = build_metric_cards(payloads["metrics"], payloads["quote"])

    assert [(c.label, c.value) for c in cards] == [
        ("Current Price", "$187.50"),
        ("Market Cap", "2950.00B"),
        ("52-Week High", "$199.62"),
        ("52-Week Low", "$164.08"),
        ("P/E Ratio", "31.25"),
    ]


def test_metric_cards_missing_values():
    cards = build_metric_cards({"metric": {}}, {})
    assert [c.value for c in cards] == ["$0.00", "0.00B", "$0.00", "$0.00", "N/A"]


@pytest.mark.parametrize("value,expected", [(1500.0, "1.50B"), (0.0, "0.00B"), (None, "0.00B")])
def test_format_market_cap(value, expected):
    assert format_market_cap(value) == expected


def test_news_limited_to_five(payloads):
    items = build_news_items(payloads["news"])

    assert len(items) == 5
    assert items[0].headline == "Headline 0"
    assert items[0].source == "Reuters"
    assert items[0].published == date(2023, 11, 14)


class TestStatusLog:

    def test_newest_first(self):
        log = StatusLog()
        log.log("first")
        log.log("second", "success")

        assert [e.message for e in log.entries] == ["second", "first"]
        assert log.latest.kind == "success"

    def test_errors_filter(self):
        log = StatusLog()
        log.log("ok")
        log.log("bad", "error")
        assert [e.message for e in log.errors()] == ["bad"]

    def test_unknown_kind(self):
        with pytest.raises(ValueError):
            StatusLog().log("x", "warning")

    def test_bounded(self):
        log = StatusLog(max_entries=3)
        for i in range(5):
            log.log(str(i))
        assert [e.message for e in log.entries] == ["4", "3", "2"]

    def test_entry_format(self):
        entry = StatusLog().log("hello")
        assert str(entry).endswith("] hello")
        assert str(entry).startswith("[")

    def test_mirrors_to_logger(self, caplog):
        with caplog.at_level("INFO", logger="stock_dashboard.ui.summary"):
            log = StatusLog()
            log.log("fetching")
            log.log("failed", "error")

        levels = [(r.levelname, r.getMessage()) for r in caplog.records]
        assert ("INFO", "fetching") in levels
        assert ("ERROR", "failed") in levels
