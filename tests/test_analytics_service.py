"""Tests for visitor analytics aggregation."""

from __future__ import annotations

import os
import time
from collections.abc import Iterator
from datetime import datetime

import pytest

from portfolio_cms.config import Settings, reset_settings
from portfolio_cms.data.crud.repository import Repository
from portfolio_cms.data.models import Visitor
from portfolio_cms.services.analytics import (
    WEEKDAY_LABELS,
    by_country,
    by_day_of_week,
    counts_as_of,
    record_visit,
)

# Naive datetimes are server-local wall time.
SUNDAY = datetime(2024, 3, 3, 10, 30)
WEDNESDAY = datetime(2024, 3, 6, 18, 0)


@pytest.fixture
def new_york_time() -> Iterator[None]:
    """Run the test with the server clock in a zone that observes daylight saving."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    previous = os.environ.get("TZ")
    os.environ["TZ"] = "America/New_York"
    time.tzset()
    yield
    if previous is None:
        del os.environ["TZ"]
    else:
        os.environ["TZ"] = previous
    time.tzset()


def test_empty_day_of_week_has_seven_zero_buckets(cms_env: Settings) -> None:
    assert by_day_of_week() == {"labels": list(WEEKDAY_LABELS), "values": [0] * 7}
    assert WEEKDAY_LABELS[0] == "Sun"


def test_day_of_week_buckets(cms_env: Settings) -> None:
    record_visit("10.0.0.1", "France", now=SUNDAY)
    record_visit("10.0.0.2", "France", now=SUNDAY)
    record_visit("10.0.0.3", "Spain", now=WEDNESDAY)

    assert by_day_of_week()["values"] == [2, 0, 0, 1, 0, 0, 0]


def test_record_visit_returns_counts(cms_env: Settings) -> None:
    now = datetime(2024, 3, 15, 12, 0)
    record_visit("10.0.0.1", "France", now=datetime(2024, 2, 20, 9, 0))
    record_visit("10.0.0.2", "France", now=datetime(2024, 3, 2, 9, 0))

    counts = record_visit("10.0.0.3", "France", now=now)

    assert counts == {"total": 3, "today": 1, "month": 2}
    assert counts_as_of(datetime(2024, 4, 1, 0, 5)) == {"total": 3, "today": 0, "month": 0}


def test_counts_on_empty_table(cms_env: Settings) -> None:
    assert counts_as_of() == {"total": 0, "today": 0, "month": 0}


def test_missing_countries_fold_into_fallback(cms_env: Settings) -> None:
    record_visit("10.0.0.1", None)
    record_visit("10.0.0.2", "")
    Repository(Visitor).insert(Visitor(ip="10.0.0.3", country=None, visited_at=SUNDAY))
    record_visit("10.0.0.4", "France")

    assert by_country() == {"labels": ["Unknown", "France"], "values": [3, 1]}


def test_countries_sorted_by_count_then_name(cms_env: Settings) -> None:
    for country in ["Spain", "France", "Spain", "Chile"]:
        record_visit("10.0.0.1", country)

    assert by_country() == {"labels": ["Spain", "Chile", "France"], "values": [2, 1, 1]}


def test_fallback_label_is_configurable(
    cms_env: Settings, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("PORTFOLIO_CMS_FALLBACK_COUNTRY", "Unresolved")
    reset_settings()

    record_visit("10.0.0.1", None)

    assert by_country()["labels"] == ["Unresolved"]


def test_month_start_uses_its_own_offset_after_dst_ends(
    cms_env: Settings, new_york_time: None
) -> None:
    # 1 November 2024 is still EDT; clocks fall back to EST on 3 November
    record_visit("10.0.0.1", "France", now=datetime(2024, 11, 1, 0, 30))

    counts = counts_as_of(datetime(2024, 11, 15, 12, 0))

    assert counts == {"total": 1, "today": 0, "month": 1}


def test_day_start_on_the_changeover_day(cms_env: Settings, new_york_time: None) -> None:
    # 10 March 2024: clocks spring forward at 02:00 EST
    record_visit("10.0.0.1", "France", now=datetime(2024, 3, 10, 0, 15))
    record_visit("10.0.0.2", "France", now=datetime(2024, 3, 9, 23, 50))

    counts = counts_as_of(datetime(2024, 3, 10, 12, 0))

    assert counts["today"] == 1
    assert counts["month"] == 2
