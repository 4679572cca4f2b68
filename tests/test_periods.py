from __future__ import annotations

import datetime as dt

import pytest

from git_profile.analysis_periods import Period, current_year_period, parse_period


def test_parse_period_year() -> None:
    p = parse_period("2025")
    assert p.label == "2025"
    assert p.start == dt.date(2025, 1, 1)
    assert p.end == dt.date(2026, 1, 1)


def test_parse_period_halves() -> None:
    p1 = parse_period("2025H1")
    p2 = parse_period("2025h2")
    assert p1.start == dt.date(2025, 1, 1)
    assert p1.end == dt.date(2025, 7, 1)
    assert p2.label == "2025H2"
    assert p2.start == dt.date(2025, 7, 1)
    assert p2.end == dt.date(2026, 1, 1)


def test_parse_period_half_first() -> None:
    assert parse_period("H12025") == parse_period("2025H1")


@pytest.mark.parametrize("spec", ["", "25", "2025Q1", "2025-01", "H32025"])
def test_parse_period_invalid(spec: str) -> None:
    with pytest.raises(ValueError):
        parse_period(spec)


def test_git_range_bounds() -> None:
    p = Period(label="2024H1", start=dt.date(2024, 1, 1), end=dt.date(2024, 7, 1))
    assert p.since == "2024-01-01 00:00:00"
    assert p.until == "2024-06-30 23:59:59"


def test_current_year_period() -> None:
    assert current_year_period(dt.date(2026, 10, 19)).label == "2026"
