"""Tests des utilitaires de calendrier et des identifiants de période."""

from __future__ import annotations

from datetime import UTC, date, datetime

import pytest

from insight_core.domain.periods import (
    daily_period_key,
    days_in_month,
    monthly_period_id,
    parse_period_key,
    period_start,
    weekend_days,
)

LEAP_FEBRUARY_DAYS = 29
APRIL_DAYS = 30


def test_days_in_month() -> None:
    """Teste le nombre de jours, années bissextiles comprises."""
    assert days_in_month(2024, 2) == LEAP_FEBRUARY_DAYS
    assert days_in_month(2023, 2) == LEAP_FEBRUARY_DAYS - 1
    assert days_in_month(2024, 4) == APRIL_DAYS
    assert days_in_month(2024, 12) == APRIL_DAYS + 1


def test_days_in_month_rejects_invalid_month() -> None:
    with pytest.raises(ValueError):
        days_in_month(2024, 13)


def test_weekend_days_april_2024() -> None:
    """Avril 2024 commence un lundi."""
    assert weekend_days(2024, 4) == [6, 7, 13, 14, 20, 21, 27, 28]


def test_period_identifiers() -> None:
    """Teste les identifiants de période des clés de cache."""
    assert monthly_period_id(2024, 4) == "2024_4"
    assert daily_period_key(date(2024, 4, 9)) == "2024-04-09"
    assert parse_period_key("2024-04-09") == date(2024, 4, 9)
    with pytest.raises(ValueError):
        monthly_period_id(2024, 0)


def test_period_start_is_utc_midnight() -> None:
    assert period_start(2024) == datetime(2024, 1, 1, tzinfo=UTC)
    assert period_start(2024, 4, 9) == datetime(2024, 4, 9, tzinfo=UTC)
