"""Tests de la normalisation des calendriers mensuels distants."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from insight_core.domain.entities import DayType, InsightSource, Locale
from insight_core.domain.errors import ValidationDefect
from insight_core.domain.normalize import normalize_day, normalize_monthly
from tests.fakes import monthly_payload

GENERATED_AT = datetime(2024, 4, 1, tzinfo=UTC)
APRIL_DAYS = 30
APRIL_WEEKENDS = [6, 7, 13, 14, 20, 21, 27, 28]


def _normalize(raw_days, theme="Theme", year=2024, month=4):
    return normalize_monthly(
        raw_days,
        year=year,
        month=month,
        locale=Locale.EN,
        month_theme=theme,
        generated_at=GENERATED_AT,
    )


def test_weekend_flags_are_forced_from_calendar() -> None:
    """Les indicateurs distants (tous à False) sont remplacés par le calendrier."""
    monthly = _normalize(monthly_payload(APRIL_DAYS)["days"])

    assert [d.day for d in monthly.days if d.is_weekend] == APRIL_WEEKENDS
    saturday = monthly.entry_for(6)
    assert saturday.weekend_tip == "Rest and recharge"
    assert monthly.entry_for(8).weekend_tip is None
    assert monthly.source is InsightSource.REMOTE


def test_remote_weekend_claims_are_ignored_on_weekdays() -> None:
    """Un jour de semaine annoncé comme week-end (avec conseil) redevient un jour ordinaire."""
    raw = monthly_payload(APRIL_DAYS)["days"]
    raw[0].update(isWeekend=True, weekendTip="Go out and celebrate")
    raw[5].update(weekendTip="Picnic in the park")

    monthly = _normalize(raw)

    monday = monthly.entry_for(1)
    assert monday.is_weekend is False
    assert monday.weekend_tip is None
    saturday = monthly.entry_for(6)
    assert saturday.is_weekend is True
    assert saturday.weekend_tip == "Picnic in the park"


def test_short_list_is_padded_with_defaults() -> None:
    """Les jours manquants reçoivent une entrée neutre."""
    monthly = _normalize(monthly_payload(10)["days"])

    assert len(monthly.days) == APRIL_DAYS
    padded = monthly.entry_for(15)
    assert padded.day_type is DayType.REFLECTION
    assert padded.stone == "Clear Quartz"
    assert padded.drink == "Warm water with lemon"
    assert padded.wear_color == "White"
    assert padded.message == ""
    assert monthly.entry_for(3).stone == "Amethyst"


def test_entries_are_mapped_by_day_number() -> None:
    """Les entrées désordonnées sont replacées; sans numéro valide, la position sert de jour."""
    raw = [
        {"day": 3, "message": "third"},
        {"day": "1", "message": "first"},
        {"message": "positional"},
    ]
    # Sans numéro, la troisième entrée prend la position 3, déjà occupée.
    with pytest.raises(ValidationDefect):
        _normalize(raw)

    monthly = _normalize([{"day": 0, "message": "out of range"}])
    assert monthly.entry_for(1).message == "out of range"

    monthly = _normalize([{"day": 2, "message": "second"}, {"day": "1", "message": "first"}])
    assert monthly.entry_for(1).message == "first"
    assert monthly.entry_for(2).message == "second"


def test_too_many_days_is_a_defect() -> None:
    with pytest.raises(ValidationDefect):
        _normalize(monthly_payload(31)["days"])


def test_unknown_day_type_and_non_string_fields() -> None:
    entry = {"dayType": "Party", "message": 42, "stone": "  ", "wearColor": ["Red"]}

    day = normalize_day(entry, 1, is_weekend=False)

    assert day.day_type is DayType.REFLECTION
    assert day.message == ""
    assert day.stone == "Clear Quartz"
    assert day.wear_color == "White"
    assert day.weekend_tip is None


def test_month_theme_defaults() -> None:
    monthly = _normalize([], theme=None, year=2024, month=2)
    assert monthly.month_theme == "A month of growth and discovery"
    assert len(monthly.days) == 29
