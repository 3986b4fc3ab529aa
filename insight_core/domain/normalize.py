"""
Normalisation des calendriers mensuels avant mise en cache.

Le contenu distant est traité comme une entrée non fiable: le calendrier (nombre de jours,
week-ends) est recalculé localement, chaque jour manquant reçoit une entrée neutre et les
indicateurs de week-end sont imposés quelle que soit la réponse reçue.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

import structlog

from insight_core.core.constants import (
    DEFAULT_DAY_TYPE,
    DEFAULT_DRINK,
    DEFAULT_MONTH_THEME,
    DEFAULT_STONE,
    DEFAULT_WEAR_COLOR,
    DEFAULT_WEEKEND_TIP,
)
from insight_core.domain.entities import (
    DayType,
    InsightKind,
    InsightSource,
    Locale,
    MonthlyDayInsight,
    MonthlyInsight,
)
from insight_core.domain.errors import ValidationDefect
from insight_core.domain.periods import days_in_month, weekend_days

log = structlog.get_logger(__name__)


def _text(entry: dict[str, Any], key: str, default: str = "") -> str:
    value = entry.get(key)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def _day_type(value: Any) -> DayType:
    if isinstance(value, str):
        try:
            return DayType(value.strip().lower())
        except ValueError:
            pass
    return DayType(DEFAULT_DAY_TYPE)


def _day_number(value: Any, position: int, total: int) -> int:
    """Numéro de jour annoncé, ou la position (1-based) si absent/invalide."""
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value.strip())
    if isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= total:
        return value
    return position


def _index_entries(raw_days: list[dict[str, Any]], total: int) -> dict[int, dict[str, Any]]:
    if len(raw_days) > total:
        raise ValidationDefect(
            f"monthly response has {len(raw_days)} days, month has {total}",
            kind=InsightKind.MONTHLY.value,
        )
    by_day: dict[int, dict[str, Any]] = {}
    for position, entry in enumerate(raw_days, start=1):
        number = _day_number(entry.get("day"), position, total)
        if number in by_day:
            raise ValidationDefect(
                f"monthly response repeats day {number}", kind=InsightKind.MONTHLY.value
            )
        by_day[number] = entry
    return by_day


def normalize_day(entry: dict[str, Any] | None, day: int, is_weekend: bool) -> MonthlyDayInsight:
    """Construit l'entrée canonique d'un jour à partir de l'entrée brute (ou de rien)."""
    entry = entry or {}
    return MonthlyDayInsight(
        day=day,
        day_type=_day_type(entry.get("dayType")),
        message=_text(entry, "message"),
        stone=_text(entry, "stone", DEFAULT_STONE),
        stone_energy=_text(entry, "stoneEnergy"),
        activity=_text(entry, "activity"),
        drink=_text(entry, "drink", DEFAULT_DRINK),
        wear_color=_text(entry, "wearColor", DEFAULT_WEAR_COLOR),
        affirmation=_text(entry, "affirmation"),
        is_weekend=is_weekend,
        weekend_tip=_text(entry, "weekendTip", DEFAULT_WEEKEND_TIP) if is_weekend else None,
    )


def normalize_monthly(
    raw_days: list[dict[str, Any]],
    *,
    year: int,
    month: int,
    locale: Locale,
    month_theme: str | None,
    generated_at: datetime,
    source: InsightSource = InsightSource.REMOTE,
) -> MonthlyInsight:
    """Réconcilie une réponse mensuelle brute avec le calendrier réel.

    Args:
        raw_days: Entrées journalières brutes (clés camelCase du format distant).
        year: Année du calendrier.
        month: Mois (1-12).
        locale: Langue du contenu.
        month_theme: Thème du mois proposé (défaut neutre si absent).
        generated_at: Horodatage de génération.
        source: Origine du contenu.

    Returns:
        MonthlyInsight: Exactement un jour par date du mois, dans l'ordre.

    Raises:
        ValidationDefect: Plus d'entrées que de jours, ou numéro de jour répété.
    """
    total = days_in_month(year, month)
    weekends = set(weekend_days(year, month))
    by_day = _index_entries(raw_days, total)
    missing = [d for d in range(1, total + 1) if d not in by_day]
    if missing:
        log.info(
            "monthly_days_defaulted",
            year=year,
            month=month,
            count=len(missing),
        )
    days = [normalize_day(by_day.get(d), d, d in weekends) for d in range(1, total + 1)]
    theme = month_theme.strip() if isinstance(month_theme, str) and month_theme.strip() else ""
    return MonthlyInsight(
        year=year,
        month=month,
        locale=locale,
        month_theme=theme or DEFAULT_MONTH_THEME,
        days=days,
        generated_at=generated_at,
        source=source,
    )
