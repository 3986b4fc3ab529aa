"""Identifiants de période et calendrier local.

Le calendrier (nombre de jours, week-ends) est toujours recalculé ici et jamais repris d'une
réponse distante.
"""

from __future__ import annotations

import calendar
from datetime import UTC, date, datetime

from insight_core.core.constants import MONTH_MAX, MONTH_MIN

_SATURDAY = 5
_SUNDAY = 6


def _check_month(month: int) -> None:
    if not MONTH_MIN <= month <= MONTH_MAX:
        raise ValueError(f"month must be in [1, 12], got {month}")


def days_in_month(year: int, month: int) -> int:
    """Nombre de jours du mois (années bissextiles comprises)."""
    _check_month(month)
    return calendar.monthrange(year, month)[1]


def weekend_days(year: int, month: int) -> list[int]:
    """Numéros des jours tombant un samedi ou un dimanche, en ordre croissant."""
    return [
        d
        for d in range(1, days_in_month(year, month) + 1)
        if date(year, month, d).weekday() in (_SATURDAY, _SUNDAY)
    ]


def parse_period_key(period_key: str) -> date:
    """Convertit une clé de période quotidienne (YYYY-MM-DD) en date."""
    return date.fromisoformat(period_key)


def daily_period_key(day: date) -> str:
    return day.isoformat()


def monthly_period_id(year: int, month: int) -> str:
    """Identifiant de période mensuelle utilisé dans les clés de cache."""
    _check_month(month)
    return f"{year}_{month}"


def period_start(year: int, month: int = 1, day: int = 1) -> datetime:
    """Début (minuit UTC) d'une période; sert d'horodatage aux contenus de repli."""
    return datetime(year, month, day, tzinfo=UTC)
