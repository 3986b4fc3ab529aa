"""
Entités du domaine métier.

Ce module définit les modèles de données des insights (quotidien, annuel, mensuel), du profil
utilisateur et du résultat de comparaison. Les modèles se sérialisent en camelCase, forme
conservée dans le cache, et valident leurs invariants à la construction.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from insight_core.core.constants import (
    LUCKY_NUMBER_COUNT,
    LUCKY_NUMBER_MAX,
    LUCKY_NUMBER_MIN,
    MONTH_MAX,
    MONTH_MIN,
    SCORE_MAX,
    SCORE_MIN,
)
from insight_core.domain.periods import days_in_month, weekend_days
from insight_core.domain.zodiac import ComputedProfile, Locale, compute_profile

__all__ = [
    "DailyInsight",
    "DayType",
    "InsightKind",
    "InsightSource",
    "Locale",
    "MonthlyDayInsight",
    "MonthlyInsight",
    "ComparisonResult",
    "Ritual",
    "UserProfile",
    "YearlyInsight",
    "validate_lucky_numbers",
]


class InsightKind(str, Enum):
    """Types de contenus générés."""

    DAILY = "daily"
    YEARLY = "yearly"
    MONTHLY = "monthly"
    COMPARISON = "comparison"


class DayType(str, Enum):
    """Tonalité d'une journée du calendrier mensuel."""

    CLEANSING = "cleansing"
    MANIFESTATION = "manifestation"
    REST = "rest"
    ACTION = "action"
    REFLECTION = "reflection"
    SOCIAL = "social"
    GRATITUDE = "gratitude"
    CREATIVITY = "creativity"


class InsightSource(str, Enum):
    """Origine d'un contenu: service distant ou repli déterministe."""

    REMOTE = "remote"
    FALLBACK = "fallback"


class _Model(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def validate_lucky_numbers(numbers: list[int]) -> list[int]:
    """Vérifie: exactement 3 entiers distincts dans [1, 99]."""
    if len(numbers) != LUCKY_NUMBER_COUNT:
        raise ValueError(f"expected {LUCKY_NUMBER_COUNT} lucky numbers, got {len(numbers)}")
    if len(set(numbers)) != LUCKY_NUMBER_COUNT:
        raise ValueError("lucky numbers must be distinct")
    for n in numbers:
        if not LUCKY_NUMBER_MIN <= n <= LUCKY_NUMBER_MAX:
            raise ValueError(f"lucky number out of range: {n}")
    return numbers


class UserProfile(_Model):
    """Identité et profil astrologique d'un utilisateur.

    `computed_profile` n'est jamais stocké ni modifié indépendamment: il est recalculé à partir
    de `birth_date` à chaque accès. Le modèle est immuable; une édition produit une nouvelle
    instance via `with_changes`.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str = Field(min_length=1)
    name: str
    birth_date: date
    locale: Locale = Locale.EN
    email: str | None = None
    birth_time: str | None = None
    birth_place: str | None = None
    timezone: str = "UTC"
    focus_areas: list[str] = Field(default_factory=list)
    is_premium: bool = False

    @computed_field  # type: ignore[prop-decorator]
    @property
    def computed_profile(self) -> ComputedProfile:
        """Profil dérivé de la date de naissance."""
        return compute_profile(self.birth_date)

    def with_changes(self, **changes: Any) -> UserProfile:
        """Retourne un profil revalidé avec les champs modifiés."""
        data = self.model_dump(exclude={"computed_profile"})
        data.update(changes)
        return UserProfile.model_validate(data)


class Ritual(_Model):
    """Petit rituel du jour."""

    title: str
    steps: list[str] = Field(min_length=1)


class DailyInsight(_Model):
    """Insight quotidien pour une date et une langue."""

    period_key: str
    locale: Locale
    energy_score: int = Field(ge=SCORE_MIN, le=SCORE_MAX)
    title: str
    description: str
    color: str
    lucky_numbers: list[int]
    ritual: Ritual
    focus_on: list[str] = Field(default_factory=list)
    avoid: list[str] = Field(default_factory=list)
    generated_at: datetime
    source: InsightSource = InsightSource.REMOTE

    @field_validator("period_key")
    @classmethod
    def _check_period_key(cls, v: str) -> str:
        date.fromisoformat(v)
        return v

    @field_validator("lucky_numbers")
    @classmethod
    def _check_lucky_numbers(cls, v: list[int]) -> list[int]:
        return validate_lucky_numbers(v)


class YearlyInsight(_Model):
    """Prévisions annuelles."""

    year: int
    locale: Locale
    theme: str
    strengths: list[str]
    challenges: list[str]
    recommendations: list[str]
    generated_at: datetime
    source: InsightSource = InsightSource.REMOTE


class MonthlyDayInsight(_Model):
    """Une journée du calendrier spirituel mensuel."""

    day: int = Field(ge=1, le=31)
    day_type: DayType
    message: str
    stone: str
    stone_energy: str
    activity: str
    drink: str
    wear_color: str
    affirmation: str
    is_weekend: bool
    weekend_tip: str | None = None

    @model_validator(mode="after")
    def _check_weekend_tip(self) -> MonthlyDayInsight:
        if self.is_weekend and not self.weekend_tip:
            raise ValueError(f"day {self.day}: weekend day requires a weekend tip")
        if not self.is_weekend and self.weekend_tip is not None:
            raise ValueError(f"day {self.day}: weekday must not carry a weekend tip")
        return self


class MonthlyInsight(_Model):
    """Calendrier mensuel: une entrée par jour, dans l'ordre, week-ends recalculés."""

    year: int
    month: int = Field(ge=MONTH_MIN, le=MONTH_MAX)
    locale: Locale
    month_theme: str
    days: list[MonthlyDayInsight]
    generated_at: datetime
    source: InsightSource = InsightSource.REMOTE

    @model_validator(mode="after")
    def _check_calendar(self) -> MonthlyInsight:
        expected = days_in_month(self.year, self.month)
        if len(self.days) != expected:
            raise ValueError(f"expected {expected} days, got {len(self.days)}")
        weekends = set(weekend_days(self.year, self.month))
        for index, entry in enumerate(self.days, start=1):
            if entry.day != index:
                raise ValueError(f"days out of order at position {index}: day {entry.day}")
            if entry.is_weekend != (index in weekends):
                raise ValueError(f"day {index}: weekend flag does not match the calendar")
        return self

    def entry_for(self, day: int) -> MonthlyDayInsight | None:
        """Retourne l'entrée d'un jour du mois, ou None hors plage."""
        if 1 <= day <= len(self.days):
            return self.days[day - 1]
        return None


class ComparisonResult(_Model):
    """Compatibilité entre deux profils (jamais mise en cache)."""

    harmony_score: int = Field(ge=SCORE_MIN, le=SCORE_MAX)
    summary: str
    strengths: list[str]
    challenges: list[str]
