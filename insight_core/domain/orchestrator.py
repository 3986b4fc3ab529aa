"""
Orchestration des insights: cache, génération distante et repli déterministe.

Pour chaque requête `(utilisateur, type, période, langue)`:
- présent en cache -> renvoyé tel quel (aucun appel réseau, aucune écriture)
- absent -> une seule génération par clé (single-flight); succès distant -> normalisation puis
  écriture; tout échec distant -> repli déterministe puis écriture

Les méthodes d'insight ne lèvent jamais pour un problème de génération; seule la comparaison
(non mise en cache, sans repli) propage les erreurs du générateur.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import UTC, date, datetime
from enum import Enum
from typing import Any, Generic, TypeVar

import structlog

from insight_core.core.metrics import (
    INSIGHT_CACHE_LOOKUPS,
    INSIGHT_GENERATIONS,
    INSIGHT_SINGLE_FLIGHT_JOINS,
)
from insight_core.domain.colors import color_to_hex, display_color
from insight_core.domain.entities import (
    ComparisonResult,
    DailyInsight,
    InsightKind,
    MonthlyDayInsight,
    MonthlyInsight,
    UserProfile,
    YearlyInsight,
)
from insight_core.domain.errors import GenerationFailure, RateLimited
from insight_core.domain.fallback import DeterministicFallback
from insight_core.domain.generator import (
    ComparisonContext,
    DailyContext,
    InsightGenerator,
    MonthlyContext,
    YearlyContext,
)
from insight_core.domain.periods import (
    daily_period_key,
    days_in_month,
    monthly_period_id,
    parse_period_key,
    weekend_days,
)
from insight_core.domain.single_flight import SingleFlight
from insight_core.infra.cache_store import InsightCache

log = structlog.get_logger(__name__)

T = TypeVar("T")


class Outcome(str, Enum):
    """Issue d'une requête d'insight."""

    CACHE_HIT = "cache_hit"
    SUCCESS = "success"
    FALLBACK_SUCCESS = "fallback_success"


@dataclass(frozen=True)
class InsightResult(Generic[T]):
    """Contenu servi et la façon dont il a été obtenu."""

    insight: T
    outcome: Outcome

    @property
    def from_cache(self) -> bool:
        return self.outcome is Outcome.CACHE_HIT

    @property
    def is_fallback(self) -> bool:
        return self.outcome is Outcome.FALLBACK_SUCCESS


@dataclass(frozen=True)
class Dashboard:
    daily: InsightResult[DailyInsight]
    yearly: InsightResult[YearlyInsight]


def _utcnow() -> datetime:
    return datetime.now(UTC)


class InsightOrchestrator:
    """Point d'entrée unique pour obtenir les insights d'un utilisateur.

    Le cache est injecté (jamais un singleton caché); l'horloge l'est aussi pour les tests.
    """

    def __init__(
        self,
        cache: InsightCache,
        generator: InsightGenerator,
        fallback: DeterministicFallback | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """Initialise l'orchestrateur avec ses dépendances."""
        self.cache = cache
        self.generator = generator
        self.fallback = fallback or DeterministicFallback()
        self.clock = clock
        self._flights: SingleFlight[tuple[str, str, str, str], InsightResult[Any]] = (
            SingleFlight()
        )

    async def _resolve(
        self,
        kind: InsightKind,
        profile: UserProfile,
        period: str,
        lookup: Callable[[], T | None],
        remote: Callable[[], Awaitable[T]],
        local: Callable[[], T],
        store: Callable[[T], None],
    ) -> InsightResult[T]:
        bound = log.bind(
            kind=kind.value, user_id=profile.id, period=period, locale=profile.locale.value
        )
        cached = lookup()
        if cached is not None:
            INSIGHT_CACHE_LOOKUPS.labels(kind=kind.value, result="hit").inc()
            bound.debug("insight_cache_hit")
            return InsightResult(cached, Outcome.CACHE_HIT)
        INSIGHT_CACHE_LOOKUPS.labels(kind=kind.value, result="miss").inc()

        async def produce() -> InsightResult[T]:
            try:
                insight = await remote()
                outcome = Outcome.SUCCESS
            except GenerationFailure as exc:
                bound.warning("insight_generation_failed", reason=exc.reason, error=exc.message)
                insight = local()
                outcome = Outcome.FALLBACK_SUCCESS
            except Exception:
                bound.exception("insight_generation_crashed")
                insight = local()
                outcome = Outcome.FALLBACK_SUCCESS
            try:
                store(insight)
            except Exception:
                bound.exception("insight_cache_write_failed")
            INSIGHT_GENERATIONS.labels(kind=kind.value, outcome=outcome.value).inc()
            if outcome is Outcome.FALLBACK_SUCCESS:
                bound.info("insight_fallback_used")
            else:
                bound.info("insight_generated")
            return InsightResult(insight, outcome)

        def joined() -> None:
            INSIGHT_SINGLE_FLIGHT_JOINS.labels(kind=kind.value).inc()
            bound.debug("insight_generation_joined")

        key = (profile.id, kind.value, period, profile.locale.value)
        return await self._flights.run(key, produce, on_join=joined)

    async def get_daily(
        self, profile: UserProfile, period_key: str | date
    ) -> InsightResult[DailyInsight]:
        """Insight quotidien pour une date (`YYYY-MM-DD` ou `date`)."""
        day = parse_period_key(period_key) if isinstance(period_key, str) else period_key
        key = daily_period_key(day)

        async def remote() -> DailyInsight:
            payload = await self.generator.generate(
                InsightKind.DAILY, DailyContext(profile, key)
            )
            return payload.to_insight(key, profile.locale, self.clock())

        return await self._resolve(
            InsightKind.DAILY,
            profile,
            key,
            lookup=lambda: self.cache.get_daily(profile.id, key, profile.locale),
            remote=remote,
            local=lambda: self.fallback.daily(profile, day),
            store=lambda insight: self.cache.set_daily(profile.id, insight),
        )

    async def get_yearly(self, profile: UserProfile, year: int) -> InsightResult[YearlyInsight]:
        """Prévisions annuelles."""

        async def remote() -> YearlyInsight:
            payload = await self.generator.generate(
                InsightKind.YEARLY, YearlyContext(profile, year)
            )
            return payload.to_insight(year, profile.locale, self.clock())

        return await self._resolve(
            InsightKind.YEARLY,
            profile,
            str(year),
            lookup=lambda: self.cache.get_yearly(profile.id, year, profile.locale),
            remote=remote,
            local=lambda: self.fallback.yearly(profile, year),
            store=lambda insight: self.cache.set_yearly(profile.id, insight),
        )

    async def get_monthly(
        self, profile: UserProfile, year: int, month: int
    ) -> InsightResult[MonthlyInsight]:
        """Calendrier spirituel mensuel, normalisé sur le calendrier réel.

        Raises:
            ValueError: Mois hors de [1, 12] (erreur d'appel, pas de génération).
        """
        period = monthly_period_id(year, month)
        context = MonthlyContext(
            profile, year, month, days_in_month(year, month), weekend_days(year, month)
        )

        async def remote() -> MonthlyInsight:
            payload = await self.generator.generate(InsightKind.MONTHLY, context)
            return payload.to_insight(year, month, profile.locale, self.clock())

        return await self._resolve(
            InsightKind.MONTHLY,
            profile,
            period,
            lookup=lambda: self.cache.get_monthly(profile.id, year, month, profile.locale),
            remote=remote,
            local=lambda: self.fallback.monthly(profile, year, month),
            store=lambda insight: self.cache.set_monthly(profile.id, insight),
        )

    async def get_dashboard(self, profile: UserProfile, today: date) -> Dashboard:
        """Insight du jour et prévisions de l'année, demandés en parallèle."""
        daily, yearly = await asyncio.gather(
            self.get_daily(profile, today), self.get_yearly(profile, today.year)
        )
        return Dashboard(daily=daily, yearly=yearly)

    def today_from_monthly(self, profile: UserProfile, day: date) -> MonthlyDayInsight | None:
        """Entrée du calendrier mensuel en cache pour une date, sans jamais générer."""
        monthly = self.cache.get_monthly(profile.id, day.year, day.month, profile.locale)
        if monthly is None:
            return None
        return monthly.entry_for(day.day)

    def lucky_color(self, profile: UserProfile, day: date) -> str:
        """Couleur du jour en hexadécimal.

        Priorité: couleur à porter du calendrier mensuel, puis couleur de l'insight quotidien,
        puis la couleur par défaut. Lecture du cache uniquement.
        """
        entry = self.today_from_monthly(profile, day)
        daily = self.cache.get_daily(profile.id, daily_period_key(day), profile.locale)
        return color_to_hex(
            display_color(
                entry.wear_color if entry else None,
                daily.color if daily else None,
            )
        )

    async def compare(
        self, profile: UserProfile, partner_name: str, partner_birth_date: date
    ) -> ComparisonResult:
        """Compatibilité avec un partenaire (ni cache, ni repli).

        Raises:
            RateLimited: Quota du service distant atteint.
            GenerationFailure: Tout autre échec, `ValidationDefect` compris.
        """
        context = ComparisonContext(profile, partner_name, partner_birth_date)
        try:
            payload = await self.generator.generate(InsightKind.COMPARISON, context)
        except RateLimited:
            log.warning("comparison_rate_limited", user_id=profile.id)
            raise
        except GenerationFailure as exc:
            log.warning("comparison_failed", user_id=profile.id, reason=exc.reason)
            raise
        except Exception as exc:
            log.exception("comparison_crashed", user_id=profile.id)
            raise GenerationFailure(
                f"comparison generation crashed: {exc}", kind=InsightKind.COMPARISON.value
            ) from exc
        return payload.to_result()
