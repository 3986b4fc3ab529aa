"""
Stockage clé-valeur des insights générés et du profil.

Ce module fournit l'interface `InsightCache` et deux implémentations: en mémoire (dev/tests) et
Redis. Les valeurs sont stockées en JSON (forme camelCase des entités).

Format des clés:
- insights: `{prefix}{kind}_{userId}_{periode}_{locale}` (période mensuelle: `{annee}_{mois}`)
- profil: `{prefix}profile`
- langue préférée: `{prefix}locale`

Une valeur illisible est traitée comme une absence (et journalisée), sans effet de bord.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TypeVar

import redis
import structlog
from pydantic import BaseModel, ValidationError

from insight_core.core.constants import DEFAULT_CACHE_KEY_PREFIX
from insight_core.domain.entities import (
    DailyInsight,
    InsightKind,
    Locale,
    MonthlyInsight,
    UserProfile,
    YearlyInsight,
)
from insight_core.domain.periods import monthly_period_id

log = structlog.get_logger(__name__)

M = TypeVar("M", bound=BaseModel)


def insight_key(
    prefix: str, kind: InsightKind | str, user_id: str, period: str, locale: Locale | str
) -> str:
    """Construit la clé de cache d'un insight."""
    kind_value = kind.value if isinstance(kind, InsightKind) else kind
    locale_value = locale.value if isinstance(locale, Locale) else locale
    return f"{prefix}{kind_value}_{user_id}_{period}_{locale_value}"


class InsightCache(ABC):
    """
    Cache des insights et du profil de l'utilisateur courant.

    Les sous-classes fournissent uniquement le stockage brut (`_read`, `_write`, `_wipe`); la
    sérialisation, le format des clés et la tolérance aux entrées corrompues sont communs.
    """

    def __init__(self, prefix: str = DEFAULT_CACHE_KEY_PREFIX) -> None:
        """Initialise le cache avec le préfixe de clés."""
        self.prefix = prefix

    @abstractmethod
    def _read(self, key: str) -> str | None: ...

    @abstractmethod
    def _write(self, key: str, value: str) -> None: ...

    @abstractmethod
    def _wipe(self) -> None: ...

    def _load(self, key: str, model: type[M]) -> M | None:
        raw = self._read(key)
        if raw is None:
            return None
        try:
            return model.model_validate_json(raw)
        except ValidationError as exc:
            log.warning("cache_entry_corrupt", key=key, errors=exc.error_count())
            return None

    def _store(self, key: str, value: BaseModel) -> None:
        self._write(key, value.model_dump_json(by_alias=True))

    # --- Profil ---

    def _profile_key(self) -> str:
        return f"{self.prefix}profile"

    def get_profile(self) -> UserProfile | None:
        """Retourne le profil stocké, s'il est présent et lisible."""
        return self._load(self._profile_key(), UserProfile)

    def set_profile(self, profile: UserProfile) -> None:
        self._store(self._profile_key(), profile)

    # --- Langue ---

    def _locale_key(self) -> str:
        return f"{self.prefix}locale"

    def get_locale(self) -> Locale:
        """Langue préférée stockée (`en` par défaut ou si la valeur est inconnue)."""
        raw = self._read(self._locale_key())
        try:
            return Locale(raw) if raw else Locale.EN
        except ValueError:
            log.warning("cache_entry_corrupt", key=self._locale_key())
            return Locale.EN

    def set_locale(self, locale: Locale) -> None:
        self._write(self._locale_key(), Locale(locale).value)

    # --- Insights ---

    def get_daily(self, user_id: str, period_key: str, locale: Locale) -> DailyInsight | None:
        key = insight_key(self.prefix, InsightKind.DAILY, user_id, period_key, locale)
        return self._load(key, DailyInsight)

    def set_daily(self, user_id: str, insight: DailyInsight) -> None:
        key = insight_key(
            self.prefix, InsightKind.DAILY, user_id, insight.period_key, insight.locale
        )
        self._store(key, insight)

    def get_yearly(self, user_id: str, year: int, locale: Locale) -> YearlyInsight | None:
        key = insight_key(self.prefix, InsightKind.YEARLY, user_id, str(year), locale)
        return self._load(key, YearlyInsight)

    def set_yearly(self, user_id: str, insight: YearlyInsight) -> None:
        key = insight_key(
            self.prefix, InsightKind.YEARLY, user_id, str(insight.year), insight.locale
        )
        self._store(key, insight)

    def get_monthly(
        self, user_id: str, year: int, month: int, locale: Locale
    ) -> MonthlyInsight | None:
        period = monthly_period_id(year, month)
        key = insight_key(self.prefix, InsightKind.MONTHLY, user_id, period, locale)
        return self._load(key, MonthlyInsight)

    def set_monthly(self, user_id: str, insight: MonthlyInsight) -> None:
        period = monthly_period_id(insight.year, insight.month)
        key = insight_key(self.prefix, InsightKind.MONTHLY, user_id, period, insight.locale)
        self._store(key, insight)

    def clear_all(self) -> None:
        """Supprime toutes les entrées sous le préfixe, profil compris."""
        self._wipe()


class InMemoryInsightCache(InsightCache):
    """
    Cache en mémoire (utilisé pour dev/tests).

    Stocke les valeurs sérialisées dans un dict local, non persistant.
    """

    def __init__(self, prefix: str = DEFAULT_CACHE_KEY_PREFIX) -> None:
        """Initialise une base mémoire vide."""
        super().__init__(prefix)
        self._db: dict[str, str] = {}

    def _read(self, key: str) -> str | None:
        return self._db.get(key)

    def _write(self, key: str, value: str) -> None:
        self._db[key] = value

    def _wipe(self) -> None:
        for key in [k for k in self._db if k.startswith(self.prefix)]:
            del self._db[key]

    def keys(self) -> list[str]:
        return sorted(self._db)


class RedisInsightCache(InsightCache):
    """Cache adossé à Redis (valeurs JSON, clés préfixées)."""

    def __init__(
        self,
        url: str | None = None,
        prefix: str = DEFAULT_CACHE_KEY_PREFIX,
        client: redis.Redis | None = None,
    ) -> None:
        """Crée un client Redis à partir de l'URL fournie (un client injecté prime)."""
        super().__init__(prefix)
        if client is None:
            if not url:
                raise ValueError("RedisInsightCache requires a url or a client")
            client = redis.Redis.from_url(url, decode_responses=True)
        self.client = client

    def _read(self, key: str) -> str | None:
        raw = self.client.get(key)
        if isinstance(raw, bytes):
            return raw.decode("utf-8", errors="replace")
        return raw

    def _write(self, key: str, value: str) -> None:
        self.client.set(key, value)

    def _wipe(self) -> None:
        keys = list(self.client.scan_iter(match=f"{self.prefix}*"))
        if keys:
            self.client.delete(*keys)
        log.info("cache_cleared", prefix=self.prefix, count=len(keys))
