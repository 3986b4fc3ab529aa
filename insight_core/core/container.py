"""
Conteneur d'injection de dépendances.

Instancie les composants centraux (cache, transport LLM, générateur, orchestrateur, miroir des
profils) à partir des settings. Aucun singleton de module: l'application hôte crée son
conteneur et le transmet.
"""

from __future__ import annotations

import redis
import structlog

from insight_core.core.logging import setup_logging
from insight_core.core.settings import Settings, get_settings
from insight_core.domain.generator import InsightGenerator
from insight_core.domain.orchestrator import InsightOrchestrator
from insight_core.domain.profile_service import ProfileService
from insight_core.infra.cache_store import InMemoryInsightCache, InsightCache, RedisInsightCache
from insight_core.infra.llm.openai_client import OpenAICompatibleLLM
from insight_core.infra.profile_sync import RemoteProfileSync

log = structlog.get_logger(__name__)


def build_cache(settings: Settings) -> tuple[InsightCache, str]:
    """Cache Redis si configuré et joignable, sinon mémoire (sauf si REQUIRE_REDIS).

    Returns:
        tuple: (cache, nom du backend: `redis`, `memory` ou `memory-fallback`).

    Raises:
        RuntimeError: Redis exigé mais absent ou injoignable.
    """
    prefix = settings.CACHE_KEY_PREFIX
    if settings.REDIS_URL:
        try:
            cache = RedisInsightCache(settings.REDIS_URL, prefix=prefix)
            cache.client.ping()
            return cache, "redis"
        except redis.RedisError as err:
            if settings.REQUIRE_REDIS:
                raise RuntimeError("Redis required but unavailable") from err
            log.warning("cache_backend_fallback", error=str(err))
            return InMemoryInsightCache(prefix=prefix), "memory-fallback"
    if settings.REQUIRE_REDIS:
        raise RuntimeError("Redis required but REDIS_URL not set")
    return InMemoryInsightCache(prefix=prefix), "memory"


class Container:
    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        s = self.settings
        setup_logging(s.LOG_LEVEL, s.APP_ENV)
        self.cache, self.storage_backend = build_cache(s)
        self.llm = OpenAICompatibleLLM(
            api_key=s.LLM_API_KEY,
            model=s.LLM_MODEL,
            base_url=s.LLM_BASE_URL,
            temperature=s.LLM_TEMPERATURE,
            timeout=s.LLM_TIMEOUT_S,
        )
        self.generator = InsightGenerator(
            self.llm,
            max_tokens=s.LLM_MAX_TOKENS,
            monthly_max_tokens=s.LLM_MONTHLY_MAX_TOKENS,
        )
        self.orchestrator = InsightOrchestrator(self.cache, self.generator)
        self.profile_sync = RemoteProfileSync(
            base_url=s.PROFILE_SYNC_URL,
            api_key=s.PROFILE_SYNC_API_KEY,
            timeout=s.PROFILE_SYNC_TIMEOUT_S,
        )
        self.profiles = ProfileService(self.cache, self.profile_sync)
        log.info(
            "container_ready",
            app=s.APP_NAME,
            env=s.APP_ENV,
            storage_backend=self.storage_backend,
            llm_configured=self.llm.client is not None,
            profile_sync=self.profile_sync.enabled,
        )

    async def aclose(self) -> None:
        await self.profile_sync.aclose()
