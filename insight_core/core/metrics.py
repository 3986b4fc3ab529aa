"""
Métriques Prometheus du cœur de génération d'insights.

Ce module définit les compteurs utilisés pour suivre l'efficacité du cache, les issues de
génération (distante ou repli déterministe) et la coalescence des requêtes concurrentes.
"""

from prometheus_client import Counter

INSIGHT_CACHE_LOOKUPS = Counter(
    "insight_cache_lookups_total",
    "Cache lookups for generated insights",
    ["kind", "result"],
)
INSIGHT_GENERATIONS = Counter(
    "insight_generations_total",
    "Completed insight generations by outcome",
    ["kind", "outcome"],
)
INSIGHT_SINGLE_FLIGHT_JOINS = Counter(
    "insight_single_flight_joins_total",
    "Requests that joined an in-flight generation instead of starting one",
    ["kind"],
)
GENERATOR_FAILURES = Counter(
    "insight_generator_failures_total",
    "Remote generator failures by reason",
    ["kind", "reason"],
)
PROFILE_SYNC_ERRORS = Counter(
    "profile_sync_errors_total",
    "Remote profile mirror failures",
    ["operation"],
)
LLM_TOKENS = Counter(
    "insight_llm_tokens_total",
    "Accumulated LLM tokens reported by the provider",
    ["kind", "type"],
)
