"""
Fakes pour les tests unitaires.

Ce module fournit un LLM scripté (réponses, erreurs, délais), un client Redis en mémoire exposant
le sous-ensemble de commandes utilisé par `RedisInsightCache` et un stockage de profils HTTP
simulé.
"""

from __future__ import annotations

import asyncio
import fnmatch
import json
from datetime import UTC, datetime
from typing import Any, Literal, overload

import httpx

from insight_core.infra.llm.base import LLM
from insight_core.infra.profile_sync import RemoteProfileSync

FROZEN_NOW = datetime(2024, 4, 10, 8, 30, tzinfo=UTC)

DAILY_PAYLOAD: dict[str, Any] = {
    "score": 82,
    "title": "The Quiet Spark",
    "desc": "Your curiosity opens doors today.",
    "color": "Sapphire Blue",
    "luckyNumbers": [4, 17, 42],
    "ritual": {"title": "Morning Breath", "steps": ["Breathe in", "Breathe out"]},
}

YEARLY_PAYLOAD: dict[str, Any] = {
    "theme": "A year of bold beginnings",
    "strengths": ["Curiosity", "Wit", "Adaptability"],
    "challenges": ["Restlessness", "Scattered focus"],
    "recommendations": ["Journal weekly", "Travel light"],
}

COMPARISON_PAYLOAD: dict[str, Any] = {
    "harmonyScore": 74,
    "summary": "Two winds that learn to dance together.",
    "strengths": ["Shared humor", "Open minds"],
    "challenges": ["Impatience", "Different rhythms"],
}


def monthly_payload(days: int, theme: str | None = "Bloom slowly") -> dict[str, Any]:
    """Réponse mensuelle complète et cohérente (week-ends non renseignés)."""
    entries = [
        {
            "day": d,
            "dayType": "action",
            "message": f"Day {d} message",
            "stone": "Amethyst",
            "stoneEnergy": "Calm focus",
            "activity": "Walk",
            "drink": "Green tea",
            "wearColor": "Lavender",
            "affirmation": "I am steady",
            "isWeekend": False,
            "weekendTip": None,
        }
        for d in range(1, days + 1)
    ]
    data: dict[str, Any] = {"days": entries}
    if theme is not None:
        data["monthTheme"] = theme
    return data


class FakeLLM(LLM):
    """
    LLM factice scripté pour les tests.

    Chaque appel consomme la réponse suivante du script: une chaîne (renvoyée telle quelle), un
    dict (sérialisé en JSON), une exception (levée) ou un callable appelé avec les messages. La
    dernière réponse est réutilisée quand le script est épuisé. `delay` simule la latence réseau;
    `max_in_flight` mesure le nombre d'appels simultanés observé.
    """

    def __init__(self, *responses: Any, delay: float = 0.0) -> None:
        self.responses = list(responses)
        self.delay = delay
        self.calls: list[dict[str, Any]] = []
        self.in_flight = 0
        self.max_in_flight = 0

    @overload
    async def generate(
        self,
        messages: list[dict[str, str]],
        *,
        with_usage: Literal[True],
        **kwargs: Any,
    ) -> tuple[str, dict[str, int]]: ...

    @overload
    async def generate(
        self,
        messages: list[dict[str, str]],
        *,
        with_usage: Literal[False] = False,
        **kwargs: Any,
    ) -> str: ...

    async def generate(
        self,
        messages: list[dict[str, str]],
        *,
        with_usage: bool = False,
        **kwargs: Any,
    ) -> str | tuple[str, dict[str, int]]:
        """Renvoie (ou lève) la prochaine réponse scriptée."""
        self.calls.append({"messages": messages, **kwargs})
        index = min(len(self.calls) - 1, len(self.responses) - 1)
        response = self.responses[index]
        if callable(response):
            response = response(messages)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
        finally:
            self.in_flight -= 1
        if isinstance(response, BaseException):
            raise response
        text = response if isinstance(response, str) else json.dumps(response)
        if with_usage:
            return text, {"prompt_tokens": 10, "completion_tokens": 5}
        return text

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def last_prompt(self) -> str:
        return self.calls[-1]["messages"][-1]["content"]


class FakeRedis:
    """Client Redis en mémoire (get/set/delete/scan_iter/ping)."""

    def __init__(self) -> None:
        self.store: dict[str, str] = {}

    def ping(self) -> bool:
        return True

    def get(self, key: str) -> str | None:
        return self.store.get(key)

    def set(self, key: str, value: str) -> bool:
        self.store[key] = value
        return True

    def delete(self, *keys: str) -> int:
        removed = 0
        for key in keys:
            if self.store.pop(key, None) is not None:
                removed += 1
        return removed

    def scan_iter(self, match: str = "*"):
        return iter([k for k in list(self.store) if fnmatch.fnmatchcase(k, match)])


BASE_URL = "https://profiles.example.test/api"


class DocumentStore:
    """Stockage de documents en mémoire servi par un `httpx.MockTransport`."""

    def __init__(self, fail_with: int | None = None) -> None:
        self.docs: dict[str, dict] = {}
        self.fail_with = fail_with
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with:
            return httpx.Response(self.fail_with)
        user_id = request.url.path.rsplit("/", 1)[-1]
        if request.method == "PUT":
            self.docs[user_id] = json.loads(request.content)
            return httpx.Response(200, json={"ok": True})
        if user_id not in self.docs:
            return httpx.Response(404)
        return httpx.Response(200, json=self.docs[user_id])

    def sync(self, **kwargs: Any) -> RemoteProfileSync:
        return RemoteProfileSync(
            base_url=BASE_URL, transport=httpx.MockTransport(self.handler), **kwargs
        )
