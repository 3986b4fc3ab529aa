"""
Client LLM pour les API compatibles OpenAI (Groq par défaut).

Implémente l'interface LLM via `chat.completions` du SDK OpenAI asynchrone:
- réponse forcée en objet JSON (`response_format`)
- HTTP 429 / quota épuisé -> `RateLimited`
- toute autre erreur (réseau, statut non-2xx, corps vide, clé absente) -> `GenerationFailure`
"""

from __future__ import annotations

from typing import Any, Literal, overload

import openai
import structlog
from openai import AsyncOpenAI

from insight_core.core.constants import HTTP_TOO_MANY_REQUESTS
from insight_core.domain.errors import GenerationFailure, RateLimited
from insight_core.infra.llm.base import LLM

log = structlog.get_logger(__name__)

_QUOTA_MARKERS = ("insufficient_quota", "rate_limit", "quota")


class OpenAICompatibleLLM(LLM):
    """
    LLM basé sur un endpoint compatible OpenAI.

    Sans clé API, aucun client n'est construit et chaque appel échoue en `GenerationFailure`,
    ce qui déclenche le repli déterministe côté orchestrateur.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "llama-3.3-70b-versatile",
        base_url: str | None = None,
        temperature: float = 0.8,
        timeout: float = 60.0,
        client: Any = None,
    ) -> None:
        """Initialize the OpenAI-compatible client (un client injecté prime, pour les tests)."""
        self.model = model
        self.temperature = temperature
        if client is not None:
            self.client = client
        elif api_key:
            self.client = AsyncOpenAI(
                api_key=api_key, base_url=base_url, timeout=timeout, max_retries=0
            )
        else:
            self.client = None

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
        """
        Génère du texte JSON (et éventuellement les métriques d'usage).

        - with_usage=False (défaut) -> str
        - with_usage=True -> (str, dict[str, int])

        Raises:
            RateLimited: Quota atteint (HTTP 429).
            GenerationFailure: Toute autre erreur ou réponse vide.
        """
        if self.client is None:
            raise GenerationFailure("LLM API key not configured")

        params: dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "temperature": self.temperature,
            "response_format": {"type": "json_object"},
        }
        params.update(kwargs)
        log.debug("llm_request", model=self.model, max_tokens=params.get("max_tokens"))
        try:
            resp = await self.client.chat.completions.create(**params)
        except openai.RateLimitError as exc:
            raise RateLimited(str(exc), status_code=HTTP_TOO_MANY_REQUESTS) from exc
        except openai.APIStatusError as exc:
            if exc.status_code == HTTP_TOO_MANY_REQUESTS or _mentions_quota(exc):
                raise RateLimited(str(exc), status_code=exc.status_code) from exc
            raise GenerationFailure(
                f"LLM HTTP {exc.status_code}", status_code=exc.status_code
            ) from exc
        except openai.APIError as exc:
            raise GenerationFailure(f"LLM transport error: {exc}") from exc

        text = _first_content(resp)
        if not text:
            raise GenerationFailure("empty response from LLM")
        usage = _extract_usage_dict(resp)
        return (text, usage) if with_usage else text


def _mentions_quota(exc: openai.APIStatusError) -> bool:
    body = exc.body if isinstance(exc.body, dict) else {}
    error = body.get("error") if isinstance(body.get("error"), dict) else body
    code = str(error.get("code") or error.get("type") or "").lower()
    return any(marker in code for marker in _QUOTA_MARKERS)


def _first_content(resp: Any) -> str | None:
    choices = getattr(resp, "choices", None) or []
    if not choices:
        return None
    content = getattr(getattr(choices[0], "message", None), "content", None)
    return str(content) if content else None


def _extract_usage_dict(resp: Any) -> dict[str, int]:
    """
    Extrait les infos d'usage depuis la réponse.

    Toujours un dict (vide si le fournisseur n'en renvoie pas).
    """
    usage = getattr(resp, "usage", None)
    if not usage:
        return {}
    return {
        "prompt_tokens": int(getattr(usage, "prompt_tokens", 0) or 0),
        "completion_tokens": int(getattr(usage, "completion_tokens", 0) or 0),
        "total_tokens": int(getattr(usage, "total_tokens", 0) or 0),
    }
