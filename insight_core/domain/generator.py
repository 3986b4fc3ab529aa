"""
Client de génération distante des insights.

Ce module construit la requête adaptée au type de contenu, appelle le LLM, puis traite la
réponse comme une entrée non fiable:
1. retrait des blocs de code markdown (```json ... ```)
2. parsing JSON (échec -> `GenerationFailure`)
3. validation du schéma brut du type demandé (échec -> `ValidationDefect`)

La conversion vers les entités canoniques (horodatage, période, normalisation mensuelle) est
portée par les payloads eux-mêmes.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from insight_core.core.constants import (
    DEFAULT_MAX_TOKENS,
    MONTHLY_MAX_TOKENS,
    SCORE_MAX,
    SCORE_MIN,
)
from insight_core.core.metrics import GENERATOR_FAILURES, LLM_TOKENS
from insight_core.domain import prompts
from insight_core.domain.entities import (
    ComparisonResult,
    DailyInsight,
    InsightKind,
    InsightSource,
    Locale,
    MonthlyInsight,
    Ritual,
    UserProfile,
    YearlyInsight,
    validate_lucky_numbers,
)
from insight_core.domain.errors import GenerationFailure, ValidationDefect
from insight_core.domain.normalize import normalize_monthly
from insight_core.domain.zodiac import compute_profile
from insight_core.infra.llm.base import LLM

log = structlog.get_logger(__name__)

_FENCE_OPEN = re.compile(r"^\s*```[a-zA-Z]*\s*")
_FENCE_CLOSE = re.compile(r"\s*```\s*$")


def strip_code_fences(text: str) -> str:
    """Retire un éventuel bloc ```json ... ``` autour de la réponse."""
    return _FENCE_CLOSE.sub("", _FENCE_OPEN.sub("", text)).strip()


# --- Contextes de génération ---


@dataclass(frozen=True)
class DailyContext:
    profile: UserProfile
    period_key: str


@dataclass(frozen=True)
class YearlyContext:
    profile: UserProfile
    year: int


@dataclass(frozen=True)
class MonthlyContext:
    """Le calendrier est fourni par l'appelant, jamais déduit de la réponse."""

    profile: UserProfile
    year: int
    month: int
    days_in_month: int
    weekend_days: list[int] = field(default_factory=list)


@dataclass(frozen=True)
class ComparisonContext:
    profile: UserProfile
    partner_name: str
    partner_birth_date: date


GenerationContext = DailyContext | YearlyContext | MonthlyContext | ComparisonContext


# --- Schémas bruts des réponses ---


class _Payload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _rounded_score(v: Any) -> int:
    if isinstance(v, bool):
        raise ValueError("score must be a number")
    try:
        return int(round(float(v)))
    except (TypeError, OverflowError) as exc:
        raise ValueError(f"score must be a finite number, got {v!r}") from exc


class DailyPayload(_Payload):
    score: int = Field(ge=SCORE_MIN, le=SCORE_MAX)
    title: str = Field(min_length=1)
    desc: str = Field(min_length=1)
    color: str = Field(min_length=1)
    lucky_numbers: list[int]
    ritual: Ritual
    focus_on: list[str] = Field(default_factory=list)
    avoid: list[str] = Field(default_factory=list)

    @field_validator("score", mode="before")
    @classmethod
    def _round_score(cls, v: Any) -> int:
        return _rounded_score(v)

    @field_validator("lucky_numbers")
    @classmethod
    def _check_lucky_numbers(cls, v: list[int]) -> list[int]:
        return validate_lucky_numbers(v)

    def to_insight(self, period_key: str, locale: Locale, generated_at: datetime) -> DailyInsight:
        return DailyInsight(
            period_key=period_key,
            locale=locale,
            energy_score=self.score,
            title=self.title,
            description=self.desc,
            color=self.color,
            lucky_numbers=self.lucky_numbers,
            ritual=self.ritual,
            focus_on=self.focus_on,
            avoid=self.avoid,
            generated_at=generated_at,
            source=InsightSource.REMOTE,
        )


class YearlyPayload(_Payload):
    theme: str = Field(min_length=1)
    strengths: list[str]
    challenges: list[str]
    recommendations: list[str]

    def to_insight(self, year: int, locale: Locale, generated_at: datetime) -> YearlyInsight:
        return YearlyInsight(
            year=year,
            locale=locale,
            theme=self.theme,
            strengths=self.strengths,
            challenges=self.challenges,
            recommendations=self.recommendations,
            generated_at=generated_at,
            source=InsightSource.REMOTE,
        )


class MonthlyPayload(_Payload):
    """Seule la présence de `days` est exigée; le contenu est réconcilié à la normalisation."""

    month_theme: str | None = None
    days: list[dict[str, Any]]

    def to_insight(
        self, year: int, month: int, locale: Locale, generated_at: datetime
    ) -> MonthlyInsight:
        return normalize_monthly(
            self.days,
            year=year,
            month=month,
            locale=locale,
            month_theme=self.month_theme,
            generated_at=generated_at,
        )


class ComparisonPayload(_Payload):
    harmony_score: int = Field(ge=SCORE_MIN, le=SCORE_MAX)
    summary: str = Field(min_length=1)
    strengths: list[str]
    challenges: list[str]

    @field_validator("harmony_score", mode="before")
    @classmethod
    def _round_score(cls, v: Any) -> int:
        return _rounded_score(v)

    def to_result(self) -> ComparisonResult:
        return ComparisonResult.model_validate(self.model_dump())


PAYLOAD_SCHEMAS: dict[InsightKind, type[_Payload]] = {
    InsightKind.DAILY: DailyPayload,
    InsightKind.YEARLY: YearlyPayload,
    InsightKind.MONTHLY: MonthlyPayload,
    InsightKind.COMPARISON: ComparisonPayload,
}


def parse_payload(kind: InsightKind, text: str) -> _Payload:
    """Analyse et valide une réponse brute pour un type donné.

    Raises:
        GenerationFailure: Texte non JSON.
        ValidationDefect: JSON valide mais non conforme au schéma.
    """
    try:
        data = json.loads(strip_code_fences(text))
    except json.JSONDecodeError as exc:
        raise GenerationFailure(
            f"response is not valid JSON: {exc.msg}", kind=kind.value
        ) from exc
    if not isinstance(data, dict):
        raise ValidationDefect("response is not a JSON object", kind=kind.value)
    try:
        return PAYLOAD_SCHEMAS[kind].model_validate(data)
    except ValidationError as exc:
        raise ValidationDefect(
            f"{kind.value} response failed validation: {exc.error_count()} error(s)",
            kind=kind.value,
        ) from exc


def _record_usage(kind: InsightKind, usage: dict[str, int]) -> None:
    for token_type in ("prompt_tokens", "completion_tokens"):
        if usage.get(token_type):
            LLM_TOKENS.labels(kind=kind.value, type=token_type).inc(usage[token_type])


class InsightGenerator:
    """Génère un type de contenu auprès du LLM et valide la réponse."""

    def __init__(
        self,
        llm: LLM,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        monthly_max_tokens: int = MONTHLY_MAX_TOKENS,
    ) -> None:
        """Initialise le client avec le transport LLM et les budgets de tokens."""
        self.llm = llm
        self.max_tokens = max_tokens
        self.monthly_max_tokens = monthly_max_tokens

    def _prompt_for(self, kind: InsightKind, context: GenerationContext) -> str:
        if kind is InsightKind.DAILY and isinstance(context, DailyContext):
            return prompts.daily_prompt(context.profile, context.period_key)
        if kind is InsightKind.YEARLY and isinstance(context, YearlyContext):
            return prompts.yearly_prompt(context.profile, context.year)
        if kind is InsightKind.MONTHLY and isinstance(context, MonthlyContext):
            return prompts.monthly_prompt(
                context.profile,
                context.year,
                context.month,
                context.days_in_month,
                list(context.weekend_days),
            )
        if kind is InsightKind.COMPARISON and isinstance(context, ComparisonContext):
            partner = compute_profile(context.partner_birth_date)
            return prompts.comparison_prompt(
                context.profile,
                context.partner_name,
                partner.western_zodiac.sign.value,
                partner.chinese_zodiac.animal.value,
            )
        raise TypeError(f"context {type(context).__name__} does not match kind {kind.value}")

    async def generate(self, kind: InsightKind, context: GenerationContext) -> Any:
        """Demande un contenu au service distant.

        Args:
            kind: Type de contenu.
            context: Contexte correspondant au type.

        Returns:
            Le payload validé (`DailyPayload`, `YearlyPayload`, `MonthlyPayload` ou
            `ComparisonPayload`).

        Raises:
            RateLimited: Quota du service atteint.
            ValidationDefect: Réponse JSON non conforme.
            GenerationFailure: Tout autre échec.
        """
        kind = InsightKind(kind)
        messages = prompts.messages_for(self._prompt_for(kind, context))
        max_tokens = (
            self.monthly_max_tokens if kind is InsightKind.MONTHLY else self.max_tokens
        )
        try:
            text, usage = await self.llm.generate(
                messages, with_usage=True, max_tokens=max_tokens
            )
            _record_usage(kind, usage)
            payload = parse_payload(kind, text)
        except GenerationFailure as exc:
            if exc.kind is None:
                exc.kind = kind.value
            GENERATOR_FAILURES.labels(kind=kind.value, reason=exc.reason).inc()
            log.warning(
                "generator_response_rejected",
                kind=kind.value,
                reason=exc.reason,
                status_code=exc.status_code,
                error=exc.message,
            )
            raise
        return payload
