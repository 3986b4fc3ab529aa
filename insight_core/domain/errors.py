"""Taxonomie des erreurs du cœur de génération.

- `GenerationFailure`: appel distant en échec ou contenu inexploitable.
- `RateLimited`: sous-cas signalé par un HTTP 429 / quota épuisé.
- `ValidationDefect`: JSON valide mais forme incorrecte (champs manquants, nombre de jours…).

Les insights (daily/yearly/monthly) ne laissent jamais remonter ces erreurs: l'orchestrateur
bascule sur le repli déterministe. Seule la comparaison les propage.
"""

from __future__ import annotations


class InsightError(Exception):
    """Erreur de base du domaine."""


class GenerationFailure(InsightError):
    """Échec d'une génération distante."""

    reason = "generation_failed"

    def __init__(
        self,
        message: str,
        *,
        kind: str | None = None,
        status_code: int | None = None,
    ) -> None:
        """Initialise l'erreur avec le type de contenu et le statut HTTP éventuel."""
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.status_code = status_code


class RateLimited(GenerationFailure):
    """Quota du service distant atteint (HTTP 429)."""

    reason = "rate_limited"


class ValidationDefect(GenerationFailure):
    """Réponse distante analysable mais non conforme au schéma attendu."""

    reason = "validation_defect"
