"""Contrat des transports LLM utilisés par le générateur d'insights."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Literal, overload

# Messages au format chat: [{"role": "system" | "user", "content": "..."}]
ChatMessages = list[dict[str, str]]


class LLM(ABC):
    """Transport asynchrone vers un modèle de langage.

    Une implémentation renvoie le texte brut de la première réponse et lève `GenerationFailure`
    (`RateLimited` pour un quota) au lieu de renvoyer un contenu dégradé. L'analyse et la
    validation du texte relèvent du générateur, le repli de l'orchestrateur.
    """

    @overload
    async def generate(
        self, messages: ChatMessages, *, with_usage: Literal[True], **kwargs: Any
    ) -> tuple[str, dict[str, int]]: ...

    @overload
    async def generate(
        self, messages: ChatMessages, *, with_usage: Literal[False] = False, **kwargs: Any
    ) -> str: ...

    @abstractmethod
    async def generate(
        self, messages: ChatMessages, *, with_usage: bool = False, **kwargs: Any
    ) -> str | tuple[str, dict[str, int]]:
        """Envoie `messages`; `kwargs` (ex. `max_tokens`) sont transmis au fournisseur."""
