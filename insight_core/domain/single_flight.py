"""
Coalescence des générations concurrentes (single-flight).

Au plus une génération est en cours par clé. Les appelants suivants rejoignent la tâche
existante au lieu d'en démarrer une nouvelle. La tâche est protégée par `asyncio.shield`:
l'annulation d'un appelant n'interrompt pas la génération, qui va jusqu'à l'écriture en cache.
L'entrée du registre est libérée dès la fin de la tâche, quelle qu'en soit l'issue.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Hashable
from typing import Generic, TypeVar

import structlog

log = structlog.get_logger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class SingleFlight(Generic[K, V]):
    """Registre des générations en cours, indexé par clé."""

    def __init__(self) -> None:
        """Initialise un registre vide."""
        self._inflight: dict[K, asyncio.Task[V]] = {}

    def __len__(self) -> int:
        return len(self._inflight)

    def in_flight(self, key: K) -> bool:
        return key in self._inflight

    def _release(self, key: K, task: asyncio.Task[V]) -> None:
        if self._inflight.get(key) is task:
            del self._inflight[key]
        if not task.cancelled() and task.exception() is not None:
            # Déjà propagée aux appelants encore en attente.
            log.debug("single_flight_task_failed", key=str(key), error=str(task.exception()))

    async def run(
        self,
        key: K,
        factory: Callable[[], Awaitable[V]],
        *,
        on_join: Callable[[], None] | None = None,
    ) -> V:
        """Exécute `factory` pour `key`, ou rejoint l'exécution déjà en cours.

        Args:
            key: Identité de la génération.
            factory: Coroutine à lancer si aucune tâche n'est en cours pour la clé.
            on_join: Rappel invoqué quand l'appel rejoint une tâche existante.

        Returns:
            Le résultat partagé par tous les appelants de la même clé.
        """
        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(factory())
            self._inflight[key] = task
            task.add_done_callback(lambda t: self._release(key, t))
        elif on_join is not None:
            on_join()
        return await asyncio.shield(task)
