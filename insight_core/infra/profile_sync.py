"""
Miroir distant (optionnel) du profil utilisateur.

Stockage de documents JSON sur HTTP: `PUT/GET {base_url}/users/{id}`. Le miroir est au mieux:
toute erreur (réseau, statut, corps invalide) est journalisée et convertie en `False`/`None`.
Sans URL configurée, les deux opérations sont des no-op.
"""

from __future__ import annotations

import httpx
import structlog
from pydantic import ValidationError

from insight_core.core.constants import HTTP_NOT_FOUND
from insight_core.core.metrics import PROFILE_SYNC_ERRORS
from insight_core.domain.entities import UserProfile

log = structlog.get_logger(__name__)


class RemoteProfileSync:
    """Client du stockage distant des profils."""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialise le client HTTP; `transport` permet d'injecter un `httpx.MockTransport`."""
        self.base_url = base_url.rstrip("/") if base_url else None
        self._client: httpx.AsyncClient | None = None
        if self.base_url:
            headers = {"Accept": "application/json"}
            if api_key:
                headers["Authorization"] = f"Bearer {api_key}"
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=headers,
                timeout=httpx.Timeout(timeout),
                transport=transport,
            )

    @property
    def enabled(self) -> bool:
        return self._client is not None

    async def save_profile(self, profile: UserProfile) -> bool:
        """Enregistre le profil; renvoie False en cas d'échec (ou si désactivé)."""
        if self._client is None:
            return False
        body = profile.model_dump(mode="json", by_alias=True, exclude={"computed_profile"})
        try:
            resp = await self._client.put(f"/users/{profile.id}", json=body)
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            PROFILE_SYNC_ERRORS.labels(operation="save").inc()
            log.warning("profile_sync_failed", operation="save", user_id=profile.id, error=str(exc))
            return False
        log.debug("profile_synced", user_id=profile.id)
        return True

    async def load_profile(self, user_id: str) -> UserProfile | None:
        """Charge un profil distant; None si absent, invalide ou injoignable."""
        if self._client is None:
            return None
        try:
            resp = await self._client.get(f"/users/{user_id}")
            if resp.status_code == HTTP_NOT_FOUND:
                return None
            resp.raise_for_status()
            return UserProfile.model_validate_json(resp.content)
        except (httpx.HTTPError, ValidationError) as exc:
            PROFILE_SYNC_ERRORS.labels(operation="load").inc()
            log.warning("profile_sync_failed", operation="load", user_id=user_id, error=str(exc))
            return None

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
