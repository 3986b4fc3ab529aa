"""Service profil: onboarding, édition, résolution de l'utilisateur courant et déconnexion."""

from __future__ import annotations

from typing import Any

import structlog

from insight_core.domain.entities import Locale, UserProfile
from insight_core.infra.cache_store import InsightCache
from insight_core.infra.profile_sync import RemoteProfileSync

log = structlog.get_logger(__name__)


class ProfileService:
    """Gère le profil local (cache) et son miroir distant.

    Le cache est la source de vérité locale; le miroir distant est au mieux et ne fait jamais
    échouer une opération.
    """

    def __init__(self, cache: InsightCache, sync: RemoteProfileSync) -> None:
        self.cache = cache
        self.sync = sync

    async def resolve(self, auth_user_id: str) -> UserProfile | None:
        """Profil de l'utilisateur authentifié.

        Utilise le profil en cache s'il appartient à cet utilisateur, sinon le miroir distant
        (alors mis en cache), sinon None (onboarding requis).
        """
        cached = self.cache.get_profile()
        if cached is not None and cached.id == auth_user_id:
            return cached
        remote = await self.sync.load_profile(auth_user_id)
        if remote is None:
            log.info("profile_not_found", user_id=auth_user_id)
            return None
        self.cache.set_profile(remote)
        return remote

    async def complete_onboarding(self, profile: UserProfile) -> UserProfile:
        self.cache.set_profile(profile)
        await self.sync.save_profile(profile)
        log.info("onboarding_completed", user_id=profile.id)
        return profile

    async def edit_profile(self, profile: UserProfile, **changes: Any) -> UserProfile:
        """Applique les modifications; le profil calculé suit la nouvelle date de naissance.

        Raises:
            pydantic.ValidationError: Modifications invalides.
        """
        updated = profile.with_changes(**changes)
        self.cache.set_profile(updated)
        await self.sync.save_profile(updated)
        log.info("profile_edited", user_id=updated.id, fields=sorted(changes))
        return updated

    def set_locale(self, locale: Locale | str) -> Locale:
        value = Locale(locale)
        self.cache.set_locale(value)
        return value

    def locale(self) -> Locale:
        return self.cache.get_locale()

    def logout(self) -> None:
        """Efface tout le cache local, profil compris."""
        self.cache.clear_all()
        log.info("logged_out")
