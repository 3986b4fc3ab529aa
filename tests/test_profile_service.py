"""Tests du service profil (onboarding, édition, résolution, déconnexion)."""

from __future__ import annotations

from datetime import date

import httpx
import pytest
from pydantic import ValidationError

from insight_core.domain.entities import Locale, UserProfile
from insight_core.domain.fallback import DeterministicFallback
from insight_core.domain.profile_service import ProfileService
from insight_core.domain.zodiac import ChineseAnimal, WesternSign
from insight_core.infra.cache_store import InMemoryInsightCache
from insight_core.infra.profile_sync import RemoteProfileSync
from tests.fakes import BASE_URL, DocumentStore


@pytest.fixture
def store() -> DocumentStore:
    return DocumentStore()


@pytest.fixture
def service(cache: InMemoryInsightCache, store: DocumentStore) -> ProfileService:
    return ProfileService(cache, store.sync())


@pytest.mark.asyncio
async def test_onboarding_caches_and_mirrors(
    service: ProfileService, store: DocumentStore, profile: UserProfile
) -> None:
    await service.complete_onboarding(profile)

    assert service.cache.get_profile() == profile
    assert profile.id in store.docs


@pytest.mark.asyncio
async def test_edit_profile_recomputes_zodiac(
    service: ProfileService, profile: UserProfile
) -> None:
    """Scénario: Gémeaux/Cheval -> Capricorne/Buffle après changement de date de naissance."""
    await service.complete_onboarding(profile)

    updated = await service.edit_profile(profile, birth_date=date(1985, 1, 5))

    assert updated.computed_profile.western_zodiac.sign is WesternSign.CAPRICORN
    assert updated.computed_profile.chinese_zodiac.animal is ChineseAnimal.OX
    cached = service.cache.get_profile()
    assert cached.computed_profile.western_zodiac.sign is WesternSign.CAPRICORN


@pytest.mark.asyncio
async def test_edit_profile_rejects_invalid_changes(
    service: ProfileService, profile: UserProfile
) -> None:
    with pytest.raises(ValidationError):
        await service.edit_profile(profile, birth_date="not a date")


@pytest.mark.asyncio
async def test_resolve_prefers_matching_cached_profile(
    service: ProfileService, store: DocumentStore, profile: UserProfile
) -> None:
    service.cache.set_profile(profile)

    assert await service.resolve(profile.id) == profile
    assert store.requests == []


@pytest.mark.asyncio
async def test_resolve_loads_remote_profile_for_other_user(
    service: ProfileService, store: DocumentStore, profile: UserProfile
) -> None:
    other = profile.with_changes(id="user-2", name="Bo")
    store.docs["user-2"] = other.model_dump(
        mode="json", by_alias=True, exclude={"computed_profile"}
    )
    service.cache.set_profile(profile)

    resolved = await service.resolve("user-2")

    assert resolved == other
    assert service.cache.get_profile() == other


@pytest.mark.asyncio
async def test_resolve_unknown_user_needs_onboarding(service: ProfileService) -> None:
    assert await service.resolve("ghost") is None


@pytest.mark.asyncio
async def test_mirror_failure_does_not_block_onboarding(
    cache: InMemoryInsightCache, profile: UserProfile
) -> None:
    sync = RemoteProfileSync(
        base_url=BASE_URL, transport=httpx.MockTransport(lambda r: httpx.Response(503))
    )
    service = ProfileService(cache, sync)

    await service.complete_onboarding(profile)

    assert cache.get_profile() == profile


def test_locale_preference(service: ProfileService) -> None:
    assert service.locale() is Locale.EN
    assert service.set_locale("th") is Locale.TH
    assert service.locale() is Locale.TH


def test_logout_clears_everything(service: ProfileService, profile: UserProfile) -> None:
    service.cache.set_profile(profile)
    service.cache.set_daily(profile.id, DeterministicFallback().daily(profile, "2024-04-09"))
    service.set_locale(Locale.TR)

    service.logout()

    assert service.cache.get_profile() is None
    assert service.cache.keys() == []
    assert service.locale() is Locale.EN
