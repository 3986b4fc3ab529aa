"""Tests du miroir distant des profils (httpx.MockTransport)."""

from __future__ import annotations

import httpx
import pytest

from insight_core.domain.entities import UserProfile
from insight_core.infra.profile_sync import RemoteProfileSync
from tests.fakes import BASE_URL, DocumentStore


@pytest.mark.asyncio
async def test_save_then_load(profile: UserProfile) -> None:
    store = DocumentStore()
    sync = store.sync(api_key="secret-token")

    assert await sync.save_profile(profile) is True
    loaded = await sync.load_profile(profile.id)

    assert loaded == profile
    put = store.requests[0]
    assert put.method == "PUT"
    assert put.url == httpx.URL(f"{BASE_URL}/users/{profile.id}")
    assert put.headers["Authorization"] == "Bearer secret-token"
    assert store.docs[profile.id]["birthDate"] == "1990-06-01"
    assert "computedProfile" not in store.docs[profile.id]
    await sync.aclose()


@pytest.mark.asyncio
async def test_missing_profile_is_none(profile: UserProfile) -> None:
    sync = DocumentStore().sync()
    assert await sync.load_profile("nobody") is None


@pytest.mark.asyncio
async def test_failures_are_converted(profile: UserProfile) -> None:
    """Best effort: les erreurs deviennent False / None."""
    sync = DocumentStore(fail_with=500).sync()

    assert await sync.save_profile(profile) is False
    assert await sync.load_profile(profile.id) is None


@pytest.mark.asyncio
async def test_network_error_and_invalid_body(profile: UserProfile) -> None:
    def broken(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    sync = RemoteProfileSync(base_url=BASE_URL, transport=httpx.MockTransport(broken))
    assert await sync.save_profile(profile) is False
    assert await sync.load_profile(profile.id) is None

    garbage = RemoteProfileSync(
        base_url=BASE_URL,
        transport=httpx.MockTransport(lambda r: httpx.Response(200, json={"name": "x"})),
    )
    assert await garbage.load_profile(profile.id) is None


@pytest.mark.asyncio
async def test_disabled_without_base_url(profile: UserProfile) -> None:
    sync = RemoteProfileSync(base_url=None)
    assert not sync.enabled
    assert await sync.save_profile(profile) is False
    assert await sync.load_profile(profile.id) is None
    await sync.aclose()
