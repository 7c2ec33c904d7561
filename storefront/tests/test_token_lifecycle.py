import asyncio
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Dict, List, Optional
from uuid import UUID, uuid4

import pytest

from storefront.application.ports.outbound import (
    IRefreshTokenRepository,
    IAccessTokenIssuer,
    IUserLookup,
)
from storefront.domain.exceptions import (
    RefreshTokenExpiredException,
    RefreshTokenInvalidException,
    RefreshTokenNotFoundException,
)
from storefront.domain.models.refresh_token_domain_model import RefreshToken, TokenPair
from storefront.domain.models.user_domain_model import UserIdentity
from storefront.domain.services.token_service import TokenLifecycleManager

NOW = datetime(2024, 1, 1, 12, 0, 0)


class InMemoryRefreshTokens(IRefreshTokenRepository):
    def __init__(self):
        self.records: Dict[str, RefreshToken] = {}

    async def create(self, token: RefreshToken) -> RefreshToken:
        token = replace(token, id=uuid4(), created_at=NOW)
        self.records[token.token] = token
        return replace(token)

    async def get_by_token(self, token: str) -> Optional[RefreshToken]:
        record = self.records.get(token)
        return replace(record) if record else None

    async def list_by_user(self, user_id: UUID, revoked: Optional[bool] = None) -> List[RefreshToken]:
        return [
            replace(r) for r in self.records.values()
            if r.user_id == user_id and (revoked is None or r.is_revoked == revoked)
        ]

    async def mark_used(self, token: str) -> bool:
        record = self.records.get(token)
        if record is None or record.is_used or record.is_revoked:
            return False
        record.is_used = True
        return True

    async def revoke(self, token: str) -> bool:
        record = self.records.get(token)
        if record is None:
            return False
        record.is_revoked = True
        return True

    async def revoke_all_for_user(self, user_id: UUID) -> int:
        count = 0
        for record in self.records.values():
            if record.user_id == user_id and not record.is_revoked:
                record.is_revoked = True
                count += 1
        return count

    async def delete_expired(self, before: datetime) -> int:
        expired = [k for k, r in self.records.items() if r.expires_at < before]
        for key in expired:
            del self.records[key]
        return len(expired)


class FakeIssuer(IAccessTokenIssuer):
    def __init__(self):
        self.signed = []

    def sign(self, payload, expires_delta):
        self.signed.append((payload, expires_delta))
        return f"access-{len(self.signed)}"

    def verify(self, token):
        raise NotImplementedError


class FakeUsers(IUserLookup):
    def __init__(self, *identities: UserIdentity):
        self.identities = {i.id: i for i in identities}

    async def get_identity(self, user_id: UUID) -> Optional[UserIdentity]:
        return self.identities.get(user_id)


class Clock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture()
def user():
    return UserIdentity(id=uuid4(), email="jdoe@example.com", role="customer")


@pytest.fixture()
def repo():
    return InMemoryRefreshTokens()


@pytest.fixture()
def issuer():
    return FakeIssuer()


@pytest.fixture()
def clock():
    return Clock(NOW)


@pytest.fixture()
def manager(repo, issuer, clock, user):
    return TokenLifecycleManager(
        token_repository=repo,
        token_issuer=issuer,
        user_lookup=FakeUsers(user),
        access_expiration="15m",
        refresh_expiration="7d",
        clock=clock,
    )


async def test_issue_token_pair_persists_valid_refresh_token(manager, repo, issuer, user):
    pair = await manager.issue_token_pair(user)

    assert pair.expires_in == 900
    assert pair.token_type == "bearer"
    assert pair.user_id == user.id

    record = repo.records[pair.refresh_token]
    assert record.user_id == user.id
    assert record.expires_at == NOW + timedelta(days=7)
    assert record.is_valid(NOW)

    payload, delta = issuer.signed[0]
    assert payload["sub"] == str(user.id)
    assert payload["type"] == "access"
    assert delta == timedelta(seconds=900)


async def test_refresh_tokens_are_long_random_hex(manager, user):
    first = await manager.issue_token_pair(user)
    second = await manager.issue_token_pair(user)

    assert len(first.refresh_token) == 128
    int(first.refresh_token, 16)
    assert first.refresh_token != second.refresh_token


async def test_refresh_rotates_token(manager, repo, user):
    original = await manager.issue_token_pair(user)

    rotated = await manager.refresh(original.refresh_token)

    assert rotated.refresh_token != original.refresh_token
    assert rotated.user_id == user.id
    assert repo.records[original.refresh_token].is_used
    assert repo.records[rotated.refresh_token].is_valid(NOW)


async def test_reusing_rotated_token_is_rejected(manager, repo, user):
    original = await manager.issue_token_pair(user)
    rotated = await manager.refresh(original.refresh_token)

    with pytest.raises(RefreshTokenInvalidException):
        await manager.refresh(original.refresh_token)

    # Reuse does not cascade to the newer token
    assert repo.records[rotated.refresh_token].is_valid(NOW)


async def test_refresh_unknown_token(manager):
    with pytest.raises(RefreshTokenNotFoundException):
        await manager.refresh("does-not-exist")


async def test_refresh_expired_token(manager, clock, user):
    pair = await manager.issue_token_pair(user)
    clock.now = NOW + timedelta(days=7)

    with pytest.raises(RefreshTokenExpiredException):
        await manager.refresh(pair.refresh_token)


async def test_expiry_is_checked_before_revocation(manager, clock, user):
    pair = await manager.issue_token_pair(user)
    await manager.revoke(pair.refresh_token)
    clock.now = NOW + timedelta(days=8)

    with pytest.raises(RefreshTokenExpiredException):
        await manager.refresh(pair.refresh_token)


async def test_refresh_revoked_token(manager, user):
    pair = await manager.issue_token_pair(user)
    assert await manager.revoke(pair.refresh_token) is True

    with pytest.raises(RefreshTokenInvalidException):
        await manager.refresh(pair.refresh_token)


async def test_revoke_is_idempotent(manager, repo, user):
    pair = await manager.issue_token_pair(user)

    assert await manager.revoke(pair.refresh_token) is True
    assert await manager.revoke(pair.refresh_token) is True
    assert repo.records[pair.refresh_token].is_revoked
    assert await manager.revoke("unknown") is False


async def test_revoke_all_counts_only_active_tokens(manager, repo, user):
    other = UserIdentity(id=uuid4(), email="other@example.com", role="customer")
    tokens = [await manager.issue_token_pair(user) for _ in range(3)]
    other_pair = await manager.issue_token_pair(other)
    await manager.revoke(tokens[0].refresh_token)

    assert await manager.revoke_all(user.id) == 2
    assert await manager.revoke_all(user.id) == 0
    assert await repo.list_by_user(user.id, revoked=False) == []
    assert repo.records[other_pair.refresh_token].is_valid(NOW)

    for pair in tokens:
        with pytest.raises(RefreshTokenInvalidException):
            await manager.refresh(pair.refresh_token)


async def test_concurrent_refresh_has_single_winner(manager, user):
    pair = await manager.issue_token_pair(user)

    results = await asyncio.gather(
        manager.refresh(pair.refresh_token),
        manager.refresh(pair.refresh_token),
        return_exceptions=True,
    )

    winners = [r for r in results if isinstance(r, TokenPair)]
    losers = [r for r in results if isinstance(r, RefreshTokenInvalidException)]
    assert len(winners) == 1
    assert len(losers) == 1


async def test_lost_mark_used_race_is_rejected(repo, issuer, clock, user):
    class RacingRepository(InMemoryRefreshTokens):
        async def mark_used(self, token: str) -> bool:
            # Another request rotated the token between the read and the update
            self.records[token].is_used = True
            return False

    racing = RacingRepository()
    manager = TokenLifecycleManager(racing, issuer, FakeUsers(user), clock=clock)
    pair = await manager.issue_token_pair(user)

    with pytest.raises(RefreshTokenInvalidException):
        await manager.refresh(pair.refresh_token)
    assert len(racing.records) == 1


async def test_refresh_for_deleted_user(repo, issuer, clock, user):
    manager = TokenLifecycleManager(repo, issuer, FakeUsers(), clock=clock)
    pair = await manager.issue_token_pair(user)

    with pytest.raises(RefreshTokenNotFoundException):
        await manager.refresh(pair.refresh_token)


def test_configuration_fallbacks(repo, issuer, user):
    manager = TokenLifecycleManager(
        repo, issuer, FakeUsers(user), access_expiration=None, refresh_expiration="forever"
    )

    assert manager.expires_in == 900
    assert manager.refresh_lifetime == timedelta(days=7)


def test_configured_lifetimes(repo, issuer, user):
    manager = TokenLifecycleManager(
        repo, issuer, FakeUsers(user), access_expiration="1h", refresh_expiration="30d"
    )

    assert manager.expires_in == 3600
    assert manager.refresh_lifetime == timedelta(days=30)


def test_is_valid_predicate(user):
    record = RefreshToken(token="t", user_id=user.id, expires_at=NOW + timedelta(minutes=1))

    assert TokenLifecycleManager.is_valid(record, NOW)
    assert not TokenLifecycleManager.is_valid(record, NOW + timedelta(minutes=1))
    assert not TokenLifecycleManager.is_valid(replace(record, is_used=True), NOW)
    assert not TokenLifecycleManager.is_valid(replace(record, is_revoked=True), NOW)


async def test_delete_expired(repo, manager, clock, user):
    await manager.issue_token_pair(user)
    clock.now = NOW + timedelta(days=10)
    fresh = await manager.issue_token_pair(user)

    assert await repo.delete_expired(clock.now) == 1
    assert list(repo.records) == [fresh.refresh_token]
