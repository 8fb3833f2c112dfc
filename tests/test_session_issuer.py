from datetime import datetime, timedelta

import pytest
from sqlalchemy import select

from marketplace.features.auth.exceptions import StoreError
from marketplace.features.auth.models.session import UserSession
from marketplace.features.auth.services.credential_store import DatabaseCredentialStore
from marketplace.features.auth.services.session_issuer import SESSION_TTL, DatabaseSessionIssuer

from tests.fakes import FakeClock


@pytest.fixture
def clock():
    return FakeClock()


async def _create_user(db_session) -> int:
    return await DatabaseCredentialStore(db_session).create_user("Gator", "hash", "g@uf.edu")


@pytest.mark.asyncio
async def test_session_expires_24_hours_after_creation(db_session, clock):
    user_id = await _create_user(db_session)
    issuer = DatabaseSessionIssuer(db_session, clock=clock)

    token = await issuer.create_session(user_id)

    result = await db_session.execute(select(UserSession).where(UserSession.session_id == token))
    session = result.scalar_one()
    assert session.user_id == user_id
    assert session.expires_at == clock.now + timedelta(hours=24)
    assert SESSION_TTL == timedelta(hours=24)


@pytest.mark.asyncio
async def test_validate_session_expiry_boundary(db_session, clock):
    user_id = await _create_user(db_session)
    issuer = DatabaseSessionIssuer(db_session, clock=clock)
    token = await issuer.create_session(user_id)

    clock.advance(hours=24, seconds=-1)
    assert await issuer.validate_session(token) is True

    clock.advance(seconds=1)
    assert await issuer.validate_session(token) is False

    clock.advance(seconds=1)
    assert await issuer.validate_session(token) is False


@pytest.mark.asyncio
async def test_expired_sessions_are_not_deleted_by_validation(db_session, clock):
    user_id = await _create_user(db_session)
    issuer = DatabaseSessionIssuer(db_session, clock=clock)
    token = await issuer.create_session(user_id)

    clock.advance(days=2)
    assert await issuer.validate_session(token) is False

    result = await db_session.execute(select(UserSession).where(UserSession.session_id == token))
    assert result.scalar_one_or_none() is not None


@pytest.mark.asyncio
async def test_unknown_or_empty_token_is_invalid(db_session):
    issuer = DatabaseSessionIssuer(db_session)

    assert await issuer.validate_session("no-such-session") is False
    assert await issuer.validate_session("") is False


@pytest.mark.asyncio
async def test_new_login_does_not_revoke_existing_sessions(db_session, clock):
    user_id = await _create_user(db_session)
    issuer = DatabaseSessionIssuer(db_session, clock=clock)

    first = await issuer.create_session(user_id)
    clock.advance(hours=1)
    second = await issuer.create_session(user_id)

    assert first != second
    assert await issuer.validate_session(first) is True
    assert await issuer.validate_session(second) is True


@pytest.mark.asyncio
async def test_store_failure_surfaces_as_store_error(db_session, clock):
    user_id = await _create_user(db_session)
    issuer = DatabaseSessionIssuer(db_session, clock=clock, token_factory=lambda: "fixed-token")
    await issuer.create_session(user_id)

    # Reusing the primary key makes the insert fail
    with pytest.raises(StoreError):
        await issuer.create_session(user_id)
