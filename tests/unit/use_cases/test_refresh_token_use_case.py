from datetime import timedelta

import pytest
import pytest_asyncio

from finly.app.errors import Unauthorized
from finly.app.use_cases.auth import LogoutUseCase, RefreshTokenUseCase
from finly.domain.entities import Session


@pytest_asyncio.fixture
async def active_session(session_manager):
    session = Session(owner_identity="user@example.com")
    await session_manager.rotate(session)
    return session


@pytest.mark.asyncio
async def test_valid_access_token_is_returned_unchanged(
    mock_uow, session_manager, token_codec, active_session
):
    mock_uow.sessions.get_by_id.return_value = active_session
    claims = token_codec.verify_session_token(active_session.refresh_token)

    use_case = RefreshTokenUseCase(mock_uow, session_manager)
    response = await use_case.execute(claims, active_session.refresh_token)

    assert response.access_token == active_session.current_access_token
    mock_uow.sessions.update_access_token.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_expired_access_token_is_renewed(
    mock_uow, session_manager, token_codec, clock, active_session
):
    mock_uow.sessions.get_by_id.return_value = active_session
    old_access = active_session.current_access_token
    session_id = active_session.id

    clock.advance(timedelta(minutes=30))
    claims = token_codec.verify_session_token(active_session.refresh_token)

    use_case = RefreshTokenUseCase(mock_uow, session_manager)
    response = await use_case.execute(claims, active_session.refresh_token)

    assert response.access_token != old_access
    assert response.access_token_expires_at == clock.now() + timedelta(minutes=15)
    assert token_codec.verify_session_token(response.access_token).subject == session_id
    mock_uow.sessions.update_access_token.assert_called_once_with(active_session)
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_unknown_session_is_unauthorized(
    mock_uow, session_manager, token_codec, active_session
):
    claims = token_codec.verify_session_token(active_session.refresh_token)

    use_case = RefreshTokenUseCase(mock_uow, session_manager)
    with pytest.raises(Unauthorized) as exc_info:
        await use_case.execute(claims, active_session.refresh_token)

    assert exc_info.value.code == "INVALID_SESSION"


@pytest.mark.asyncio
async def test_access_token_cannot_be_used_to_refresh(
    mock_uow, session_manager, token_codec, active_session
):
    mock_uow.sessions.get_by_id.return_value = active_session
    claims = token_codec.verify_session_token(active_session.current_access_token)

    use_case = RefreshTokenUseCase(mock_uow, session_manager)
    with pytest.raises(Unauthorized):
        await use_case.execute(claims, active_session.current_access_token)


@pytest.mark.asyncio
async def test_session_with_empty_refresh_token_is_unauthorized(
    mock_uow, session_manager, token_codec, clock
):
    session = Session(owner_identity="user@example.com")
    mock_uow.sessions.get_by_id.return_value = session
    token = token_codec.sign_session_token(session.id, clock.now() + timedelta(days=1))
    claims = token_codec.verify_session_token(token)

    use_case = RefreshTokenUseCase(mock_uow, session_manager)
    with pytest.raises(Unauthorized):
        await use_case.execute(claims, "")


@pytest.mark.asyncio
async def test_logout_deletes_session(mock_uow, session_manager):
    use_case = LogoutUseCase(mock_uow, session_manager)
    response = await use_case.execute("session-1")

    assert response.success is True
    mock_uow.sessions.delete_by_id.assert_called_once_with("session-1")
    mock_uow.commit.assert_called_once()
