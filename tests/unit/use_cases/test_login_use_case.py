"""
Unit tests for LoginUseCase and GoogleSignInUseCase

Session flow runs through a real SessionManager over a mocked UnitOfWork.
"""
from unittest.mock import AsyncMock, MagicMock

import pytest

from finly.app.errors import Unauthorized
from finly.app.services.identity_provider import IdentityClaims
from finly.app.use_cases.auth import GoogleSignInUseCase, LoginUseCase
from finly.domain.entities import AuthType, Session, User


def _password_user(password: str = "SecurePass123!") -> User:
    return User(
        email="user@example.com",
        name="User",
        password_hash=f"hashed:{password}",
        auth_type=AuthType.username_password,
    )


@pytest.mark.asyncio
async def test_first_login_creates_then_rotates_session(
    mock_uow, session_manager, password_hasher, token_codec
):
    mock_uow.users.get_by_email.return_value = _password_user()

    use_case = LoginUseCase(mock_uow, session_manager, password_hasher)
    response = await use_case.execute("user@example.com", "SecurePass123!")

    assert response.success is True
    assert response.user.email == "user@example.com"
    assert response.user.auth_type == "USERNAME_PASSWORD"
    assert response.refresh_token_expires_at > response.access_token_expires_at

    mock_uow.sessions.create.assert_called_once()
    mock_uow.sessions.reset_by_owner.assert_called_once()
    rotated = mock_uow.sessions.reset_by_owner.call_args.args[0]
    assert token_codec.verify_session_token(response.access_token).subject == rotated.id
    assert token_codec.verify_session_token(response.refresh_token).subject == rotated.id
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_second_login_rotates_existing_session(mock_uow, session_manager, password_hasher):
    mock_uow.users.get_by_email.return_value = _password_user()
    existing = Session(owner_identity="user@example.com")
    old_id = existing.id
    mock_uow.sessions.get_by_owner.return_value = existing

    use_case = LoginUseCase(mock_uow, session_manager, password_hasher)
    await use_case.execute("user@example.com", "SecurePass123!")

    mock_uow.sessions.create.assert_not_called()
    mock_uow.sessions.reset_by_owner.assert_called_once_with(existing)
    assert existing.id != old_id


@pytest.mark.asyncio
async def test_login_wrong_password(mock_uow, session_manager, password_hasher):
    mock_uow.users.get_by_email.return_value = _password_user()

    use_case = LoginUseCase(mock_uow, session_manager, password_hasher)
    with pytest.raises(Unauthorized) as exc_info:
        await use_case.execute("user@example.com", "WrongPassword!")

    assert exc_info.value.code == "INVALID_CREDENTIALS"
    mock_uow.sessions.reset_by_owner.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_login_unknown_email_fails_like_wrong_password(
    mock_uow, session_manager, password_hasher
):
    use_case = LoginUseCase(mock_uow, session_manager, password_hasher)
    with pytest.raises(Unauthorized) as exc_info:
        await use_case.execute("nobody@example.com", "whatever123")

    assert exc_info.value.code == "INVALID_CREDENTIALS"
    assert exc_info.value.message == "incorrect email or password"


@pytest.mark.asyncio
async def test_password_login_on_google_account_is_unauthorized(
    mock_uow, session_manager, password_hasher
):
    mock_uow.users.get_by_email.return_value = User(
        email="user@example.com", name="User", auth_type=AuthType.google
    )

    use_case = LoginUseCase(mock_uow, session_manager, password_hasher)
    with pytest.raises(Unauthorized) as exc_info:
        await use_case.execute("user@example.com", "SecurePass123!")

    assert exc_info.value.code == "WRONG_AUTH_METHOD"
    password_hasher.verify.assert_not_called()


@pytest.fixture
def identity_provider():
    provider = MagicMock()
    provider.verify = AsyncMock(
        return_value=IdentityClaims(
            subject="google-sub-1",
            email="user@example.com",
            email_verified=True,
            name="Google User",
        )
    )
    return provider


@pytest.mark.asyncio
async def test_google_signin_registers_unknown_account(
    mock_uow, session_manager, identity_provider
):
    use_case = GoogleSignInUseCase(mock_uow, session_manager, identity_provider)
    response = await use_case.execute("id-token")

    identity_provider.verify.assert_called_once_with("id-token")
    mock_uow.users.create.assert_called_once()
    created = mock_uow.users.create.call_args.args[0]
    assert created.auth_type == AuthType.google
    assert created.email_verified is True
    assert created.password_hash is None
    assert response.user.name == "Google User"
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_google_signin_refuses_password_account(
    mock_uow, session_manager, identity_provider
):
    mock_uow.users.get_by_email.return_value = _password_user()

    use_case = GoogleSignInUseCase(mock_uow, session_manager, identity_provider)
    with pytest.raises(Unauthorized):
        await use_case.execute("id-token")

    mock_uow.sessions.reset_by_owner.assert_not_called()


@pytest.mark.asyncio
async def test_google_signin_rejected_token_propagates(
    mock_uow, session_manager, identity_provider
):
    identity_provider.verify.side_effect = Unauthorized("invalid google id token")

    use_case = GoogleSignInUseCase(mock_uow, session_manager, identity_provider)
    with pytest.raises(Unauthorized):
        await use_case.execute("bad-token")

    mock_uow.users.get_by_email.assert_not_called()
