from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock
from urllib.parse import parse_qs, urlparse

import pytest

from finly.api.utils.jwt import InvalidSignature
from finly.app.errors import Conflict, NotFound, Unauthorized, ValidationError
from finly.app.use_cases.password import (
    ConfirmPasswordResetUseCase,
    RequestPasswordResetUseCase,
)
from finly.domain.entities import ResetPassword, User

LINK_BASE = "https://app.example.com/reset-password"


@pytest.fixture
def notifier():
    notifier = MagicMock()
    notifier.send_reset_link = AsyncMock()
    return notifier


@pytest.fixture
def request_use_case(mock_uow, token_codec, clock, notifier):
    return RequestPasswordResetUseCase(mock_uow, token_codec, clock, notifier, LINK_BASE)


@pytest.fixture
def confirm_use_case(mock_uow, token_codec, clock, password_hasher):
    return ConfirmPasswordResetUseCase(mock_uow, token_codec, clock, password_hasher)


def _user() -> User:
    return User(email="user@example.com", name="User", password_hash="hashed:old-password")


def _pending(clock) -> ResetPassword:
    now = clock.now()
    return ResetPassword(
        user_email="user@example.com", sent_at=now, expires_at=now + timedelta(minutes=30)
    )


@pytest.mark.asyncio
async def test_request_sends_link_with_reset_token(
    request_use_case, mock_uow, token_codec, clock, notifier
):
    mock_uow.users.get_by_email.return_value = _user()

    response = await request_use_case.execute("user@example.com")

    assert response.success is True
    record = mock_uow.reset_passwords.create.call_args.args[0]
    assert record.user_email == "user@example.com"
    assert record.expires_at == clock.now() + timedelta(minutes=30)
    mock_uow.commit.assert_called_once()

    email, link = notifier.send_reset_link.call_args.args
    assert email == "user@example.com"
    assert link.startswith(LINK_BASE + "?token=")
    token = parse_qs(urlparse(link).query)["token"][0]
    assert token_codec.verify_reset_token(token).subject == record.id


@pytest.mark.asyncio
async def test_request_for_unknown_email_is_silent(request_use_case, mock_uow, notifier):
    response = await request_use_case.execute("nobody@example.com")

    assert response.success is True
    mock_uow.reset_passwords.create.assert_not_called()
    notifier.send_reset_link.assert_not_called()


@pytest.mark.asyncio
async def test_second_request_while_pending_is_conflict(
    request_use_case, mock_uow, clock, notifier
):
    mock_uow.users.get_by_email.return_value = _user()
    pending = _pending(clock)
    mock_uow.reset_passwords.get_pending_by_email.return_value = pending

    with pytest.raises(Conflict) as exc_info:
        await request_use_case.execute("user@example.com")

    assert exc_info.value.code == "RESET_ALREADY_REQUESTED"
    assert exc_info.value.message == "2025-03-10T12:30:00+00:00"
    notifier.send_reset_link.assert_not_called()


@pytest.mark.asyncio
async def test_confirm_resets_password_and_drops_session(
    confirm_use_case, mock_uow, token_codec, clock, password_hasher
):
    user = _user()
    record = _pending(clock)
    mock_uow.users.get_by_email.return_value = user
    mock_uow.reset_passwords.get_by_id.return_value = record
    token = token_codec.sign_reset_token(record.id, record.expires_at)

    response = await confirm_use_case.execute(token, "NewSecurePass1")

    assert response.success is True
    assert user.password_hash == "hashed:NewSecurePass1"
    mock_uow.reset_passwords.mark_as_used.assert_called_once_with(record.id)
    mock_uow.sessions.delete_by_owner.assert_called_once_with("user@example.com")
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_confirm_short_password_is_rejected_before_token_check(confirm_use_case):
    with pytest.raises(ValidationError) as exc_info:
        await confirm_use_case.execute("not-even-a-token", "short")

    assert exc_info.value.code == "INVALID_PASSWORD"


@pytest.mark.asyncio
async def test_confirm_rejects_session_token(confirm_use_case, token_codec, clock):
    session_token = token_codec.sign_session_token("reset-id", clock.now() + timedelta(minutes=5))

    with pytest.raises(InvalidSignature):
        await confirm_use_case.execute(session_token, "NewSecurePass1")


@pytest.mark.asyncio
async def test_confirm_used_link_is_conflict(confirm_use_case, mock_uow, token_codec, clock):
    record = _pending(clock)
    record.is_password_reset = True
    mock_uow.reset_passwords.get_by_id.return_value = record
    token = token_codec.sign_reset_token(record.id, record.expires_at)

    with pytest.raises(Conflict) as exc_info:
        await confirm_use_case.execute(token, "NewSecurePass1")

    assert exc_info.value.code == "TOKEN_ALREADY_USED"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_confirm_expired_request(confirm_use_case, mock_uow, token_codec, clock):
    record = _pending(clock)
    record.expires_at = clock.now()
    mock_uow.reset_passwords.get_by_id.return_value = record
    token = token_codec.sign_reset_token(record.id, clock.now() + timedelta(minutes=5))

    with pytest.raises(Unauthorized) as exc_info:
        await confirm_use_case.execute(token, "NewSecurePass1")

    assert exc_info.value.code == "TOKEN_EXPIRED"


@pytest.mark.asyncio
async def test_confirm_unknown_request(confirm_use_case, token_codec, clock):
    token = token_codec.sign_reset_token("missing", clock.now() + timedelta(minutes=5))

    with pytest.raises(Unauthorized) as exc_info:
        await confirm_use_case.execute(token, "NewSecurePass1")

    assert exc_info.value.code == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_confirm_for_deleted_account(confirm_use_case, mock_uow, token_codec, clock):
    record = _pending(clock)
    mock_uow.reset_passwords.get_by_id.return_value = record
    token = token_codec.sign_reset_token(record.id, record.expires_at)

    with pytest.raises(NotFound):
        await confirm_use_case.execute(token, "NewSecurePass1")
