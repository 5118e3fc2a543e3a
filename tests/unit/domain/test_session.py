from datetime import UTC, datetime, timedelta

from finly.domain.entities import Session

NOW = datetime(2025, 3, 10, 12, 0, tzinfo=UTC)


def _session(**overrides) -> Session:
    values = dict(
        owner_identity="user@example.com",
        refresh_token="refresh",
        refresh_token_expires_at=NOW + timedelta(days=1),
        current_access_token="access",
        current_access_token_expires_at=NOW + timedelta(minutes=15),
    )
    values.update(overrides)
    return Session(**values)


def test_fresh_session_tokens_are_valid():
    session = _session()

    assert session.is_refresh_token_valid(NOW)
    assert session.is_current_access_token_valid(NOW)


def test_empty_refresh_token_is_invalid_even_with_future_expiry():
    session = _session(refresh_token="", refresh_token_expires_at=NOW + timedelta(days=365))

    assert not session.is_refresh_token_valid(NOW)


def test_empty_access_token_is_invalid_even_with_future_expiry():
    session = _session(current_access_token="")

    assert not session.is_current_access_token_valid(NOW)


def test_new_session_has_no_valid_tokens():
    session = Session(owner_identity="user@example.com")

    assert session.refresh_token == ""
    assert session.current_access_token == ""
    assert not session.is_refresh_token_valid(NOW)
    assert not session.is_current_access_token_valid(NOW)


def test_token_is_invalid_at_its_expiry_instant():
    session = _session(current_access_token_expires_at=NOW)

    assert not session.is_current_access_token_valid(NOW)
    assert session.is_current_access_token_valid(NOW - timedelta(microseconds=1))


def test_access_can_expire_while_refresh_is_still_valid():
    session = _session()
    later = NOW + timedelta(minutes=20)

    assert session.is_refresh_token_valid(later)
    assert not session.is_current_access_token_valid(later)


def test_naive_expiry_is_read_as_utc():
    session = _session(refresh_token_expires_at=datetime(2025, 3, 10, 12, 30))

    assert session.is_refresh_token_valid(NOW)
    assert not session.is_refresh_token_valid(NOW + timedelta(hours=1))


def test_session_ids_are_unique():
    assert _session().id != _session().id
