from unittest.mock import AsyncMock, MagicMock

import pytest

from finly.api.utils.jwt import TokenCodec
from finly.app.services.session_manager import SessionManager, SessionPolicy
from tests.fixtures.clock import FixedClock
from tests.fixtures.keys import RESET_SECRET, rsa_key_pair


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with all repositories"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update = AsyncMock(side_effect=lambda user: user)

    uow.sessions = MagicMock()
    uow.sessions.get_by_id = AsyncMock(return_value=None)
    uow.sessions.get_by_owner = AsyncMock(return_value=None)
    uow.sessions.create = AsyncMock(side_effect=lambda session: session)
    uow.sessions.reset_by_owner = AsyncMock()
    uow.sessions.update_access_token = AsyncMock()
    uow.sessions.delete_by_id = AsyncMock()
    uow.sessions.delete_by_owner = AsyncMock()

    uow.reset_passwords = MagicMock()
    uow.reset_passwords.create = AsyncMock(side_effect=lambda record: record)
    uow.reset_passwords.get_by_id = AsyncMock(return_value=None)
    uow.reset_passwords.get_pending_by_email = AsyncMock(return_value=None)
    uow.reset_passwords.mark_as_used = AsyncMock()

    uow.categories = MagicMock()
    uow.categories.get_by_id = AsyncMock(return_value=None)
    uow.categories.get_active_by_user = AsyncMock(return_value=None)
    uow.categories.upsert = AsyncMock(side_effect=lambda category: category)
    uow.categories.deactivate = AsyncMock(return_value=True)
    uow.categories.list_active_by_user = AsyncMock(return_value=[])

    uow.subcategories = MagicMock()
    uow.subcategories.get_by_id = AsyncMock(return_value=None)
    uow.subcategories.upsert = AsyncMock(side_effect=lambda sub: sub)
    uow.subcategories.deactivate = AsyncMock(return_value=True)
    uow.subcategories.list_active_by_categories = AsyncMock(return_value=[])

    uow.credit_cards = MagicMock()
    uow.credit_cards.get_by_id = AsyncMock(return_value=None)
    uow.credit_cards.get_active_by_user = AsyncMock(return_value=None)
    uow.credit_cards.upsert = AsyncMock(side_effect=lambda card: card)
    uow.credit_cards.deactivate = AsyncMock(return_value=True)
    uow.credit_cards.list_active_by_user = AsyncMock(return_value=[])

    uow.billing_cycles = MagicMock()
    uow.billing_cycles.create = AsyncMock(side_effect=lambda cycle: cycle)
    uow.billing_cycles.list_by_card = AsyncMock(return_value=[])
    return uow


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def token_codec(clock):
    private_key, public_key = rsa_key_pair()
    return TokenCodec(private_key, public_key, RESET_SECRET, clock)


@pytest.fixture
def session_policy():
    return SessionPolicy()


@pytest.fixture
def session_manager(mock_uow, token_codec, clock, session_policy):
    return SessionManager(mock_uow, token_codec, clock, session_policy)


@pytest.fixture
def password_hasher():
    """Hasher stub; verify() matches plaintext against 'hashed:<plaintext>'"""
    hasher = MagicMock()
    hasher.hash = AsyncMock(side_effect=lambda plaintext: f"hashed:{plaintext}")
    hasher.verify = AsyncMock(
        side_effect=lambda plaintext, hashed: hashed == f"hashed:{plaintext}"
    )
    return hasher
