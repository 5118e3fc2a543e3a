import pytest

from finly.app.errors import Conflict
from finly.app.use_cases.auth import SignupCommand, SignupUseCase
from finly.domain.entities import AuthType, User


@pytest.mark.asyncio
async def test_signup_success(mock_uow, password_hasher):
    """Test successful signup hashes the password and commits"""
    # Arrange
    command = SignupCommand(email="new@example.com", password="SecurePass123!", name="New")

    # Act
    use_case = SignupUseCase(mock_uow, password_hasher)
    response = await use_case.execute(command)

    # Assert
    assert response.success is True
    assert response.message == "user created"
    created = mock_uow.users.create.call_args.args[0]
    assert created.password_hash == "hashed:SecurePass123!"
    assert created.auth_type == AuthType.username_password
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_signup_duplicate_email(mock_uow, password_hasher):
    """Test signup with an already registered email"""
    mock_uow.users.get_by_email.return_value = User(email="new@example.com", name="Old")

    use_case = SignupUseCase(mock_uow, password_hasher)
    with pytest.raises(Conflict) as exc_info:
        await use_case.execute(
            SignupCommand(email="new@example.com", password="SecurePass123!", name="New")
        )

    assert exc_info.value.code == "EMAIL_ALREADY_EXISTS"
    password_hasher.hash.assert_not_called()
    mock_uow.users.create.assert_not_called()
    mock_uow.commit.assert_not_called()
