from finly.app.errors import Conflict
from finly.app.services.password_hasher import IPasswordHasher
from finly.app.services.unit_of_work import UnitOfWork
from finly.domain.entities import AuthType, User

from .dtos import SignupCommand, SignupResponse


class SignupUseCase:
    """
    Signup Use Case

    Business Logic:
    1. Reject an email that is already registered
    2. Hash password off the event loop
    3. Create User with auth_type=USERNAME_PASSWORD
    4. Commit
    """

    def __init__(self, uow: UnitOfWork, password_hasher: IPasswordHasher):
        self.uow = uow
        self.password_hasher = password_hasher

    async def execute(self, command: SignupCommand) -> SignupResponse:
        """
        Execute signup use case

        Raises:
            Conflict: email already registered
            HashingError: password could not be hashed
        """
        async with self.uow:
            existing_user = await self.uow.users.get_by_email(command.email)
            if existing_user:
                raise Conflict("email already registered", code="EMAIL_ALREADY_EXISTS")

            password_hash = await self.password_hasher.hash(command.password)

            user = User(
                email=command.email,
                name=command.name,
                password_hash=password_hash,
                auth_type=AuthType.username_password,
            )
            await self.uow.users.create(user)
            await self.uow.commit()

        return SignupResponse(success=True, message="user created")
