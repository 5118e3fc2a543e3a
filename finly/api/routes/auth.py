from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from finly.app.services.identity_provider import IIdentityProvider
from finly.app.services.password_hasher import IPasswordHasher
from finly.app.services.session_manager import SessionManager
from finly.app.services.unit_of_work import UnitOfWork
from finly.app.use_cases.auth import (
    GoogleSignInUseCase,
    LoginResponse,
    LoginUseCase,
    SignupCommand,
    SignupResponse,
    SignupUseCase,
)
from finly.depends import (
    get_identity_provider,
    get_password_hasher,
    get_session_manager,
    get_unit_of_work,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


class SignupRequest(BaseModel):
    """
    Signup HTTP request payload

    Validates incoming HTTP request before converting to SignupCommand.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=8, description="User password (min 8 chars)")
    name: str = Field(..., min_length=1, max_length=255, description="Display name")


@router.post(
    "/create_user", status_code=status.HTTP_201_CREATED, response_model=SignupResponse
)
async def create_user(
    request: SignupRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    password_hasher: IPasswordHasher = Depends(get_password_hasher),
):
    """
    User Signup

    Creates a username/password account.

    Raises:
        - 409 Conflict: Email already registered
        - 422 Unprocessable Entity: Invalid input (handled by FastAPI)
        - 500 Internal Server Error: Hashing or persistence failure
    """
    command = SignupCommand(email=request.email, password=request.password, name=request.name)
    use_case = SignupUseCase(uow, password_hasher)
    return await use_case.execute(command)


class LoginRequest(BaseModel):
    """Login HTTP request payload"""

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    request: LoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    session_manager: SessionManager = Depends(get_session_manager),
    password_hasher: IPasswordHasher = Depends(get_password_hasher),
):
    """
    User Login

    Opens (or rotates) the user's single session and returns an access token
    and a refresh token with their expiry instants. Tokens from any previous
    login stop working.

    Raises:
        - 401 Unauthorized: Invalid credentials or account bound to another sign-in method
        - 500 Internal Server Error: Server error
    """
    use_case = LoginUseCase(uow, session_manager, password_hasher)
    return await use_case.execute(request.email, request.password)


class GoogleSignInRequest(BaseModel):
    id_token: str = Field(..., min_length=1, description="Google id token")


@router.post("/google_signin", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def google_signin(
    request: GoogleSignInRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    session_manager: SessionManager = Depends(get_session_manager),
    identity_provider: IIdentityProvider = Depends(get_identity_provider),
):
    """
    Google Sign-In

    Registers the account on first sign-in, then behaves like login.

    Raises:
        - 401 Unauthorized: Id token rejected or account bound to password sign-in
        - 500 Internal Server Error: Server error
    """
    use_case = GoogleSignInUseCase(uow, session_manager, identity_provider)
    return await use_case.execute(request.id_token)
