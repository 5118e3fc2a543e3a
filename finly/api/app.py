import logging
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlmodel import SQLModel

from finly.adapter.services.identity_provider import GoogleIdentityProvider
from finly.adapter.services.password_hasher import BcryptPasswordHasher
from finly.adapter.services.reset_password_notifier import LoggingResetPasswordNotifier
from finly.app.errors import AppError
from finly.app.services.clock import Clock, SystemClock
from finly.app.services.identity_provider import IIdentityProvider
from finly.app.services.password_hasher import IPasswordHasher
from finly.app.services.reset_password_notifier import IResetPasswordNotifier
from finly.app.services.session_manager import SessionPolicy
from finly.domain import entities  # noqa: F401  registers tables on SQLModel.metadata

from .error import error_body, status_code_for
from .utils.jwt import load_token_codec

logger = logging.getLogger(__name__)


async def handle_app_error(request: Request, exc: AppError):
    status_code = status_code_for(exc)
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(f"Server error: {exc.code}: {exc.message}", exc_info=exc)
        return JSONResponse(
            status_code=status_code, content=error_body(exc.code, "Internal server error")
        )

    logger.warning(f"Client error: {exc.code}: {exc.message}")
    return JSONResponse(status_code=status_code, content=error_body(exc.code, exc.message))


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("INTERNAL_ERROR", "Internal server error"),
    )


def create_app(
    ApplicationConfig,
    clock: Optional[Clock] = None,
    password_hasher: Optional[IPasswordHasher] = None,
    identity_provider: Optional[IIdentityProvider] = None,
    reset_password_notifier: Optional[IResetPasswordNotifier] = None,
) -> FastAPI:
    """
    Build the application.

    Key material is loaded here, once; missing or unreadable keys raise
    ConfigurationError before the app can serve.
    """
    clock = clock or SystemClock()
    token_codec = load_token_codec(ApplicationConfig, clock)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if ApplicationConfig.AUTO_CREATE_TABLES:
            from finly.depends import engine

            async with engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)
        yield

    app = FastAPI(title="Finly API", version="0.1.0", lifespan=lifespan)

    app.state.config = ApplicationConfig
    app.state.clock = clock
    app.state.token_codec = token_codec
    app.state.session_policy = SessionPolicy(
        access_token_ttl=timedelta(minutes=ApplicationConfig.ACCESS_TOKEN_TTL_MINUTES),
        refresh_token_ttl=timedelta(days=ApplicationConfig.REFRESH_TOKEN_TTL_DAYS),
    )
    app.state.password_hasher = password_hasher or BcryptPasswordHasher()
    app.state.identity_provider = identity_provider or GoogleIdentityProvider(
        ApplicationConfig.GOOGLE_OAUTH_CLIENT_ID
    )
    app.state.reset_password_notifier = (
        reset_password_notifier or LoggingResetPasswordNotifier()
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from finly.api.routes import auth, category, credit_card, health_check, password, session, token

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, tags=["Authentication"])
    app.include_router(token.router, tags=["Token"])
    app.include_router(session.router, tags=["Sessions"])
    app.include_router(password.router, tags=["Password"])
    app.include_router(category.router, tags=["Categories"])
    app.include_router(credit_card.router, tags=["Credit Cards"])

    app.add_exception_handler(AppError, handle_app_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    return app
