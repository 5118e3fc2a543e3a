import asyncio
import logging

from google.auth.exceptions import GoogleAuthError
from google.auth.transport import requests
from google.oauth2 import id_token

from finly.app.errors import Unauthorized
from finly.app.services.identity_provider import IdentityClaims, IIdentityProvider

logger = logging.getLogger(__name__)


class GoogleIdentityProvider(IIdentityProvider):
    """Verifies Google id tokens against the configured OAuth client id"""

    def __init__(self, client_id: str):
        self.client_id = client_id

    async def verify(self, token: str) -> IdentityClaims:
        try:
            payload = await asyncio.to_thread(self._verify_id_token, token)
        except (ValueError, GoogleAuthError) as e:
            logger.warning(f"Google id token rejected: {e}")
            raise Unauthorized("invalid google id token", code="INVALID_ID_TOKEN") from e

        email = payload.get("email")
        subject = payload.get("sub")
        if not email or not subject:
            raise Unauthorized("google id token missing claims", code="INVALID_ID_TOKEN")

        email_verified = payload.get("email_verified", False)
        if isinstance(email_verified, str):
            email_verified = email_verified.lower() == "true"

        name = payload.get("name")
        return IdentityClaims(
            subject=str(subject),
            email=str(email),
            email_verified=bool(email_verified),
            name=name if isinstance(name, str) and name else str(email).split("@")[0],
        )

    def _verify_id_token(self, token: str) -> dict:
        return id_token.verify_oauth2_token(token, requests.Request(), self.client_id)
