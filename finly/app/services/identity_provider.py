from abc import ABC, abstractmethod

from pydantic import BaseModel


class IdentityClaims(BaseModel):
    """Claims returned by an external identity provider"""

    subject: str
    email: str
    email_verified: bool
    name: str


class IIdentityProvider(ABC):
    """OAuth identity provider port"""

    @abstractmethod
    async def verify(self, token: str) -> IdentityClaims:
        """Exchange an id token for claims. Raises Unauthorized when rejected."""
        pass
