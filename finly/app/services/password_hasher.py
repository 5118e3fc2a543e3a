from abc import ABC, abstractmethod


class IPasswordHasher(ABC):
    """Credential hashing port"""

    @abstractmethod
    async def hash(self, plaintext: str) -> str:
        """Hash a plaintext password. Raises HashingError on malformed input."""
        pass

    @abstractmethod
    async def verify(self, plaintext: str, hashed: str) -> bool:
        """Check a plaintext password against a stored hash. Raises HashingError."""
        pass
