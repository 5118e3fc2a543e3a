import asyncio

import bcrypt

from finly.app.errors import HashingError
from finly.app.services.password_hasher import IPasswordHasher

BCRYPT_ROUNDS = 12


class BcryptPasswordHasher(IPasswordHasher):
    """bcrypt hashing, run in a worker thread so it does not stall the event loop"""

    def __init__(self, rounds: int = BCRYPT_ROUNDS):
        self.rounds = rounds

    async def hash(self, plaintext: str) -> str:
        return await asyncio.to_thread(self._hash, plaintext)

    async def verify(self, plaintext: str, hashed: str) -> bool:
        return await asyncio.to_thread(self._verify, plaintext, hashed)

    def _hash(self, plaintext: str) -> str:
        try:
            return bcrypt.hashpw(plaintext.encode(), bcrypt.gensalt(self.rounds)).decode()
        except ValueError as e:
            raise HashingError("failed to hash password") from e

    def _verify(self, plaintext: str, hashed: str) -> bool:
        try:
            return bcrypt.checkpw(plaintext.encode(), hashed.encode())
        except ValueError as e:
            raise HashingError("malformed password hash") from e
