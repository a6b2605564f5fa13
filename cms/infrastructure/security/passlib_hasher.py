"""Password hashing with passlib."""

import asyncio

from passlib.context import CryptContext

from cms.application.interfaces import PasswordHasher

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class PasslibPasswordHasher(PasswordHasher):
    """Runs passlib's CPU-bound hashing off the event loop."""

    def __init__(self, context: CryptContext = pwd_context):
        self._context = context

    async def hash(self, password: str) -> str:
        return await asyncio.to_thread(self._context.hash, password)

    async def verify(self, password: str, hashed: str) -> bool:
        return await asyncio.to_thread(self._context.verify, password, hashed)
