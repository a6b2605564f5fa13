"""Application service (use case) for admin authentication."""

import logging

from cms.application.interfaces import PasswordHasher, UserRepository
from cms.domain.entities import User

logger = logging.getLogger(__name__)


class AuthService:
    """Checks admin credentials against stored password hashes."""

    def __init__(self, repository: UserRepository, hasher: PasswordHasher):
        self._repository = repository
        self._hasher = hasher

    async def authenticate(self, username: str, password: str) -> User | None:
        """Return the user when the credentials match, else None.

        Unknown user and wrong password are indistinguishable to the caller.
        """
        user = await self._repository.get_by_username(username)
        if user is None or not await self._hasher.verify(password, user.password):
            logger.info("Rejected login for %r", username)
            return None
        return user

    async def ensure_admin(self, username: str, password: str) -> User | None:
        """Create the initial admin account when no user exists yet."""
        if not username or not password:
            return None
        if await self._repository.count() > 0:
            return None

        user = await self._repository.create(
            User(username=username, password=await self._hasher.hash(password))
        )
        logger.info("Seeded admin user '%s'", username)
        return user
