"""Abstract repository interface (port) for admin user accounts."""

from abc import ABC, abstractmethod

from cms.domain.entities import User


class UserRepository(ABC):
    """Port for user persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_username(self, username: str) -> User | None:
        """Retrieve a user by login name."""
        ...

    @abstractmethod
    async def count(self) -> int:
        """Return the number of stored users."""
        ...

    @abstractmethod
    async def create(self, user: User) -> User:
        """Persist a new user and return it with the generated ID."""
        ...
