"""Abstract password hashing interface (port)."""

from abc import ABC, abstractmethod


class PasswordHasher(ABC):
    """Port for one-way password hashing."""

    @abstractmethod
    async def hash(self, password: str) -> str:
        ...

    @abstractmethod
    async def verify(self, password: str, hashed: str) -> bool:
        ...
