"""Abstract repository interface (port) for the category lookup table."""

from abc import ABC, abstractmethod

from cms.domain.entities import Category


class CategoryRepository(ABC):
    """Port for category reads — implemented in the infrastructure layer."""

    @abstractmethod
    async def get_all(self) -> list[Category]:
        """Retrieve every category ordered by name."""
        ...
