"""Abstract storage interface (port) for article images."""

from abc import ABC, abstractmethod


class ImageStorage(ABC):
    """Port for image file storage — implemented in the infrastructure layer."""

    @property
    @abstractmethod
    def max_size_bytes(self) -> int:
        """Largest upload ``store_image`` accepts."""
        ...

    @abstractmethod
    async def store_image(self, content: bytes, filename: str) -> str:
        """Store an uploaded image under a name no other upload shares.

        Raises ValueError for unsupported types or oversized content.
        """
        ...

    @abstractmethod
    async def delete_image(self, filename: str) -> bool:
        """Delete a stored image. Returns True if deleted, False if not found."""
        ...
