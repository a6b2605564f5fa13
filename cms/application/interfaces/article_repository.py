"""Abstract repository interfaces (ports) — define the contract, not the implementation."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from enum import Enum

from cms.domain.entities import Article, ArticleCategoryRow, ArticleListing, Category


class ArticleProjection(str, Enum):
    """Named column sets a caller may request from ``get_by_id``."""

    FULL = "full"          # every column
    SUMMARY = "summary"    # id, title, published_at only


class ArticleRepository(ABC):
    """Port for article persistence — implemented in the infrastructure layer.

    ``create`` and ``update`` validate first; a failed validation returns False
    with ``article.errors`` populated and leaves the store untouched. Store
    failures raise ``PersistenceError``.
    """

    @abstractmethod
    async def get_all(self) -> list[Article]:
        """Retrieve every article ordered by publication date, drafts first."""
        ...

    @abstractmethod
    async def get_page(
        self, limit: int, offset: int, published_only: bool = False
    ) -> dict[int, ArticleListing]:
        """Retrieve one page of articles keyed by id, each with its category names."""
        ...

    @abstractmethod
    async def get_by_id(
        self, article_id: int, projection: ArticleProjection = ArticleProjection.FULL
    ) -> Article | None:
        """Retrieve a single article by its ID."""
        ...

    @abstractmethod
    async def get_with_categories(
        self, article_id: int, only_published: bool = False
    ) -> list[ArticleCategoryRow]:
        """Retrieve the article joined with each of its categories, one row per category."""
        ...

    @abstractmethod
    async def get_categories(self, article: Article) -> list[Category]:
        """Retrieve the categories linked to an article."""
        ...

    @abstractmethod
    async def get_total(self, published_only: bool = False) -> int:
        """Count articles, filtered like ``get_page``."""
        ...

    @abstractmethod
    async def create(self, article: Article) -> bool:
        """Validate and insert a new article, assigning its generated ID."""
        ...

    @abstractmethod
    async def update(self, article: Article) -> bool:
        """Validate and update title, content and publication date."""
        ...

    @abstractmethod
    async def delete(self, article: Article) -> bool:
        """Delete an article together with its category links."""
        ...

    @abstractmethod
    async def set_categories(self, article: Article, category_ids: Iterable[int | str]) -> None:
        """Make the article's category links match ``category_ids`` exactly."""
        ...

    @abstractmethod
    async def set_image_file(self, article: Article, filename: str | None) -> bool:
        """Update only the image column; ``None`` clears it."""
        ...

    @abstractmethod
    async def publish(self, article: Article) -> str | None:
        """Stamp the article with the current time. Returns the timestamp or None."""
        ...
