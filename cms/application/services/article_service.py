"""Application service (use case) for Article operations."""

import logging

from cms.application.interfaces import (
    ArticleProjection,
    ArticleRepository,
    CategoryRepository,
    ImageStorage,
)
from cms.application.schemas import ArticleWrite
from cms.domain.entities import Article, ArticleListing, Category
from cms.domain.exceptions import ArticleValidationError, EntityNotFoundError, PersistenceError
from cms.domain.listing import fold_category_rows
from cms.domain.pagination import Paginator

logger = logging.getLogger(__name__)


class ArticleService:
    """Orchestrates article business logic. Depends on the repository ports (DI)."""

    def __init__(
        self,
        repository: ArticleRepository,
        category_repository: CategoryRepository,
        image_storage: ImageStorage | None = None,
    ):
        self._repository = repository
        self._category_repository = category_repository
        self._image_storage = image_storage
        self._pending_removals: list[str] = []
        self._stored_images: list[str] = []

    # ── Queries ─────────────────────────────────────────────────────

    async def list_all(self) -> list[Article]:
        return await self._repository.get_all()

    async def list_page(
        self, page: int | str | None, per_page: int, published_only: bool = False
    ) -> tuple[list[ArticleListing], Paginator]:
        total = await self._repository.get_total(published_only=published_only)
        paginator = Paginator(page, per_page, total)
        articles = await self._repository.get_page(
            paginator.limit, paginator.offset, published_only=published_only
        )
        return list(articles.values()), paginator

    async def get_article(
        self, article_id: int, projection: ArticleProjection = ArticleProjection.FULL
    ) -> Article:
        article = await self._repository.get_by_id(article_id, projection)
        if article is None:
            raise EntityNotFoundError("Article", article_id)
        return article

    async def get_article_with_categories(
        self, article_id: int, only_published: bool = False
    ) -> ArticleListing:
        rows = await self._repository.get_with_categories(article_id, only_published=only_published)
        listings = fold_category_rows(rows)
        if article_id not in listings:
            raise EntityNotFoundError("Article", article_id)
        return listings[article_id]

    async def get_categories(self, article_id: int) -> list[Category]:
        article = await self.get_article(article_id, ArticleProjection.SUMMARY)
        return await self._repository.get_categories(article)

    async def get_article_detail(self, article_id: int) -> tuple[Article, list[Category]]:
        """Load an article and its linked categories with a single article lookup."""
        article = await self.get_article(article_id)
        return article, await self._repository.get_categories(article)

    async def list_categories(self) -> list[Category]:
        return await self._category_repository.get_all()

    # ── Commands ────────────────────────────────────────────────────

    async def create_article(self, data: ArticleWrite) -> Article:
        article = Article(
            title=data.title,
            content=data.content,
            published_at=data.published_at,
        )
        if not await self._repository.create(article):
            raise ArticleValidationError(article.errors)

        # Links are only touched once the article itself was accepted.
        await self._repository.set_categories(article, data.category_ids)
        return article

    async def update_article(self, article_id: int, data: ArticleWrite) -> Article:
        article = await self.get_article(article_id)
        article.title = data.title
        article.content = data.content
        article.published_at = data.published_at

        if not await self._repository.update(article):
            raise ArticleValidationError(article.errors)

        await self._repository.set_categories(article, data.category_ids)
        return article

    async def delete_article(self, article_id: int) -> bool:
        article = await self.get_article(article_id)
        deleted = await self._repository.delete(article)
        if deleted and article.image_file:
            self._pending_removals.append(article.image_file)
        return deleted

    async def publish_article(self, article_id: int) -> str:
        article = await self.get_article(article_id, ArticleProjection.SUMMARY)
        published_at = await self._repository.publish(article)
        if published_at is None:
            raise EntityNotFoundError("Article", article_id)
        return published_at

    async def replace_image(self, article_id: int, content: bytes, filename: str) -> Article:
        """Store a new image for the article; the one it replaces is queued for removal."""
        if self._image_storage is None:
            raise RuntimeError("Image storage is not configured")

        article = await self.get_article(article_id)
        previous = article.image_file

        stored_name = await self._image_storage.store_image(content, filename)
        try:
            await self._repository.set_image_file(article, stored_name)
        except PersistenceError:
            await self._image_storage.delete_image(stored_name)
            raise

        self._stored_images.append(stored_name)
        if previous and previous != stored_name:
            self._pending_removals.append(previous)

        logger.info("Article %d image set to %s", article_id, article.image_file)
        return article

    async def remove_image(self, article_id: int) -> Article:
        article = await self.get_article(article_id)
        previous = article.image_file

        await self._repository.set_image_file(article, None)
        if previous:
            self._pending_removals.append(previous)
        return article

    # ── Image files ─────────────────────────────────────────────────
    #
    # Files are only removed from disk once the database write that stops
    # referencing them has committed.

    async def remove_replaced_images(self) -> None:
        """Delete images no longer referenced; call after the commit succeeded."""
        removals, self._pending_removals = self._pending_removals, []
        self._stored_images = []
        if self._image_storage is None:
            return
        for filename in removals:
            await self._image_storage.delete_image(filename)

    async def discard_stored_images(self) -> None:
        """Delete images stored during a unit of work that did not commit."""
        stored, self._stored_images = self._stored_images, []
        self._pending_removals = []
        if self._image_storage is None:
            return
        for filename in stored:
            await self._image_storage.delete_image(filename)
