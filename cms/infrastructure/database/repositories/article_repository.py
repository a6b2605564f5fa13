"""Concrete repository implementation backed by SQLAlchemy."""

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from sqlalchemy import Result, delete, func, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from cms.application.interfaces import ArticleProjection, ArticleRepository
from cms.domain.category_links import coerce_category_ids, plan_category_changes
from cms.domain.entities import (
    Article,
    ArticleCategoryRow,
    ArticleListing,
    Category,
    format_published_at,
    parse_published_at,
)
from cms.domain.exceptions import PersistenceError
from cms.domain.listing import fold_category_rows
from cms.infrastructure.database.models import ArticleCategoryModel, ArticleModel, CategoryModel

logger = logging.getLogger(__name__)

_FULL_COLUMNS = (
    ArticleModel.id,
    ArticleModel.title,
    ArticleModel.content,
    ArticleModel.published_at,
    ArticleModel.image_file,
)

_PROJECTIONS = {
    ArticleProjection.FULL: _FULL_COLUMNS,
    ArticleProjection.SUMMARY: (ArticleModel.id, ArticleModel.title, ArticleModel.published_at),
}


def _now() -> datetime:
    """Server time used when publishing."""
    return datetime.now()


def _to_db_timestamp(value: str | None) -> datetime | None:
    """Empty string and None both mean 'draft' and are stored as NULL."""
    return parse_published_at(value) if value else None


def _from_db_timestamp(value: datetime | None) -> str | None:
    return format_published_at(value) if value is not None else None


class SQLAlchemyArticleRepository(ArticleRepository):
    """Implements the ArticleRepository port using SQLAlchemy async sessions.

    Statements run inside the session's transaction; committing is left to
    whoever owns the session.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, row: Mapping[str, Any]) -> Article:
        """Map a result row → domain entity, tolerating partial projections."""
        return Article(
            id=row["id"],
            title=row.get("title", ""),
            content=row.get("content", ""),
            published_at=_from_db_timestamp(row.get("published_at")),
            image_file=row.get("image_file"),
        )

    def _to_row(self, row: Mapping[str, Any]) -> ArticleCategoryRow:
        """Map a joined article/category result row → flat domain row."""
        return ArticleCategoryRow(
            id=row["id"],
            title=row["title"],
            content=row["content"],
            published_at=_from_db_timestamp(row["published_at"]),
            image_file=row["image_file"],
            category_name=row["category_name"],
        )

    async def _execute(self, operation: str, statement, params=None) -> Result:
        """Run a statement, converting driver failures into PersistenceError."""
        try:
            if params is None:
                return await self._session.execute(statement)
            return await self._session.execute(statement, params)
        except SQLAlchemyError as exc:
            logger.error("Article store failure during %s: %s", operation, exc)
            raise PersistenceError(operation, str(exc)) from exc

    # ── Reads ───────────────────────────────────────────────────────

    async def get_all(self) -> list[Article]:
        stmt = select(*_FULL_COLUMNS).order_by(
            ArticleModel.published_at.asc().nulls_first(), ArticleModel.id
        )
        result = await self._execute("get_all", stmt)
        return [self._to_entity(row) for row in result.mappings().all()]

    async def get_page(
        self, limit: int, offset: int, published_only: bool = False
    ) -> dict[int, ArticleListing]:
        # Paginate the articles first, then attach categories, so the join
        # cannot change how many articles land on the page.
        page = select(*_FULL_COLUMNS)
        if published_only:
            page = page.where(ArticleModel.published_at.is_not(None))
        page = (
            page.order_by(ArticleModel.published_at.asc().nulls_first(), ArticleModel.id)
            .limit(limit)
            .offset(offset)
            .subquery("a")
        )

        stmt = (
            select(
                page.c.id,
                page.c.title,
                page.c.content,
                page.c.published_at,
                page.c.image_file,
                CategoryModel.name.label("category_name"),
            )
            .select_from(page)
            .outerjoin(ArticleCategoryModel, ArticleCategoryModel.article_id == page.c.id)
            .outerjoin(CategoryModel, CategoryModel.id == ArticleCategoryModel.category_id)
            .order_by(
                page.c.published_at.asc().nulls_first(),
                page.c.id,
                ArticleCategoryModel.category_id,
            )
        )
        result = await self._execute("get_page", stmt)
        return fold_category_rows(self._to_row(row) for row in result.mappings().all())

    async def get_by_id(
        self, article_id: int, projection: ArticleProjection = ArticleProjection.FULL
    ) -> Article | None:
        try:
            columns = _PROJECTIONS[ArticleProjection(projection)]
        except (KeyError, ValueError):
            raise ValueError(f"Unknown article projection: {projection!r}") from None

        stmt = select(*columns).where(ArticleModel.id == article_id)
        result = await self._execute("get_by_id", stmt)
        row = result.mappings().first()
        return self._to_entity(row) if row else None

    async def get_with_categories(
        self, article_id: int, only_published: bool = False
    ) -> list[ArticleCategoryRow]:
        stmt = (
            select(*_FULL_COLUMNS, CategoryModel.name.label("category_name"))
            .select_from(ArticleModel)
            .outerjoin(ArticleCategoryModel, ArticleCategoryModel.article_id == ArticleModel.id)
            .outerjoin(CategoryModel, CategoryModel.id == ArticleCategoryModel.category_id)
            .where(ArticleModel.id == article_id)
            .order_by(ArticleCategoryModel.category_id)
        )
        if only_published:
            stmt = stmt.where(ArticleModel.published_at.is_not(None))

        result = await self._execute("get_with_categories", stmt)
        return [self._to_row(row) for row in result.mappings().all()]

    async def get_categories(self, article: Article) -> list[Category]:
        stmt = (
            select(CategoryModel.id, CategoryModel.name)
            .join(ArticleCategoryModel, ArticleCategoryModel.category_id == CategoryModel.id)
            .where(ArticleCategoryModel.article_id == article.id)
        )
        result = await self._execute("get_categories", stmt)
        return [Category(id=row.id, name=row.name) for row in result.all()]

    async def get_total(self, published_only: bool = False) -> int:
        stmt = select(func.count()).select_from(ArticleModel)
        if published_only:
            stmt = stmt.where(ArticleModel.published_at.is_not(None))
        result = await self._execute("get_total", stmt)
        return result.scalar_one()

    # ── Writes ──────────────────────────────────────────────────────

    async def create(self, article: Article) -> bool:
        if not article.validate():
            return False

        model = ArticleModel(
            title=article.title,
            content=article.content,
            published_at=_to_db_timestamp(article.published_at),
            image_file=article.image_file,
        )
        try:
            self._session.add(model)
            await self._session.flush()
        except SQLAlchemyError as exc:
            logger.error("Article store failure during create: %s", exc)
            raise PersistenceError("create", str(exc)) from exc

        article.id = model.id
        article.published_at = article.published_at or None
        logger.info("Created article %d", article.id)
        return True

    async def update(self, article: Article) -> bool:
        if not article.validate():
            return False

        stmt = (
            update(ArticleModel)
            .where(ArticleModel.id == article.id)
            .values(
                title=article.title,
                content=article.content,
                published_at=_to_db_timestamp(article.published_at),
            )
        )
        await self._execute("update", stmt)
        article.published_at = article.published_at or None
        return True

    async def delete(self, article: Article) -> bool:
        # Links go explicitly as well, for engines that do not cascade.
        await self._execute(
            "delete",
            delete(ArticleCategoryModel).where(ArticleCategoryModel.article_id == article.id),
        )
        await self._execute("delete", delete(ArticleModel).where(ArticleModel.id == article.id))
        logger.info("Deleted article %s", article.id)
        return True

    async def set_categories(self, article: Article, category_ids: Iterable[int | str]) -> None:
        wanted = coerce_category_ids(category_ids)

        result = await self._execute(
            "set_categories",
            select(ArticleCategoryModel.category_id).where(
                ArticleCategoryModel.article_id == article.id
            ),
        )
        changes = plan_category_changes(wanted, result.scalars().all())

        if changes.to_insert:
            await self._execute(
                "set_categories",
                insert(ArticleCategoryModel),
                [
                    {"article_id": article.id, "category_id": category_id}
                    for category_id in sorted(changes.to_insert)
                ],
            )

        if changes.to_delete:
            await self._execute(
                "set_categories",
                delete(ArticleCategoryModel).where(
                    ArticleCategoryModel.article_id == article.id,
                    ArticleCategoryModel.category_id.in_(sorted(changes.to_delete)),
                ),
            )

        logger.debug(
            "Article %s categories: +%s -%s",
            article.id,
            sorted(changes.to_insert),
            sorted(changes.to_delete),
        )

    async def set_image_file(self, article: Article, filename: str | None) -> bool:
        stmt = (
            update(ArticleModel)
            .where(ArticleModel.id == article.id)
            .values(image_file=filename)
        )
        await self._execute("set_image_file", stmt)
        article.image_file = filename
        return True

    async def publish(self, article: Article) -> str | None:
        published_at = _now().replace(microsecond=0)
        stmt = (
            update(ArticleModel)
            .where(ArticleModel.id == article.id)
            .values(published_at=published_at)
        )
        result = await self._execute("publish", stmt)
        if result.rowcount == 0:
            return None

        article.published_at = format_published_at(published_at)
        logger.info("Published article %s at %s", article.id, article.published_at)
        return article.published_at
