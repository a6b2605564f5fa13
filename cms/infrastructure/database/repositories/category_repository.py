"""Concrete repository implementation for categories backed by SQLAlchemy."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cms.application.interfaces import CategoryRepository
from cms.domain.entities import Category
from cms.infrastructure.database.models import CategoryModel


class SQLAlchemyCategoryRepository(CategoryRepository):
    """Implements the CategoryRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: CategoryModel) -> Category:
        return Category(id=model.id, name=model.name)

    async def get_all(self) -> list[Category]:
        stmt = select(CategoryModel).order_by(CategoryModel.name)
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]
