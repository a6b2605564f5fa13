"""SQLAlchemy ORM models for articles and their category links."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from cms.infrastructure.database.base import Base


class ArticleModel(Base):
    """ORM model — maps to the 'articles' table."""

    __tablename__ = "articles"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    published_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True, index=True)
    image_file: Mapped[str | None] = mapped_column(String(128), nullable=True)

    def __repr__(self) -> str:
        return f"<ArticleModel(id={self.id}, title='{self.title}')>"


class ArticleCategoryModel(Base):
    """ORM model — maps to the 'article_category' join table.

    The composite primary key keeps each (article, category) pair unique.
    """

    __tablename__ = "article_category"

    article_id: Mapped[int] = mapped_column(
        ForeignKey("articles.id", ondelete="CASCADE"), primary_key=True
    )
    category_id: Mapped[int] = mapped_column(
        ForeignKey("category.id", ondelete="CASCADE"), primary_key=True
    )

    def __repr__(self) -> str:
        return (
            f"<ArticleCategoryModel(article_id={self.article_id}, "
            f"category_id={self.category_id})>"
        )
