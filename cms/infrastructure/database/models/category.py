"""SQLAlchemy ORM model for the Category lookup table."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from cms.infrastructure.database.base import Base


class CategoryModel(Base):
    """ORM model — maps to the 'category' table."""

    __tablename__ = "category"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)

    def __repr__(self) -> str:
        return f"<CategoryModel(id={self.id}, name='{self.name}')>"
