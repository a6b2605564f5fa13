from .article_repository import SQLAlchemyArticleRepository
from .category_repository import SQLAlchemyCategoryRepository
from .user_repository import SQLAlchemyUserRepository

__all__ = [
    "SQLAlchemyArticleRepository",
    "SQLAlchemyCategoryRepository",
    "SQLAlchemyUserRepository",
]
