from .article import ArticleCategoryModel, ArticleModel
from .category import CategoryModel
from .user import UserModel

__all__ = [
    "ArticleModel",
    "ArticleCategoryModel",
    "CategoryModel",
    "UserModel",
]
