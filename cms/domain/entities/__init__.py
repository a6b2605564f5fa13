from .article import (
    PUBLISHED_AT_FORMAT,
    Article,
    ArticleCategoryRow,
    ArticleListing,
    format_published_at,
    parse_published_at,
)
from .category import Category
from .contact_message import ContactMessage
from .user import User

__all__ = [
    "PUBLISHED_AT_FORMAT",
    "Article",
    "ArticleCategoryRow",
    "ArticleListing",
    "format_published_at",
    "parse_published_at",
    "Category",
    "ContactMessage",
    "User",
]
