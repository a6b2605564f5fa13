from .article_service import ArticleService
from .auth_service import AuthService
from .contact_service import ContactService

__all__ = [
    "ArticleService",
    "AuthService",
    "ContactService",
]
