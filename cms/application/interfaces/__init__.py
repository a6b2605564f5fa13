from .article_repository import ArticleProjection, ArticleRepository
from .category_repository import CategoryRepository
from .image_storage import ImageStorage
from .mail_sender import MailSender
from .password_hasher import PasswordHasher
from .user_repository import UserRepository

__all__ = [
    "ArticleProjection",
    "ArticleRepository",
    "CategoryRepository",
    "ImageStorage",
    "MailSender",
    "PasswordHasher",
    "UserRepository",
]
