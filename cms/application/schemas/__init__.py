from .article import (
    ArticleDetailResponse,
    ArticleListingResponse,
    ArticlePageResponse,
    ArticleResponse,
    ArticleWrite,
    CategoryResponse,
    PublishResponse,
    ValidationErrorResponse,
)
from .contact import ContactRequest, ContactResponse

__all__ = [
    "ArticleDetailResponse",
    "ArticleListingResponse",
    "ArticlePageResponse",
    "ArticleResponse",
    "ArticleWrite",
    "CategoryResponse",
    "PublishResponse",
    "ValidationErrorResponse",
    "ContactRequest",
    "ContactResponse",
]
