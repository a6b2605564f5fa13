"""Public article endpoints — published articles only."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from cms.application.schemas import ArticleListingResponse, ArticlePageResponse
from cms.application.services import ArticleService
from cms.config import get_settings
from cms.domain.exceptions import EntityNotFoundError
from cms.domain.pagination import Paginator
from cms.infrastructure.dependencies import get_article_service

router = APIRouter(prefix="/articles", tags=["Articles"])


def to_page_response(articles, paginator: Paginator) -> ArticlePageResponse:
    return ArticlePageResponse(
        articles=[ArticleListingResponse.model_validate(a, from_attributes=True) for a in articles],
        page=paginator.page,
        total_pages=paginator.total_pages,
        total=paginator.total_records,
        previous=paginator.previous,
        next=paginator.next,
    )


@router.get("", response_model=ArticlePageResponse)
async def list_articles(
    page: str | None = Query(None, description="1-based page number"),
    per_page: int | None = Query(None, ge=1, le=100),
    service: ArticleService = Depends(get_article_service),
) -> ArticlePageResponse:
    """Retrieve a page of published articles with their category names."""
    articles, paginator = await service.list_page(
        page, per_page or get_settings().articles_per_page, published_only=True
    )
    return to_page_response(articles, paginator)


@router.get("/{article_id}", response_model=ArticleListingResponse)
async def get_article(
    article_id: int,
    service: ArticleService = Depends(get_article_service),
) -> ArticleListingResponse:
    """Retrieve a single published article with its category names."""
    try:
        article = await service.get_article_with_categories(article_id, only_published=True)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return ArticleListingResponse.model_validate(article, from_attributes=True)
