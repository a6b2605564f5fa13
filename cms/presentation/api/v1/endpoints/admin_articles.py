"""Admin article endpoints — every route requires a logged-in user."""

from fastapi import APIRouter, Depends, HTTPException, Query, UploadFile, status

from cms.application.interfaces import ImageStorage
from cms.application.schemas import (
    ArticleDetailResponse,
    ArticlePageResponse,
    ArticleResponse,
    ArticleWrite,
    CategoryResponse,
    PublishResponse,
    ValidationErrorResponse,
)
from cms.application.services import ArticleService
from cms.config import get_settings
from cms.domain.exceptions import ArticleValidationError, EntityNotFoundError
from cms.infrastructure.dependencies import get_article_service, get_image_storage, require_admin
from cms.presentation.api.v1.endpoints.articles import to_page_response

router = APIRouter(
    prefix="/admin/articles",
    tags=["Admin"],
    dependencies=[Depends(require_admin)],
)

_VALIDATION_RESPONSES = {
    422: {"model": ValidationErrorResponse},
}


@router.get("", response_model=ArticlePageResponse)
async def list_articles(
    page: str | None = Query(None, description="1-based page number"),
    per_page: int | None = Query(None, ge=1, le=100),
    service: ArticleService = Depends(get_article_service),
) -> ArticlePageResponse:
    """Retrieve a page of all articles, drafts included."""
    articles, paginator = await service.list_page(
        page, per_page or get_settings().articles_per_page, published_only=False
    )
    return to_page_response(articles, paginator)


@router.get("/{article_id}", response_model=ArticleDetailResponse)
async def get_article(
    article_id: int,
    service: ArticleService = Depends(get_article_service),
) -> ArticleDetailResponse:
    """Retrieve an article with the categories it is linked to."""
    try:
        article, categories = await service.get_article_detail(article_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return ArticleDetailResponse(
        **ArticleResponse.model_validate(article, from_attributes=True).model_dump(),
        categories=[CategoryResponse.model_validate(c, from_attributes=True) for c in categories],
    )


@router.post(
    "",
    response_model=ArticleResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_VALIDATION_RESPONSES,
)
async def create_article(
    data: ArticleWrite,
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    """Create a new article and link the selected categories."""
    article = await service.create_article(data)
    return ArticleResponse.model_validate(article, from_attributes=True)


@router.put("/{article_id}", response_model=ArticleResponse, responses=_VALIDATION_RESPONSES)
async def update_article(
    article_id: int,
    data: ArticleWrite,
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    """Update an existing article and resync its categories."""
    try:
        article = await service.update_article(article_id, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return ArticleResponse.model_validate(article, from_attributes=True)


@router.delete("/{article_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_article(
    article_id: int,
    service: ArticleService = Depends(get_article_service),
) -> None:
    """Delete an article by ID."""
    try:
        await service.delete_article(article_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("/{article_id}/publish", response_model=PublishResponse)
async def publish_article(
    article_id: int,
    service: ArticleService = Depends(get_article_service),
) -> PublishResponse:
    """Publish an article now; republishing resets the timestamp."""
    try:
        published_at = await service.publish_article(article_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return PublishResponse(published_at=published_at)


@router.post("/{article_id}/image", response_model=ArticleResponse, responses=_VALIDATION_RESPONSES)
async def upload_image(
    article_id: int,
    file: UploadFile,
    service: ArticleService = Depends(get_article_service),
    image_storage: ImageStorage = Depends(get_image_storage),
) -> ArticleResponse:
    """Upload an image for the article, replacing any previous one."""
    limit = image_storage.max_size_bytes
    if file.size is not None and file.size > limit:
        raise ArticleValidationError([f"Image exceeds {limit} bytes"])

    # One byte past the limit is enough for the storage to reject it.
    content = await file.read(limit + 1)
    try:
        article = await service.replace_image(article_id, content, file.filename or "")
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise ArticleValidationError([str(e)]) from e
    return ArticleResponse.model_validate(article, from_attributes=True)


@router.delete("/{article_id}/image", response_model=ArticleResponse)
async def delete_image(
    article_id: int,
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    """Remove the article's image."""
    try:
        article = await service.remove_image(article_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return ArticleResponse.model_validate(article, from_attributes=True)
