"""Category lookup endpoint."""

from fastapi import APIRouter, Depends

from cms.application.schemas import CategoryResponse
from cms.application.services import ArticleService
from cms.infrastructure.dependencies import get_article_service

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.get("", response_model=list[CategoryResponse])
async def list_categories(
    service: ArticleService = Depends(get_article_service),
) -> list[CategoryResponse]:
    """Retrieve every category, ordered by name."""
    categories = await service.list_categories()
    return [CategoryResponse.model_validate(c, from_attributes=True) for c in categories]
