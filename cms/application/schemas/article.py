"""Pydantic DTOs (Data Transfer Objects) for the Article feature.

Write schemas deliberately accept empty strings: the article's own rule set
decides what is valid so editors get the same messages from every caller.
"""

from pydantic import BaseModel, Field


class ArticleWrite(BaseModel):
    """Schema for creating or updating an article from the editor form."""

    title: str = Field("", examples=["Hello world"])
    content: str = Field("", examples=["The first article on this site."])
    published_at: str | None = Field(None, examples=["2024-05-01 09:30:00"])
    category_ids: list[int] = Field(default_factory=list, examples=[[1, 3]])


class CategoryResponse(BaseModel):
    id: int
    name: str

    model_config = {"from_attributes": True}


class ArticleResponse(BaseModel):
    """Schema returned to the client."""

    id: int
    title: str
    content: str
    published_at: str | None
    image_file: str | None
    is_published: bool

    model_config = {"from_attributes": True}


class ArticleDetailResponse(ArticleResponse):
    """An article together with its linked categories."""

    categories: list[CategoryResponse] = Field(default_factory=list)


class ArticleListingResponse(BaseModel):
    id: int
    title: str
    content: str
    published_at: str | None
    image_file: str | None
    category_names: list[str]

    model_config = {"from_attributes": True}


class ArticlePageResponse(BaseModel):
    """One page of a listing plus the numbers needed to render pager links."""

    articles: list[ArticleListingResponse]
    page: int
    total_pages: int
    total: int
    previous: int | None
    next: int | None


class PublishResponse(BaseModel):
    published_at: str


class ValidationErrorResponse(BaseModel):
    errors: list[str]
