"""Domain entities — pure Python business objects, no framework dependencies."""

from dataclasses import dataclass, field
from datetime import datetime

# Fixed wire/storage format for publication timestamps.
PUBLISHED_AT_FORMAT = "%Y-%m-%d %H:%M:%S"


def parse_published_at(value: str) -> datetime:
    """Parse a publication timestamp, raising ValueError unless it matches exactly."""
    return datetime.strptime(value, PUBLISHED_AT_FORMAT)


def format_published_at(value: datetime) -> str:
    return value.strftime(PUBLISHED_AT_FORMAT)


@dataclass
class Article:
    """Core domain entity representing a piece of writing for publication.

    ``published_at`` holds the formatted timestamp string (or ``None``/``""``
    for a draft). ``errors`` is transient and never persisted.
    """

    title: str = ""
    content: str = ""
    published_at: str | None = None
    image_file: str | None = None
    id: int | None = None
    errors: list[str] = field(default_factory=list, compare=False)

    @property
    def is_published(self) -> bool:
        return bool(self.published_at)

    def validate(self) -> bool:
        """Check the current field values, collecting every failure in ``errors``.

        Returns True when no rule failed.
        """
        self.errors = []

        if not self.title:
            self.errors.append("Title is required")

        if not self.content:
            self.errors.append("Content is required")

        if self.published_at:
            try:
                parse_published_at(self.published_at)
            except ValueError:
                self.errors.append("Invalid Publication Date")

        return not self.errors


@dataclass
class ArticleListing:
    """An article as it appears in a listing page, with its category names."""

    id: int
    title: str
    content: str
    published_at: str | None = None
    image_file: str | None = None
    category_names: list[str] = field(default_factory=list)

    @property
    def is_published(self) -> bool:
        return bool(self.published_at)


@dataclass
class ArticleCategoryRow:
    """One flat row of an article left-joined with one of its categories.

    ``category_name`` is None when the article has no categories.
    """

    id: int
    title: str
    content: str
    published_at: str | None
    image_file: str | None
    category_name: str | None
