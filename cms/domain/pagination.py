"""Page-number arithmetic for paginated listings."""

import math
from dataclasses import dataclass, field


@dataclass
class Paginator:
    """Translate a 1-based page number into LIMIT/OFFSET and neighbour pages.

    ``page`` accepts raw query-string values; anything that is not a positive
    integer falls back to the first page.
    """

    page: int | str | None
    records_per_page: int
    total_records: int
    limit: int = field(init=False)
    offset: int = field(init=False)
    total_pages: int = field(init=False)

    def __post_init__(self) -> None:
        if self.records_per_page < 1:
            raise ValueError("records_per_page must be at least 1")

        try:
            page = int(self.page)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            page = 1
        self.page = max(page, 1)

        self.limit = self.records_per_page
        self.offset = (self.page - 1) * self.records_per_page
        self.total_pages = max(math.ceil(self.total_records / self.records_per_page), 1)

    @property
    def previous(self) -> int | None:
        return self.page - 1 if self.page > 1 else None

    @property
    def next(self) -> int | None:
        return self.page + 1 if self.page < self.total_pages else None
