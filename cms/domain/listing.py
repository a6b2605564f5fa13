"""Folding of joined article×category rows into one listing entry per article."""

from collections.abc import Iterable

from cms.domain.entities import ArticleCategoryRow, ArticleListing


def fold_category_rows(rows: Iterable[ArticleCategoryRow]) -> dict[int, ArticleListing]:
    """Group rows by article id, keeping first-seen article order.

    Category names accumulate in row order. A row without a category (the
    LEFT JOIN placeholder) contributes no name, so an uncategorised article
    ends up with an empty ``category_names`` list.
    """
    articles: dict[int, ArticleListing] = {}

    for row in rows:
        listing = articles.get(row.id)
        if listing is None:
            listing = ArticleListing(
                id=row.id,
                title=row.title,
                content=row.content,
                published_at=row.published_at,
                image_file=row.image_file,
            )
            articles[row.id] = listing

        if row.category_name is not None:
            listing.category_names.append(row.category_name)

    return articles
