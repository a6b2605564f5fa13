"""Integration tests for SQLAlchemyArticleRepository against in-memory SQLite."""

from datetime import datetime

import pytest
from sqlalchemy import func, select

from cms.application.interfaces import ArticleProjection
from cms.domain.entities import Article
from cms.domain.exceptions import PersistenceError
from cms.infrastructure.database.models import ArticleCategoryModel
from cms.infrastructure.database.repositories import SQLAlchemyArticleRepository
from cms.infrastructure.database.repositories import article_repository as repository_module


async def _create(repo, title, published_at=None, content="Body"):
    article = Article(title=title, content=content, published_at=published_at)
    assert await repo.create(article)
    return article


async def _link_count(session) -> int:
    result = await session.execute(select(func.count()).select_from(ArticleCategoryModel))
    return result.scalar_one()


# ── create / get_by_id ───────────────────────────────────────────────


@pytest.mark.asyncio
async def test_create_assigns_id_and_round_trips(session):
    repo = SQLAlchemyArticleRepository(session)
    article = Article(title="Hello", content="World", published_at="2024-01-02 10:30:00")

    assert await repo.create(article) is True
    assert article.id is not None
    assert article.errors == []

    loaded = await repo.get_by_id(article.id)
    assert loaded == article
    assert loaded.errors == []
    assert loaded.is_published


@pytest.mark.asyncio
async def test_create_with_empty_publication_date_stores_draft(session):
    repo = SQLAlchemyArticleRepository(session)
    article = Article(title="Draft", content="Not yet", published_at="")

    assert await repo.create(article)

    loaded = await repo.get_by_id(article.id)
    assert loaded.published_at is None
    assert not loaded.is_published
    assert loaded == article


@pytest.mark.asyncio
async def test_create_invalid_article_collects_all_errors_and_writes_nothing(session):
    repo = SQLAlchemyArticleRepository(session)
    article = Article(title="", content="", published_at="2024-13-45 99:00:00")

    assert await repo.create(article) is False
    assert sorted(article.errors) == sorted(
        ["Title is required", "Content is required", "Invalid Publication Date"]
    )
    assert article.id is None
    assert await repo.get_total() == 0


@pytest.mark.asyncio
async def test_create_rejects_out_of_range_day(session):
    repo = SQLAlchemyArticleRepository(session)
    article = Article(title="T", content="C", published_at="2024-01-32 10:00:00")

    assert await repo.create(article) is False
    assert article.errors == ["Invalid Publication Date"]


@pytest.mark.asyncio
async def test_get_by_id_returns_none_when_missing(session):
    repo = SQLAlchemyArticleRepository(session)
    assert await repo.get_by_id(404) is None


@pytest.mark.asyncio
async def test_get_by_id_summary_projection(session):
    repo = SQLAlchemyArticleRepository(session)
    article = await _create(repo, "Summary", "2024-03-01 08:00:00", content="Long body")

    loaded = await repo.get_by_id(article.id, ArticleProjection.SUMMARY)
    assert loaded.id == article.id
    assert loaded.title == "Summary"
    assert loaded.published_at == "2024-03-01 08:00:00"
    assert loaded.content == ""


@pytest.mark.asyncio
async def test_get_by_id_rejects_unknown_projection(session):
    repo = SQLAlchemyArticleRepository(session)
    with pytest.raises(ValueError):
        await repo.get_by_id(1, "id, (SELECT password FROM users)")


# ── update ───────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_update_with_empty_publication_date_makes_draft(session):
    repo = SQLAlchemyArticleRepository(session)
    article = await _create(repo, "Live", "2024-01-01 00:00:00")

    article.published_at = ""
    assert await repo.update(article)

    loaded = await repo.get_by_id(article.id)
    assert loaded.published_at is None
    assert not loaded.is_published


@pytest.mark.asyncio
async def test_update_invalid_does_not_touch_store(session):
    repo = SQLAlchemyArticleRepository(session)
    article = await _create(repo, "Original", "2024-01-01 00:00:00")

    article.title = ""
    article.published_at = "yesterday"
    assert await repo.update(article) is False
    assert sorted(article.errors) == ["Invalid Publication Date", "Title is required"]

    loaded = await repo.get_by_id(article.id)
    assert loaded.title == "Original"
    assert loaded.published_at == "2024-01-01 00:00:00"


@pytest.mark.asyncio
async def test_update_clears_errors_once_corrected(session):
    repo = SQLAlchemyArticleRepository(session)
    article = await _create(repo, "Original")

    article.content = ""
    assert await repo.update(article) is False
    article.content = "Fixed"
    assert await repo.update(article) is True
    assert article.errors == []


# ── listings ─────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_get_all_orders_drafts_first_then_by_publication(session):
    repo = SQLAlchemyArticleRepository(session)
    late = await _create(repo, "Late", "2024-06-01 00:00:00")
    draft = await _create(repo, "Draft")
    early = await _create(repo, "Early", "2024-01-01 00:00:00")

    articles = await repo.get_all()
    assert [a.id for a in articles] == [draft.id, early.id, late.id]


@pytest.mark.asyncio
async def test_get_page_published_only_paginates_before_join(session, categories):
    repo = SQLAlchemyArticleRepository(session)
    first = await _create(repo, "First", "2024-01-01 00:00:00")
    second = await _create(repo, "Second", "2024-02-01 00:00:00")
    third = await _create(repo, "Third", "2024-03-01 00:00:00")
    await _create(repo, "Draft A")
    await _create(repo, "Draft B")

    await repo.set_categories(first, [categories["News"], categories["Tech"], categories["Travel"]])
    await repo.set_categories(second, [categories["Tech"]])
    await repo.set_categories(third, [categories["News"]])

    page = await repo.get_page(limit=2, offset=0, published_only=True)

    assert list(page) == [first.id, second.id]
    assert all(listing.is_published for listing in page.values())
    assert page[first.id].category_names == ["News", "Tech", "Travel"]
    assert page[second.id].category_names == ["Tech"]

    next_page = await repo.get_page(limit=2, offset=2, published_only=True)
    assert list(next_page) == [third.id]
    assert next_page[third.id].category_names == ["News"]


@pytest.mark.asyncio
async def test_get_page_uncategorised_article_has_no_names(session):
    repo = SQLAlchemyArticleRepository(session)
    article = await _create(repo, "Bare", "2024-01-01 00:00:00")

    page = await repo.get_page(limit=10, offset=0)
    assert page[article.id].category_names == []


@pytest.mark.asyncio
async def test_get_page_includes_drafts_when_not_filtered(session):
    repo = SQLAlchemyArticleRepository(session)
    draft = await _create(repo, "Draft")
    live = await _create(repo, "Live", "2024-01-01 00:00:00")

    page = await repo.get_page(limit=10, offset=0, published_only=False)
    assert list(page) == [draft.id, live.id]


@pytest.mark.asyncio
async def test_get_total_counts_published_only_when_asked(session):
    repo = SQLAlchemyArticleRepository(session)
    for index in range(3):
        await _create(repo, f"Live {index}", f"2024-01-0{index + 1} 00:00:00")
    await _create(repo, "Draft A")
    await _create(repo, "Draft B")

    assert await repo.get_total() == 5
    assert await repo.get_total(published_only=True) == 3


@pytest.mark.asyncio
async def test_get_with_categories_returns_one_row_per_category(session, categories):
    repo = SQLAlchemyArticleRepository(session)
    article = await _create(repo, "Tagged", "2024-01-01 00:00:00")
    await repo.set_categories(article, [categories["Tech"], categories["News"]])

    rows = await repo.get_with_categories(article.id)
    assert sorted(row.category_name for row in rows) == ["News", "Tech"]
    assert {row.id for row in rows} == {article.id}


@pytest.mark.asyncio
async def test_get_with_categories_without_links_yields_placeholder_row(session):
    repo = SQLAlchemyArticleRepository(session)
    article = await _create(repo, "Bare")

    rows = await repo.get_with_categories(article.id)
    assert len(rows) == 1
    assert rows[0].category_name is None
    assert rows[0].title == "Bare"


@pytest.mark.asyncio
async def test_get_with_categories_hides_drafts_when_only_published(session):
    repo = SQLAlchemyArticleRepository(session)
    article = await _create(repo, "Draft")

    assert await repo.get_with_categories(article.id, only_published=True) == []
    assert await repo.get_with_categories(999) == []


# ── categories ───────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_set_categories_is_idempotent(session, categories):
    repo = SQLAlchemyArticleRepository(session)
    article = await _create(repo, "Tagged")
    ids = [categories["News"], categories["Tech"]]

    await repo.set_categories(article, ids)
    await repo.set_categories(article, ids)

    linked = await repo.get_categories(article)
    assert sorted(c.name for c in linked) == ["News", "Tech"]
    assert await _link_count(session) == 2


@pytest.mark.asyncio
async def test_set_categories_reconciles_inserts_and_deletes(session, categories):
    repo = SQLAlchemyArticleRepository(session)
    article = await _create(repo, "Tagged")

    await repo.set_categories(article, [categories["News"], categories["Tech"]])
    await repo.set_categories(article, [str(categories["Tech"]), str(categories["Travel"])])

    linked = await repo.get_categories(article)
    assert sorted(c.name for c in linked) == ["Tech", "Travel"]


@pytest.mark.asyncio
async def test_set_categories_with_empty_list_removes_every_link(session, categories):
    repo = SQLAlchemyArticleRepository(session)
    article = await _create(repo, "Tagged")
    other = await _create(repo, "Other")
    await repo.set_categories(article, list(categories.values()))
    await repo.set_categories(other, [categories["News"]])

    await repo.set_categories(article, [])

    assert await repo.get_categories(article) == []
    assert [c.name for c in await repo.get_categories(other)] == ["News"]


@pytest.mark.asyncio
async def test_set_categories_with_unknown_category_raises_persistence_error(session):
    repo = SQLAlchemyArticleRepository(session)
    article = await _create(repo, "Tagged")

    with pytest.raises(PersistenceError):
        await repo.set_categories(article, [12345])


# ── single-field mutations ───────────────────────────────────────────


@pytest.mark.asyncio
async def test_publish_sets_and_overwrites_timestamp(session, monkeypatch):
    repo = SQLAlchemyArticleRepository(session)
    article = await _create(repo, "Draft")

    monkeypatch.setattr(repository_module, "_now", lambda: datetime(2024, 5, 1, 9, 0, 0, 123456))
    first = await repo.publish(article)
    assert first == "2024-05-01 09:00:00"
    assert (await repo.get_by_id(article.id)).published_at == first

    monkeypatch.setattr(repository_module, "_now", lambda: datetime(2024, 5, 2, 18, 15, 30))
    second = await repo.publish(article)
    assert second == "2024-05-02 18:15:30"
    assert second > first
    assert (await repo.get_by_id(article.id)).published_at == second


@pytest.mark.asyncio
async def test_publish_matches_fixed_format(session):
    repo = SQLAlchemyArticleRepository(session)
    article = await _create(repo, "Draft")

    published_at = await repo.publish(article)
    assert datetime.strptime(published_at, "%Y-%m-%d %H:%M:%S")
    assert article.published_at == published_at


@pytest.mark.asyncio
async def test_publish_missing_article_returns_none(session):
    repo = SQLAlchemyArticleRepository(session)
    assert await repo.publish(Article(id=999, title="Ghost", content="Gone")) is None


@pytest.mark.asyncio
async def test_set_image_file_sets_and_clears(session):
    repo = SQLAlchemyArticleRepository(session)
    article = await _create(repo, "Pictured")

    assert await repo.set_image_file(article, "cover.png")
    assert (await repo.get_by_id(article.id)).image_file == "cover.png"

    assert await repo.set_image_file(article, None)
    assert (await repo.get_by_id(article.id)).image_file is None


# ── delete ───────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_delete_removes_article_and_its_links(session, categories):
    repo = SQLAlchemyArticleRepository(session)
    article = await _create(repo, "Doomed")
    await repo.set_categories(article, list(categories.values()))

    assert await repo.delete(article)

    assert await repo.get_by_id(article.id) is None
    assert await repo.get_categories(article) == []
    assert await _link_count(session) == 0


@pytest.mark.asyncio
async def test_delete_missing_article_is_not_an_error(session):
    repo = SQLAlchemyArticleRepository(session)
    assert await repo.delete(Article(id=999)) is True
