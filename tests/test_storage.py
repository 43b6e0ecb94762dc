from datetime import datetime, timedelta, timezone

import pytest

from newslens.models import Article, BiasVerdict
from newslens.storage import (
    ArticleQuery,
    DuplicateArticleError,
    InMemoryArticleRepository,
    JsonArticleRepository,
    bias_stats,
    create_repository,
)

BASE_TIME = datetime(2024, 5, 1, tzinfo=timezone.utc)


def _article(n: int, *, category="politics", label="center", source="Reuters") -> Article:
    return Article(
        title=f"Story {n}",
        url=f"https://example.com/{n}",
        source=source,
        published_at=BASE_TIME + timedelta(hours=n),
        category=category,
        bias=BiasVerdict(score=0.0, label=label, confidence=0.5, keywords=("reform",)),
    )


@pytest.fixture(params=["memory", "json"])
def repo(request, tmp_path):
    if request.param == "memory":
        return InMemoryArticleRepository()
    return JsonArticleRepository(tmp_path / "articles.json")


def test_insert_enforces_unique_url(repo):
    repo.insert(_article(1))
    with pytest.raises(DuplicateArticleError):
        repo.insert(_article(1))
    assert repo.count_all() == 1
    assert repo.find_by_url("https://example.com/1").title == "Story 1"
    assert repo.find_by_url("https://example.com/404") is None


def test_aggregates(repo):
    repo.insert(_article(1, category="politics", label="left", source="Reuters"))
    repo.insert(_article(2, category="science", label="left", source="AP"))
    repo.insert(_article(3, category="science", label="neutral", source="AP"))

    assert repo.distinct_categories() == {"politics", "science"}
    assert repo.distinct_sources() == {"Reuters", "AP"}
    assert repo.count_by_bias_label() == {"left": 2, "neutral": 1}
    assert bias_stats(repo) == {"left": 2, "center": 0, "right": 0, "neutral": 1}


def test_bias_stats_on_empty_store_lists_every_label():
    assert bias_stats(InMemoryArticleRepository()) == {"left": 0, "center": 0, "right": 0, "neutral": 0}


def test_find_articles_filters_sorts_and_paginates(repo):
    for n in range(5):
        repo.insert(_article(n, category="politics" if n % 2 else "business", label="right" if n < 3 else "left"))

    page = repo.find_articles(ArticleQuery(categories=["business"], page=1, limit=2))
    assert [a.url for a in page.articles] == ["https://example.com/4", "https://example.com/2"]
    assert page.total == 3
    assert page.total_pages == 2

    page2 = repo.find_articles(ArticleQuery(categories=["business"], page=2, limit=2))
    assert [a.url for a in page2.articles] == ["https://example.com/0"]

    assert repo.find_articles(ArticleQuery(bias="left")).total == 2
    assert repo.find_articles(ArticleQuery(source="reut", bias="all")).total == 5
    assert repo.find_articles(ArticleQuery(source="bbc")).total == 0


def test_json_store_survives_reload(tmp_path):
    path = tmp_path / "store" / "articles.json"
    first = JsonArticleRepository(path)
    first.insert(_article(7, label="right"))

    reloaded = JsonArticleRepository(path)
    stored = reloaded.find_by_url("https://example.com/7")
    assert stored is not None
    assert stored.bias.label == "right"
    assert stored.bias.keywords == ("reform",)
    assert stored.published_at == BASE_TIME + timedelta(hours=7)


@pytest.mark.parametrize("body", ["{not json", '{"foo": 1}', '["x"]', '[{"title": "a"}, 3]', '[{"title": "a", "url": "u", "bias": "left"}]', "42"])
def test_json_store_starts_empty_on_corrupt_file(tmp_path, body):
    path = tmp_path / "articles.json"
    path.write_text(body, encoding="utf-8")
    repo = JsonArticleRepository(path)
    assert repo.count_all() == 0
    repo.insert(Article(title="fresh", url="https://example.com/fresh", source="Wire"))
    assert JsonArticleRepository(path).count_all() == 1


def test_create_repository(tmp_path):
    assert isinstance(create_repository("memory"), InMemoryArticleRepository)
    assert isinstance(create_repository("JSON", tmp_path / "a.json"), JsonArticleRepository)
    with pytest.raises(ValueError):
        create_repository("mongo")
