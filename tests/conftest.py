from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from mangaproxy.api.mangadex import get_source
from mangaproxy.main import app
from mangaproxy.models import Author, Chapter, Cover, Manga, PageInfo, Relationship
from mangaproxy.sources.base import MangaSource


def ts(day: int) -> datetime:
    return datetime(2024, 1, day, tzinfo=timezone.utc)


class FakeSource(MangaSource):
    """In-memory source; set ``fail`` to the name of a method that should raise."""

    def __init__(self):
        self.mangas: dict[str, Manga] = {}
        self.feeds: dict[str, list[Chapter]] = {}
        self.chapters: dict[str, Chapter] = {}
        self.pages: dict[str, list[PageInfo]] = {}
        self.covers: dict[str, Cover] = {}
        self.authors: dict[str, Author] = {}
        self.fail: set[str] = set()
        self.calls: list[tuple] = []

    def _check(self, name: str, *args):
        self.calls.append((name, *args))
        if name in self.fail:
            raise RuntimeError(f"{name} failed")

    async def search(self, query, limit=10):
        self._check("search", query, limit)
        return [m for m in self.mangas.values() if query.lower() in m.title.get("en", "").lower()][:limit]

    async def get_manga(self, manga_id):
        self._check("get_manga", manga_id)
        return self.mangas[manga_id]

    async def get_feed(self, manga_id, limit=500, languages=None):
        self._check("get_feed", manga_id, limit, tuple(languages or ()))
        return list(self.feeds.get(manga_id, []))

    async def get_chapter(self, chapter_id):
        self._check("get_chapter", chapter_id)
        return self.chapters[chapter_id]

    async def get_readable_pages(self, chapter_id):
        self._check("get_readable_pages", chapter_id)
        return self.pages[chapter_id]

    async def resolve_cover(self, ref, manga_id):
        self._check("resolve_cover", ref.id, manga_id)
        return self.covers[ref.id]

    async def resolve_author(self, ref):
        self._check("resolve_author", ref.id)
        return self.authors[ref.id]


@pytest.fixture
def fake_source():
    source = FakeSource()
    source.mangas["m1"] = Manga(
        id="m1",
        title={"en": "Frieren"},
        relationships=[
            Relationship(id="c1", type="cover_art"),
            Relationship(id="a1", type="author"),
            Relationship(id="a2", type="author"),
        ],
    )
    source.mangas["m2"] = Manga(id="m2", title={"en": "Frieren Anthology"})
    source.covers["c1"] = Cover(id="c1", file_name="cover.jpg", url="https://uploads.example/covers/m1/cover.jpg")
    source.authors["a1"] = Author(id="a1", name="Yamada Kanehito")
    source.authors["a2"] = Author(id="a2", name="Abe Tsukasa")
    source.feeds["m1"] = [
        Chapter(id="ch-12a", chapter="12", updated_at=ts(1)),
        Chapter(id="ch-12b", chapter="12", updated_at=ts(2)),
        Chapter(id="ch-12.5", chapter="12.5", updated_at=ts(3)),
        Chapter(id="ch-13", chapter="13", updated_at=ts(4)),
    ]
    source.chapters["ch-13"] = Chapter(id="ch-13", chapter="13", updated_at=ts(4))
    source.pages["ch-13"] = [
        PageInfo(page_number=0, url="https://cdn.example/data/h/1.png"),
        PageInfo(page_number=1, url="https://cdn.example/data/h/2.png"),
    ]
    return source


@pytest.fixture
def client(fake_source):
    async def override():
        yield fake_source

    app.dependency_overrides[get_source] = override
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
