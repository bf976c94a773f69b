from abc import ABC, abstractmethod

from mangaproxy.models import Author, Chapter, Cover, Manga, PageInfo, Relationship


class SourceError(Exception):
    """The upstream answered, but with an error payload."""


class MangaSource(ABC):
    @abstractmethod
    async def search(self, query: str, limit: int = 10) -> list[Manga]:
        pass

    @abstractmethod
    async def get_manga(self, manga_id: str) -> Manga:
        pass

    @abstractmethod
    async def get_feed(self, manga_id: str, limit: int = 500, languages: list[str] = None) -> list[Chapter]:
        pass

    @abstractmethod
    async def get_chapter(self, chapter_id: str) -> Chapter:
        pass

    @abstractmethod
    async def get_readable_pages(self, chapter_id: str) -> list[PageInfo]:
        pass

    @abstractmethod
    async def resolve_cover(self, ref: Relationship, manga_id: str) -> Cover:
        pass

    @abstractmethod
    async def resolve_author(self, ref: Relationship) -> Author:
        pass

    async def close(self):
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
