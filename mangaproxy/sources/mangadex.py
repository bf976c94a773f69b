import logging
from datetime import datetime
from typing import Optional

import aiohttp

from mangaproxy.core.config import DATA_SAVER, MANGADEX_API_URL, MANGADEX_UPLOADS_URL
from mangaproxy.models import Author, Chapter, Cover, Manga, PageInfo, Relationship
from .base import MangaSource, SourceError

logger = logging.getLogger(__name__)


def _parse_datetime(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None

def _parse_relationships(data: dict) -> list[Relationship]:
    return [
        Relationship(id=rel["id"], type=rel["type"], attributes=rel.get("attributes"))
        for rel in data.get("relationships", [])
    ]


class MangaDexSource(MangaSource):
    BASE_URL = MANGADEX_API_URL
    CDN_URL = MANGADEX_UPLOADS_URL

    def __init__(self, data_saver: bool = DATA_SAVER):
        self.data_saver = data_saver
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
        return self._session

    async def _request(self, endpoint: str, params: list[tuple[str, str]] = None) -> dict:
        session = await self._get_session()
        url = f"{self.BASE_URL}{endpoint}"
        logger.debug("GET %s %s", url, params or "")
        async with session.get(url, params=params) as response:
            response.raise_for_status()
            data = await response.json()
        if data.get("result") == "error":
            errors = data.get("errors") or [{}]
            raise SourceError(errors[0].get("detail") or f"MangaDex error for {endpoint}")
        return data

    def _parse_manga(self, data: dict) -> Manga:
        attributes = data["attributes"]
        tags = []
        for tag in attributes.get("tags", []):
            tag_name = tag["attributes"]["name"].get("en", "")
            if tag_name:
                tags.append(tag_name)

        return Manga(
            id=data["id"],
            title=attributes.get("title") or {},
            alt_titles=attributes.get("altTitles") or [],
            description=attributes.get("description") or {},
            status=attributes.get("status"),
            year=attributes.get("year"),
            content_rating=attributes.get("contentRating"),
            original_language=attributes.get("originalLanguage"),
            last_chapter=attributes.get("lastChapter"),
            last_volume=attributes.get("lastVolume"),
            tags=tags,
            created_at=_parse_datetime(attributes.get("createdAt")),
            updated_at=_parse_datetime(attributes.get("updatedAt")),
            relationships=_parse_relationships(data),
        )

    def _parse_chapter(self, data: dict) -> Chapter:
        attrs = data["attributes"]
        return Chapter(
            id=data["id"],
            chapter=attrs.get("chapter"),
            volume=attrs.get("volume"),
            title=attrs.get("title"),
            translated_language=attrs.get("translatedLanguage"),
            pages=attrs.get("pages", 0),
            external_url=attrs.get("externalUrl"),
            publish_at=_parse_datetime(attrs.get("publishAt")),
            readable_at=_parse_datetime(attrs.get("readableAt")),
            created_at=_parse_datetime(attrs.get("createdAt")),
            updated_at=_parse_datetime(attrs.get("updatedAt")),
            relationships=_parse_relationships(data),
        )

    def _parse_cover(self, cover_id: str, attrs: dict, manga_id: str) -> Cover:
        file_name = attrs["fileName"]
        return Cover(
            id=cover_id,
            file_name=file_name,
            url=f"{self.CDN_URL}/covers/{manga_id}/{file_name}",
            volume=attrs.get("volume"),
            description=attrs.get("description"),
            locale=attrs.get("locale"),
        )

    def _parse_author(self, author_id: str, attrs: dict) -> Author:
        return Author(
            id=author_id,
            name=attrs.get("name", ""),
            biography=attrs.get("biography") or {},
            image_url=attrs.get("imageUrl"),
            twitter=attrs.get("twitter"),
            website=attrs.get("website"),
        )

    async def search(self, query: str, limit: int = 10) -> list[Manga]:
        params = [
            ("title", query),
            ("limit", str(limit)),
            ("hasAvailableChapters", "true"),
            ("includes[]", "cover_art"),
        ]
        data = await self._request("/manga", params)
        return [self._parse_manga(manga) for manga in data.get("data", [])]

    async def get_manga(self, manga_id: str) -> Manga:
        data = await self._request(f"/manga/{manga_id}")
        return self._parse_manga(data["data"])

    async def get_feed(self, manga_id: str, limit: int = 500, languages: list[str] = None) -> list[Chapter]:
        params = [("limit", str(limit))]
        params += [("translatedLanguage[]", lang) for lang in (languages or ["en"])]
        params += [("order[createdAt]", "desc"), ("includes[]", "manga")]
        data = await self._request(f"/manga/{manga_id}/feed", params)
        return [self._parse_chapter(chapter) for chapter in data.get("data", [])]

    async def get_chapter(self, chapter_id: str) -> Chapter:
        data = await self._request(f"/chapter/{chapter_id}")
        return self._parse_chapter(data["data"])

    async def get_readable_pages(self, chapter_id: str) -> list[PageInfo]:
        data = await self._request(f"/at-home/server/{chapter_id}")
        base_url = data["baseUrl"]
        chapter_hash = data["chapter"]["hash"]
        if self.data_saver:
            folder, filenames = "data-saver", data["chapter"]["dataSaver"]
        else:
            folder, filenames = "data", data["chapter"]["data"]

        return [
            PageInfo(page_number=i, url=f"{base_url}/{folder}/{chapter_hash}/{filename}")
            for i, filename in enumerate(filenames)
        ]

    async def resolve_cover(self, ref: Relationship, manga_id: str) -> Cover:
        if ref.attributes:
            return self._parse_cover(ref.id, ref.attributes, manga_id)
        data = await self._request(f"/cover/{ref.id}")
        return self._parse_cover(ref.id, data["data"]["attributes"], manga_id)

    async def resolve_author(self, ref: Relationship) -> Author:
        if ref.attributes:
            return self._parse_author(ref.id, ref.attributes)
        data = await self._request(f"/author/{ref.id}")
        return self._parse_author(ref.id, data["data"]["attributes"])

    async def close(self):
        if self._session and not self._session.closed:
            await self._session.close()
