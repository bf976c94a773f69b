import asyncio
import logging
from typing import Optional

from mangaproxy.core.chapters import select_latest_per_label
from mangaproxy.core.config import FEED_LANGUAGES, FEED_LIMIT, SEARCH_LIMIT
from mangaproxy.models import Author, Chapter, Cover, Manga, PageInfo, ResolvedManga
from mangaproxy.sources.base import MangaSource

logger = logging.getLogger(__name__)


async def _join_all(coros) -> list:
    """Await every coroutine; on the first failure cancel the rest before raising."""
    tasks = [asyncio.ensure_future(coro) for coro in coros]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            if not task.done():
                task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


async def _resolve_one(source: MangaSource, manga: Manga) -> ResolvedManga:
    cover_ref = manga.cover_ref
    author_refs = manga.author_refs

    async def cover() -> Optional[Cover]:
        if cover_ref is None:
            return None
        return await source.resolve_cover(cover_ref, manga.id)

    async def authors() -> Optional[list[Author]]:
        if not author_refs:
            return None
        return await _join_all(source.resolve_author(ref) for ref in author_refs)

    main_cover, resolved_authors = await _join_all([cover(), authors()])
    return ResolvedManga(
        **vars(manga),
        main_cover_resolved=main_cover,
        authors_resolved=resolved_authors,
    )


async def resolve_search_results(source: MangaSource, mangas: list[Manga]) -> list[ResolvedManga]:
    """Fetch every result's cover and authors at once.

    Order follows ``mangas``; the first failure cancels the lookups still in
    flight and propagates.
    """
    return await _join_all(_resolve_one(source, manga) for manga in mangas)


async def search_manga(source: MangaSource, query: str, limit: int = SEARCH_LIMIT) -> list[ResolvedManga]:
    mangas = await source.search(query, limit)
    logger.info("Search %r returned %d results", query, len(mangas))
    return await resolve_search_results(source, mangas)


async def latest_chapters(source: MangaSource, manga_id: str,
                          limit: int = FEED_LIMIT, languages: list[str] = None) -> list[Chapter]:
    manga = await source.get_manga(manga_id)
    chapters = await source.get_feed(manga.id, limit=limit, languages=languages or FEED_LANGUAGES)
    selected = select_latest_per_label(chapters)
    logger.info("Manga %s: %d feed entries, %d distinct chapters", manga.id, len(chapters), len(selected))
    return selected


async def chapter_with_pages(source: MangaSource, chapter_id: str) -> tuple[Chapter, list[PageInfo]]:
    chapter = await source.get_chapter(chapter_id)
    pages = await source.get_readable_pages(chapter.id)
    return chapter, pages
