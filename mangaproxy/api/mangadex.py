import logging
from urllib.parse import unquote

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from mangaproxy.services.manga_service import chapter_with_pages, latest_chapters, search_manga
from mangaproxy.sources import MangaDexSource, MangaSource

logger = logging.getLogger(__name__)

router = APIRouter(tags=["mangadex"])

GENERIC_ERROR = "Something went wrong. Please try again later."

ROUTES_INFO = {
    "intro": "Welcome to the mangadex provider: check out the provider's website @ https://mangadex.org/",
    "routes": ["/:query", "/info/:id", "/read/:mangaId", "/chapter/:chapterId"],
    "documentation": "https://api.mangadex.org/docs/",
}


async def get_source():
    async with MangaDexSource() as source:
        yield source


def _error_response() -> JSONResponse:
    return JSONResponse(status_code=500, content={"message": GENERIC_ERROR})


@router.get("/")
def index():
    return ROUTES_INFO


@router.get("/info/{manga_id:path}")
async def manga_info(manga_id: str, source: MangaSource = Depends(get_source)):
    manga_id = unquote(manga_id)
    try:
        return await source.get_manga(manga_id)
    except Exception:
        logger.exception("Failed to fetch manga %s", manga_id)
        return _error_response()


@router.get("/read/{manga_id}")
async def read_manga(manga_id: str, source: MangaSource = Depends(get_source)):
    try:
        return await latest_chapters(source, manga_id)
    except Exception:
        logger.exception("Failed to fetch chapters for manga %s", manga_id)
        return _error_response()


@router.get("/chapter/{chapter_id}")
async def read_chapter(chapter_id: str, source: MangaSource = Depends(get_source)):
    try:
        chapter, pages = await chapter_with_pages(source, chapter_id)
    except Exception:
        logger.exception("Failed to fetch chapter %s", chapter_id)
        return _error_response()
    return {"chapter": chapter, "pages": pages}


@router.get("/{query}")
async def search(query: str, source: MangaSource = Depends(get_source)):
    try:
        return await search_manga(source, query)
    except Exception:
        logger.exception("Search failed for %r", query)
        return _error_response()
