import os


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}

def _env_list(name: str, default: list[str]) -> list[str]:
    value = os.environ.get(name)
    if not value:
        return default
    return [item.strip() for item in value.split(",") if item.strip()]


MANGADEX_API_URL = os.environ.get("MANGADEX_API_URL", "https://api.mangadex.org").rstrip("/")
MANGADEX_UPLOADS_URL = os.environ.get("MANGADEX_UPLOADS_URL", "https://uploads.mangadex.org").rstrip("/")

ROUTE_PREFIX = os.environ.get("MANGAPROXY_ROUTE_PREFIX", "").rstrip("/")
SEARCH_LIMIT = int(os.environ.get("MANGAPROXY_SEARCH_LIMIT", "10"))
FEED_LIMIT = int(os.environ.get("MANGAPROXY_FEED_LIMIT", "500"))
FEED_LANGUAGES = _env_list("MANGAPROXY_FEED_LANGUAGES", ["en"])
DATA_SAVER = _env_bool("MANGAPROXY_DATA_SAVER")

HOST = os.environ.get("MANGAPROXY_HOST", "127.0.0.1")
PORT = int(os.environ.get("MANGAPROXY_PORT", "3000"))
LOG_LEVEL = os.environ.get("MANGAPROXY_LOG_LEVEL", "INFO").upper()
