from .base import MangaSource, SourceError
from .mangadex import MangaDexSource

__all__ = ["MangaSource", "SourceError", "MangaDexSource"]
