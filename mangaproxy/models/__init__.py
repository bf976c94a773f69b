from .manga import Author, Cover, Manga, Relationship, ResolvedManga
from .chapter import Chapter
from .page import PageInfo

__all__ = ["Author", "Cover", "Manga", "Relationship", "ResolvedManga", "Chapter", "PageInfo"]
