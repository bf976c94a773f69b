from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class Relationship:
    id: str
    type: str
    attributes: Optional[dict] = None


@dataclass
class Cover:
    id: str
    file_name: str
    url: Optional[str] = None
    volume: Optional[str] = None
    description: Optional[str] = None
    locale: Optional[str] = None


@dataclass
class Author:
    id: str
    name: str
    biography: dict[str, str] = field(default_factory=dict)
    image_url: Optional[str] = None
    twitter: Optional[str] = None
    website: Optional[str] = None


@dataclass
class Manga:
    id: str
    title: dict[str, str] = field(default_factory=dict)
    alt_titles: list[dict[str, str]] = field(default_factory=list)
    description: dict[str, str] = field(default_factory=dict)
    status: Optional[str] = None
    year: Optional[int] = None
    content_rating: Optional[str] = None
    original_language: Optional[str] = None
    last_chapter: Optional[str] = None
    last_volume: Optional[str] = None
    tags: list[str] = field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    relationships: list[Relationship] = field(default_factory=list)

    @property
    def cover_ref(self) -> Optional[Relationship]:
        for rel in self.relationships:
            if rel.type == "cover_art":
                return rel
        return None

    @property
    def author_refs(self) -> list[Relationship]:
        return [rel for rel in self.relationships if rel.type == "author"]


@dataclass
class ResolvedManga(Manga):
    """A search hit with its cover and authors fetched alongside it."""
    main_cover_resolved: Optional[Cover] = None
    authors_resolved: Optional[list[Author]] = None
