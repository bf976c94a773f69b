from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from .manga import Relationship


@dataclass
class Chapter:
    id: str
    chapter: Optional[str] = None
    volume: Optional[str] = None
    title: Optional[str] = None
    translated_language: Optional[str] = None
    pages: int = 0
    external_url: Optional[str] = None
    publish_at: Optional[datetime] = None
    readable_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    relationships: list[Relationship] = field(default_factory=list)

    def __repr__(self):
        return f"Chapter(id={self.id}, chapter={self.chapter}, language={self.translated_language})"
