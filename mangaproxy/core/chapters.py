"""Picking the newest upload of every chapter and ordering them for reading."""
from datetime import datetime, timezone
from typing import Iterable, NamedTuple, Optional, TypeVar, Union

T = TypeVar("T")

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


class ChapterLabel(NamedTuple):
    numeric: bool
    major: int
    fractional: int


def parse_chapter_label(label: Optional[str]) -> ChapterLabel:
    """Parse "12.5" into (12, 5).

    Missing or non-integer labels come back as non-numeric with a (0, 0) pair
    so they can still be compared.
    """
    if not label:
        return ChapterLabel(False, 0, 0)
    parts = label.strip().split(".")
    try:
        major = int(parts[0])
        fractional = int(parts[1]) if len(parts) > 1 and parts[1] else 0
    except ValueError:
        return ChapterLabel(False, 0, 0)
    return ChapterLabel(True, major, fractional)


def chapter_sort_key(record) -> ChapterLabel:
    return parse_chapter_label(record.chapter)


def _timestamp(value: Union[datetime, str, None]) -> datetime:
    if value is None:
        return _OLDEST
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return _OLDEST
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def select_latest_per_label(records: Iterable[T]) -> list[T]:
    """Keep the most recently updated record per chapter label, newest chapter first.

    Records need ``chapter`` (label, may be None) and ``updated_at`` attributes.
    A record missing its label is grouped under "". On equal ``updated_at`` the
    record scanned last wins. Labels that are not numbers sort after every
    numbered chapter.
    """
    latest: dict[str, T] = {}
    for record in records:
        name = record.chapter or ""
        kept = latest.get(name)
        if kept is None or _timestamp(record.updated_at) >= _timestamp(kept.updated_at):
            latest[name] = record

    return sorted(latest.values(), key=chapter_sort_key, reverse=True)
