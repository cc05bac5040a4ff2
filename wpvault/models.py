"""Data models used throughout the conversion pipeline."""

from __future__ import annotations

import datetime as dt
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

DRAFT_STATUSES = {"draft", "pending", "future", "private"}


@dataclass(frozen=True)
class Post:
    """A single exported content item and its raw HTML body."""

    id: int
    slug: Optional[str] = None
    title: str = ""
    type: Optional[str] = None
    is_draft: bool = False
    date: Optional[dt.date] = None
    content: str = ""
    categories: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Post":
        """Build a post from an extracted export record.

        ``id`` is required; ``status`` is honoured when ``is_draft`` is absent and
        ``date`` accepts ISO dates or datetimes (only the calendar date is kept).
        """
        if "id" not in data:
            raise KeyError("post record is missing required field 'id'")
        try:
            post_id = int(data["id"])
        except (TypeError, ValueError) as exc:
            raise ValueError(f"post id must be an integer, got {data['id']!r}") from exc

        is_draft = data.get("is_draft")
        if is_draft is None:
            is_draft = data.get("status") in DRAFT_STATUSES

        return cls(
            id=post_id,
            slug=data.get("slug") or None,
            title=data.get("title") or "",
            type=data.get("type") or None,
            is_draft=bool(is_draft),
            date=parse_date(data.get("date")),
            content=data.get("content") or "",
            categories=list(data.get("categories") or []),
            tags=list(data.get("tags") or []),
        )


@dataclass
class ImageCandidate:
    """Raw image reference discovered in post content."""

    original_src: str
    filename: str


@dataclass
class ImageTarget:
    """Local destination planned for an image referenced by a post."""

    original_src: str
    destination: Path


def parse_date(value: Union[str, dt.date, None]) -> Optional[dt.date]:
    if value is None or value == "":
        return None
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    try:
        return dt.date.fromisoformat(str(value).strip()[:10])
    except ValueError as exc:
        raise ValueError(f"unrecognised post date {value!r}") from exc


def load_posts(path: Path) -> List[Post]:
    """Read a JSON array of extracted post records."""
    records = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(records, list):
        raise ValueError(f"{path} must contain a JSON array of posts")
    return [Post.from_dict(record) for record in records]
