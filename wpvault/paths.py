"""Output path construction for converted posts."""

from __future__ import annotations

import os
from pathlib import Path
from typing import List

from .config import DATE_FOLDERS_YEAR, DATE_FOLDERS_YEAR_MONTH, PathConfig
from .models import Post
from .utils import slug_with_fallback

TYPE_FOLDERS = {"post": "posts", "page": "pages"}
CUSTOM_TYPE_FOLDER = "custom"
DRAFTS_FOLDER = "_drafts"
INDEX_FILENAME = "index.md"


def _type_segments(post: Post) -> List[str]:
    if not post.type:
        return []
    if post.type in TYPE_FOLDERS:
        return [TYPE_FOLDERS[post.type]]
    return [CUSTOM_TYPE_FOLDER, post.type]


def _date_segments(post: Post, config: PathConfig) -> List[str]:
    if post.date is None:
        return []
    segments: List[str] = []
    if config.date_folders in (DATE_FOLDERS_YEAR, DATE_FOLDERS_YEAR_MONTH):
        segments.append(f"{post.date.year:04d}")
    if config.date_folders == DATE_FOLDERS_YEAR_MONTH:
        segments.append(f"{post.date.month:02d}")
    return segments


def build_post_path(post: Post, config: PathConfig) -> Path:
    """Map a post onto its Markdown file location under ``config.output``.

    Segments are assembled in a fixed order: output root, type folder, drafts
    folder, date folders, then the slug as a folder holding ``index.md`` or as
    ``<slug>.md``. Date-dependent parts are skipped for undated posts.
    """
    segments: List[str] = [str(config.output)]
    segments.extend(_type_segments(post))

    if post.is_draft:
        segments.append(DRAFTS_FOLDER)

    segments.extend(_date_segments(post, config))

    slug = slug_with_fallback(post)
    if config.prefix_date and post.date is not None:
        slug = f"{post.date.year:04d}-{post.date.month:02d}-{post.date.day:02d}-{slug}"

    if config.post_folders:
        segments.extend([slug, INDEX_FILENAME])
    else:
        segments.append(f"{slug}.md")

    return Path(os.path.join(*segments))


path_for = build_post_path
