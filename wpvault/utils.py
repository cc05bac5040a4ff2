"""Utility helpers for slugs, filenames and path handling."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Union
from urllib.parse import unquote

from .models import Post

ILLEGAL_FILENAME_PATTERN = re.compile(r'[<>:"/\\|?*\x00-\x1F]')
ILLEGAL_URL_FILENAME_PATTERN = re.compile(r'[<>:"/\\|?*]')
PERCENT_ESCAPE_PATTERN = re.compile(r"%(?![0-9A-Fa-f]{2})")


def slug_with_fallback(post: Post) -> str:
    """Return the post slug, or ``id-<id>`` when the post has none."""
    return post.slug if post.slug else f"id-{post.id}"


def sanitize_filename(name: str) -> str:
    """Replace characters that are illegal in filenames with underscores."""
    return ILLEGAL_FILENAME_PATTERN.sub("_", name)


def get_filename_from_url(url: str) -> str:
    """Derive a local filename from the last path segment of ``url``."""
    filename = url.split("/")[-1]
    filename = filename.split("?")[0].split("#")[0]
    filename = ILLEGAL_URL_FILENAME_PATTERN.sub("_", filename)
    return _percent_decode(filename)


def _percent_decode(value: str) -> str:
    # a stray "%" or an escape that is not valid UTF-8 leaves the name undecoded
    if PERCENT_ESCAPE_PATTERN.search(value):
        return value
    try:
        return unquote(value, errors="strict")
    except UnicodeDecodeError:
        return value


def get_unique_filename(directory: Union[str, Path], basename: str) -> str:
    """Return ``basename`` or the first ``name_N.ext`` not present in ``directory``.

    This is a check-then-act lookup against the filesystem: two writers targeting
    the same directory at once can both be handed the same name. Callers write
    into a given directory from a single thread.
    """
    directory = Path(directory)
    stem, ext = os.path.splitext(basename)
    filename = basename
    counter = 0
    while (directory / filename).exists():
        counter += 1
        filename = f"{stem}_{counter}{ext}"
    return filename
