"""High-level orchestration for converting posts and writing Markdown files."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional

from .config import PathConfig
from .images import collect_image_candidates, plan_image_targets
from .markdown import compose_markdown, markdown_for
from .models import ImageTarget, Post
from .paths import path_for
from .utils import get_unique_filename, sanitize_filename

logger = logging.getLogger("wpvault")


@dataclass
class WriteResult:
    """Outcome of a single written post."""

    post_id: int
    output_path: Path
    markdown: str
    total_seconds: float
    images: List[ImageTarget] = field(default_factory=list)


def resolve_output_path(candidate: Path) -> Path:
    """Sanitize the filename of ``candidate`` and avoid clobbering existing files."""
    directory = candidate.parent
    basename = sanitize_filename(candidate.name)
    return directory / get_unique_filename(directory, basename)


def write_post(post: Post, config: PathConfig) -> Optional[WriteResult]:
    """Convert one post and write it below ``config.output``."""
    start = time.perf_counter()
    body = markdown_for(post.content, config)
    markdown = compose_markdown(post, body)

    candidate = path_for(post, config)
    try:
        candidate.parent.mkdir(parents=True, exist_ok=True)
        output_path = resolve_output_path(candidate)
        output_path.write_text(markdown, encoding="utf-8")
    except OSError as exc:
        logger.warning("Failed to write post %s to %s: %s", post.id, candidate, exc)
        return None

    if output_path != candidate:
        logger.debug("Renamed %s to avoid an existing file", output_path.name)
    logger.info("Saved Markdown to %s", output_path)

    images = plan_image_targets(collect_image_candidates(post, config), output_path)
    return WriteResult(
        post_id=post.id,
        output_path=output_path,
        markdown=markdown,
        total_seconds=time.perf_counter() - start,
        images=images,
    )


def write_posts(posts: Iterable[Post], config: PathConfig) -> List[WriteResult]:
    """Write every post in order.

    Writes run one at a time so the existence check behind filename
    disambiguation is never raced by another writer from this process.
    """
    results: List[WriteResult] = []
    for post in posts:
        result = write_post(post, config)
        if result:
            results.append(result)
    return results
