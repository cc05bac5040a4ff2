"""Image reference discovery and local placement planning."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Set

from bs4 import BeautifulSoup

from .config import PathConfig
from .models import ImageCandidate, ImageTarget, Post
from .utils import get_filename_from_url

logger = logging.getLogger("wpvault")

IMAGES_FOLDER = "images"


def collect_image_candidates(post: Post, config: PathConfig) -> List[ImageCandidate]:
    """List the images referenced by the post body that will be saved locally."""
    if not config.rewrites_image_paths or not post.content:
        return []

    soup = BeautifulSoup(post.content, "html.parser")
    seen: Set[str] = set()
    candidates: List[ImageCandidate] = []
    for img in soup.find_all("img"):
        src = img.get("src")
        if not src or src.startswith("data:") or src in seen:
            continue
        seen.add(src)
        filename = get_filename_from_url(src)
        if not filename:
            logger.debug("Skipping image without a filename: %s", src)
            continue
        candidates.append(ImageCandidate(original_src=src, filename=filename))
    return candidates


def plan_image_targets(
    candidates: List[ImageCandidate],
    post_path: Path,
) -> List[ImageTarget]:
    """Place each candidate in the ``images`` folder beside the post file.

    Destinations use exactly the filename the rewritten content links to. A file
    already on disk under that name is left for the downloader to skip or replace.
    """
    image_dir = post_path.parent / IMAGES_FOLDER
    targets: List[ImageTarget] = []
    planned: Set[str] = set()
    for candidate in candidates:
        if candidate.filename in planned:
            continue
        planned.add(candidate.filename)
        targets.append(
            ImageTarget(
                original_src=candidate.original_src,
                destination=image_dir / candidate.filename,
            )
        )
    return targets
