"""Command-line entry point for the export converter."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Sequence

from .config import (
    DATE_FOLDER_CHOICES,
    DATE_FOLDERS_NONE,
    DEFAULT_OUTPUT,
    SAVE_IMAGES_CHOICES,
    PathConfig,
)
from .models import load_posts
from .writer import write_posts

logger = logging.getLogger("wpvault.cli")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Convert extracted blog posts (JSON) into a folder of Markdown files.",
    )
    parser.add_argument(
        "input",
        type=Path,
        help="JSON file holding an array of post records",
    )
    parser.add_argument(
        "--output",
        default=DEFAULT_OUTPUT,
        type=Path,
        help="Directory where Markdown files should be written",
    )
    parser.add_argument(
        "--date-folders",
        choices=DATE_FOLDER_CHOICES,
        default=DATE_FOLDERS_NONE,
        help="Organize posts into year or year/month folders",
    )
    parser.add_argument(
        "--prefix-date",
        action="store_true",
        help="Prefix post filenames (or folders) with their yyyy-mm-dd date",
    )
    parser.add_argument(
        "--post-folders",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Write each post as <slug>/index.md instead of <slug>.md",
    )
    parser.add_argument(
        "--save-images",
        choices=SAVE_IMAGES_CHOICES,
        default="all",
        help="Which images to save locally; scraped and all rewrite content image links",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    argv = list(sys.argv[1:] if argv is None else argv)
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> PathConfig:
    return PathConfig(
        output=Path(args.output),
        date_folders=args.date_folders,
        prefix_date=args.prefix_date,
        post_folders=args.post_folders,
        save_images=args.save_images,
    )


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )

    try:
        posts = load_posts(args.input)
    except (OSError, ValueError, KeyError) as exc:
        logger.error("Could not read posts from %s: %s", args.input, exc)
        return 1

    config = build_config(args)
    logger.info("Writing %d post(s) to %s", len(posts), config.output)

    overall_start = time.perf_counter()
    results = write_posts(posts, config)
    total_elapsed = time.perf_counter() - overall_start

    image_count = sum(len(result.images) for result in results)
    logger.info(
        "Finished in %.2fs (%d/%d written, %d image(s) to fetch)",
        total_elapsed,
        len(results),
        len(posts),
        image_count,
    )
    if args.verbose:
        for result in results:
            for image in result.images:
                logger.debug("Image %s -> %s", image.original_src, image.destination)
    return 0


if __name__ == "__main__":
    sys.exit(main())
