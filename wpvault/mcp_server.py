"""MCP server exposing the post conversion tools."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from mcp.server.fastmcp import FastMCP

from .config import (
    DATE_FOLDER_CHOICES,
    DATE_FOLDERS_NONE,
    DEFAULT_OUTPUT,
    SAVE_IMAGES_CHOICES,
    PathConfig,
)
from .markdown import markdown_for
from .models import Post, parse_date
from .paths import path_for

logger = logging.getLogger("wpvault.mcp")
logger.setLevel(logging.ERROR)

mcp = FastMCP(name="wpvault")


def _check_choice(name: str, value: str, choices) -> None:
    if value not in choices:
        raise ValueError(f"{name} must be one of {', '.join(choices)}; got {value!r}")


@mcp.tool()
def convert_html(html: str, save_images: str = "none") -> str:
    """Convert an exported post body from HTML to Markdown."""
    _check_choice("save_images", save_images, SAVE_IMAGES_CHOICES)
    return markdown_for(html, PathConfig(save_images=save_images))


@mcp.tool()
def post_path(
    post_id: int,
    slug: Optional[str] = None,
    post_type: Optional[str] = "post",
    is_draft: bool = False,
    date: Optional[str] = None,
    output: str = DEFAULT_OUTPUT,
    date_folders: str = DATE_FOLDERS_NONE,
    prefix_date: bool = False,
    post_folders: bool = True,
) -> str:
    """Return the relative Markdown path a post would be written to."""
    _check_choice("date_folders", date_folders, DATE_FOLDER_CHOICES)
    post = Post(
        id=post_id,
        slug=slug,
        type=post_type,
        is_draft=is_draft,
        date=parse_date(date),
    )
    config = PathConfig(
        output=Path(output),
        date_folders=date_folders,
        prefix_date=prefix_date,
        post_folders=post_folders,
    )
    return str(path_for(post, config))


def main() -> None:
    """Entry point for running the MCP server."""
    logging.basicConfig(level=logging.ERROR)
    mcp.run()


if __name__ == "__main__":
    main()
