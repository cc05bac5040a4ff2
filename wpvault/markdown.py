"""Markdown generation for exported post bodies."""

from __future__ import annotations

import json
from typing import List

from .config import PathConfig
from .content import postprocess, preprocess
from .models import Post
from .rules import VaultMarkdownConverter

# single reusable converter; it holds no per-document state
CONVERTER = VaultMarkdownConverter()


def markdown_for(raw_html: str, config: PathConfig) -> str:
    """Convert a post's raw HTML body into Markdown."""
    content = preprocess(raw_html, config)
    content = CONVERTER.convert(content)
    return postprocess(content)


def _quote(value: str) -> str:
    # JSON string escaping is valid YAML double-quoted scalar syntax
    return json.dumps(value, ensure_ascii=False)


def _list_line(key: str, values: List[str]) -> str:
    return f"{key}: [" + ", ".join(_quote(value) for value in values) + "]"


def compose_markdown(post: Post, body: str) -> str:
    """Generate final Markdown including front matter."""
    front_matter_lines = ["---"]
    front_matter_lines.append(f"title: {_quote(post.title)}")
    if post.date is not None:
        front_matter_lines.append(f"date: {post.date.isoformat()}")
    if post.categories:
        front_matter_lines.append(_list_line("categories", post.categories))
    if post.tags:
        front_matter_lines.append(_list_line("tags", post.tags))
    if post.is_draft:
        front_matter_lines.append("draft: true")
    front_matter_lines.append("---\n")

    return "\n".join(front_matter_lines) + body.strip() + "\n"
