"""Tests for the MCP tool functions."""

from __future__ import annotations

from pathlib import Path

import pytest

from wpvault.mcp_server import convert_html, post_path


def test_convert_html_tool():
    assert convert_html("<p>Hi <em>there</em></p>") == "Hi there"


def test_convert_html_rejects_unknown_mode():
    with pytest.raises(ValueError):
        convert_html("<p>x</p>", save_images="sometimes")


def test_post_path_tool():
    assert post_path(post_id=42, post_type="page") == str(Path("output/pages/id-42/index.md"))
    assert post_path(
        post_id=7,
        slug="hello",
        date="2023-04-05",
        date_folders="year",
        post_folders=False,
    ) == str(Path("output/posts/2023/hello.md"))


def test_post_path_rejects_unknown_date_folders():
    with pytest.raises(ValueError):
        post_path(post_id=1, date_folders="decade")
