"""Tests for writing converted posts to disk."""

from __future__ import annotations

import dataclasses

from wpvault.config import PathConfig
from wpvault.writer import resolve_output_path, write_post, write_posts


def test_write_post_creates_markdown_file(sample_post, no_images_config):
    result = write_post(sample_post, no_images_config)

    assert result is not None
    expected = no_images_config.output / "posts" / "hello" / "index.md"
    assert result.output_path == expected
    text = expected.read_text(encoding="utf-8")
    assert text.startswith('---\ntitle: "Hello"\ndate: 2023-04-05\n---\n')
    assert text.endswith("Hi\n")
    assert result.post_id == 7


def test_colliding_posts_get_suffixed_names(sample_post, no_images_config):
    second = dataclasses.replace(sample_post, id=8, content="<p>Again</p>")
    results = write_posts([sample_post, second], no_images_config)

    names = [result.output_path.name for result in results]
    assert names == ["index.md", "index_1.md"]
    assert results[1].output_path.read_text(encoding="utf-8").endswith("Again\n")


def test_write_post_plans_images(sample_post, tmp_path):
    config = PathConfig(output=tmp_path, save_images="all", post_folders=False)
    post = dataclasses.replace(
        sample_post, content='<p><img src="https://example.com/u/photo.png" alt="p"></p>'
    )
    result = write_post(post, config)

    assert "![p](images/photo.png)" in result.markdown
    assert [image.destination for image in result.images] == [
        tmp_path / "posts" / "images" / "photo.png"
    ]


def test_unwritable_output_is_skipped(sample_post, tmp_path, caplog):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    config = PathConfig(output=blocker, save_images="none")

    assert write_posts([sample_post], config) == []
    assert "Failed to write post 7" in caplog.text


def test_resolve_output_path_sanitizes_filename(tmp_path):
    assert resolve_output_path(tmp_path / "a:b.md") == tmp_path / "a_b.md"


def test_planned_image_matches_content_link_when_file_exists(sample_post, tmp_path):
    config = PathConfig(output=tmp_path, save_images="all", post_folders=True)
    image_dir = tmp_path / "posts" / "hello" / "images"
    image_dir.mkdir(parents=True)
    (image_dir / "cat.jpg").write_bytes(b"x")
    post = dataclasses.replace(
        sample_post, content='<p><img src="https://example.com/u/cat.jpg" alt=""></p>'
    )
    result = write_post(post, config)

    assert "![](images/cat.jpg)" in result.markdown
    assert [image.destination for image in result.images] == [image_dir / "cat.jpg"]
