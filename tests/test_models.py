"""Tests for post records and loading."""

from __future__ import annotations

import datetime as dt
import json

import pytest

from wpvault.models import Post, load_posts, parse_date


def test_from_dict_reads_all_fields():
    post = Post.from_dict(
        {
            "id": "12",
            "slug": "hello",
            "title": "Hello",
            "type": "page",
            "status": "draft",
            "date": "2023-04-05T10:30:00Z",
            "content": "<p>Hi</p>",
            "categories": ["News"],
            "tags": ["intro"],
        }
    )
    assert post.id == 12
    assert post.type == "page"
    assert post.is_draft is True
    assert post.date == dt.date(2023, 4, 5)
    assert post.categories == ["News"]
    assert post.tags == ["intro"]


def test_from_dict_defaults():
    post = Post.from_dict({"id": 3, "status": "publish"})
    assert post.slug is None
    assert post.type is None
    assert post.is_draft is False
    assert post.date is None
    assert post.content == ""


def test_explicit_draft_flag_wins_over_status():
    assert Post.from_dict({"id": 1, "status": "draft", "is_draft": False}).is_draft is False


def test_from_dict_requires_id():
    with pytest.raises(KeyError):
        Post.from_dict({"slug": "x"})
    with pytest.raises(ValueError):
        Post.from_dict({"id": "abc"})


def test_parse_date_rejects_garbage():
    assert parse_date("") is None
    assert parse_date(dt.datetime(2020, 1, 2, 3, 4)) == dt.date(2020, 1, 2)
    with pytest.raises(ValueError):
        parse_date("yesterday")


def test_load_posts(tmp_path):
    path = tmp_path / "posts.json"
    path.write_text(json.dumps([{"id": 1}, {"id": 2, "slug": "b"}]), encoding="utf-8")
    posts = load_posts(path)
    assert [post.id for post in posts] == [1, 2]


def test_load_posts_requires_array(tmp_path):
    path = tmp_path / "posts.json"
    path.write_text(json.dumps({"id": 1}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_posts(path)
