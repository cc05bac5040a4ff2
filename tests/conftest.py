"""Shared pytest fixtures for the conversion tests."""

from __future__ import annotations

import datetime as dt

import pytest

from wpvault.config import PathConfig
from wpvault.models import Post


@pytest.fixture()
def no_images_config(tmp_path) -> PathConfig:
    return PathConfig(output=tmp_path / "vault", save_images="none")


@pytest.fixture()
def sample_post() -> Post:
    return Post(
        id=7,
        slug="hello",
        title="Hello",
        type="post",
        date=dt.date(2023, 4, 5),
        content="<p>Hi</p>",
    )
