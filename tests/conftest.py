"""Pytest configuration and shared fixtures for the test suite."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Callable

import pytest

from blognest.models import Post
from blognest.persistence import PostFileGateway
from blognest.store import PostStore

CREATED_AT = datetime(2024, 1, 25, 10, 0, 0, tzinfo=timezone.utc)


def _build_post(
    post_id: str, title: str = "Title", author: str = "Author", content: str = ""
) -> Post:
    return Post(
        id=post_id,
        title=title,
        author=author,
        content=content,
        created_at=CREATED_AT,
        updated_at=CREATED_AT,
    )


@pytest.fixture
def make_post() -> Callable[..., Post]:
    """Factory for posts with a fixed id and fixed timestamps."""
    return _build_post


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    """Path of a backing file that does not exist yet."""
    return tmp_path / "blognest.json"


@pytest.fixture
def gateway(data_file: Path) -> PostFileGateway:
    """Gateway writing to a temporary backing file."""
    return PostFileGateway(data_file)


@pytest.fixture
def sample_posts() -> list[Post]:
    """Three posts in insertion order."""
    return [
        _build_post("abc12345-0000-4000-8000-000000000001", "First post", "Ana", "hello world"),
        _build_post("abcxyz99-0000-4000-8000-000000000002", "Second", "Ben", "this is a draft"),
        _build_post("f0f0f0f0-0000-4000-8000-000000000003", "Third", "Cleo", "line one\nline two"),
    ]


@pytest.fixture
def store(sample_posts: list[Post]) -> PostStore:
    """Store pre-filled with the sample posts."""
    return PostStore(sample_posts)
