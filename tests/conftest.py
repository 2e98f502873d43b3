"""Shared fixtures for listing tests."""

import json
from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures" / "listings"


@pytest.fixture
def load_fixture():
    """Return a loader for raw listing fixture bodies."""

    def _load(name: str) -> str:
        return (FIXTURES_DIR / name).read_text(encoding="utf-8")

    return _load


@pytest.fixture
def mixed_listing_body(load_fixture) -> str:
    """Info endpoint response with one subreddit, one post and one comment."""
    return load_fixture("posts-comments-subreddits.json")


@pytest.fixture
def posts_listing_body(load_fixture) -> str:
    """By-id endpoint response with two posts."""
    return load_fixture("posts.json")


@pytest.fixture
def mixed_listing_json(mixed_listing_body) -> dict:
    return json.loads(mixed_listing_body)
