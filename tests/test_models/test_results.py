"""Unit tests for result and entity models."""

from datetime import datetime, timezone

import pytest

from reddit_listings.models.results import ListingResult, Pagination
from reddit_listings.models.things import ZERO_TIMESTAMP, Comment, Kind, Post


class TestPagination:
    """Test the pagination handle."""

    def test_empty(self):
        pagination = Pagination()
        assert pagination.has_next is False
        assert pagination.has_previous is False

    def test_cursors(self):
        pagination = Pagination(before="t3_a", after="t3_z")
        assert pagination.has_next is True
        assert pagination.has_previous is True


class TestListingResult:
    """Test bucket accessors."""

    def test_missing_bucket_is_empty(self):
        result = ListingResult(buckets={"posts": ()})
        assert result.posts == ()
        assert result.comments == ()
        assert result.bucket("anything") == ()

    def test_in_listing_order(self):
        a = Post(id="a", fullname="t3_a")
        x = Comment(id="x", fullname="t1_x")
        b = Post(id="b", fullname="t3_b")
        result = ListingResult(
            buckets={"posts": (a, b), "comments": (x,)},
            positions={"posts": (0, 2), "comments": (1,)},
            child_count=3,
        )
        assert result.in_listing_order() == (a, x, b)

    def test_buckets_are_read_only(self):
        """Test a frozen result cannot be changed through its bucket mappings."""
        result = ListingResult(
            buckets={"posts": (Post(id="a", fullname="t3_a"),)},
            positions={"posts": (0,)},
        )

        with pytest.raises(TypeError):
            result.buckets["posts"] = ()
        with pytest.raises(TypeError):
            result.positions["posts"] = (5,)
        assert len(result.posts) == 1

    def test_dump_uses_plain_dicts(self):
        result = ListingResult(buckets={"posts": ()}, positions={"posts": ()})
        dumped = result.model_dump()
        assert dumped["buckets"] == {"posts": ()}
        assert type(dumped["positions"]) is dict

    def test_entities_keep_subclass(self):
        post = Post(id="a", fullname="t3_a")
        result = ListingResult(buckets={"posts": (post,)})
        assert isinstance(result.posts[0], Post)


class TestEntities:
    """Test entity defaults and derived properties."""

    def test_kind(self):
        assert Post.kind is Kind.POST
        assert Comment.kind is Kind.COMMENT

    def test_value_equality(self):
        assert Post(id="a", fullname="t3_a") == Post(id="a", fullname="t3_a")
        assert Post(id="a", fullname="t3_a") != Post(id="b", fullname="t3_b")

    def test_sentinel_defaults(self):
        post = Post(id="a", fullname="t3_a")
        assert post.created == ZERO_TIMESTAMP
        assert post.was_edited is False

    def test_was_edited(self):
        comment = Comment(
            id="x",
            fullname="t1_x",
            edited=datetime(2020, 8, 3, tzinfo=timezone.utc),
        )
        assert comment.was_edited is True

    def test_sentinel_before_any_real_time(self):
        assert ZERO_TIMESTAMP < datetime(1970, 1, 1, tzinfo=timezone.utc)
