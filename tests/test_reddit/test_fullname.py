"""Unit tests for fullname parsing."""

import pytest

from reddit_listings.exceptions import ValidationError
from reddit_listings.models.things import Kind
from reddit_listings.reddit.fullname import make_fullname, parse_fullname


class TestParseFullname:
    """Test suite for parse_fullname."""

    @pytest.mark.parametrize(
        "fullname, kind, local_id",
        [
            ("t1_g05v931", Kind.COMMENT, "g05v931"),
            ("t2_164ab8", Kind.ACCOUNT, "164ab8"),
            ("t3_i2gvg4", Kind.POST, "i2gvg4"),
            ("t4_abc", Kind.MESSAGE, "abc"),
            ("t5_2qh23", Kind.SUBREDDIT, "2qh23"),
            ("t6_award", Kind.AWARD, "award"),
        ],
    )
    def test_known_prefixes(self, fullname, kind, local_id):
        """Test every prefix maps to exactly one kind."""
        assert parse_fullname(fullname) == (kind, local_id)

    def test_local_id_may_contain_underscore(self):
        assert parse_fullname("t3_abc_def") == (Kind.POST, "abc_def")

    @pytest.mark.parametrize("value", ["i2gvg4", "t3_", "t9_abc", "more_abc", ""])
    def test_invalid(self, value):
        """Test malformed values and unknown prefixes are rejected."""
        with pytest.raises(ValidationError):
            parse_fullname(value)

    def test_non_string(self):
        with pytest.raises(ValidationError):
            parse_fullname(123)


class TestMakeFullname:
    """Test suite for make_fullname."""

    def test_build(self):
        assert make_fullname(Kind.SUBREDDIT, "2qh23") == "t5_2qh23"

    def test_more_has_no_prefix(self):
        """Test kinds without a fullname prefix are rejected."""
        with pytest.raises(ValidationError):
            make_fullname(Kind.MORE, "abc")
