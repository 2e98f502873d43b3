"""
Tests for ListingsService.

Covers:
- Mixed-kind lookups through the info endpoint
- Post lookups through the by-id endpoint
- Unknown kinds surfacing as warnings
- Multi-request batches completing out of order
- Terminal errors (transport, malformed response, empty request)
"""

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from reddit_listings.config import ListingsConfig
from reddit_listings.exceptions import (
    EmptyRequest,
    MalformedResponse,
    TransportFailure,
    UnknownKind,
    ValidationError,
)
from reddit_listings.models.things import ZERO_TIMESTAMP, Kind, Vote
from reddit_listings.reddit.service import ListingsService


def listing_body(children, after=None):
    return json.dumps({
        "kind": "Listing",
        "data": {"before": None, "after": after, "modhash": "", "children": children},
    })


def post(local_id):
    return {"kind": "t3", "data": {"id": local_id, "name": f"t3_{local_id}"}}


class RecordingTransport:
    """Synchronous transport returning a fixed body and recording calls."""

    def __init__(self, body):
        self.body = body
        self.calls = []

    def request(self, method, path, params):
        self.calls.append((method, path, params))
        return self.body


class EchoPostsTransport:
    """
    Async transport that answers every by-id request with the posts it names.

    Earlier partitions are delayed longer, so they complete last.
    """

    def __init__(self, after=None):
        self.calls = []
        self.after = after

    async def request(self, method, path, params):
        self.calls.append(path)
        fullnames = path.rsplit("/", 1)[1].split(",")
        await asyncio.sleep(0.01 * (10 - len(self.calls)))
        children = [post(name.split("_", 1)[1]) for name in fullnames]
        return listing_body(children, after=self.after and fullnames[-1])


class FailFirstTransport:
    """
    Async transport that fails the first partition and stalls the others.

    Records which stalled requests were cancelled and which ran to completion.
    """

    def __init__(self):
        self.cancelled = []
        self.finished = []

    async def request(self, method, path, params):
        if path.endswith("t3_a"):
            raise TransportFailure("Reddit API returned 503", status_code=503, path=path)
        try:
            await asyncio.sleep(0.05)
        except asyncio.CancelledError:
            self.cancelled.append(path)
            raise
        self.finished.append(path)
        return listing_body([post(path.rsplit("_", 1)[1])])


class TestGet:
    """Test mixed-kind lookups."""

    @pytest.mark.asyncio
    async def test_mixed_kinds(self, mixed_listing_body):
        """Test one subreddit, one post and one comment come back typed."""
        transport = RecordingTransport(mixed_listing_body)
        service = ListingsService(transport)

        result = await service.get("t5_2qh23", "t3_i2gvg4", "t1_g05v931")

        assert transport.calls == [
            ("GET", "/api/info", {"id": "t5_2qh23,t3_i2gvg4,t1_g05v931"})
        ]
        assert len(result.posts) == 1
        assert len(result.comments) == 1
        assert len(result.subreddits) == 1
        assert result.posts[0].id == "i2gvg4"
        assert result.comments[0].id == "g05v931"
        assert result.subreddits[0].id == "2qh23"
        assert result.posts[0].likes is Vote.UPVOTED
        assert result.comments[0].likes is Vote.UPVOTED
        assert result.comments[0].parent_id == "t3_i2gvg4"
        assert result.comments[0].post_id == "t3_i2gvg4"
        assert result.warnings == ()

    @pytest.mark.asyncio
    async def test_unknown_kind_is_warning(self):
        """Test an unrecognized child yields a warning and no error."""
        body = listing_body([post("a"), {"kind": "t4", "data": {"id": "m"}}])
        service = ListingsService(RecordingTransport(body))

        result = await service.get("t3_a", "t4_m")

        assert len(result.posts) == 1
        assert len(result.warnings) == 1
        assert isinstance(result.warnings[0], UnknownKind)

    @pytest.mark.asyncio
    async def test_requested_kinds(self, mixed_listing_body):
        service = ListingsService(RecordingTransport(mixed_listing_body))

        result = await service.get("t5_2qh23", "t3_i2gvg4", kinds=[Kind.SUBREDDIT])

        assert list(result.buckets) == ["subreddits"]
        assert result.posts == ()

    @pytest.mark.asyncio
    async def test_single_kind(self, mixed_listing_body):
        service = ListingsService(RecordingTransport(mixed_listing_body))

        result = await service.get("t5_2qh23", "t3_i2gvg4", kinds=Kind.POST)

        assert list(result.buckets) == ["posts"]
        assert len(result.posts) == 1

    @pytest.mark.asyncio
    async def test_unregistered_kind_rejected_before_request(self):
        """Test an unregistered kind fails without touching the transport."""
        transport = RecordingTransport(listing_body([]))

        with pytest.raises(UnknownKind):
            await ListingsService(transport).get("t4_abc", kinds=[Kind.MESSAGE])

        assert transport.calls == []

    @pytest.mark.asyncio
    async def test_parsed_json_body(self, mixed_listing_json):
        """Test transports may return already-parsed JSON."""
        service = ListingsService(RecordingTransport(mixed_listing_json))
        result = await service.get("t5_2qh23")
        assert len(result.subreddits) == 1

    @pytest.mark.asyncio
    async def test_async_mock_transport(self, mixed_listing_body):
        transport = MagicMock()
        transport.request = AsyncMock(return_value=mixed_listing_body)

        result = await ListingsService(transport).get("t3_i2gvg4")

        transport.request.assert_awaited_once_with("GET", "/api/info", {"id": "t3_i2gvg4"})
        assert len(result.posts) == 1


class TestGetPosts:
    """Test post lookups by id."""

    @pytest.mark.asyncio
    async def test_two_posts(self, posts_listing_body):
        """Test posts come back in request order with link and self posts told apart."""
        transport = RecordingTransport(posts_listing_body)
        service = ListingsService(transport)

        result = await service.get_posts("t3_i2gvg4", "t3_i2gwgz")

        assert transport.calls == [("GET", "/by_id/t3_i2gvg4,t3_i2gwgz", {})]
        assert [p.fullname for p in result.posts] == ["t3_i2gvg4", "t3_i2gwgz"]

        self_post, link_post = result.posts
        assert self_post.is_self_post is True
        assert self_post.body == "This is some text"
        assert link_post.edited == ZERO_TIMESTAMP
        assert link_post.was_edited is False
        assert link_post.url == "http://example.com"
        assert link_post.url != link_post.permalink
        assert link_post.body == ""
        assert link_post.is_link_post is True

    @pytest.mark.asyncio
    async def test_non_post_rejected(self):
        transport = RecordingTransport("")
        with pytest.raises(ValidationError):
            await ListingsService(transport).get_posts("t3_a", "t1_b")
        assert transport.calls == []

    @pytest.mark.asyncio
    async def test_concurrent_partitions_keep_order(self):
        """Test partitions completing out of order are joined by index."""
        transport = EchoPostsTransport()
        service = ListingsService(transport, ListingsConfig(max_ids_per_request=2))
        fullnames = [f"t3_p{i}" for i in range(5)]

        result = await service.get_posts(*fullnames)

        assert len(transport.calls) == 3
        assert [p.fullname for p in result.posts] == fullnames

    @pytest.mark.asyncio
    async def test_last_partition_pagination(self):
        transport = EchoPostsTransport(after=True)
        service = ListingsService(transport, ListingsConfig(max_ids_per_request=2))

        result = await service.get_posts("t3_a", "t3_b", "t3_c")

        assert result.pagination.after == "t3_c"


class TestPreserveOrder:
    """Test strict global ordering."""

    @pytest.mark.asyncio
    async def test_reorders_when_enabled(self):
        body = listing_body([post("b"), post("a")])
        service = ListingsService(RecordingTransport(body))

        grouped = await service.get_posts("t3_a", "t3_b")
        ordered = await service.get_posts("t3_a", "t3_b", preserve_order=True)

        assert [p.id for p in grouped.posts] == ["b", "a"]
        assert [p.id for p in ordered.posts] == ["a", "b"]

    @pytest.mark.asyncio
    async def test_config_default(self):
        body = listing_body([post("b"), post("a")])
        config = ListingsConfig(preserve_global_order=True)
        service = ListingsService(RecordingTransport(body), config)

        result = await service.get_posts("t3_a", "t3_b")

        assert [p.id for p in result.posts] == ["a", "b"]


class TestErrors:
    """Test terminal failures."""

    @pytest.mark.asyncio
    async def test_empty_request(self):
        """Test zero identifiers never reach the transport."""
        transport = RecordingTransport("")
        service = ListingsService(transport)

        with pytest.raises(EmptyRequest):
            await service.get()
        with pytest.raises(EmptyRequest):
            await service.get_posts()

        assert transport.calls == []

    @pytest.mark.asyncio
    async def test_transport_failure(self):
        transport = MagicMock()
        transport.request = AsyncMock(
            side_effect=TransportFailure("Reddit API returned 500", status_code=500)
        )

        with pytest.raises(TransportFailure) as exc_info:
            await ListingsService(transport).get("t3_a")

        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_malformed_response(self):
        service = ListingsService(RecordingTransport("<html>oops</html>"))
        with pytest.raises(MalformedResponse):
            await service.get("t3_a")

    @pytest.mark.asyncio
    async def test_not_a_listing(self):
        body = json.dumps({"kind": "t3", "data": {}})
        service = ListingsService(RecordingTransport(body))
        with pytest.raises(MalformedResponse):
            await service.get_posts("t3_a")

    @pytest.mark.asyncio
    async def test_failed_partition_cancels_the_rest(self):
        """Test no partition keeps fetching after the batch has failed."""
        transport = FailFirstTransport()
        service = ListingsService(transport, ListingsConfig(max_ids_per_request=1))

        with pytest.raises(TransportFailure) as exc_info:
            await service.get_posts("t3_a", "t3_b", "t3_c")

        assert exc_info.value.path == "/by_id/t3_a"
        assert transport.cancelled == ["/by_id/t3_b", "/by_id/t3_c"]

        await asyncio.sleep(0.1)
        assert transport.finished == []
