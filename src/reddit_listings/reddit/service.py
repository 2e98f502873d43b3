"""
Listings service.

Ties the planner, transport, decoder, splitter and assembler together into
the two lookups Reddit offers for batches of fullnames:

- ``get``: mixed kinds through the info endpoint
- ``get_posts``: posts only through the by-id endpoint
"""

import asyncio
import inspect
import time
from typing import Any, Iterable, List, Optional, Sequence, Tuple, Union

from reddit_listings.config import ListingsConfig
from reddit_listings.exceptions import RedditAPIError
from reddit_listings.models.results import ListingResult
from reddit_listings.models.things import Kind
from reddit_listings.reddit.assembler import assemble
from reddit_listings.reddit.decoder import decode_listing
from reddit_listings.reddit.planner import BatchPlanner, BatchRequest
from reddit_listings.reddit.registry import KindRegistry, registry as default_registry
from reddit_listings.reddit.splitter import split_listing
from reddit_listings.reddit.transport import Transport
from reddit_listings.utils.logger import get_logger, log_listing_fetch

logger = get_logger(__name__)

DEFAULT_KINDS = (Kind.POST, Kind.COMMENT, Kind.SUBREDDIT)


class ListingsService:
    """
    Fetches batches of Reddit things by fullname.

    The transport may be synchronous (run in a worker thread) or async
    (awaited directly). When a batch exceeds the configured ceiling, its
    requests are issued concurrently and reassembled by partition index.

    Example:
        >>> service = ListingsService(PrawTransport.from_env())
        >>> result = await service.get("t5_2qh23", "t3_i2gvg4", "t1_g05v931")
        >>> result.posts[0].title
        'This is a title'
    """

    def __init__(
        self,
        transport: Transport,
        config: Optional[ListingsConfig] = None,
        registry: KindRegistry = default_registry,
    ) -> None:
        self.transport = transport
        self.config = config or ListingsConfig()
        self.planner = BatchPlanner(self.config)
        self.registry = registry

    async def get(
        self,
        *fullnames: str,
        kinds: Iterable[Union[Kind, str]] = DEFAULT_KINDS,
        preserve_order: Optional[bool] = None,
    ) -> ListingResult:
        """
        Fetch things of any kind by fullname.

        Args:
            *fullnames: Fullnames to fetch, e.g. "t3_i2gvg4"
            kinds: Kinds to bucket (default: posts, comments, subreddits)
            preserve_order: Re-sort buckets into the requested order; defaults
                to ``config.preserve_global_order``

        Returns:
            ListingResult with posts, comments and subreddits buckets

        Raises:
            EmptyRequest: If no fullnames are given
            ValidationError: If a fullname is malformed
            UnknownKind: If a requested kind has no registered decoder
            TransportFailure: If a request fails
            MalformedResponse: If a response is not a Listing
        """
        if isinstance(kinds, str):
            kinds = (kinds,)
        kinds = tuple(kinds)
        self.registry.buckets_for(kinds)

        requests = self.planner.plan_info(fullnames)
        return await self._execute("get", requests, kinds, fullnames, preserve_order)

    async def get_posts(
        self,
        *fullnames: str,
        preserve_order: Optional[bool] = None,
    ) -> ListingResult:
        """
        Fetch posts by fullname.

        Raises:
            EmptyRequest: If no fullnames are given
            ValidationError: If a fullname is not a t3 fullname
            TransportFailure: If a request fails
            MalformedResponse: If a response is not a Listing
        """
        requests = self.planner.plan_posts(fullnames)
        return await self._execute("get_posts", requests, (Kind.POST,), fullnames, preserve_order)

    async def _execute(
        self,
        operation: str,
        requests: List[BatchRequest],
        kinds: Tuple[Union[Kind, str], ...],
        fullnames: Sequence[str],
        preserve_order: Optional[bool],
    ) -> ListingResult:
        start_time = time.time()

        logger.info(
            "listing_fetch_started",
            operation=operation,
            ids=len(fullnames),
            requests=len(requests),
        )

        try:
            parts = await self._fetch_all(requests, kinds)
        except RedditAPIError as e:
            log_listing_fetch(
                operation,
                (time.time() - start_time) * 1000,
                requests=len(requests),
                error=str(e),
                error_type=type(e).__name__,
            )
            raise

        if preserve_order is None:
            preserve_order = self.config.preserve_global_order

        result = assemble(parts, order=fullnames if preserve_order else None)

        log_listing_fetch(
            operation,
            (time.time() - start_time) * 1000,
            requests=len(requests),
            buckets={name: len(items) for name, items in result.buckets.items()},
            warnings=len(result.warnings),
        )

        return result

    async def _fetch_all(
        self,
        requests: List[BatchRequest],
        kinds: Tuple[Union[Kind, str], ...],
    ) -> List[Tuple[int, ListingResult]]:
        """
        Fetch every partition concurrently.

        If one partition fails, the others are cancelled and awaited before
        the failure propagates, so no fetch outlives the call.
        """
        tasks = [
            asyncio.ensure_future(self._fetch_partition(request, kinds))
            for request in requests
        ]
        try:
            return await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def _fetch_partition(
        self,
        request: BatchRequest,
        kinds: Tuple[Union[Kind, str], ...],
    ) -> Tuple[int, ListingResult]:
        body = await self._send(request)
        result = split_listing(decode_listing(body), kinds, self.registry)

        logger.debug(
            "partition_fetched",
            index=request.index,
            path=request.path,
            children=result.child_count,
            warnings=len(result.warnings),
        )

        return request.index, result

    async def _send(self, request: BatchRequest) -> Any:
        params = dict(request.params)
        if inspect.iscoroutinefunction(self.transport.request):
            return await self.transport.request(request.method, request.path, params)
        return await asyncio.to_thread(
            self.transport.request, request.method, request.path, params
        )
