"""
Listing splitter.

Demultiplexes the heterogeneous children of a Listing into per-kind buckets
in one pass, keeping relative order within each bucket.
"""

from typing import Dict, Iterable, List, Optional, Union

import structlog

from reddit_listings.exceptions import DecodeError
from reddit_listings.models.results import ListingResult
from reddit_listings.models.things import Entity, Kind
from reddit_listings.reddit.decoder import Listing, decode_thing
from reddit_listings.reddit.registry import KindRegistry, registry as default_registry

logger = structlog.get_logger(__name__)


def split_listing(
    listing: Listing,
    kinds: Optional[Iterable[Union[Kind, str]]] = None,
    registry: KindRegistry = default_registry,
) -> ListingResult:
    """
    Decode every child of a listing and group the entities by kind.

    Children that cannot be decoded (unknown kind or malformed field) are
    excluded and reported in ``warnings`` with their child index. Known kinds
    that were not requested are dropped silently.

    Args:
        listing: Decoded Listing envelope
        kinds: Kinds to keep, or None for every registered kind
        registry: Kind registry used for dispatch

    Returns:
        ListingResult with one bucket per requested kind (possibly empty)

    Example:
        >>> result = split_listing(decode_listing(body), kinds=[Kind.POST, Kind.COMMENT])
        >>> [post.id for post in result.posts]
        ['i2gvg4']
    """
    bucket_names = registry.buckets_for(kinds)
    wanted = set(bucket_names)

    entities: Dict[str, List[Entity]] = {name: [] for name in bucket_names}
    positions: Dict[str, List[int]] = {name: [] for name in bucket_names}
    warnings: List[DecodeError] = []

    for index, child in enumerate(listing.children):
        try:
            entity = decode_thing(child, registry)
        except DecodeError as e:
            e.index = index
            warnings.append(e)
            logger.warning(
                "listing_child_skipped",
                index=index,
                kind=e.kind,
                error=e.message,
                error_type=type(e).__name__,
            )
            continue

        bucket = registry.lookup(entity.kind.value).bucket
        if bucket not in wanted:
            continue

        entities[bucket].append(entity)
        positions[bucket].append(index)

    return ListingResult(
        buckets={name: tuple(items) for name, items in entities.items()},
        positions={name: tuple(items) for name, items in positions.items()},
        pagination=listing.pagination,
        warnings=tuple(warnings),
        child_count=len(listing.children),
    )
