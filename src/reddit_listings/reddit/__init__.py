"""
Reddit listing decode and batch retrieval layer.

This package provides:
- Field normalizers for ambiguous wire values (FieldNormalizer)
- The kind dispatch registry (KindRegistry)
- Envelope and listing decoding (decode_thing, decode_listing)
- Listing splitting and result assembly (split_listing, assemble)
- Batch request planning (BatchPlanner)
- A PRAW-backed transport and the ListingsService facade

Example:
    >>> from reddit_listings.reddit import ListingsService, PrawTransport
    >>> service = ListingsService(PrawTransport.from_env())
    >>> result = await service.get("t3_i2gvg4", "t1_g05v931")
"""

from reddit_listings.reddit.normalizer import (
    FieldNormalizer,
    normalizer,
    normalize_timestamp,
    normalize_edited,
    normalize_vote,
    normalize_count,
    normalize_ratio,
)
from reddit_listings.reddit.fullname import make_fullname, parse_fullname
from reddit_listings.reddit.registry import KindEntry, KindRegistry, registry
from reddit_listings.reddit.decoder import Listing, decode_listing, decode_thing
from reddit_listings.reddit.splitter import split_listing
from reddit_listings.reddit.planner import BatchPlanner, BatchRequest
from reddit_listings.reddit.assembler import assemble
from reddit_listings.reddit.transport import PrawTransport, Transport
from reddit_listings.reddit.service import DEFAULT_KINDS, ListingsService

__all__ = [
    # Normalizers
    "FieldNormalizer",
    "normalizer",
    "normalize_timestamp",
    "normalize_edited",
    "normalize_vote",
    "normalize_count",
    "normalize_ratio",
    # Fullnames
    "make_fullname",
    "parse_fullname",
    # Dispatch
    "KindEntry",
    "KindRegistry",
    "registry",
    # Decoding
    "Listing",
    "decode_listing",
    "decode_thing",
    "split_listing",
    # Batching
    "BatchPlanner",
    "BatchRequest",
    "assemble",
    # Service
    "Transport",
    "PrawTransport",
    "ListingsService",
    "DEFAULT_KINDS",
]
