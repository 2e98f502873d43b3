"""
Typed decoding of Reddit listings and batched lookups by fullname.

Example:
    >>> from reddit_listings import ListingsService, PrawTransport
    >>> service = ListingsService(PrawTransport.from_env())
    >>> result = await service.get("t5_2qh23", "t3_i2gvg4", "t1_g05v931")
    >>> result.subreddits[0].display_name
    'test'
"""

from reddit_listings.exceptions import (
    RedditAPIError,
    TransportFailure,
    MalformedResponse,
    DecodeError,
    UnknownKind,
    MalformedField,
    ValidationError,
    EmptyRequest,
)
from reddit_listings.config import ListingsConfig
from reddit_listings.models import (
    ZERO_TIMESTAMP,
    Account,
    Comment,
    Entity,
    Kind,
    ListingResult,
    MoreComments,
    Pagination,
    Post,
    Subreddit,
    Vote,
)
from reddit_listings.reddit import (
    BatchPlanner,
    ListingsService,
    PrawTransport,
    assemble,
    decode_listing,
    decode_thing,
    split_listing,
)

__version__ = "1.0.0"

__all__ = [
    # Exceptions
    "RedditAPIError",
    "TransportFailure",
    "MalformedResponse",
    "DecodeError",
    "UnknownKind",
    "MalformedField",
    "ValidationError",
    "EmptyRequest",
    # Configuration
    "ListingsConfig",
    # Models
    "ZERO_TIMESTAMP",
    "Kind",
    "Vote",
    "Entity",
    "Post",
    "Comment",
    "Subreddit",
    "Account",
    "MoreComments",
    "ListingResult",
    "Pagination",
    # Engine
    "decode_thing",
    "decode_listing",
    "split_listing",
    "assemble",
    "BatchPlanner",
    "ListingsService",
    "PrawTransport",
]
