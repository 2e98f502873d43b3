"""
Result models returned by listing fetches.

Defines the pagination handle attached to every listing and the
ListingResult container that groups decoded entities by kind.
"""
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from reddit_listings.models.things import (
    Account,
    Comment,
    Entity,
    MoreComments,
    Post,
    Subreddit,
)
from reddit_listings.exceptions import DecodeError


class Pagination(BaseModel):
    """
    Cursor metadata of a listing.

    Cursors are opaque. An empty string means there is no page in that
    direction.
    """

    model_config = ConfigDict(frozen=True)

    before: str = Field("", description="Cursor for the previous page")
    after: str = Field("", description="Cursor for the next page")
    modhash: str = Field("", description="Modification authorization token")

    @property
    def has_next(self) -> bool:
        return self.after != ""

    @property
    def has_previous(self) -> bool:
        return self.before != ""


class ListingResult(BaseModel):
    """
    Entities of a listing grouped into per-kind buckets.

    Attributes:
        buckets: Bucket name (e.g. "posts") to entities in listing order
        positions: Bucket name to the original child index of each entity
        pagination: Cursor metadata of the listing
        warnings: Children that could not be classified or decoded
        child_count: Number of children in the source listing(s)

    Example:
        >>> result = split_listing(listing, kinds=[Kind.POST, Kind.COMMENT])
        >>> for post in result.posts:
        ...     print(post.title)
        >>> if result.warnings:
        ...     print(f"{len(result.warnings)} children skipped")
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    buckets: Mapping[str, Tuple[Entity, ...]] = Field(default_factory=dict, validate_default=True)
    positions: Mapping[str, Tuple[int, ...]] = Field(default_factory=dict, validate_default=True)
    pagination: Pagination = Field(default_factory=Pagination)
    warnings: Tuple[DecodeError, ...] = ()
    child_count: int = Field(0, ge=0)

    @field_validator("buckets", "positions")
    @classmethod
    def _read_only(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(value))

    @field_serializer("buckets", "positions")
    def _serialize_mapping(self, value: Mapping[str, Any]) -> Dict[str, Any]:
        return dict(value)

    def bucket(self, name: str) -> Tuple[Entity, ...]:
        """Return the named bucket, or an empty tuple if it was not requested."""
        return self.buckets.get(name, ())

    @property
    def posts(self) -> Tuple[Post, ...]:
        return self.bucket("posts")

    @property
    def comments(self) -> Tuple[Comment, ...]:
        return self.bucket("comments")

    @property
    def subreddits(self) -> Tuple[Subreddit, ...]:
        return self.bucket("subreddits")

    @property
    def accounts(self) -> Tuple[Account, ...]:
        return self.bucket("accounts")

    @property
    def more(self) -> Tuple[MoreComments, ...]:
        return self.bucket("more")

    def in_listing_order(self) -> Tuple[Entity, ...]:
        """Return every bucketed entity in its original listing order."""
        ordered = []
        for name, entities in self.buckets.items():
            ordered.extend(zip(self.positions.get(name, ()), entities))
        ordered.sort(key=lambda pair: pair[0])
        return tuple(entity for _, entity in ordered)
