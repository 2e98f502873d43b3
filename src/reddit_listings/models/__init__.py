"""Typed models for decoded Reddit entities and listing results."""

from reddit_listings.models.things import (
    ZERO_TIMESTAMP,
    Account,
    Comment,
    Entity,
    Kind,
    MoreComments,
    Post,
    Subreddit,
    Vote,
)
from reddit_listings.models.results import ListingResult, Pagination

__all__ = [
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
]
