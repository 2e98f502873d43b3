"""
Kind dispatch registry.

Maps envelope kind codes to the decoder for that kind and to the bucket the
listing splitter files its entities under. Supporting a new kind means
adding one entry here.
"""

from typing import Any, Callable, Dict, Iterable, List, NamedTuple, Optional, Type, Union

import structlog

from reddit_listings.exceptions import UnknownKind
from reddit_listings.models.things import (
    Account,
    Comment,
    Entity,
    Kind,
    MoreComments,
    Post,
    Subreddit,
)
from reddit_listings.reddit.entities import (
    decode_account,
    decode_comment,
    decode_more,
    decode_post,
    decode_subreddit,
)

logger = structlog.get_logger(__name__)


class KindEntry(NamedTuple):
    """Registry entry for one kind."""

    kind: Kind
    model: Type[Entity]
    decode: Callable[[Dict[str, Any]], Entity]
    bucket: str


class KindRegistry:
    """
    Ordered mapping from kind code to KindEntry.

    Lookups are exact string matches on the kind code. The registration order
    is the bucket order of split results.

    Example:
        >>> entry = registry.lookup("t3")
        >>> entry.bucket
        'posts'
        >>> registry.lookup("t4")
        Traceback (most recent call last):
        ...
        reddit_listings.exceptions.UnknownKind: Unknown kind 't4'
    """

    def __init__(self, entries: Iterable[KindEntry] = ()) -> None:
        self._entries: Dict[str, KindEntry] = {}
        for entry in entries:
            self.register(entry)

    def register(self, entry: KindEntry) -> None:
        if entry.kind.value in self._entries:
            raise ValueError(f"Kind '{entry.kind.value}' is already registered")
        self._entries[entry.kind.value] = entry
        logger.debug("kind_registered", kind=entry.kind.value, bucket=entry.bucket)

    def lookup(self, kind: str) -> KindEntry:
        """
        Return the entry for a kind code.

        Raises:
            UnknownKind: If no decoder is registered for the kind
        """
        entry = self._entries.get(kind)
        if entry is None:
            raise UnknownKind(kind)
        return entry

    def buckets_for(self, kinds: Optional[Iterable[Union[Kind, str]]] = None) -> List[str]:
        """
        Resolve requested kinds to bucket names, in registry order.

        Args:
            kinds: Kinds to keep (a single kind is accepted), or None for every
                registered kind

        Raises:
            UnknownKind: If a requested kind is not registered
        """
        if kinds is None:
            return [entry.bucket for entry in self._entries.values()]
        if isinstance(kinds, str):
            kinds = (kinds,)

        requested = {getattr(kind, "value", kind) for kind in kinds}
        for kind in requested:
            self.lookup(kind)
        return [
            entry.bucket
            for code, entry in self._entries.items()
            if code in requested
        ]

    def __contains__(self, kind: str) -> bool:
        return kind in self._entries

    def __iter__(self):
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)


registry = KindRegistry([
    KindEntry(Kind.COMMENT, Comment, decode_comment, "comments"),
    KindEntry(Kind.ACCOUNT, Account, decode_account, "accounts"),
    KindEntry(Kind.POST, Post, decode_post, "posts"),
    KindEntry(Kind.SUBREDDIT, Subreddit, decode_subreddit, "subreddits"),
    KindEntry(Kind.MORE, MoreComments, decode_more, "more"),
])
