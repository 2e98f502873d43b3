"""
Result assembly for multi-request batches.

Partitions may complete in any order; results are always joined by
partition index, never by arrival.
"""

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from reddit_listings.exceptions import DecodeError
from reddit_listings.models.results import ListingResult, Pagination
from reddit_listings.models.things import Entity


def assemble(
    parts: Iterable[Tuple[int, ListingResult]],
    order: Optional[Sequence[str]] = None,
) -> ListingResult:
    """
    Combine per-partition results into one ListingResult.

    Args:
        parts: (partition index, result) pairs in any order
        order: Requested fullnames; when given, each bucket is stably
            re-sorted into this order and unmatched entities go last

    Returns:
        Combined result carrying the pagination of the last partition

    Example:
        >>> combined = assemble([(1, second), (0, first)])
        >>> combined.posts == first.posts + second.posts
        True
    """
    ordered = sorted(parts, key=lambda part: part[0])

    if not ordered:
        return ListingResult()

    if len(ordered) == 1 and order is None:
        return ordered[0][1]

    buckets: Dict[str, List[Entity]] = {}
    positions: Dict[str, List[int]] = {}
    warnings: List[DecodeError] = []
    pagination = Pagination()
    offset = 0

    for _, result in ordered:
        for name, entities in result.buckets.items():
            buckets.setdefault(name, []).extend(entities)
            positions.setdefault(name, []).extend(
                position + offset for position in result.positions.get(name, ())
            )
        warnings.extend(result.warnings)
        pagination = result.pagination
        offset += result.child_count

    if order is not None:
        rank = {fullname: i for i, fullname in enumerate(order)}
        missing = len(rank)
        for name in buckets:
            pairs = sorted(
                zip(buckets[name], positions[name]),
                key=lambda pair: rank.get(pair[0].fullname, missing),
            )
            buckets[name] = [entity for entity, _ in pairs]
            positions[name] = [position for _, position in pairs]

    return ListingResult(
        buckets={name: tuple(items) for name, items in buckets.items()},
        positions={name: tuple(items) for name, items in positions.items()},
        pagination=pagination,
        warnings=tuple(warnings),
        child_count=offset,
    )
