"""
Fullname parsing and construction.

A fullname is ``<prefix>_<local-id>``, e.g. ``t3_i2gvg4``. The prefix
identifies exactly one entity kind.
"""

from typing import Tuple

from reddit_listings.exceptions import ValidationError
from reddit_listings.models.things import Kind

FULLNAME_PREFIXES = (
    Kind.COMMENT,
    Kind.ACCOUNT,
    Kind.POST,
    Kind.MESSAGE,
    Kind.SUBREDDIT,
    Kind.AWARD,
)

_KIND_BY_PREFIX = {kind.value: kind for kind in FULLNAME_PREFIXES}


def parse_fullname(fullname: str) -> Tuple[Kind, str]:
    """
    Split a fullname into its kind and local id.

    Args:
        fullname: Fullname such as "t1_g05v931"

    Returns:
        Tuple of (Kind, local id)

    Raises:
        ValidationError: If the value is not a fullname or the prefix is unknown

    Example:
        >>> parse_fullname("t5_2qh23")
        (<Kind.SUBREDDIT: 't5'>, '2qh23')
    """
    if not isinstance(fullname, str):
        raise ValidationError("fullname must be a string", field=repr(fullname))

    prefix, sep, local_id = fullname.partition("_")
    if not sep or not local_id:
        raise ValidationError("expected <prefix>_<id>", field=fullname)

    kind = _KIND_BY_PREFIX.get(prefix)
    if kind is None:
        raise ValidationError(f"unknown fullname prefix '{prefix}'", field=fullname)

    return kind, local_id


def make_fullname(kind: Kind, local_id: str) -> str:
    """Build a fullname from a kind and a local id."""
    if kind not in FULLNAME_PREFIXES:
        raise ValidationError(f"kind '{kind.value}' has no fullname prefix")
    return f"{kind.value}_{local_id}"
