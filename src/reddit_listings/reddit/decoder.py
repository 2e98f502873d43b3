"""
Envelope decoding for Reddit API responses.

``decode_listing`` validates the top-level Listing envelope of a response
body. ``decode_thing`` turns one ``{kind, data}`` child into a typed entity
through the kind registry.
"""

import json
from typing import Any, Dict, List, NamedTuple, Union

import structlog

from reddit_listings.exceptions import MalformedField, MalformedResponse
from reddit_listings.models.results import Pagination
from reddit_listings.models.things import Entity, Kind
from reddit_listings.reddit.registry import KindRegistry, registry as default_registry

logger = structlog.get_logger(__name__)


class Listing(NamedTuple):
    """A decoded Listing envelope whose children are still raw envelopes."""

    children: List[Any]
    pagination: Pagination


def decode_thing(raw: Any, registry: KindRegistry = default_registry) -> Entity:
    """
    Decode one ``{kind, data}`` envelope into a typed entity.

    Args:
        raw: Parsed JSON envelope
        registry: Kind registry used for dispatch

    Returns:
        Immutable entity of the kind's model type

    Raises:
        UnknownKind: If the kind has no registered decoder
        MalformedField: If the envelope or one of its fields is malformed

    Example:
        >>> post = decode_thing({"kind": "t3", "data": {"id": "i2gvg4", "name": "t3_i2gvg4"}})
        >>> post.fullname
        't3_i2gvg4'
    """
    if not isinstance(raw, dict):
        raise MalformedField("kind", "", f"expected an envelope object, got {type(raw).__name__}")

    kind = raw.get("kind")
    if not isinstance(kind, str):
        raise MalformedField("kind", "", "missing or non-string kind")

    entry = registry.lookup(kind)

    data = raw.get("data")
    if not isinstance(data, dict):
        raise MalformedField("data", kind, "missing or non-object data")

    return entry.decode(data)


def _load(payload: Union[bytes, str, Dict[str, Any]]) -> Any:
    if isinstance(payload, (bytes, bytearray, str)):
        try:
            return json.loads(payload)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedResponse(f"Response is not valid JSON: {e}") from e
    return payload


def _cursor(data: Dict[str, Any], name: str) -> str:
    value = data.get(name)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise MalformedResponse(f"Listing {name} must be a string or null")
    return value


def decode_listing(payload: Union[bytes, str, Dict[str, Any]]) -> Listing:
    """
    Decode the top-level Listing envelope of a response.

    Args:
        payload: Raw response body, or JSON already parsed by the transport

    Returns:
        Listing with raw children and pagination metadata

    Raises:
        MalformedResponse: If the body is not JSON or not a Listing envelope
    """
    document = _load(payload)

    if not isinstance(document, dict) or document.get("kind") != Kind.LISTING.value:
        raise MalformedResponse("Response is not a Listing envelope")

    data = document.get("data")
    if not isinstance(data, dict):
        raise MalformedResponse("Listing envelope has no data object")

    children = data.get("children")
    if not isinstance(children, list):
        raise MalformedResponse("Listing data has no children array")

    pagination = Pagination(
        before=_cursor(data, "before"),
        after=_cursor(data, "after"),
        modhash=_cursor(data, "modhash"),
    )

    logger.debug(
        "listing_decoded",
        children=len(children),
        before=pagination.before,
        after=pagination.after,
    )

    return Listing(children=children, pagination=pagination)
