"""
Field normalization for Reddit wire values.

Reddit encodes several fields ambiguously: timestamps are float epoch
seconds, ``likes`` is null/true/false, and ``edited`` is either ``false``
or an epoch time. The functions here turn those values into unambiguous
Python values and raise TypeError or ValueError for anything they cannot
interpret. The decoder turns those errors into MalformedField.
"""

import math
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple

from reddit_listings.models.things import ZERO_TIMESTAMP, Vote


def _describe(value: Any) -> str:
    return type(value).__name__


class FieldNormalizer:
    """
    Normalizer for individual Reddit data fields.

    All normalization methods are static and can be called without
    instantiation. ``None`` always maps to the field's documented default.

    Example:
        >>> FieldNormalizer.normalize_vote(None)
        <Vote.ABSENT: 'absent'>
        >>> FieldNormalizer.normalize_edited(False) == ZERO_TIMESTAMP
        True
    """

    @staticmethod
    def normalize_timestamp(value: Any) -> datetime:
        """
        Convert epoch seconds to a UTC datetime.

        Fractional seconds are truncated.

        Args:
            value: Seconds since the Unix epoch (int or float), or None

        Returns:
            Timezone-aware UTC datetime, or ZERO_TIMESTAMP for None

        Raises:
            TypeError: If value is not a number
            ValueError: If value is negative or not finite

        Example:
            >>> FieldNormalizer.normalize_timestamp(1596392588.0)
            datetime.datetime(2020, 8, 2, 18, 23, 8, tzinfo=datetime.timezone.utc)
        """
        if value is None:
            return ZERO_TIMESTAMP

        # bool is an int subclass; true/false are never timestamps
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"expected epoch seconds, got {_describe(value)}")

        if not math.isfinite(value) or value < 0:
            raise ValueError(f"epoch seconds out of range: {value!r}")

        try:
            return datetime.fromtimestamp(int(value), tz=timezone.utc)
        except (OverflowError, OSError) as e:
            raise ValueError(f"epoch seconds out of range: {value!r}") from e

    @staticmethod
    def normalize_edited(value: Any) -> datetime:
        """
        Convert the ``edited`` marker to a datetime.

        Args:
            value: ``false`` (never edited), epoch seconds, or None

        Returns:
            ZERO_TIMESTAMP if never edited, the edit time otherwise

        Raises:
            TypeError: If value is ``true`` or not a number
        """
        if value is None or value is False:
            return ZERO_TIMESTAMP

        if value is True:
            raise TypeError("expected false or epoch seconds, got true")

        return FieldNormalizer.normalize_timestamp(value)

    @staticmethod
    def normalize_vote(value: Any) -> Vote:
        """
        Convert ``likes`` to a Vote.

        Args:
            value: null, true or false

        Returns:
            Vote.ABSENT, Vote.UPVOTED or Vote.DOWNVOTED

        Raises:
            TypeError: If value is anything else
        """
        if value is None:
            return Vote.ABSENT
        if value is True:
            return Vote.UPVOTED
        if value is False:
            return Vote.DOWNVOTED
        raise TypeError(f"expected null, true or false, got {_describe(value)}")

    @staticmethod
    def normalize_integer(value: Any) -> int:
        """Convert a signed integer field such as ``score``. None becomes 0."""
        if value is None:
            return 0

        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"expected an integer, got {_describe(value)}")

        if isinstance(value, float):
            if not value.is_integer():
                raise ValueError(f"expected an integer, got {value!r}")
            value = int(value)

        return value

    @staticmethod
    def normalize_count(value: Any) -> int:
        """
        Convert a count field (``num_comments``, ``subscribers``, ...).

        Args:
            value: Non-negative integer, or None

        Returns:
            The count, or 0 for None

        Raises:
            TypeError: If value is not a number
            ValueError: If value is negative or fractional
        """
        count = FieldNormalizer.normalize_integer(value)
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        return count

    @staticmethod
    def normalize_ratio(value: Any) -> float:
        """Convert a ratio field such as ``upvote_ratio`` to a float in [0, 1]."""
        if value is None:
            return 0.0

        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"expected a number, got {_describe(value)}")

        if not 0.0 <= value <= 1.0:
            raise ValueError(f"ratio must be within [0, 1], got {value!r}")

        return float(value)

    @staticmethod
    def normalize_string(value: Any) -> str:
        """Convert a string field. None becomes an empty string."""
        if value is None:
            return ""
        if not isinstance(value, str):
            raise TypeError(f"expected a string, got {_describe(value)}")
        return value

    @staticmethod
    def normalize_optional_string(value: Any) -> Optional[str]:
        if value is None:
            return None
        return FieldNormalizer.normalize_string(value)

    @staticmethod
    def normalize_boolean(value: Any) -> bool:
        """Convert a boolean flag. None becomes False."""
        if value is None:
            return False
        if not isinstance(value, bool):
            raise TypeError(f"expected a boolean, got {_describe(value)}")
        return value

    @staticmethod
    def normalize_string_list(value: Any) -> Tuple[str, ...]:
        """Convert a list of strings (e.g. ``more.children``) to a tuple."""
        if value is None:
            return ()
        if not isinstance(value, list):
            raise TypeError(f"expected a list, got {_describe(value)}")
        return tuple(FieldNormalizer.normalize_string(item) for item in value)

    @staticmethod
    def normalize_object_list(value: Any) -> Tuple[Dict[str, Any], ...]:
        """Convert a list of JSON objects (e.g. flair richtext segments) to a tuple."""
        if value is None:
            return ()
        if not isinstance(value, list):
            raise TypeError(f"expected a list, got {_describe(value)}")
        for item in value:
            if not isinstance(item, dict):
                raise TypeError(f"expected a list of objects, got {_describe(item)} item")
        return tuple(dict(item) for item in value)


# Create singleton instance for convenient import
normalizer = FieldNormalizer()


# Convenience functions for direct import
def normalize_timestamp(value: Any) -> datetime:
    """Convert epoch seconds to a UTC datetime. See FieldNormalizer.normalize_timestamp()."""
    return FieldNormalizer.normalize_timestamp(value)


def normalize_edited(value: Any) -> datetime:
    """Convert the ``edited`` marker. See FieldNormalizer.normalize_edited()."""
    return FieldNormalizer.normalize_edited(value)


def normalize_vote(value: Any) -> Vote:
    """Convert ``likes`` to a Vote. See FieldNormalizer.normalize_vote()."""
    return FieldNormalizer.normalize_vote(value)


def normalize_count(value: Any) -> int:
    return FieldNormalizer.normalize_count(value)


def normalize_ratio(value: Any) -> float:
    return FieldNormalizer.normalize_ratio(value)
