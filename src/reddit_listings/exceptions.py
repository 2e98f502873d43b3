"""
Custom exceptions for Reddit listing retrieval and decoding.

Two families live here. Terminal errors (TransportFailure,
MalformedResponse, ValidationError) abort the request that raised them.
Per-child decode errors (UnknownKind, MalformedField) are collected as
warnings by the listing splitter and never abort a listing.
"""

from typing import Optional


class RedditAPIError(Exception):
    """
    Base exception for all Reddit listing related errors.

    This is the parent class for every exception raised by this package.
    Use this for catching any Reddit-related error.
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        """
        Initialize RedditAPIError.

        Args:
            message: Error description
            status_code: Optional HTTP status code associated with the error
        """
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class TransportFailure(RedditAPIError):
    """
    Raised when the transport could not deliver a response.

    This occurs when:
    - The connection fails or times out
    - Reddit answers with a non-2xx status

    Retrying is the caller's decision; this package never retries.

    Example:
        >>> raise TransportFailure("Reddit returned 503", status_code=503, path="/api/info")
    """

    def __init__(
        self,
        message: str = "Reddit API request failed",
        status_code: Optional[int] = None,
        path: Optional[str] = None,
    ) -> None:
        """
        Initialize TransportFailure.

        Args:
            message: Error description
            status_code: HTTP status code, if a response was received
            path: Request path that failed
        """
        self.path = path
        super().__init__(message, status_code=status_code)


class MalformedResponse(RedditAPIError):
    """
    Raised when a response body is not a decodable Listing.

    The body is either not valid JSON or its top level is not a
    ``{"kind": "Listing", "data": {...}}`` envelope.
    """

    def __init__(self, message: str = "Malformed Reddit API response") -> None:
        super().__init__(message)


class DecodeError(RedditAPIError):
    """
    Base exception for failures that affect a single listing child.

    Attributes:
        kind: Kind code of the offending envelope (may be empty)
        index: Position of the child within its listing, set by the splitter
    """

    def __init__(self, message: str, kind: str = "", index: Optional[int] = None) -> None:
        self.kind = kind
        self.index = index
        super().__init__(message)


class UnknownKind(DecodeError):
    """
    Raised when an envelope's kind has no registered decoder.

    Example:
        >>> raise UnknownKind("t4")
    """

    def __init__(self, kind: str, index: Optional[int] = None) -> None:
        super().__init__(f"Unknown kind '{kind}'", kind=kind, index=index)


class MalformedField(DecodeError):
    """
    Raised when a field of an envelope's data cannot be normalized.

    Attributes:
        field: Wire name of the field that failed
        reason: Why normalization failed

    Example:
        >>> raise MalformedField("likes", "t3", "expected null, true or false")
    """

    def __init__(
        self,
        field: str,
        kind: str,
        reason: str,
        index: Optional[int] = None,
    ) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"{kind}.{field}: {reason}", kind=kind, index=index)


class ValidationError(RedditAPIError):
    """
    Raised when request parameters are invalid.

    This occurs when:
    - A fullname is malformed or carries an unknown prefix
    - A post-only request contains a non-post fullname
    - Required configuration is missing

    This is a client-side error and should not be retried.

    Example:
        >>> raise ValidationError("expected a t3 fullname", field="t1_abc")
    """

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        """
        Initialize ValidationError.

        Args:
            message: Error description
            field: Optional field name that failed validation
        """
        self.field = field

        if field:
            message = f"{field}: {message}"

        super().__init__(message, status_code=422)


class EmptyRequest(ValidationError):
    """Raised when a batch request names no identifiers at all."""

    def __init__(self, message: str = "At least one identifier is required") -> None:
        super().__init__(message)
