"""
Transport layer for listing requests.

Defines the Transport protocol the listings service depends on and a PRAW
backed implementation. Any object with a compatible ``request`` method,
synchronous or ``async``, can stand in for PrawTransport.
"""

import os
from typing import Any, Dict, Optional, Protocol

import praw
import structlog
from praw.exceptions import PRAWException
from prawcore.exceptions import PrawcoreException, RequestException, ResponseException

from reddit_listings.exceptions import TransportFailure, ValidationError

logger = structlog.get_logger(__name__)

DEFAULT_USER_AGENT = "reddit-listings/1.0"


class Transport(Protocol):
    """Anything that can perform one Reddit API request."""

    def request(self, method: str, path: str, params: Dict[str, str]) -> Any:
        """
        Perform a request and return the body.

        Returns:
            Raw bytes, text, or already-parsed JSON

        Raises:
            TransportFailure: If no usable response was received
        """
        ...


class PrawTransport:
    """
    Transport backed by an authenticated ``praw.Reddit`` instance.

    Authentication, token refresh and PRAW's own rate limiting stay inside
    PRAW. Request failures are mapped to TransportFailure.

    Example:
        >>> transport = PrawTransport.from_env()
        >>> body = transport.request("GET", "/api/info", {"id": "t3_i2gvg4"})
    """

    def __init__(self, reddit: praw.Reddit) -> None:
        self.reddit = reddit

    @classmethod
    def from_env(cls, timeout: int = 30) -> "PrawTransport":
        """
        Build a read-only transport from environment variables.

        Reads REDDIT_CLIENT_ID, REDDIT_CLIENT_SECRET and REDDIT_USER_AGENT.

        Args:
            timeout: Request timeout in seconds

        Raises:
            ValidationError: If a required credential is missing
        """
        client_id = os.getenv("REDDIT_CLIENT_ID")
        client_secret = os.getenv("REDDIT_CLIENT_SECRET")
        user_agent = os.getenv("REDDIT_USER_AGENT", DEFAULT_USER_AGENT)

        if not client_id:
            logger.error("missing_credential", variable="REDDIT_CLIENT_ID")
            raise ValidationError("environment variable is required", field="REDDIT_CLIENT_ID")

        if not client_secret:
            logger.error("missing_credential", variable="REDDIT_CLIENT_SECRET")
            raise ValidationError("environment variable is required", field="REDDIT_CLIENT_SECRET")

        logger.info(
            "reddit_transport_initializing",
            user_agent=user_agent,
            client_id=f"{client_id[:8]}...",  # Partial log for security
        )

        reddit = praw.Reddit(
            client_id=client_id,
            client_secret=client_secret,
            user_agent=user_agent,
            timeout=timeout,
        )
        reddit.read_only = True

        return cls(reddit)

    def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, str]] = None,
    ) -> Any:
        """
        Perform a request through PRAW and return the parsed JSON body.

        Raises:
            TransportFailure: On connection errors, timeouts and non-2xx responses
        """
        try:
            return self.reddit.request(method=method, path=path, params=params or {})

        except ResponseException as e:
            status_code = e.response.status_code
            logger.error("reddit_response_error", path=path, status_code=status_code)
            raise TransportFailure(
                f"Reddit API returned {status_code}",
                status_code=status_code,
                path=path,
            ) from e

        except RequestException as e:
            logger.error("reddit_request_error", path=path, error=str(e))
            raise TransportFailure(f"Request to Reddit API failed: {e}", path=path) from e

        except (PrawcoreException, PRAWException) as e:
            logger.error(
                "reddit_transport_error",
                path=path,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise TransportFailure(f"Reddit API error: {e}", path=path) from e
