"""
Configuration for listing retrieval.

Settings are passed explicitly to the planner and the service; nothing here
is read implicitly at import time.
"""
import os

from pydantic import BaseModel, ConfigDict, Field

from reddit_listings.exceptions import ValidationError

DEFAULT_MAX_IDS_PER_REQUEST = 100


class ListingsConfig(BaseModel):
    """
    Settings for batch planning and result assembly.

    Example:
        >>> config = ListingsConfig(max_ids_per_request=50)
        >>> planner = BatchPlanner(config)
    """

    model_config = ConfigDict(frozen=True)

    max_ids_per_request: int = Field(
        DEFAULT_MAX_IDS_PER_REQUEST,
        ge=1,
        description="Maximum identifiers sent in one request",
    )
    preserve_global_order: bool = Field(
        False,
        description="Re-sort multi-request results into the requested order",
    )
    info_path: str = Field(
        "/api/info",
        description="Endpoint for mixed-kind lookups by fullname",
    )
    by_id_path: str = Field(
        "/by_id",
        description="Endpoint prefix for post lookups by fullname",
    )

    @classmethod
    def from_env(cls) -> "ListingsConfig":
        """
        Build a configuration from environment variables.

        Reads:
            REDDIT_MAX_IDS_PER_REQUEST: Identifier ceiling per request
            REDDIT_PRESERVE_ORDER: "true"/"1" to preserve global order

        Raises:
            ValidationError: If REDDIT_MAX_IDS_PER_REQUEST is not a positive integer
        """
        raw_max = os.getenv("REDDIT_MAX_IDS_PER_REQUEST", str(DEFAULT_MAX_IDS_PER_REQUEST))
        try:
            max_ids = int(raw_max)
        except ValueError as e:
            raise ValidationError(
                f"expected an integer, got {raw_max!r}",
                field="REDDIT_MAX_IDS_PER_REQUEST",
            ) from e

        if max_ids < 1:
            raise ValidationError(
                "must be at least 1",
                field="REDDIT_MAX_IDS_PER_REQUEST",
            )

        preserve = os.getenv("REDDIT_PRESERVE_ORDER", "false").lower() in ("1", "true", "yes")

        return cls(max_ids_per_request=max_ids, preserve_global_order=preserve)
