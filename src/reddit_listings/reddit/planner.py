"""
Batch request planning.

Splits identifier lists into contiguous chunks that respect the
per-request ceiling and encodes each chunk in the shape its endpoint
expects.
"""

from typing import Dict, List, Optional, Sequence, Tuple

import structlog
from pydantic import BaseModel, ConfigDict, Field

from reddit_listings.config import ListingsConfig
from reddit_listings.exceptions import EmptyRequest, ValidationError
from reddit_listings.models.things import Kind
from reddit_listings.reddit.fullname import parse_fullname

logger = structlog.get_logger(__name__)


class BatchRequest(BaseModel):
    """
    One planned wire request.

    Attributes:
        index: Position of this request within its batch
        method: HTTP method
        path: Request path
        params: Query parameters
        ids: Identifiers covered by this request, in caller order
    """

    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0)
    method: str = "GET"
    path: str
    params: Dict[str, str] = Field(default_factory=dict)
    ids: Tuple[str, ...]


class BatchPlanner:
    """
    Plans the requests needed to fetch a set of identifiers.

    Chunks are contiguous: the first request gets the first
    ``max_ids_per_request`` identifiers, the next request the following ones,
    and so on.

    Example:
        >>> planner = BatchPlanner(ListingsConfig(max_ids_per_request=100))
        >>> [len(chunk) for chunk in planner.partition(ids)]  # 250 ids
        [100, 100, 50]
    """

    def __init__(self, config: Optional[ListingsConfig] = None) -> None:
        self.config = config or ListingsConfig()

    def partition(self, ids: Sequence[str]) -> List[Tuple[str, ...]]:
        """
        Split identifiers into chunks no larger than the configured ceiling.

        Raises:
            EmptyRequest: If no identifiers are given
        """
        ids = tuple(ids)
        if not ids:
            raise EmptyRequest()

        size = self.config.max_ids_per_request
        return [ids[start:start + size] for start in range(0, len(ids), size)]

    def plan_info(self, fullnames: Sequence[str]) -> List[BatchRequest]:
        """
        Plan mixed-kind lookups against the info endpoint.

        Each request carries its chunk as ``id=<comma-joined fullnames>``.

        Raises:
            EmptyRequest: If no fullnames are given
            ValidationError: If a value is not a valid fullname
        """
        chunks = self.partition(fullnames)
        for fullname in fullnames:
            parse_fullname(fullname)

        requests = [
            BatchRequest(
                index=index,
                path=self.config.info_path,
                params={"id": ",".join(chunk)},
                ids=chunk,
            )
            for index, chunk in enumerate(chunks)
        ]
        self._log_plan("info", requests)
        return requests

    def plan_posts(self, fullnames: Sequence[str]) -> List[BatchRequest]:
        """
        Plan post lookups against the by-id endpoint.

        Each request carries its chunk in the path: ``/by_id/t3_a,t3_b``.

        Raises:
            EmptyRequest: If no fullnames are given
            ValidationError: If a value is not a post fullname
        """
        chunks = self.partition(fullnames)
        for fullname in fullnames:
            kind, _ = parse_fullname(fullname)
            if kind is not Kind.POST:
                raise ValidationError("expected a t3 (post) fullname", field=fullname)

        prefix = self.config.by_id_path.rstrip("/")
        requests = [
            BatchRequest(
                index=index,
                path=f"{prefix}/{','.join(chunk)}",
                ids=chunk,
            )
            for index, chunk in enumerate(chunks)
        ]
        self._log_plan("by_id", requests)
        return requests

    def _log_plan(self, endpoint: str, requests: List[BatchRequest]) -> None:
        logger.debug(
            "batch_planned",
            endpoint=endpoint,
            requests=len(requests),
            ids=sum(len(request.ids) for request in requests),
            max_ids_per_request=self.config.max_ids_per_request,
        )
