"""
REST source for the MedAssist demo backend.

Endpoints: GET articles, GET providers, POST bookings. JSON bodies use the
camelCase field names of the records.
"""
import logging
from typing import List, Optional

from medassist.fetching.sources.base import MalformedResponse, RemoteSource
from medassist.fetching.sources.registry import registry
from medassist.schemas.records import Article, BookingConfirmation, BookingRequest, Provider

logger = logging.getLogger(__name__)


@registry.register("rest")
class RestSource(RemoteSource):
    """Primary source: the demo REST backend."""

    def get_articles(self) -> List[Article]:
        articles = self._parse_list(Article, self._request("GET", "articles"))
        logger.info(f"RestSource fetched {len(articles)} articles from {self.base_url}")
        return articles

    def get_providers(self) -> List[Provider]:
        providers = self._parse_list(Provider, self._request("GET", "providers"))
        logger.info(f"RestSource fetched {len(providers)} providers from {self.base_url}")
        return providers

    def submit_booking(
        self, request: BookingRequest, user_identity: Optional[str] = None
    ) -> BookingConfirmation:
        headers = {"Content-Type": "application/json"}
        if request.request_id:
            headers["Idempotency-Key"] = request.request_id

        body = request.model_dump(by_alias=True, exclude_none=True, exclude={"request_id"})
        payload = self._request("POST", "bookings", json=body, headers=headers)
        if not isinstance(payload, dict):
            raise MalformedResponse(f"{self.name}: booking response is not an object")

        confirmation = self._parse_one(BookingConfirmation, payload)
        if not confirmation.id:
            raise MalformedResponse(f"{self.name}: booking response carries no id")

        logger.info(f"RestSource booking accepted: {confirmation.id} ({confirmation.status})")
        return confirmation
