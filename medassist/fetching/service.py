"""
Synchronized fetcher: cache-first reads with ordered remote fallback.

Tier order for every call is Primary, then Secondary. The secondary source is
a fallback, never a race: it is contacted only after the primary failed, and
the two are never called concurrently. Articles are additionally served from
and written through to the local cache.

Every remote failure is converted into "try the next tier", including
unexpected errors raised by a source. Only exhaustion of all tiers reaches
the caller, as a `Failure` value; nothing a source raises escapes this module.

Concurrent calls are neither de-duplicated nor serialized. Write-through uses
replace-by-id semantics, so concurrent writers converge.
"""
import logging
from typing import Callable, List, Optional, Tuple, TypeVar

from medassist.fetching.connectivity import ConnectivityProbe
from medassist.fetching.results import (
    Accepted,
    Failure,
    FailureReason,
    FetchResult,
    Origin,
    SubmitResult,
    Success,
)
from medassist.fetching.sources.base import RemoteSource, SourceError
from medassist.schemas.records import BookingRequest
from medassist.storage.cache import LocalCache

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SynchronizedFetcher:
    """Coordinates the local cache, the connectivity probe and two remote tiers."""

    def __init__(
        self,
        cache: LocalCache,
        probe: ConnectivityProbe,
        primary: RemoteSource,
        secondary: RemoteSource,
    ):
        self.cache = cache
        self.probe = probe
        self.primary = primary
        self.secondary = secondary

    def _tiers(self) -> List[Tuple[Origin, RemoteSource]]:
        return [(Origin.PRIMARY, self.primary), (Origin.SECONDARY, self.secondary)]

    def _fetch_remote(
        self, resource: str, call: Callable[[RemoteSource], List[T]]
    ) -> Tuple[List[T], Optional[Origin], List[str]]:
        """
        Try each remote tier in order until one yields records.

        Returns:
            (records, origin, errors); records is empty and origin None when
            every tier failed or came back empty.
        """
        errors = []
        for origin, source in self._tiers():
            try:
                logger.info(f"Fetching {resource} from {origin.value} source ({source.name})")
                records = call(source)
            except SourceError as e:
                logger.warning(f"{origin.value} source failed for {resource}: {e}")
                errors.append(f"{origin.value}: {e}")
                continue
            except Exception as e:
                logger.error(f"Unexpected error from {origin.value} source for {resource}: {e}")
                errors.append(f"{origin.value}: {e}")
                continue

            if records:
                logger.info(f"Fetched {len(records)} {resource} from {origin.value} source")
                return records, origin, errors

            logger.warning(f"{origin.value} source returned no {resource}")
            errors.append(f"{origin.value}: empty response")

        return [], None, errors

    def _read_cache(self) -> list:
        try:
            return self.cache.read_all()
        except Exception as e:
            # Read failures never abort the fetch
            logger.warning(f"Local cache read failed, treating as empty: {e}")
            return []

    def _write_through(self, records: list) -> None:
        try:
            self.cache.write_all(records)
        except Exception as e:
            logger.error(f"Write-through to local cache failed: {e}")

    def fetch_articles(self) -> FetchResult:
        """
        Fetch articles with offline-first strategy.

        1. Read the local cache
        2. Offline: serve the cache, or fail when it is empty
        3. Online: primary, then secondary on failure
        4. Fresh remote records are written through and returned
        5. Otherwise fall back to the (possibly stale) cache
        """
        cached = self._read_cache()
        if cached:
            logger.debug(f"Loaded {len(cached)} articles from local cache")

        if not self.probe.is_online():
            logger.info("Offline - returning cached articles")
            if cached:
                return Success(cached, Origin.CACHE)
            return Failure(FailureReason.NO_DATA_AVAILABLE, "No articles available offline")

        remote, origin, errors = self._fetch_remote("articles", lambda source: source.get_articles())

        if remote:
            self._write_through(remote)
            return Success(remote, origin)

        if cached:
            logger.warning(f"All remote sources failed; serving {len(cached)} cached articles")
            return Success(cached, Origin.CACHE)

        logger.error(f"No articles available: {'; '.join(errors)}")
        return Failure(FailureReason.NO_DATA_AVAILABLE, "; ".join(errors))

    def fetch_providers(self) -> FetchResult:
        """Fetch providers from primary, falling back to secondary. Never cached."""
        remote, origin, errors = self._fetch_remote("providers", lambda source: source.get_providers())

        if remote:
            return Success(remote, origin)

        logger.error(f"Both sources failed for providers: {'; '.join(errors)}")
        return Failure(FailureReason.ALL_SOURCES_UNAVAILABLE, "; ".join(errors))

    def submit_booking(self, request: BookingRequest, user_identity: Optional[str] = None) -> SubmitResult:
        """
        Submit a booking to the primary source, falling back to the secondary.

        The request is validated locally first; an invalid request never
        reaches either source. Each tier is attempted at most once and no
        idempotency key is generated here.
        """
        missing = request.missing_fields()
        if missing:
            logger.warning(f"Booking rejected locally, missing fields: {missing}")
            return Failure(FailureReason.INVALID_REQUEST, f"Missing required fields: {', '.join(missing)}")

        errors = []
        for origin, source in self._tiers():
            try:
                logger.info(f"Submitting booking via {origin.value} source ({source.name})")
                confirmation = source.submit_booking(request, user_identity)
            except SourceError as e:
                logger.warning(f"{origin.value} source rejected booking: {e}")
                errors.append(f"{origin.value}: {e}")
                continue
            except Exception as e:
                logger.error(f"Unexpected error from {origin.value} source for booking: {e}")
                errors.append(f"{origin.value}: {e}")
                continue

            logger.info(f"Booking {confirmation.id} accepted by {origin.value} source")
            return Accepted(confirmation, origin)

        logger.error(f"Both sources failed for booking: {'; '.join(errors)}")
        return Failure(FailureReason.BOTH_SOURCES_FAILED, "; ".join(errors))

    def close(self) -> None:
        self.primary.close()
        self.secondary.close()
        self.probe.close()
