"""
Sync manager: manual, automatic and forced article synchronization.

Wraps `SynchronizedFetcher.fetch_articles()` and reduces its result to a
`SyncReport` a caller can display or log. No presentation happens here.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from medassist.fetching.connectivity import ConnectivityProbe
from medassist.fetching.results import Origin
from medassist.fetching.service import SynchronizedFetcher

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SyncReport:
    ok: bool
    message: str
    count: int = 0
    origin: Optional[Origin] = None


class SyncManager:
    def __init__(self, fetcher: SynchronizedFetcher, probe: Optional[ConnectivityProbe] = None):
        self.fetcher = fetcher
        self.probe = probe or fetcher.probe

    def sync_articles(self) -> SyncReport:
        """Manual sync, e.g. pull-to-refresh."""
        logger.info("Manual sync initiated")
        result = self.fetcher.fetch_articles()

        if not result.ok:
            logger.error(f"Sync failed: {result.reason.value} {result.detail}")
            return SyncReport(ok=False, message=f"Sync failed: {result.reason.value}")

        logger.info(f"Sync successful: {len(result.items)} articles from {result.origin.value}")
        return SyncReport(
            ok=True,
            message=f"Synced {len(result.items)} articles",
            count=len(result.items),
            origin=result.origin,
        )

    def auto_sync_if_needed(self) -> Optional[SyncReport]:
        """Sync when the network is available; returns None when skipped."""
        if not self.probe.is_online():
            logger.info("No network - skipping auto sync")
            return None

        logger.info("Auto-sync initiated (network available)")
        return self.sync_articles()

    def force_sync(self) -> SyncReport:
        """
        Sync that must reach a remote source.

        A result served from the local cache means both remote tiers failed,
        so it is reported as a failed forced sync.
        """
        logger.info("Force sync initiated")
        result = self.fetcher.fetch_articles()

        if not result.ok:
            logger.error(f"Force sync failed: {result.reason.value}")
            return SyncReport(ok=False, message=f"Force sync failed: {result.reason.value}")

        if result.origin == Origin.CACHE:
            logger.warning("Force sync reached no remote source; cache left unchanged")
            return SyncReport(
                ok=False,
                message="Force sync failed: remote sources unavailable",
                count=len(result.items),
                origin=result.origin,
            )

        logger.info(f"Force sync successful: {len(result.items)} articles")
        return SyncReport(
            ok=True,
            message=f"Force sync complete: {len(result.items)} articles",
            count=len(result.items),
            origin=result.origin,
        )
