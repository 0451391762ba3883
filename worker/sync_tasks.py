"""
Celery sync tasks: background article synchronization.

`sync.articles` runs on the beat schedule and skips itself while offline.
`sync.force` is queued on demand and fails when no remote source answers.
Each run builds its own fetcher and closes it afterwards.
"""
import logging
from dataclasses import asdict
from typing import Optional

from celery_app import celery_app
from medassist.fetching.factory import build_fetcher
from medassist.sync.manager import SyncManager, SyncReport

logger = logging.getLogger(__name__)


def _report_payload(report: Optional[SyncReport]) -> dict:
    if report is None:
        return {"ok": False, "skipped": True, "message": "offline"}

    payload = asdict(report)
    payload["origin"] = report.origin.value if report.origin else None
    payload["skipped"] = False
    return payload


def run_sync(force: bool = False, fetcher=None) -> dict:
    """Run one sync pass and return a JSON-serialisable report."""
    owned = fetcher is None
    if owned:
        fetcher = build_fetcher()

    try:
        manager = SyncManager(fetcher)
        report = manager.force_sync() if force else manager.auto_sync_if_needed()
    finally:
        if owned:
            fetcher.close()

    payload = _report_payload(report)
    logger.info(f"Sync task finished: {payload}")
    return payload


@celery_app.task(name="sync.articles")
def sync_articles_task():
    """Periodic auto-sync; a no-op while offline."""
    return run_sync(force=False)


@celery_app.task(name="sync.force")
def force_sync_task():
    """On-demand sync that must reach a remote source."""
    return run_sync(force=True)
