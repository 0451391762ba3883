"""Factory for the synchronized fetcher.

Configuration-driven source selection via system settings. Every collaborator
is constructed here and injected; nothing is shared through module globals.
"""
import logging
from typing import Optional

from sqlalchemy.engine import Engine

from medassist.fetching.connectivity import ConnectivityProbe, HttpConnectivityProbe
from medassist.fetching.service import SynchronizedFetcher
from medassist.fetching.sources import SourceConfig, get_source
from medassist.storage.cache import LocalCache, SqlArticleCache
from medassist.storage.db import get_engine

logger = logging.getLogger(__name__)


def build_fetcher(
    settings=None,
    cache: Optional[LocalCache] = None,
    probe: Optional[ConnectivityProbe] = None,
    engine: Optional[Engine] = None,
) -> SynchronizedFetcher:
    """Build a fetcher from settings.

    Args:
        settings: SystemSettings (default: the process settings)
        cache: overrides the SQL cache built from DATABASE_URL
        probe: overrides the HTTP connectivity probe
        engine: engine for the SQL cache when `cache` is not given

    Raises:
        ValueError: when a configured source kind is not registered
    """
    if settings is None:
        from medassist.config.system_settings import system_settings
        settings = system_settings

    config = SourceConfig(settings)

    primary = get_source(
        settings.PRIMARY_SOURCE,
        settings.PRIMARY_BASE_URL,
        config=config,
        credentials={"api_key": settings.PRIMARY_API_KEY},
    )
    secondary = get_source(
        settings.SECONDARY_SOURCE,
        settings.SECONDARY_BASE_URL,
        config=config,
        credentials={"api_key": settings.SECONDARY_API_KEY},
    )
    if primary is None or secondary is None:
        raise ValueError(
            f"Unknown source kind in settings: primary={settings.PRIMARY_SOURCE}, "
            f"secondary={settings.SECONDARY_SOURCE}"
        )

    if cache is None:
        cache = SqlArticleCache(engine or get_engine(settings.DATABASE_URL))

    if probe is None:
        probe = HttpConnectivityProbe(
            settings.CONNECTIVITY_PROBE_URL,
            timeout=settings.CONNECTIVITY_TIMEOUT_SECONDS,
        )

    logger.info(
        f"Fetcher built: primary={primary.name}@{primary.base_url}, "
        f"secondary={secondary.name}@{secondary.base_url}"
    )
    return SynchronizedFetcher(cache=cache, probe=probe, primary=primary, secondary=secondary)
