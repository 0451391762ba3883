"""
Sources package: remote record adapters ordered into tiers by the fetcher.

Importing this package registers every built-in source kind.
"""
import logging
from typing import Any, Dict, Optional

from medassist.fetching.sources.base import (
    MalformedResponse,
    NetworkError,
    RemoteSource,
    ServerError,
    SourceConfig,
    SourceError,
)
from medassist.fetching.sources.firestore import FirestoreSource
from medassist.fetching.sources.registry import registry
from medassist.fetching.sources.rest import RestSource

logger = logging.getLogger(__name__)


def get_source(
    source_kind: str,
    base_url: str,
    config: Optional[SourceConfig] = None,
    credentials: Optional[Dict[str, Any]] = None,
) -> Optional[RemoteSource]:
    """
    Factory to get a source instance by kind.

    Args:
        source_kind: 'rest', 'firestore', or any registered kind
        base_url: Root URL the source resolves its endpoints against
        config: SourceConfig (created if None)
        credentials: Optional secrets, e.g. {'api_key': ...}

    Returns:
        RemoteSource instance or None if not recognized
    """
    source_cls = registry.get_source_class(source_kind)
    if not source_cls:
        logger.error(f"Unknown source: {source_kind}. Available: {registry.list_sources()}")
        return None

    logger.debug(f"Creating {source_kind} source for {base_url}")
    return source_cls(base_url, config=config, credentials=credentials)


__all__ = [
    "RemoteSource",
    "SourceConfig",
    "SourceError",
    "NetworkError",
    "ServerError",
    "MalformedResponse",
    "RestSource",
    "FirestoreSource",
    "registry",
    "get_source",
]
