"""
Source kinds by name.

Settings name the primary and secondary tiers by kind ("rest", "firestore");
the registry resolves a kind to its `RemoteSource` subclass. Kinds are
case-insensitive and each may be claimed by one class only.
"""
from typing import Dict, List, Optional, Type

from medassist.fetching.sources.base import RemoteSource


class SourceRegistry:
    def __init__(self):
        self._sources: Dict[str, Type[RemoteSource]] = {}

    def register(self, source_kind: str):
        """Class decorator binding a source kind to a RemoteSource subclass."""
        kind = source_kind.strip().lower()
        if not kind:
            raise ValueError("Source kind must not be blank")

        def wrapper(source_cls):
            if not (isinstance(source_cls, type) and issubclass(source_cls, RemoteSource)):
                raise TypeError(f"{source_cls!r} is not a RemoteSource subclass")
            existing = self._sources.get(kind)
            if existing is not None and existing is not source_cls:
                raise ValueError(f"Source kind '{kind}' already registered by {existing.__name__}")
            self._sources[kind] = source_cls
            source_cls.kind = kind
            return source_cls
        return wrapper

    def get_source_class(self, source_kind: str) -> Optional[Type[RemoteSource]]:
        return self._sources.get(source_kind.strip().lower())

    def list_sources(self) -> List[str]:
        return sorted(self._sources)


registry = SourceRegistry()
