"""
Local article cache.

The fetcher reads and writes articles only through `LocalCache`:
- read_all() never raises; storage errors are logged and read as empty
- write_all() replaces rows by id; storage errors are logged, not raised

Entries are never expired. A row lives until a later write replaces it.
"""
import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, List, Sequence

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from medassist.schemas.records import Article
from medassist.storage.db import Base
from medassist.storage.models import CachedArticle

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


@dataclass(frozen=True)
class CacheEntry:
    record: Article
    last_updated: datetime


class LocalCache(ABC):
    @abstractmethod
    def read_all(self) -> List[Article]:
        pass

    @abstractmethod
    def write_all(self, records: Sequence[Article]) -> None:
        pass

    @abstractmethod
    def entries(self) -> List[CacheEntry]:
        pass

    @abstractmethod
    def clear(self) -> None:
        pass


class SqlArticleCache(LocalCache):
    """SQLAlchemy-backed cache; one session per call."""

    def __init__(self, engine: Engine, create_tables: bool = True):
        self.engine = engine
        if create_tables:
            Base.metadata.create_all(engine, tables=[CachedArticle.__table__])

    @staticmethod
    def _to_record(row: CachedArticle) -> Article:
        return Article(
            id=row.id,
            title=row.title,
            author=row.author,
            summary=row.summary,
            content=row.content,
            image_url=row.image_url,
            date=row.date,
        )

    def _rows(self, session: Session) -> List[CachedArticle]:
        return session.query(CachedArticle).order_by(CachedArticle.date.desc()).all()

    def read_all(self) -> List[Article]:
        try:
            with Session(self.engine) as session:
                records = [self._to_record(row) for row in self._rows(session)]
        except SQLAlchemyError as e:
            logger.warning(f"Error loading articles from local cache: {e}")
            return []

        logger.debug(f"Loaded {len(records)} articles from local cache")
        return records

    def entries(self) -> List[CacheEntry]:
        try:
            with Session(self.engine) as session:
                return [
                    CacheEntry(record=self._to_record(row), last_updated=row.last_updated)
                    for row in self._rows(session)
                ]
        except SQLAlchemyError as e:
            logger.warning(f"Error loading cache entries: {e}")
            return []

    def write_all(self, records: Sequence[Article]) -> None:
        now = _utcnow()
        # Last occurrence of an id wins, as with sequential replaces
        latest = {record.id: record for record in records}
        try:
            with Session(self.engine) as session:
                for record in latest.values():
                    # merge() is an upsert on the primary key
                    session.merge(CachedArticle(
                        id=record.id,
                        title=record.title,
                        author=record.author,
                        summary=record.summary,
                        content=record.content,
                        image_url=record.image_url,
                        date=record.date,
                        last_updated=now,
                    ))
                session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Error updating local cache: {e}")
            return

        logger.info(f"Updated local cache with {len(latest)} articles")

    def clear(self) -> None:
        try:
            with Session(self.engine) as session:
                session.query(CachedArticle).delete()
                session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Error clearing local cache: {e}")


class InMemoryArticleCache(LocalCache):
    """Process-local cache keyed by article id."""

    def __init__(self):
        self._lock = threading.Lock()
        self._entries: Dict[str, CacheEntry] = {}

    def read_all(self) -> List[Article]:
        return [entry.record for entry in self.entries()]

    def entries(self) -> List[CacheEntry]:
        with self._lock:
            entries = list(self._entries.values())
        return sorted(entries, key=lambda entry: entry.record.date, reverse=True)

    def write_all(self, records: Sequence[Article]) -> None:
        now = _utcnow()
        with self._lock:
            for record in records:
                self._entries[record.id] = CacheEntry(record=record, last_updated=now)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
