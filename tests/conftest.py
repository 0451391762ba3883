# =============================================================================
# tests/conftest.py
# Pytest Configuration and Fixtures
# =============================================================================

import pytest
from typing import List, Optional
from unittest.mock import MagicMock

from medassist.fetching.connectivity import StaticConnectivityProbe
from medassist.fetching.service import SynchronizedFetcher
from medassist.fetching.sources.base import RemoteSource, SourceConfig
from medassist.schemas.records import Article, BookingConfirmation, BookingRequest, Provider
from medassist.storage.cache import InMemoryArticleCache, SqlArticleCache
from medassist.storage.db import get_engine


# =============================================================================
# RECORD FIXTURES
# =============================================================================

def make_article(article_id: str, title: Optional[str] = None, date: str = "2025-10-01") -> Article:
    return Article(
        id=article_id,
        title=title or f"Article {article_id}",
        author="Dr. Test",
        summary="summary",
        content="content",
        image_url="https://example.org/image.png",
        date=date,
    )


def make_provider(provider_id: str) -> Provider:
    return Provider(id=provider_id, name=f"Dr. {provider_id}", specialty="General Practitioner")


@pytest.fixture
def a1():
    return make_article("A1", date="2025-10-01")


@pytest.fixture
def a2():
    return make_article("A2", date="2025-10-02")


@pytest.fixture
def booking_request():
    return BookingRequest(
        doctor_id="1",
        patient_name="Thandi Nkosi",
        patient_email="thandi@example.org",
        appointment_date="2025-01-20",
        appointment_time="10:00 AM",
        reason="Check-up",
    )


# =============================================================================
# FAKE SOURCES
# =============================================================================

class FakeSource(RemoteSource):
    """In-process source with scripted answers and call counters.

    Each answer is either a value to return or an exception instance to raise.
    """

    def __init__(self, name: str, articles=None, providers=None, booking=None):
        super().__init__("http://fake.invalid/", config=SourceConfig(_FakeSettings()), session=MagicMock())
        self.name = name
        self.articles = articles if articles is not None else []
        self.providers = providers if providers is not None else []
        self.booking = booking
        self.calls: List[str] = []
        self.booking_identities: List[Optional[str]] = []

    @staticmethod
    def _answer(answer):
        if isinstance(answer, Exception):
            raise answer
        return answer

    def get_articles(self):
        self.calls.append("get_articles")
        return self._answer(self.articles)

    def get_providers(self):
        self.calls.append("get_providers")
        return self._answer(self.providers)

    def submit_booking(self, request, user_identity=None):
        self.calls.append("submit_booking")
        self.booking_identities.append(user_identity)
        return self._answer(self.booking)


class _FakeSettings:
    CONNECT_TIMEOUT_SECONDS = 1.0
    READ_TIMEOUT_SECONDS = 1.0


@pytest.fixture
def confirmation():
    return BookingConfirmation(id="BK1", status="confirmed", message="ok")


# =============================================================================
# CACHE / FETCHER FIXTURES
# =============================================================================

@pytest.fixture
def memory_cache():
    return InMemoryArticleCache()


@pytest.fixture
def sqlite_engine():
    engine = get_engine("sqlite://")
    yield engine
    engine.dispose()


@pytest.fixture
def sql_cache(sqlite_engine):
    return SqlArticleCache(sqlite_engine)


@pytest.fixture
def build():
    """Assemble a fetcher from a cache, an online flag and two fake sources."""
    def _build(cache, online: bool, primary: FakeSource, secondary: FakeSource) -> SynchronizedFetcher:
        return SynchronizedFetcher(
            cache=cache,
            probe=StaticConnectivityProbe(online),
            primary=primary,
            secondary=secondary,
        )
    return _build
