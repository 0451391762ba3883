# =============================================================================
# tests/unit/test_fetch_articles.py
# Unit Tests for SynchronizedFetcher.fetch_articles
# =============================================================================

import json

import pytest
from unittest.mock import MagicMock

from conftest import FakeSource, make_article
from medassist.fetching.results import FailureReason, Origin
from medassist.fetching.sources.base import MalformedResponse, NetworkError, ServerError
from medassist.fetching.sources.firestore import FirestoreSource


class TestOfflineArticles:
    """Offline path never contacts a remote source"""

    def test_offline_serves_cache(self, build, memory_cache, a1):
        """cache=[A1], offline -> Success([A1], Cache)"""
        memory_cache.write_all([a1])
        primary, secondary = FakeSource("primary"), FakeSource("secondary")

        result = build(memory_cache, False, primary, secondary).fetch_articles()

        assert result.ok
        assert result.origin == Origin.CACHE
        assert [a.id for a in result.items] == ["A1"]
        assert primary.calls == []
        assert secondary.calls == []

    def test_offline_empty_cache_fails(self, build, memory_cache):
        """Offline with nothing cached -> Failure(NO_DATA_AVAILABLE)"""
        result = build(memory_cache, False, FakeSource("p"), FakeSource("s")).fetch_articles()

        assert not result.ok
        assert result.reason == FailureReason.NO_DATA_AVAILABLE


class TestOnlineArticles:
    """Online path: primary, secondary, write-through, stale fallback"""

    def test_primary_success_writes_through(self, build, memory_cache, a1, a2):
        """cache=[], Primary returns [A1,A2] -> Success(Primary), cache=[A1,A2]"""
        primary = FakeSource("primary", articles=[a1, a2])
        secondary = FakeSource("secondary", articles=[make_article("S1")])

        result = build(memory_cache, True, primary, secondary).fetch_articles()

        assert result.ok
        assert result.origin == Origin.PRIMARY
        assert [a.id for a in result.items] == ["A1", "A2"]
        assert {a.id for a in memory_cache.read_all()} == {"A1", "A2"}

    def test_primary_success_never_invokes_secondary(self, build, memory_cache, a1):
        primary = FakeSource("primary", articles=[a1])
        secondary = FakeSource("secondary", articles=[make_article("S1")])

        build(memory_cache, True, primary, secondary).fetch_articles()

        assert primary.calls == ["get_articles"]
        assert secondary.calls == []

    def test_secondary_used_when_primary_fails(self, build, memory_cache, a1, a2):
        """cache=[A1], Primary fails, Secondary returns [A2] -> Success([A2], Secondary)"""
        memory_cache.write_all([a1])
        primary = FakeSource("primary", articles=NetworkError("connection refused"))
        secondary = FakeSource("secondary", articles=[a2])

        result = build(memory_cache, True, primary, secondary).fetch_articles()

        assert result.ok
        assert result.origin == Origin.SECONDARY
        assert [a.id for a in result.items] == ["A2"]
        # A1 retained, A2 added
        assert {a.id for a in memory_cache.read_all()} == {"A1", "A2"}

    @pytest.mark.parametrize("error", [
        NetworkError("timeout"),
        ServerError(503),
        MalformedResponse("not json"),
    ])
    def test_every_primary_error_triggers_fallback(self, build, memory_cache, a2, error):
        primary = FakeSource("primary", articles=error)
        secondary = FakeSource("secondary", articles=[a2])

        result = build(memory_cache, True, primary, secondary).fetch_articles()

        assert result.origin == Origin.SECONDARY
        assert secondary.calls == ["get_articles"]

    def test_empty_primary_triggers_fallback(self, build, memory_cache, a2):
        primary = FakeSource("primary", articles=[])
        secondary = FakeSource("secondary", articles=[a2])

        result = build(memory_cache, True, primary, secondary).fetch_articles()

        assert result.origin == Origin.SECONDARY

    def test_both_fail_serves_stale_cache(self, build, memory_cache, a1):
        """Non-empty cache is never turned into a Failure while online"""
        memory_cache.write_all([a1])
        primary = FakeSource("primary", articles=ServerError(500))
        secondary = FakeSource("secondary", articles=NetworkError("unreachable"))

        result = build(memory_cache, True, primary, secondary).fetch_articles()

        assert result.ok
        assert result.origin == Origin.CACHE
        assert [a.id for a in result.items] == ["A1"]

    def test_both_fail_empty_cache(self, build, memory_cache):
        """cache=[], Primary fails, Secondary fails -> Failure(NO_DATA_AVAILABLE)"""
        primary = FakeSource("primary", articles=ServerError(500))
        secondary = FakeSource("secondary", articles=MalformedResponse("bad"))

        result = build(memory_cache, True, primary, secondary).fetch_articles()

        assert not result.ok
        assert result.reason == FailureReason.NO_DATA_AVAILABLE
        assert "primary" in result.detail and "secondary" in result.detail

    def test_remote_id_collision_replaces_cached_row(self, build, memory_cache):
        memory_cache.write_all([make_article("A1", title="Old title")])
        primary = FakeSource("primary", articles=[make_article("A1", title="New title")])

        build(memory_cache, True, primary, FakeSource("s")).fetch_articles()

        cached = memory_cache.read_all()
        assert len(cached) == 1
        assert cached[0].title == "New title"


class TestCacheFaults:
    """Cache failures never abort a fetch"""

    def test_cache_read_error_treated_as_empty(self, build, a1):
        class BrokenCache:
            def read_all(self):
                raise RuntimeError("disk gone")

            def write_all(self, records):
                raise RuntimeError("disk gone")

        primary = FakeSource("primary", articles=[a1])

        result = build(BrokenCache(), True, primary, FakeSource("s")).fetch_articles()

        assert result.ok
        assert result.origin == Origin.PRIMARY

    def test_sql_cache_write_through(self, build, sql_cache, a1, a2):
        primary = FakeSource("primary", articles=[a1, a2])

        build(sql_cache, True, primary, FakeSource("s")).fetch_articles()
        offline = build(sql_cache, False, FakeSource("p"), FakeSource("s")).fetch_articles()

        assert offline.origin == Origin.CACHE
        # newest date first
        assert [a.id for a in offline.items] == ["A2", "A1"]


class TestUnexpectedSourceErrors:
    """Errors outside the source taxonomy are still treated as a failed tier"""

    def test_unexpected_primary_error_falls_back(self, build, memory_cache, a2):
        primary = FakeSource("primary", articles=AttributeError("'int' object has no attribute 'rsplit'"))
        secondary = FakeSource("secondary", articles=[a2])

        result = build(memory_cache, True, primary, secondary).fetch_articles()

        assert result.ok
        assert result.origin == Origin.SECONDARY

    def test_unexpected_errors_on_both_tiers_serve_cache(self, build, memory_cache, a1):
        memory_cache.write_all([a1])
        primary = FakeSource("primary", articles=NetworkError("unreachable"))
        secondary = FakeSource("secondary", articles=KeyError("fields"))

        result = build(memory_cache, True, primary, secondary).fetch_articles()

        assert result.ok
        assert result.origin == Origin.CACHE
        assert [a.id for a in result.items] == ["A1"]

    def test_firestore_document_with_bad_name_serves_cache(self, build, memory_cache, a1):
        """cache=[A1], primary down, secondary lists a document whose name is not a string"""
        memory_cache.write_all([a1])
        body = {"documents": [{"name": 123, "fields": {"title": {"stringValue": "t"}}}]}
        response = MagicMock(status_code=200, content=json.dumps(body).encode())
        response.json.return_value = body
        session = MagicMock()
        session.request.return_value = response
        secondary = FirestoreSource("http://firestore.test/documents", session=session)
        primary = FakeSource("primary", articles=NetworkError("unreachable"))

        result = build(memory_cache, True, primary, secondary).fetch_articles()

        assert result.ok
        assert result.origin == Origin.CACHE
        assert [a.id for a in result.items] == ["A1"]
