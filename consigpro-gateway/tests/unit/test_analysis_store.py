"""Unit tests for the in-memory analysis store"""

import pytest
from decimal import Decimal
from consigpro_gateway.domain.models import ExtractedData
from consigpro_gateway.domain.exceptions import AnalysisNotFoundError, AnalysisSupersededError
from consigpro_gateway.infrastructure.state.analysis_store import AnalysisStore


def test_commit_and_get(store, sample_data):
    """Committed data is returned with its calculations"""
    generation = store.begin("s1")
    snapshot = store.commit("s1", generation, sample_data)

    assert store.get("s1") == snapshot
    assert snapshot.data == sample_data
    assert snapshot.calculations.loan.limit == Decimal("350.00")


def test_last_request_wins(store, sample_data):
    """An older request resolving late is discarded"""
    older = store.begin("s1")
    newer = store.begin("s1")

    newer_data = ExtractedData(base_ir=Decimal("2000"))
    store.commit("s1", newer, newer_data)

    with pytest.raises(AnalysisSupersededError):
        store.commit("s1", older, sample_data)

    assert store.get("s1").data == newer_data


def test_superseded_before_newer_resolves(store, sample_data):
    """Starting a newer request invalidates an in-flight one even if it finishes first"""
    older = store.begin("s1")
    store.begin("s1")

    with pytest.raises(AnalysisSupersededError):
        store.commit("s1", older, sample_data)

    with pytest.raises(AnalysisNotFoundError):
        store.get("s1")


def test_failed_request_keeps_previous_snapshot(store, sample_data):
    """A begin() that never commits leaves the prior result in place"""
    store.commit("s1", store.begin("s1"), sample_data)
    store.begin("s1")  # request that later fails

    assert store.get("s1").data == sample_data


def test_sessions_are_isolated(store, sample_data):
    store.commit("a", store.begin("a"), sample_data)

    with pytest.raises(AnalysisNotFoundError):
        store.get("b")


def test_clear_drops_snapshot_and_in_flight_requests(store, sample_data):
    store.commit("s1", store.begin("s1"), sample_data)
    in_flight = store.begin("s1")

    store.clear("s1")

    with pytest.raises(AnalysisNotFoundError):
        store.get("s1")
    with pytest.raises(AnalysisSupersededError):
        store.commit("s1", in_flight, sample_data)


def test_cleanup_expired(sample_data):
    """Sessions idle past the TTL are purged"""
    store = AnalysisStore(ttl_seconds=-1)
    store.commit("s1", store.begin("s1"), sample_data)

    assert store.cleanup_expired() == 1
    with pytest.raises(AnalysisNotFoundError):
        store.get("s1")


def test_cleanup_keeps_fresh_sessions(store, sample_data):
    store.commit("s1", store.begin("s1"), sample_data)

    assert store.cleanup_expired() == 0
    assert store.get("s1").data == sample_data


def test_expired_session_does_not_reissue_generations(sample_data):
    """A request started before expiry can't commit over the recreated session"""
    store = AnalysisStore(ttl_seconds=-1)
    stale = store.begin("s1")
    assert store.cleanup_expired() == 1

    fresh = store.begin("s1")
    assert fresh != stale

    with pytest.raises(AnalysisSupersededError):
        store.commit("s1", stale, sample_data)
    assert store.commit("s1", fresh, sample_data).generation == fresh
