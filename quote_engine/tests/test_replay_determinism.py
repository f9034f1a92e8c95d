"""
Tests for replaying the event log into a rule set.

Critical: replay must produce identical state across runs and fail
atomically on malformed data.
"""

import logging

import pytest

from quote_engine.core.canonical import compute_state_hash
from quote_engine.core.errors import MalformedEventData
from quote_engine.log import MemoryEventStore
from quote_engine.replay import build, replay


def zone(name, *postcodes):
    return {"Event": "ZoneDefined", "Data": {"Name": name, "Postcodes": list(postcodes)}}


def rate(rate_id, max_weight, cost, from_zone, to_zone):
    return {
        "Event": "RateDefined",
        "Data": {
            "ID": rate_id,
            "MaxWeight": max_weight,
            "Cost": cost,
            "FromZone": from_zone,
            "ToZone": to_zone,
        },
    }


EVENTS = [
    zone("A", "1000", "1001"),
    zone("B", "2000"),
    rate("R1", 10, 5, "A", "B"),
    rate("R2", 20, 8, "A", "B"),
    zone("C", "3000"),
    rate("R3", 5, 4, "B", "C"),
]


def test_replay_determinism_100_runs():
    """Replaying the same events 100 times must produce identical state."""
    hashes = {compute_state_hash(build(EVENTS)) for _ in range(100)}

    assert len(hashes) == 1
    assert build(EVENTS) == build(EVENTS)


def test_replay_counts():
    result = replay(EVENTS)

    assert result.applied == 6
    assert result.skipped == 0
    assert result.event_counts == {"ZoneDefined": 3, "RateDefined": 3}


def test_replay_empty_log():
    result = replay([])

    assert result.applied == 0
    assert len(result.state.zones) == 0
    assert result.state.rates == ()


def test_zone_redefinition_replaces_postcodes():
    """The last definition wins; postcodes are not merged."""
    state = build([zone("A", "1000", "1001"), zone("A", "1002")])

    assert state.zones["A"].postcodes == frozenset({"1002"})
    assert state.zone_of("1000") is None
    assert state.zone_of("1002") == "A"


def test_duplicate_postcodes_in_one_event_collapse():
    state = build([zone("A", "1000", "1000", "1001")])

    assert state.zones["A"].postcodes == frozenset({"1000", "1001"})


def test_rate_count_matches_rate_events_with_duplicate_ids():
    events = [rate("R1", 1, 1, "A", "B"), rate("R1", 1, 1, "A", "B"), rate("R1", 2, 3, "A", "B")]
    state = build(events)

    assert len(state.rates) == 3
    assert [r.id for r in state.rates] == ["R1", "R1", "R1"]


def test_rates_keep_log_order():
    state = build(EVENTS)

    assert [r.id for r in state.rates] == ["R1", "R2", "R3"]


def test_unknown_event_is_skipped_with_warning(caplog):
    events = EVENTS[:3] + [{"Event": "ZoneRetired", "Data": {"Name": "A"}}] + EVENTS[3:]

    with caplog.at_level(logging.WARNING, logger="quote_engine.replay.runner"):
        result = replay(events)

    assert result.skipped == 1
    assert result.applied == 6
    assert result.state == build(EVENTS)
    assert any("ZoneRetired" in rec.getMessage() for rec in caplog.records)


def test_malformed_rate_fails_whole_build():
    events = EVENTS + [{"Event": "RateDefined", "Data": {"ID": "R9", "Cost": 1, "FromZone": "A", "ToZone": "B"}}]

    with pytest.raises(MalformedEventData, match="MaxWeight"):
        build(events)


def test_malformed_event_fails_before_any_fold(caplog):
    """A bad event at the end of the log must stop the replay before it starts."""
    events = EVENTS + [zone("D", 4000)]

    with caplog.at_level(logging.INFO, logger="quote_engine"):
        with pytest.raises(MalformedEventData):
            replay(events)

    assert not any("Replayed" in rec.getMessage() for rec in caplog.records)


def test_replay_from_store():
    store = MemoryEventStore(EVENTS)

    assert build(store.read()) == build(EVENTS)


class TestPostcodeIndex:
    """Same postcode claimed by two zones: the later definition wins and is reported."""

    def test_later_zone_takes_postcode(self, caplog):
        with caplog.at_level(logging.WARNING, logger="quote_engine.core.handlers"):
            state = build([zone("A", "1000", "1001"), zone("B", "1000")])

        assert state.zone_of("1000") == "B"
        assert state.zone_of("1001") == "A"
        assert any(
            "1000" in rec.getMessage() and "A" in rec.getMessage() and "B" in rec.getMessage()
            for rec in caplog.records
        )

    def test_redefinition_reclaims_postcode(self):
        state = build([zone("A", "1000"), zone("B", "1000"), zone("A", "1000")])

        assert state.zone_of("1000") == "A"

    def test_dropped_postcode_falls_back_to_other_zone(self):
        state = build([zone("A", "1000"), zone("B", "1000"), zone("B", "2000")])

        assert state.zone_of("1000") == "A"
        assert state.zone_of("2000") == "B"

    def test_dropped_postcode_without_other_zone_is_unassigned(self):
        state = build([zone("A", "1000", "1001"), zone("A", "1001")])

        assert "1000" not in state.postcode_index

    def test_index_independent_of_zone_mapping_order(self):
        """Resolution follows event order, never mapping iteration order."""
        s1 = build([zone("B", "1000"), zone("A", "1000")])
        s2 = build([zone("A", "1000"), zone("B", "1000")])

        assert s1.zone_of("1000") == "A"
        assert s2.zone_of("1000") == "B"


def test_oversized_cost_fails_whole_build():
    events = EVENTS + [rate("R9", 1, 10 ** 400, "A", "B")]

    with pytest.raises(MalformedEventData, match="Cost"):
        build(events)
