"""Hypothesis property-based tests.

Properties that must hold for all valid inputs, verified by random generation.
"""

from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from conftest import make_session, snapshot
from weekly_schedule.interval import (
    WEEKDAYS,
    WINDOW_END,
    WINDOW_START,
    format_time,
    overlaps,
    parse_time,
)
from weekly_schedule.store import ScheduleStore


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

# Sessions on 5-minute boundaries anywhere in the day, 5 min to 4 h long
@st.composite
def _sessions(draw, day=None):
    start = draw(st.integers(min_value=0, max_value=(1440 - 10) // 5)) * 5
    length = draw(st.integers(min_value=1, max_value=48)) * 5
    end = min(start + length, 1439)
    return make_session(
        day or draw(st.sampled_from([d.value for d in WEEKDAYS])),
        format_time(start),
        format_time(end),
    )


# Add/remove commands: ("add", session) or ("remove", index into added ids)
_commands = st.lists(
    st.one_of(
        st.tuples(st.just("add"), _sessions()),
        st.tuples(st.just("remove"), st.integers(min_value=0, max_value=20)),
    ),
    max_size=40,
)


def _run(commands) -> tuple[ScheduleStore, list]:
    store = ScheduleStore()
    added = []
    for op, arg in commands:
        if op == "add":
            if not store.add_class(arg).has_conflict:
                added.append(arg)
        elif added:
            victim = added.pop(arg % len(added))
            assert store.remove_class(victim.day, victim.id)
    return store, added


# ---------------------------------------------------------------------------
# Property: parse_time / format_time round-trip
# ---------------------------------------------------------------------------
class TestTimeRoundTrip:

    @given(minutes=st.integers(min_value=0, max_value=1439))
    @settings(max_examples=50)
    def test_format_then_parse(self, minutes):
        assert parse_time(format_time(minutes)) == minutes


# ---------------------------------------------------------------------------
# Property: no two sessions on a day overlap, partitions stay ordered
# ---------------------------------------------------------------------------
class TestNoOverlapInvariant:

    @given(commands=_commands)
    @settings(max_examples=100)
    def test_partitions_never_overlap(self, commands):
        store, _ = _run(commands)
        for day in WEEKDAYS:
            sessions = store.get_classes_for_day(day)
            starts = [s.start_minutes for s in sessions]
            assert starts == sorted(starts)
            for i, a in enumerate(sessions):
                for b in sessions[i + 1:]:
                    assert not overlaps(
                        a.start_minutes, a.end_minutes,
                        b.start_minutes, b.end_minutes,
                    ), f"{a.id} overlaps {b.id}"

    @given(commands=_commands)
    @settings(max_examples=50)
    def test_contents_match_successful_adds(self, commands):
        store, added = _run(commands)
        assert {s.id for s in store.get_all_classes()} == {s.id for s in added}
        assert len(store) == len(added)


# ---------------------------------------------------------------------------
# Property: conflicts leave state untouched; successes are stored once
# ---------------------------------------------------------------------------
class TestAddOutcome:

    @given(commands=_commands, candidate=_sessions())
    @settings(max_examples=100)
    def test_add_outcome(self, commands, candidate):
        store, _ = _run(commands)
        before = snapshot(store)
        preview = store.detect_conflict(candidate)

        result = store.add_class(candidate)

        assert result == preview
        day_ids = [s.id for s in store.get_classes_for_day(candidate.day)]
        if result.has_conflict:
            assert snapshot(store) == before
            collider = result.conflicting_class
            assert collider.overlaps(candidate)
            # No earlier-starting session also overlaps
            for s in store.get_classes_for_day(candidate.day):
                if s.start_minutes < collider.start_minutes:
                    assert not s.overlaps(candidate)
        else:
            assert day_ids.count(candidate.id) == 1

    @given(commands=_commands)
    @settings(max_examples=50)
    def test_reads_are_idempotent(self, commands):
        store, _ = _run(commands)
        assert store.get_all_classes() == store.get_all_classes()


# ---------------------------------------------------------------------------
# Property: free slots
# ---------------------------------------------------------------------------
class TestFreeSlotProperties:

    @given(
        commands=_commands,
        duration=st.integers(min_value=1, max_value=900),
    )
    @settings(max_examples=100)
    def test_slots_are_free_long_enough_and_in_window(self, commands, duration):
        store, _ = _run(commands)
        for slot in store.suggest_free_slots(duration):
            begin, end = parse_time(slot.start_time), parse_time(slot.end_time)
            assert slot.duration >= duration
            assert slot.duration == end - begin
            assert WINDOW_START <= begin < end <= WINDOW_END
            for s in store.get_classes_for_day(slot.day):
                assert not overlaps(begin, end, s.start_minutes, s.end_minutes)

    @given(commands=_commands)
    @settings(max_examples=50)
    def test_minimal_request_covers_all_free_window_time(self, commands):
        """With a 1-minute request, slots + busy time partition the window."""
        store, _ = _run(commands)
        slots = store.suggest_free_slots(1)
        for day in WEEKDAYS:
            busy = set()
            for s in store.get_classes_for_day(day):
                busy.update(range(s.start_minutes, s.end_minutes))
            free = set()
            for slot in (x for x in slots if x.day == day):
                free.update(range(parse_time(slot.start_time), parse_time(slot.end_time)))
            window = set(range(WINDOW_START, WINDOW_END))
            assert free == window - busy
