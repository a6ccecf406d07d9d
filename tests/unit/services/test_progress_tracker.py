"""Tests for the pure progress transformations."""
from datetime import datetime, timedelta, timezone

import pytest

from reading_tracker.models.domain import CompletionEntry, MultiPlanProgress, PlanProgress
from reading_tracker.services.progress_tracker import (
    advance_plan,
    ensure_current_plan_progress,
    get_current_plan_progress,
    get_plan_progress,
    new_plan_progress,
    record_completion,
    recompute_streaks,
    remove_plan_progress,
    reset_plan_progress,
    switch_active_plan,
)

UTC = timezone.utc
NOW = datetime(2026, 3, 15, 12, 0, tzinfo=UTC)


def _entry(plan_id, readings=(), days_ago=(), current=0, longest=0):
    completions = [
        CompletionEntry(reading_id=reading_id, completed_at=NOW - timedelta(days=n))
        for reading_id, n in zip(readings, days_ago)
    ]
    return PlanProgress(
        plan_id=plan_id,
        completions=completions,
        current_streak=current,
        longest_streak=longest,
        last_reading_date=completions[-1].completed_at if completions else None,
        total_readings=len(completions),
        start_date=NOW - timedelta(days=30),
        last_accessed_date=NOW - timedelta(days=1),
    )


@pytest.fixture
def progress():
    return MultiPlanProgress(
        user_id="user-1",
        current_plan_id="plan-a",
        plan_progress={
            "plan-a": _entry("plan-a", readings=["a1", "a2"], days_ago=[2, 1], current=2, longest=4),
            "plan-b": _entry("plan-b", readings=["b1"], days_ago=[5], current=1, longest=1),
        },
    )


class TestLookups:

    def test_get_plan_progress(self, progress):
        assert get_plan_progress(progress, "plan-b").completed_readings == ["b1"]

    def test_missing_plan_is_none(self, progress):
        assert get_plan_progress(progress, "never-started") is None

    def test_current_plan_progress(self, progress):
        assert get_current_plan_progress(progress).plan_id == "plan-a"

    def test_ensure_current_heals_missing_entry(self, progress):
        orphaned = progress.model_copy(update={"current_plan_id": "plan-c"})

        healed = ensure_current_plan_progress(orphaned, now=NOW)

        entry = get_current_plan_progress(healed)
        assert entry.plan_id == "plan-c"
        assert entry.start_date == NOW
        assert entry.completions == []
        assert get_current_plan_progress(orphaned) is None

    def test_ensure_current_is_noop_when_present(self, progress):
        assert ensure_current_plan_progress(progress, now=NOW) is progress


class TestSwitchActivePlan:

    def test_switch_to_new_plan_creates_zeroed_entry(self, progress):
        switched = switch_active_plan(progress, "plan-c", now=NOW)

        assert switched.current_plan_id == "plan-c"
        entry = switched.plan_progress["plan-c"]
        assert entry == new_plan_progress("plan-c", NOW)
        assert switched.plan_progress["plan-a"].last_accessed_date == NOW

    def test_switch_to_existing_plan_keeps_history(self, progress):
        switched = switch_active_plan(progress, "plan-b", now=NOW)

        entry = switched.plan_progress["plan-b"]
        assert entry.completed_readings == ["b1"]
        assert entry.last_accessed_date == NOW
        assert entry.start_date == progress.plan_progress["plan-b"].start_date

    def test_switch_never_shrinks_any_history(self, progress):
        switched = progress
        for plan_id in ["plan-b", "plan-c", "plan-a", "plan-b"]:
            before = {pid: len(e.completions) for pid, e in switched.plan_progress.items()}
            switched = switch_active_plan(switched, plan_id, now=NOW)
            for pid, count in before.items():
                assert len(switched.plan_progress[pid].completions) >= count

    def test_input_is_not_mutated(self, progress):
        snapshot = progress.model_copy(deep=True)

        switch_active_plan(progress, "plan-c", now=NOW)

        assert progress == snapshot


class TestRecordCompletion:

    def test_appends_paired_completion(self, progress):
        updated = record_completion(progress, "plan-a", "a3", now=NOW, tz=UTC)

        entry = updated.plan_progress["plan-a"]
        assert entry.completions[-1] == CompletionEntry(reading_id="a3", completed_at=NOW)
        assert entry.total_readings == 3
        assert entry.last_reading_date == NOW

    def test_extends_streak_from_yesterday(self, progress):
        entry = record_completion(progress, "plan-a", "a3", now=NOW, tz=UTC).plan_progress["plan-a"]

        assert entry.current_streak == 3
        assert entry.longest_streak == 4

    def test_second_completion_same_day_does_not_extend(self, progress):
        once = record_completion(progress, "plan-a", "a3", now=NOW, tz=UTC)
        twice = record_completion(once, "plan-a", "a4", now=NOW + timedelta(hours=2), tz=UTC)

        assert twice.plan_progress["plan-a"].current_streak == 3
        assert twice.plan_progress["plan-a"].total_readings == 4

    def test_missed_days_still_add_one(self, progress):
        entry = record_completion(progress, "plan-b", "b2", now=NOW, tz=UTC).plan_progress["plan-b"]

        assert entry.current_streak == 2
        assert entry.longest_streak == 2

    def test_long_gap_extends_stored_streak(self):
        stale = MultiPlanProgress(
            user_id="user-1",
            current_plan_id="plan-a",
            plan_progress={"plan-a": _entry("plan-a", readings=["a1"], days_ago=[5], current=4, longest=4)},
        )

        entry = record_completion(stale, "plan-a", "a2", now=NOW, tz=UTC).plan_progress["plan-a"]

        assert entry.current_streak == 5
        assert entry.longest_streak == 5

    def test_first_completion_on_unstarted_plan(self, progress):
        entry = record_completion(progress, "plan-c", "c1", now=NOW, tz=UTC).plan_progress["plan-c"]

        assert entry.current_streak == 1
        assert entry.longest_streak == 1
        assert entry.completed_readings == ["c1"]

    def test_duplicate_readings_are_kept(self, progress):
        entry = record_completion(progress, "plan-a", "a1", now=NOW, tz=UTC).plan_progress["plan-a"]

        assert entry.completed_readings == ["a1", "a2", "a1"]

    def test_other_plans_are_untouched(self, progress):
        before = progress.plan_progress["plan-b"].model_copy(deep=True)

        updated = record_completion(progress, "plan-a", "a3", now=NOW, tz=UTC)

        assert get_plan_progress(updated, "plan-b") == before
        assert updated.current_plan_id == progress.current_plan_id

    def test_longest_never_below_current_over_many_days(self, progress):
        updated = progress
        for offset in [0, 0, 1, 2, 2, 5, 6, 7, 8, 9, 20]:
            day = NOW + timedelta(days=offset, hours=1)
            updated = record_completion(updated, "plan-a", f"r{offset}", now=day, tz=UTC)
            entry = updated.plan_progress["plan-a"]
            assert entry.longest_streak >= entry.current_streak
        assert updated.plan_progress["plan-a"].current_streak == 11
        assert updated.plan_progress["plan-a"].longest_streak == 11


class TestResetPlanProgress:

    def test_only_target_plan_is_zeroed(self, progress):
        reset = reset_plan_progress(progress, "plan-a", now=NOW)

        assert reset.plan_progress["plan-a"] == new_plan_progress("plan-a", NOW)
        assert reset.plan_progress["plan-b"] == progress.plan_progress["plan-b"]
        assert reset.current_plan_id == progress.current_plan_id
        assert progress.plan_progress["plan-a"].total_readings == 2


class TestAdvanceAndRemove:

    def test_advance_moves_start_back_one_day(self, progress):
        advanced = advance_plan(progress, "plan-a", now=NOW)

        before = progress.plan_progress["plan-a"].start_date
        assert advanced.plan_progress["plan-a"].start_date == before - timedelta(days=1)

    def test_remove_plan_progress(self, progress):
        removed = remove_plan_progress(progress, "plan-b")

        assert "plan-b" not in removed.plan_progress
        assert "plan-b" in progress.plan_progress

    def test_remove_unknown_plan_is_harmless(self, progress):
        assert remove_plan_progress(progress, "nope") == progress


class TestRecomputeStreaks:

    def test_recomputes_current_and_keeps_longest(self, progress):
        drifted = progress.model_copy(deep=True)
        drifted.plan_progress["plan-a"].current_streak = 9
        drifted.plan_progress["plan-a"].longest_streak = 9

        repaired = recompute_streaks(drifted, now=NOW, tz=UTC)

        assert repaired.plan_progress["plan-a"].current_streak == 2
        assert repaired.plan_progress["plan-a"].longest_streak == 9
        assert repaired.plan_progress["plan-b"].current_streak == 0
        assert repaired.plan_progress["plan-b"].longest_streak == 1
