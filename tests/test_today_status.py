"""Tests for composing today's habit statuses and the day summary."""

from __future__ import annotations

import pytest

from habitdesk.models import ALL_WEEKDAYS, Habit
from habitdesk.services.habits import StreakStats, compose_today, summarize_day

from support import CREATED, TODAY

SATURDAY = 6


def make_habit(key, days=ALL_WEEKDAYS, skippable=False, critical=False, active=True) -> Habit:
    return Habit(
        habit_key=key,
        label=key.replace("_", " ").title(),
        specific_days=list(days),
        skippable=skippable,
        critical=critical,
        active=active,
        created_at=CREATED,
    )


def test_flags_are_computed_per_habit():
    habits = [
        make_habit("stretch"),
        make_habit("gym", days=(1, 3, 5), skippable=True),
        make_habit("journal", skippable=True),
    ]
    streaks = {"stretch": StreakStats(streak=4, missed_days=0), "journal": StreakStats(0, 2)}

    statuses = compose_today(habits, {"stretch"}, "Wedding", streaks, SATURDAY)
    by_key = {status.habit.habit_key: status for status in statuses}

    assert by_key["stretch"].completed is True
    assert by_key["stretch"].applicable is True
    assert by_key["stretch"].skipped is False
    assert by_key["stretch"].skip_reason is None
    assert by_key["stretch"].streak == 4

    assert by_key["gym"].applicable is False
    assert by_key["gym"].skipped is True
    assert by_key["gym"].skip_reason == "Wedding"

    assert by_key["journal"].missed_days == 2
    assert all(status.milestone is None for status in statuses)


def test_missing_streak_entry_defaults_to_zero():
    [status] = compose_today([make_habit("new_habit")], set(), None, {}, SATURDAY)
    assert (status.streak, status.missed_days) == (0, 0)


def test_inactive_habits_are_left_out_and_order_is_kept():
    habits = [make_habit("b"), make_habit("old", active=False), make_habit("a")]
    statuses = compose_today(habits, set(), None, {}, SATURDAY)
    assert [status.habit.habit_key for status in statuses] == ["b", "a"]


def test_status_serialises_to_json_friendly_dict():
    [status] = compose_today([make_habit("read", days=(6, 0))], {"read"}, None, {}, SATURDAY)
    payload = status.to_dict()
    assert payload["habit"]["habit_key"] == "read"
    assert payload["habit"]["specific_days"] == [0, 6]
    assert payload["completed"] is True
    assert payload["milestone"] is None


def test_summary_counts_only_applicable_habits():
    habits = [
        make_habit("done"),
        make_habit("skipped", skippable=True),
        make_habit("missed", critical=True),
        make_habit("weekday_only", days=(1, 2, 3, 4, 5)),
    ]
    statuses = compose_today(habits, {"done"}, "Birthday", {}, SATURDAY)

    summary = summarize_day(statuses, TODAY)

    assert summary.total == 3
    assert summary.completed == 1
    assert summary.skipped == 1
    assert summary.missed == 1
    assert summary.score == 67
    assert summary.missed_critical == ["Missed"]
    assert summary.perfect is False
    assert summary.to_dict()["date"] == "2026-03-21"


def test_summary_without_applicable_habits_is_perfect():
    statuses = compose_today([make_habit("weekday_only", days=(1,))], set(), None, {}, SATURDAY)
    summary = summarize_day(statuses, TODAY)
    assert summary.total == 0
    assert summary.score == 100
    assert summary.perfect is True


@pytest.mark.parametrize("done, expected", [(1, 13), (3, 38), (5, 63), (7, 88)])
def test_summary_score_rounds_halves_up(done, expected):
    habits = [make_habit(f"habit_{n}") for n in range(8)]
    completed = {f"habit_{n}" for n in range(done)}
    summary = summarize_day(compose_today(habits, completed, None, {}, SATURDAY), TODAY)
    assert summary.score == expected
