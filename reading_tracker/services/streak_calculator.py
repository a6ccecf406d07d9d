"""Calendar-day and streak arithmetic.

All functions are pure. "Today" comes from ``now`` (defaults to the current
time) and every timestamp is reduced to its local calendar day in ``tz``
(``None`` means the host's local zone). Naive timestamps are treated as
already local.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Iterable, List, Optional

STREAK_MILESTONES = (7, 14, 30, 60, 90, 180, 365)


@dataclass(frozen=True)
class StreakSummary:
    current: int
    longest: int


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_local_date(value: datetime, tz: Optional[tzinfo] = None) -> date:
    """Local calendar day of ``value``."""
    if value.tzinfo is None:
        return value.date()
    return value.astimezone(tz).date()


def _today(now: Optional[datetime], tz: Optional[tzinfo]) -> date:
    return to_local_date(now or utc_now(), tz)


def current_day_index(
    start_date: datetime,
    *,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> int:
    """1-based day of the plan, counted in calendar days since ``start_date``.

    A plan started today is on day 1, one started yesterday on day 2. The
    value is floored at 1 and never clamped against the plan length.
    """
    days_passed = (_today(now, tz) - to_local_date(start_date, tz)).days
    return max(days_passed + 1, 1)


def has_completed_today(
    completion_timestamps: Iterable[datetime],
    *,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> bool:
    today = _today(now, tz)
    return any(to_local_date(ts, tz) == today for ts in completion_timestamps)


def should_extend_streak(
    completion_timestamps: Iterable[datetime],
    last_completion: Optional[datetime],
    *,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> bool:
    """Whether a new completion adds to the streak.

    False once today already has a completion, so several readings on the
    same day count once.
    """
    if last_completion is None:
        return True
    return not has_completed_today(completion_timestamps, now=now, tz=tz)


def compute_streak_from_history(
    completion_timestamps: Iterable[datetime],
    *,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> StreakSummary:
    """Recompute current and longest streak from the full completion history."""
    days: List[date] = sorted({to_local_date(ts, tz) for ts in completion_timestamps}, reverse=True)
    if not days:
        return StreakSummary(current=0, longest=0)

    current = 0
    if (_today(now, tz) - days[0]).days in (0, 1):
        current = 1
        for newer, older in zip(days, days[1:]):
            if (newer - older).days != 1:
                break
            current += 1

    longest = 1
    running = 1
    for newer, older in zip(days, days[1:]):
        if (newer - older).days == 1:
            running += 1
        else:
            running = 1
        longest = max(longest, running)

    return StreakSummary(current=current, longest=max(longest, current))


def scheduled_date(start_date: datetime, day_number: int, tz: Optional[tzinfo] = None) -> date:
    """Calendar date on which ``day_number`` falls for a plan started on ``start_date``."""
    return to_local_date(start_date, tz) + timedelta(days=day_number - 1)


def completion_percentage(completed_count: int, total_days: int) -> int:
    if total_days <= 0:
        return 0
    return round(completed_count / total_days * 100)


def is_streak_milestone(streak: int) -> bool:
    return streak in STREAK_MILESTONES
