from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, List, Tuple

from streak_tracker.models.streak import Streak


def segment_runs(dates: Iterable[date]) -> List[Streak]:
    """Split check-in dates into maximal runs of consecutive days, oldest first."""
    ordered = sorted(set(dates))
    if not ordered:
        return []

    runs: List[Streak] = []
    run_start = ordered[0]
    length = 1
    for previous, current in zip(ordered, ordered[1:]):
        if (current - previous).days == 1:
            length += 1
            continue
        runs.append(Streak(start_date=run_start, end_date=previous, length=length))
        run_start = current
        length = 1

    runs.append(Streak(start_date=run_start, end_date=ordered[-1], length=length))
    return runs


def compute_streaks(dates: Iterable[date], today: date) -> Tuple[int, int]:
    """Return ``(current_streak, longest_streak)`` for a set of check-in dates.

    Only the trailing run can be current: it counts when it ends today or
    yesterday (the user can still extend it today), otherwise the streak is
    broken and the current streak is 0.
    """
    runs = segment_runs(dates)
    if not runs:
        return 0, 0

    longest = max(run.length for run in runs)
    trailing = runs[-1]

    if trailing.end_date == today:
        current = trailing.length
    elif trailing.end_date == today - timedelta(days=1):
        current = trailing.length
    else:
        current = 0

    return current, longest


def missed_days(dates: Iterable[date], today: date, window_days: int = 30) -> List[date]:
    """Days in the trailing window with no check-in, on or after the first check-in.

    The window covers the ``window_days`` days before ``today``; today itself
    is never missed.
    """
    recorded = set(dates)
    if not recorded:
        return []

    first_check_in = min(recorded)
    missed = []
    for offset in range(1, max(window_days, 0) + 1):
        day = today - timedelta(days=offset)
        if day >= first_check_in and day not in recorded:
            missed.append(day)

    return sorted(missed)
