from __future__ import annotations

from datetime import date
from typing import Optional

from streak_tracker.core import dates as calendar
from streak_tracker.core.logging import log_event
from streak_tracker.features.streaks.engine import compute_streaks, missed_days
from streak_tracker.features.streaks.messages import (
    ALREADY_CHECKED_IN_MESSAGE,
    tier_for,
    tier_message,
)
from streak_tracker.features.streaks.repository import InMemoryCheckInRepository
from streak_tracker.models.streak import (
    CalendarReport,
    CheckInLog,
    CheckInResult,
    MissedDaysReport,
    SimulatedCheckIn,
    StatusReport,
    StreakStats,
)

DEFAULT_MISSED_DAYS_WINDOW = 30


def normalize(log: CheckInLog, today: date) -> CheckInLog:
    """Return a copy of ``log`` with its invariants restored for ``today``.

    Dates are deduplicated, future dates dropped and the rest sorted; streak
    stats are recomputed from the dates. The stored longest streak is kept
    when it is higher than the recomputed one.
    """
    kept = sorted({day for day in log.dates if day <= today})
    current, longest = compute_streaks(kept, today)
    return CheckInLog(
        dates=kept,
        current_streak=current,
        longest_streak=max(log.longest_streak, longest),
        last_check_in_date=kept[-1] if kept else None,
    )


def stats_for(log: CheckInLog) -> StreakStats:
    return StreakStats(
        current_streak=log.current_streak,
        longest_streak=log.longest_streak,
        last_check_in_date=log.last_check_in_date,
        total_check_ins=len(log.dates),
    )


class StreakService:
    """Check-in and reporting use cases over a single check-in log.

    Every operation normalizes the log against the reference day before
    reading or writing it; streak stats are always recomputed from scratch.
    """

    def __init__(
        self,
        repository: Optional[InMemoryCheckInRepository] = None,
        missed_days_window: int = DEFAULT_MISSED_DAYS_WINDOW,
    ):
        self._repository = repository or InMemoryCheckInRepository()
        self._missed_days_window = missed_days_window

    @property
    def repository(self) -> InMemoryCheckInRepository:
        return self._repository

    def record_check_in(self, today: Optional[date] = None) -> CheckInResult:
        current_day = today or calendar.today()
        with self._repository.transaction() as stored:
            log = self._refresh(stored, current_day)

            if current_day in log.dates:
                log_event(
                    "info",
                    "streak.check_in.rejected",
                    event_type="already_checked_in",
                    extra={"day": current_day.isoformat(), "current_streak": log.current_streak},
                )
                return CheckInResult(
                    ok=False,
                    outcome="already_checked_in",
                    stats=stats_for(log),
                    message=ALREADY_CHECKED_IN_MESSAGE,
                    next_eligible_date=calendar.tomorrow(current_day),
                )

            log = normalize(
                CheckInLog(
                    dates=log.dates + [current_day],
                    current_streak=log.current_streak,
                    longest_streak=log.longest_streak,
                    last_check_in_date=current_day,
                ),
                current_day,
            )
            self._repository.save(log)

        stats = stats_for(log)
        log_event(
            "info",
            "streak.check_in.recorded",
            event_type="checked_in",
            extra={
                "day": current_day.isoformat(),
                "current_streak": stats.current_streak,
                "longest_streak": stats.longest_streak,
            },
        )
        return CheckInResult(
            ok=True,
            outcome="checked_in",
            stats=stats,
            message=tier_message(stats.current_streak),
            tier=tier_for(stats.current_streak),
        )

    def get_status(self, today: Optional[date] = None) -> StatusReport:
        current_day = today or calendar.today()
        with self._repository.transaction() as stored:
            log = self._refresh(stored, current_day)
        return StatusReport(
            stats=stats_for(log),
            can_check_in_today=current_day not in log.dates,
            check_in_dates=list(log.dates),
        )

    def get_calendar(self, today: Optional[date] = None, window_days: Optional[int] = None) -> CalendarReport:
        current_day = today or calendar.today()
        window = self._window(window_days)
        with self._repository.transaction() as stored:
            log = self._refresh(stored, current_day)
        return CalendarReport(
            check_in_dates=list(log.dates),
            missed_days=missed_days(log.dates, current_day, window),
            current_streak=log.current_streak,
        )

    def get_missed_days(self, today: Optional[date] = None, window_days: Optional[int] = None) -> MissedDaysReport:
        current_day = today or calendar.today()
        window = self._window(window_days)
        with self._repository.transaction() as stored:
            log = self._refresh(stored, current_day)
        return MissedDaysReport(
            missed_days=missed_days(log.dates, current_day, window),
            date_from=calendar.days_ago(window, current_day),
            date_to=current_day,
        )

    # Test/debug collaborator operations -------------------------------
    def reset(self) -> None:
        self._repository.clear()
        log_event("info", "streak.reset", event_type="reset")

    def simulate_check_in(self, value: Optional[str], today: Optional[date] = None) -> SimulatedCheckIn:
        """Insert an arbitrary day, bypassing the today-only rule.

        Raises InvalidDateFormatError before touching the log. A day after
        ``today`` is dropped again by normalization.
        """
        requested = calendar.parse_calendar_date(value)
        current_day = today or calendar.today()
        with self._repository.transaction() as stored:
            before = set(stored.dates)
            log = normalize(
                CheckInLog(
                    dates=stored.dates + [requested],
                    current_streak=stored.current_streak,
                    longest_streak=stored.longest_streak,
                    last_check_in_date=stored.last_check_in_date,
                ),
                current_day,
            )
            self._repository.save(log)

        added = requested not in before and requested in log.dates
        dropped_future = requested > current_day
        if dropped_future:
            log_event(
                "warning",
                "streak.simulated_check_in.future_date_dropped",
                event_type="simulated_check_in",
                extra={"day": requested.isoformat(), "today": current_day.isoformat()},
            )
        else:
            log_event(
                "info",
                "streak.simulated_check_in",
                event_type="simulated_check_in",
                extra={"day": requested.isoformat(), "added": added},
            )
        return SimulatedCheckIn(
            requested_date=requested,
            added=added,
            stats=stats_for(log),
            check_in_dates=list(log.dates),
            dropped_future=dropped_future,
        )

    # Internal helpers -------------------------------------------------
    def _refresh(self, stored: CheckInLog, today: date) -> CheckInLog:
        log = normalize(stored, today)
        self._repository.save(log)
        log_event(
            "debug",
            "streak.recalculated",
            extra={
                "today": today.isoformat(),
                "check_ins": len(log.dates),
                "current_streak": log.current_streak,
                "longest_streak": log.longest_streak,
            },
        )
        return log

    def _window(self, window_days: Optional[int]) -> int:
        window = self._missed_days_window if window_days is None else window_days
        # Negative windows are empty; date_from must agree with missed_days.
        return max(window, 0)
