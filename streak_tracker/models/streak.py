from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import List, Literal, Optional

StreakTier = Literal["start", "building", "strong", "excellent", "legendary"]
CheckInOutcome = Literal["checked_in", "already_checked_in"]


@dataclass
class CheckInLog:
    """
    The user's check-in history. Day-level, local wall-clock dates only.

    ``dates`` is the source of truth; the remaining fields are cached stats
    kept in step with it by normalization. ``longest_streak`` is a ratchet and
    only ever grows until the log is reset.
    """

    dates: List[date] = field(default_factory=list)
    current_streak: int = 0
    longest_streak: int = 0
    last_check_in_date: Optional[date] = None


@dataclass(frozen=True)
class Streak:
    """A maximal run of consecutive check-in days."""

    start_date: date
    end_date: date
    length: int


@dataclass(frozen=True)
class StreakStats:
    current_streak: int
    longest_streak: int
    last_check_in_date: Optional[date]
    total_check_ins: int

    @property
    def is_new_record(self) -> bool:
        return self.current_streak == self.longest_streak and self.current_streak > 1


@dataclass
class CheckInResult:
    """Outcome of a check-in attempt. ``ok`` is False when nothing was recorded."""

    ok: bool
    outcome: CheckInOutcome
    stats: StreakStats
    message: str
    tier: Optional[StreakTier] = None
    next_eligible_date: Optional[date] = None


@dataclass
class StatusReport:
    stats: StreakStats
    can_check_in_today: bool
    check_in_dates: List[date] = field(default_factory=list)


@dataclass
class CalendarReport:
    check_in_dates: List[date]
    missed_days: List[date]
    current_streak: int


@dataclass
class MissedDaysReport:
    missed_days: List[date]
    date_from: date
    date_to: date

    @property
    def total_missed_days(self) -> int:
        return len(self.missed_days)


@dataclass
class SimulatedCheckIn:
    requested_date: date
    added: bool
    stats: StreakStats
    check_in_dates: List[date] = field(default_factory=list)
    dropped_future: bool = False
