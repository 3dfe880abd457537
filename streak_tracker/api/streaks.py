from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from streak_tracker.core import dates as calendar
from streak_tracker.core.errors import ValidationError, error_payload
from streak_tracker.core.logging import get_request_id
from streak_tracker.features.streaks.service import StreakService
from streak_tracker.models.streak import StreakStats

router = APIRouter()
debug_router = APIRouter()


class SimulatedCheckInRequest(BaseModel):
    date: Optional[str] = None


def get_today() -> date:
    """Reference day for a request; overridden in tests."""
    return calendar.today()


def get_streak_service(request: Request) -> StreakService:
    return request.app.state.streak_service


def _stats_payload(stats: StreakStats) -> dict:
    return {
        "currentStreak": stats.current_streak,
        "longestStreak": stats.longest_streak,
        "lastCheckInDate": calendar.format_calendar_date(stats.last_check_in_date),
        "totalCheckIns": stats.total_check_ins,
    }


def _dates_payload(days) -> list:
    return [day.isoformat() for day in days]


@router.post("/check-in")
def check_in(
    request: Request,
    service: StreakService = Depends(get_streak_service),
    today: date = Depends(get_today),
):
    """Record today's check-in (once per day)."""
    result = service.record_check_in(today)

    if not result.ok:
        rid = getattr(request.state, "request_id", None) or get_request_id() or ""
        body = error_payload(result.outcome, result.message, rid)
        body.update(
            {
                "success": False,
                "message": result.message,
                **_stats_payload(result.stats),
                "nextCheckInAvailable": calendar.format_calendar_date(result.next_eligible_date),
            }
        )
        return JSONResponse(status_code=400, content=body)

    return {
        "success": True,
        "message": result.message,
        "tier": result.tier,
        **_stats_payload(result.stats),
        "isNewRecord": result.stats.is_new_record,
    }


@router.get("/streak")
def get_streak(
    service: StreakService = Depends(get_streak_service),
    today: date = Depends(get_today),
):
    report = service.get_status(today)
    return {
        **_stats_payload(report.stats),
        "canCheckInToday": report.can_check_in_today,
        "checkInDates": _dates_payload(report.check_in_dates),
        "isNewRecord": report.stats.is_new_record,
    }


@router.get("/missed-days")
def get_missed_days(
    request: Request,
    window: Optional[int] = Query(None, ge=1),
    service: StreakService = Depends(get_streak_service),
    today: date = Depends(get_today),
):
    """Missed days in the trailing window (default 30 days before today)."""
    max_window = request.app.state.settings.MAX_MISSED_DAYS_WINDOW
    if window is not None and window > max_window:
        raise ValidationError(
            f"window must be between 1 and {max_window} days",
            code="invalid_window",
            status_code=422,
        )
    report = service.get_missed_days(today, window_days=window)
    return {
        "missedDays": _dates_payload(report.missed_days),
        "totalMissedDays": report.total_missed_days,
        "dateRange": {
            "from": report.date_from.isoformat(),
            "to": report.date_to.isoformat(),
        },
    }


@router.get("/calendar")
def get_calendar(
    service: StreakService = Depends(get_streak_service),
    today: date = Depends(get_today),
):
    report = service.get_calendar(today)
    return {
        "checkInDates": _dates_payload(report.check_in_dates),
        "missedDays": _dates_payload(report.missed_days),
        "currentStreak": report.current_streak,
    }


@debug_router.post("/test-checkin")
def simulate_check_in(
    body: Optional[SimulatedCheckInRequest] = None,
    service: StreakService = Depends(get_streak_service),
    today: date = Depends(get_today),
):
    """Add a check-in on an arbitrary date (debug/testing only)."""
    result = service.simulate_check_in(body.date if body else None, today)
    requested = result.requested_date.isoformat()
    message = f"Test check-in added for {requested}"
    if result.dropped_future:
        message = f"Test check-in for {requested} ignored: date is in the future"
    return {
        "success": True,
        "message": message,
        **_stats_payload(result.stats),
        "checkInDates": _dates_payload(result.check_in_dates),
    }


@debug_router.post("/test-reset")
def reset(service: StreakService = Depends(get_streak_service)):
    """Clear all check-ins and stats (debug/testing only)."""
    service.reset()
    log = service.repository.load()
    return {
        "success": True,
        "message": "All streak data reset",
        "streakData": {
            "currentStreak": log.current_streak,
            "longestStreak": log.longest_streak,
            "lastCheckInDate": calendar.format_calendar_date(log.last_check_in_date),
            "checkInDates": _dates_payload(log.dates),
            "missedDays": [],
        },
    }
