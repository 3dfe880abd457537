"""
Health endpoints for the streak tracker backend.

Lightweight liveness checks with no dependencies on streak state.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Query

from streak_tracker.core.logging import get_request_id

logger = logging.getLogger("streak_tracker")

router = APIRouter(tags=["health"])


@router.get("/health")
def health(now: Optional[str] = Query(None, description="Fixed timestamp for deterministic testing (ISO format)")):
    """Liveness check with a server timestamp."""
    timestamp = now or datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
    logger.info("health.check", extra={"request_id": get_request_id()})
    return {"status": "OK", "timestamp": timestamp}


@router.get("/healthz")
def healthz():
    """Lightweight liveness check (no deps)."""
    return {"status": "ok"}
