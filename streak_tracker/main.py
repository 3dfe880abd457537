import logging
import os
import time
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

# Load env from the project root .env
project_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if "PYTEST_CURRENT_TEST" not in os.environ:
    load_dotenv(dotenv_path=os.path.join(project_dir, ".env"))

from streak_tracker.core.config import Settings, settings, validate_config  # noqa: E402
from streak_tracker.core.logging import configure_logging  # noqa: E402
from streak_tracker.core.middleware.request_id import RequestIdMiddleware  # noqa: E402
from streak_tracker.core.validation import validate_env  # noqa: E402
from streak_tracker.core.errors import (  # noqa: E402
    AppError,
    app_error_handler,
    http_error_handler,
    unhandled_exception_handler,
)
from streak_tracker.api import health, streaks  # noqa: E402
from streak_tracker.features.streaks.repository import InMemoryCheckInRepository  # noqa: E402
from streak_tracker.features.streaks.service import StreakService  # noqa: E402

ENDPOINTS = [
    ("POST", "/check-in"),
    ("GET", "/streak"),
    ("GET", "/missed-days"),
    ("GET", "/calendar"),
    ("GET", "/health"),
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger = logging.getLogger("streak_tracker")
    cfg: Settings = app.state.settings
    app.state.startup_time = time.time()
    logger.info(f"Streak Tracker backend listening on {cfg.HOST}:{cfg.PORT}")
    for method, path in ENDPOINTS:
        logger.info(f"  {method:<4} http://localhost:{cfg.PORT}{path}")
    if cfg.debug_routes_enabled:
        logger.info("Debug routes enabled: POST /test-checkin, POST /test-reset")
    try:
        yield
    finally:
        logger.info("Stopping Streak Tracker backend...")


def create_app(settings_obj: Optional[Settings] = None) -> FastAPI:
    """Build the API with its own check-in repository."""
    cfg = settings_obj or settings

    configure_logging(cfg.ENV, cfg.LOG_LEVEL)
    validate_env(settings_obj=cfg)
    validate_config(strict=cfg.CONFIG_STRICT, settings_obj=cfg)

    app = FastAPI(title="Streak Tracker - Backend", lifespan=lifespan)
    app.state.settings = cfg
    app.state.streak_service = StreakService(
        repository=InMemoryCheckInRepository(),
        missed_days_window=cfg.MISSED_DAYS_WINDOW,
    )

    app.add_middleware(RequestIdMiddleware)

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins,
        allow_credentials="*" not in cfg.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(streaks.router, tags=["streaks"])
    if cfg.debug_routes_enabled:
        app.include_router(streaks.debug_router, tags=["debug"])
    app.include_router(health.router, tags=["health"])

    return app


app = create_app()
