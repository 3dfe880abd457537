"""
Environment validation utilities.

Ensures the backend fails fast on misconfiguration while
remaining bypassable for tests via SKIP_ENV_VALIDATION.
"""

import os
from typing import Optional

from streak_tracker.core.config import settings


class EnvValidationError(RuntimeError):
    """Raised when environment validation fails."""


def validate_env(env: Optional[str] = None, settings_obj=None) -> bool:
    """Validate environment configuration.

    Args:
        env: Override environment name (defaults to settings.ENV)
        settings_obj: Override settings object (defaults to streak_tracker.core.config.settings)

    Returns:
        True if validation passes.

    Raises:
        EnvValidationError when a rule is violated.
    """
    if os.getenv("SKIP_ENV_VALIDATION") == "1":
        return True

    cfg = settings_obj or settings
    mode = (env or getattr(cfg, "ENV", "development") or "development").lower()

    port = getattr(cfg, "PORT", 3000)
    if not 1 <= port <= 65535:
        raise EnvValidationError(f"PORT must be between 1 and 65535 (got {port})")

    max_window = getattr(cfg, "MAX_MISSED_DAYS_WINDOW", 365)
    if max_window < 1:
        raise EnvValidationError("MAX_MISSED_DAYS_WINDOW must be at least 1")

    window = getattr(cfg, "MISSED_DAYS_WINDOW", 30)
    if not 1 <= window <= max_window:
        raise EnvValidationError(
            f"MISSED_DAYS_WINDOW must be between 1 and MAX_MISSED_DAYS_WINDOW ({max_window})"
        )

    if mode == "production" and getattr(cfg, "ENABLE_DEBUG_ROUTES", None) is True:
        raise EnvValidationError("ENABLE_DEBUG_ROUTES must not be enabled in production")

    return True
