import logging

from pydantic_settings import BaseSettings
from pydantic import ConfigDict
from typing import List, Optional


class Settings(BaseSettings):
    # Environment
    ENV: str = "development"
    CONFIG_STRICT: bool = False
    LOG_LEVEL: str = "INFO"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # CORS (comma-separated origins, "*" for any)
    CORS_ALLOW_ORIGINS: str = "*"

    # Streak reporting
    MISSED_DAYS_WINDOW: int = 30
    MAX_MISSED_DAYS_WINDOW: int = 365

    # Debug routes (/test-checkin, /test-reset). None = on unless production.
    ENABLE_DEBUG_ROUTES: Optional[bool] = None

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def is_production(self) -> bool:
        return self.ENV.lower() == "production"

    @property
    def debug_routes_enabled(self) -> bool:
        if self.ENABLE_DEBUG_ROUTES is None:
            return not self.is_production
        return self.ENABLE_DEBUG_ROUTES

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ALLOW_ORIGINS.split(",") if origin.strip()]


settings = Settings()


def validate_config(strict: Optional[bool] = None, settings_obj: Optional[Settings] = None, logger: Optional[logging.Logger] = None) -> bool:
    """Validate soft configuration rules.

    In strict mode raise RuntimeError; otherwise emit warnings only.
    """
    cfg = settings_obj or settings
    log = logger or logging.getLogger("streak_tracker")
    strict_mode = strict if strict is not None else getattr(cfg, "CONFIG_STRICT", False)

    problems = []
    if cfg.is_production and "*" in cfg.cors_origins:
        problems.append("CORS_ALLOW_ORIGINS allows any origin in production")

    if problems:
        message = f"Configuration warnings: {'; '.join(problems)}"
        if strict_mode:
            raise RuntimeError(message)
        log.warning(message)

    return True
