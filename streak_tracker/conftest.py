# streak_tracker/conftest.py
import os
import sys
from datetime import date
from pathlib import Path

import pytest

# Add project root to PYTHONPATH
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ.setdefault("SKIP_ENV_VALIDATION", "1")

TODAY = date(2024, 6, 10)


@pytest.fixture
def app():
    """
    Fresh application per test.

    Each app owns its own check-in repository, so no state leaks between
    tests. The clock dependency is pinned to TODAY; tests can move it by
    overriding get_today again.
    """
    from streak_tracker.api.streaks import get_today
    from streak_tracker.core.config import Settings
    from streak_tracker.main import create_app

    application = create_app(Settings(ENV="test", ENABLE_DEBUG_ROUTES=True))
    application.dependency_overrides[get_today] = lambda: TODAY
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app):
    from fastapi.testclient import TestClient

    return TestClient(app)
