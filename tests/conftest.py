"""Root pytest configuration.

Test Structure:
    tests/
    ├── unit/               # Fast, isolated tests (mocks, no database)
    └── integration/
        ├── persistence/    # Repositories against in-memory SQLite
        └── api/            # FastAPI TestClient against in-memory SQLite

Settings are loaded from config/.env.dev (or config/.env) when present;
otherwise the two required secrets get harmless test defaults so the app
module can be imported.
"""

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parents[1]

# Load .env.dev for tests (same as local development)
CONFIG_DIR = PROJECT_ROOT / "config"
if (CONFIG_DIR / ".env.dev").exists():
    load_dotenv(CONFIG_DIR / ".env.dev")
elif (CONFIG_DIR / ".env").exists():
    load_dotenv(CONFIG_DIR / ".env")

os.environ.setdefault("JWT_SECRET_KEY", "test-jwt-secret-for-testing-only")
os.environ.setdefault("POSTGRES_PASSWORD", "test-password")

from juander_config import clear_settings_cache  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def configure_app_settings():
    """Start and finish the test session with a fresh settings cache."""
    clear_settings_cache()
    yield
    clear_settings_cache()
