# tests/conftest.py
"""
Global test bootstrap
- Sets required env (JWT secret, console-only logging) BEFORE seriesgate is imported
- Pulls in db/app/auth fixtures
"""

from __future__ import annotations

import os

# ──────────────────────────────────────────────────────────────────────────────
# 🌱 Test env (must precede any `seriesgate` import)
# ──────────────────────────────────────────────────────────────────────────────
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("LOG_TO_FILE", "0")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("ENV", "development")

# ──────────────────────────────────────────────────────────────────────────────
# 📦 Fixtures (db, app, auth)
# ──────────────────────────────────────────────────────────────────────────────
from tests.fixtures.db import *    # noqa: F401,F403,E402
from tests.fixtures.app import *   # noqa: F401,F403,E402
from tests.fixtures.auth import *  # noqa: F401,F403,E402
