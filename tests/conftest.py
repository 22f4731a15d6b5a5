"""
DAMit! test configuration.

Environment is set before any ``app`` module is imported: the JWT secret is
read at import time and the engine binds to DATABASE_URL on first import.
"""

import os
import tempfile
from datetime import date

import pytest

_TMP_DIR = tempfile.mkdtemp(prefix="damit-tests-")

os.environ["ENV"] = "production"  # skip .env loading
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}"
os.environ["DAMIT_TIMEZONE"] = "UTC"
os.environ["DAMIT_LOCAL_STORE"] = os.path.join(_TMP_DIR, "local_store.json")
os.environ.pop("FIREBASE_ADMIN_JSON", None)
os.environ.pop("SUPABASE_URL", None)


def make_log(log_date: date, log_id: int = None, **fields):
    from app.models.daily_log import DailyLog
    return DailyLog(id=log_id, user_id=1, log_date=log_date, **fields)


@pytest.fixture(scope="session")
def client():
    from fastapi.testclient import TestClient
    from app.main import app
    from app.utils.rate_limit_utils import limiter

    limiter.enabled = False
    with TestClient(app) as c:
        yield c


def login(client, device_id: str) -> dict:
    res = client.post("/auth/device-login", json={"device_id": device_id})
    assert res.status_code == 200
    return {"Authorization": f"Bearer {res.json()['token']}"}
