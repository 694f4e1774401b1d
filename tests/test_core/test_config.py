# tests/test_core/test_config.py

import pytest
from pydantic import ValidationError

from seriesgate.core.config import Settings


def _settings(**overrides):
    return Settings(JWT_SECRET_KEY="k", _env_file=None, **overrides)


def test_database_urls():
    s = _settings(POSTGRES_USER="u", POSTGRES_PASSWORD="p", POSTGRES_SERVER="db", POSTGRES_PORT=6543, POSTGRES_DB="sg")
    assert s.DATABASE_URL == "postgresql://u:p@db:6543/sg"
    assert s.ASYNC_DATABASE_URL == "postgresql+asyncpg://u:p@db:6543/sg"
    assert s.TEST_DATABASE_URL == "postgresql+asyncpg://u:p@db:6543/sg_test"


@pytest.mark.parametrize(
    "raw, expected",
    [("repeatable read", "REPEATABLE READ"), ("READ_COMMITTED", "READ COMMITTED"), ("Serializable", "SERIALIZABLE")],
)
def test_isolation_is_normalized(raw, expected):
    assert _settings(SERIES_READ_ISOLATION=raw).SERIES_READ_ISOLATION == expected


def test_unknown_isolation_rejected():
    with pytest.raises(ValidationError):
        _settings(SERIES_READ_ISOLATION="READ UNCOMMITTED")


def test_env_flags():
    assert _settings(ENV="production").is_production is True
    assert _settings(ENV="development").is_development is True


def test_jwt_secret_is_required(monkeypatch):
    monkeypatch.delenv("JWT_SECRET_KEY", raising=False)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
