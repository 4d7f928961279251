"""
Shared fixtures for the ABOGA test suite.
"""

import json
import os
import time
from pathlib import Path

# Tests run against the SQL backend; set before any settings object is built
os.environ.setdefault("ENV", "test")
os.environ["DATA_BACKEND"] = "sql"
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from jose import jwt

from aboga.core.config import ApplicationConfig, BackendConfig, Config, GenerativeConfig, reset_config
from aboga.core.database import build_session_factory, create_database_engine, create_tables
from aboga.core.security import AuthContext, AuthUser
from aboga.services.data_store import SqlDataStore

JWT_SECRET = "test-jwt-secret"
SAMPLE_LAWYERS_FILE = Path(__file__).resolve().parents[1] / "scripts" / "lawyers_sample.json"


def make_token(sub: str = "user-1", secret: str = JWT_SECRET, **claims) -> str:
    payload = {
        "sub": sub,
        "aud": "authenticated",
        "email": f"{sub}@example.com",
        "exp": int(time.time()) + 3600,
        **claims,
    }
    return jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture
def config():
    cfg = Config(
        backend=BackendConfig(data_backend="sql", database_url="sqlite://", supabase_jwt_secret=JWT_SECRET),
        generative=GenerativeConfig(gemini_api_key="test-key"),
        application=ApplicationConfig(environment="test"),
    )
    yield cfg
    reset_config()


@pytest.fixture
def engine(config):
    db_engine = create_database_engine(config.backend)
    create_tables(db_engine)
    yield db_engine
    db_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def sql_store(session_factory):
    return SqlDataStore(session_factory)


@pytest.fixture
def visitor():
    return AuthContext()


@pytest.fixture
def signed_in():
    return AuthContext(user=AuthUser(id="user-1", email="user-1@example.com"), access_token="token")


@pytest.fixture
def sample_lawyers():
    with open(SAMPLE_LAWYERS_FILE, encoding="utf-8") as fh:
        return json.load(fh)


@pytest.fixture
def token_factory():
    """Sign test access tokens with the configured secret."""
    return make_token
