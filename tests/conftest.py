import os
import sys
from pathlib import Path as _Path
sys.path.insert(0, str(_Path(__file__).resolve().parents[1] / "src"))

# Cheap hashing for the test run; read when authgate.auth.passwords is imported.
os.environ.setdefault("AUTHGATE_HASH_TIME_COST", "1")
os.environ.setdefault("AUTHGATE_HASH_MEMORY_COST", "8192")

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from authgate.app import create_app
from authgate.auth.session import SessionSigner
from authgate.auth.users import UserStore
from authgate.config import Settings
from authgate.db import make_engine


@pytest.fixture()
def db_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'authgate-test.db'}"


@pytest.fixture()
def store(db_url: str) -> UserStore:
    s = UserStore(make_engine(db_url))
    s.create_schema()
    return s


@pytest.fixture()
def settings(db_url: str) -> Settings:
    return Settings(secret_key="test-secret", database_url=db_url, log_level="WARNING")


@pytest.fixture()
def signer(settings: Settings) -> SessionSigner:
    return SessionSigner(settings.secret_key, salt=settings.session_salt, max_age=settings.session_max_age)


@pytest.fixture()
def client(settings: Settings, store: UserStore) -> TestClient:
    app = create_app(settings=settings, store=store)
    return TestClient(app, follow_redirects=False)


@pytest.fixture()
def ana(client: TestClient) -> dict:
    """Registered user, returned with its plaintext password."""
    r = client.post(
        "/api/auth/register",
        json={"name": "Ana", "email": "ana@x.com", "password": "abcdef"},
    )
    assert r.status_code == 201, r.text
    return {**r.json()["user"], "password": "abcdef"}
