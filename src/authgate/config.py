# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parents[2]

_TRUTHY = {"1", "true", "yes", "y"}


def _env(*names: str, default: str = "") -> str:
    for name in names:
        v = os.getenv(name)
        if v is not None and v.strip():
            return v.strip()
    return default


@dataclass(frozen=True)
class Settings:
    secret_key: str
    database_url: str = "sqlite:///./authgate.db"
    cookie_name: str = "authgate_session"
    session_max_age: int = 28800  # 8 hours
    session_salt: str = "authgate.session.v1"
    cookie_secure: bool = False
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Build settings from the environment.

    AUTHGATE_SECRET_KEY (or SECRET_KEY) is mandatory: sessions cannot be
    signed without it.
    """
    secret = _env("AUTHGATE_SECRET_KEY", "SECRET_KEY")
    if not secret:
        raise RuntimeError("Missing AUTHGATE_SECRET_KEY (or SECRET_KEY) in environment")
    return Settings(
        secret_key=secret,
        database_url=_env("AUTHGATE_DATABASE_URL", "DATABASE_URL", default="sqlite:///./authgate.db"),
        cookie_name=_env("AUTHGATE_COOKIE_NAME", default="authgate_session"),
        session_max_age=int(_env("AUTHGATE_SESSION_MAX_AGE", default="28800")),
        session_salt=_env("AUTHGATE_SESSION_SALT", default="authgate.session.v1"),
        cookie_secure=_env("AUTHGATE_COOKIE_SECURE", default="false").lower() in _TRUTHY,
        log_level=_env("AUTHGATE_LOG_LEVEL", default="INFO").upper(),
    )


def default_seed_path() -> Path:
    return Path(_env("AUTHGATE_SEED_PATH", default=str(BASE_DIR / "data" / "seed_users.yml"))).resolve()
