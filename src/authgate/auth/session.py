# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from itsdangerous import BadData, URLSafeTimedSerializer

DEFAULT_SALT = "authgate.session.v1"
DEFAULT_MAX_AGE_SECONDS = 28800  # 8 hours


@dataclass(frozen=True)
class SessionData:
    user_id: str


class SessionSigner:
    """Issues and validates the signed session token.

    The token is a timestamped itsdangerous payload; expiry is enforced on
    load through ``max_age``.
    """

    def __init__(self, secret: str, *, salt: str = DEFAULT_SALT, max_age: int = DEFAULT_MAX_AGE_SECONDS):
        if not secret:
            raise RuntimeError("Missing session secret")
        self.max_age = int(max_age)
        self._s = URLSafeTimedSerializer(secret_key=secret, salt=salt)

    def sign(self, user_id: str) -> str:
        if not user_id:
            raise ValueError("Empty user id")
        return self._s.dumps({"uid": str(user_id)})

    def verify(self, token: Optional[str], *, max_age: Optional[int] = None) -> Optional[SessionData]:
        if not token:
            return None
        try:
            data = self._s.loads(token, max_age=self.max_age if max_age is None else max_age)
        except BadData:
            # Bad signature, expired, or undecodable payload.
            return None
        if not isinstance(data, dict):
            return None
        uid = str(data.get("uid") or "").strip()
        if not uid:
            return None
        return SessionData(user_id=uid)
