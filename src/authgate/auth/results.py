# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from authgate.auth.users import PublicUser


class Failure(str, Enum):
    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"
    BAD_PASSWORD = "bad_password"
    EMAIL_TAKEN = "email_taken"
    INTERNAL = "internal"


# NOT_FOUND and BAD_PASSWORD share a message so logins cannot probe for accounts.
PUBLIC_MESSAGES = {
    Failure.INVALID_INPUT: "Invalid input data",
    Failure.NOT_FOUND: "Invalid credentials",
    Failure.BAD_PASSWORD: "Invalid credentials",
    Failure.EMAIL_TAKEN: "Email is already in use",
    Failure.INTERNAL: "Internal server error",
}

HTTP_STATUS = {
    Failure.INVALID_INPUT: 400,
    Failure.NOT_FOUND: 401,
    Failure.BAD_PASSWORD: 401,
    Failure.EMAIL_TAKEN: 409,
    Failure.INTERNAL: 500,
}


@dataclass(frozen=True)
class AuthResult:
    user: Optional[PublicUser] = None
    failure: Optional[Failure] = None
    errors: Dict[str, List[str]] = field(default_factory=dict)

    @classmethod
    def success(cls, user: PublicUser) -> "AuthResult":
        return cls(user=user)

    @classmethod
    def fail(cls, failure: Failure, errors: Optional[Dict[str, List[str]]] = None) -> "AuthResult":
        return cls(failure=failure, errors=dict(errors or {}))

    @property
    def ok(self) -> bool:
        return self.failure is None and self.user is not None

    @property
    def message(self) -> str:
        if self.failure is None:
            return ""
        return PUBLIC_MESSAGES[self.failure]

    @property
    def status_code(self) -> int:
        if self.failure is None:
            return 200
        return HTTP_STATUS[self.failure]
