# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import os

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

# Work factor is fixed per deployment; argon2 defaults unless overridden.
_PH = PasswordHasher(
    time_cost=int(os.getenv("AUTHGATE_HASH_TIME_COST", "3")),
    memory_cost=int(os.getenv("AUTHGATE_HASH_MEMORY_COST", "65536")),
)

_DUMMY_HASH = ""


def hash_password(plain: str) -> str:
    if not plain:
        raise ValueError("Empty password")
    return _PH.hash(plain)


def verify_password(hash_value: str, plain: str) -> bool:
    if not hash_value or not plain:
        return False
    try:
        return _PH.verify(hash_value, plain)
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False


def burn_verify(plain: str) -> None:
    """Spend one verification on a throwaway hash.

    Used when no user matched so unknown emails cost the same as wrong
    passwords.
    """
    global _DUMMY_HASH
    if not _DUMMY_HASH:
        _DUMMY_HASH = _PH.hash("authgate-dummy-password")
    verify_password(_DUMMY_HASH, plain or "x")
