# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from authgate.auth.passwords import burn_verify, verify_password
from authgate.auth.results import AuthResult, Failure
from authgate.auth.users import UserStore
from authgate.auth.validation import validate_login

log = logging.getLogger(__name__)


def verify_credentials(store: UserStore, email: Any, password: Any) -> AuthResult:
    """Check an email/password pair against the store.

    Unknown email and wrong password keep distinct reason codes in the
    result and in the logs, but expose the same ``message``.
    """
    v = validate_login(email, password)
    if not v.ok:
        log.info("login rejected: invalid input (%s)", ", ".join(sorted(v.errors)))
        return AuthResult.fail(Failure.INVALID_INPUT, v.errors)

    addr = v.data["email"]
    try:
        user = store.find_by_email(addr)
    except SQLAlchemyError:
        log.exception("login failed: user lookup error")
        return AuthResult.fail(Failure.INTERNAL)

    if user is None:
        burn_verify(v.data["password"])
        log.info("login rejected: no user for %s", addr)
        return AuthResult.fail(Failure.NOT_FOUND)

    if not verify_password(user.password_hash, v.data["password"]):
        log.info("login rejected: bad password for user %s", user.id)
        return AuthResult.fail(Failure.BAD_PASSWORD)

    log.info("login ok: user %s", user.id)
    return AuthResult.success(user.public())
