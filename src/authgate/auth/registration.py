# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from authgate.auth.passwords import hash_password
from authgate.auth.results import AuthResult, Failure
from authgate.auth.users import EmailTaken, UserStore
from authgate.auth.validation import validate_registration

log = logging.getLogger(__name__)


def register_user(
    store: UserStore,
    name: Any,
    email: Any,
    password: Any,
    confirm_password: Any = None,
) -> AuthResult:
    v = validate_registration(name, email, password, confirm_password)
    if not v.ok:
        log.info("registration rejected: invalid input (%s)", ", ".join(sorted(v.errors)))
        return AuthResult.fail(Failure.INVALID_INPUT, v.errors)

    addr = v.data["email"]
    try:
        if store.find_by_email(addr) is not None:
            log.info("registration rejected: %s already registered", addr)
            return AuthResult.fail(Failure.EMAIL_TAKEN)

        record = store.insert(
            name=v.data["name"],
            email=addr,
            password_hash=hash_password(v.data["password"]),
        )
    except EmailTaken:
        # Concurrent registration of the same email.
        log.info("registration rejected: %s taken by concurrent insert", addr)
        return AuthResult.fail(Failure.EMAIL_TAKEN)
    except SQLAlchemyError:
        log.exception("registration failed: store error")
        return AuthResult.fail(Failure.INTERNAL)

    log.info("registered user %s", record.id)
    return AuthResult.success(record.public())
