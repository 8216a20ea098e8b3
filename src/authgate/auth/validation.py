# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Input validators for the login and registration payloads.

Each validator returns a ``Validation``: cleaned values in ``data`` and
per-field messages in ``errors``. An empty ``errors`` means valid.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from email_validator import EmailNotValidError, validate_email

PASSWORD_MIN_LENGTH = 6
NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 255


@dataclass
class Validation:
    data: Dict[str, str] = field(default_factory=dict)
    errors: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors

    def add(self, field_name: str, message: str) -> None:
        self.errors.setdefault(field_name, []).append(message)


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def normalize_email(raw: Any) -> Optional[str]:
    """Return the normalized address, or None when it is not a valid one."""
    s = _as_str(raw).strip()
    if not s or len(s) > EMAIL_MAX_LENGTH:
        return None
    try:
        return validate_email(s, check_deliverability=False).normalized
    except EmailNotValidError:
        return None


def _check_email(v: Validation, raw: Any) -> None:
    if not _as_str(raw).strip():
        v.add("email", "Email is required")
        return
    email = normalize_email(raw)
    if email is None:
        v.add("email", "Invalid email")
        return
    v.data["email"] = email


def _check_password(v: Validation, raw: Any) -> None:
    password = _as_str(raw)
    if len(password) < PASSWORD_MIN_LENGTH:
        v.add("password", f"Password must be at least {PASSWORD_MIN_LENGTH} characters")
        return
    v.data["password"] = password


def validate_login(email: Any, password: Any) -> Validation:
    v = Validation()
    _check_email(v, email)
    _check_password(v, password)
    return v


def validate_registration(
    name: Any,
    email: Any,
    password: Any,
    confirm_password: Any = None,
) -> Validation:
    v = Validation()

    n = _as_str(name).strip()
    if not n:
        v.add("name", "Name is required")
    elif len(n) > NAME_MAX_LENGTH:
        v.add("name", f"Name cannot be longer than {NAME_MAX_LENGTH} characters")
    else:
        v.data["name"] = n

    _check_email(v, email)
    _check_password(v, password)

    # Only the HTML form sends a confirmation field.
    if confirm_password is not None:
        if not _as_str(confirm_password):
            v.add("confirm_password", "Password confirmation is required")
        elif confirm_password != password:
            v.add("confirm_password", "Passwords do not match")

    return v
