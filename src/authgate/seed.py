# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Development seed data.

The seed file is YAML::

    version: 1
    users:
      - name: Test User
        email: teste@mail.com
        password: senha123

Seeding wipes the users table first, then registers every entry.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List

import yaml

from authgate.auth.registration import register_user
from authgate.auth.users import PublicUser, UserStore

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeedUser:
    name: str
    email: str
    password: str


def load_seed_file(path: Path) -> List[SeedUser]:
    if not path.exists():
        return []
    raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    users = (raw.get("users") or []) if isinstance(raw, dict) else []
    out: List[SeedUser] = []
    for entry in users:
        if not isinstance(entry, dict):
            continue
        out.append(
            SeedUser(
                name=str(entry.get("name") or "").strip(),
                email=str(entry.get("email") or "").strip(),
                password=str(entry.get("password") or ""),
            )
        )
    return out


def seed_users(store: UserStore, entries: List[SeedUser]) -> List[PublicUser]:
    removed = store.delete_all()
    log.info("seed: removed %d existing users", removed)

    created: List[PublicUser] = []
    for entry in entries:
        result = register_user(store, entry.name, entry.email, entry.password)
        if not result.ok:
            log.warning("seed: skipped %s (%s)", entry.email or "<no email>", result.failure.value)
            continue
        created.append(result.user)
    log.info("seed: created %d users", len(created))
    return created
