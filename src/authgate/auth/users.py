# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import delete, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from authgate.db import Base, User


class EmailTaken(Exception):
    """Raised when the unique constraint on users.email rejects an insert."""


@dataclass(frozen=True)
class PublicUser:
    id: str
    name: str
    email: str
    created_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class UserRecord:
    id: str
    name: str
    email: str
    password_hash: str
    created_at: Optional[datetime] = None

    def public(self) -> PublicUser:
        return PublicUser(id=self.id, name=self.name, email=self.email, created_at=self.created_at)


def _record(row: User) -> UserRecord:
    return UserRecord(
        id=row.id,
        name=row.name,
        email=row.email,
        password_hash=row.password_hash,
        created_at=row.created_at,
    )


class UserStore:
    """User persistence on top of a pooled SQLAlchemy engine.

    One short-lived ORM session is opened per call, so a single store can be
    shared by concurrent request handlers.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self._sessions = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

    def create_schema(self) -> None:
        Base.metadata.create_all(self.engine)

    def find_by_email(self, email: str) -> Optional[UserRecord]:
        e = (email or "").strip()
        if not e:
            return None
        with self._sessions() as db:
            row = db.execute(select(User).where(User.email == e)).scalar_one_or_none()
            return _record(row) if row is not None else None

    def get_by_id(self, user_id: str) -> Optional[UserRecord]:
        if not user_id:
            return None
        with self._sessions() as db:
            row = db.get(User, user_id)
            return _record(row) if row is not None else None

    def insert(self, *, name: str, email: str, password_hash: str) -> UserRecord:
        with self._sessions() as db:
            row = User(name=name, email=email, password_hash=password_hash)
            db.add(row)
            try:
                db.commit()
            except IntegrityError as exc:
                db.rollback()
                raise EmailTaken(email) from exc
            db.refresh(row)
            return _record(row)

    def delete_all(self) -> int:
        with self._sessions() as db:
            result = db.execute(delete(User))
            db.commit()
            return int(result.rowcount or 0)
