#!/usr/bin/env python3
from __future__ import annotations

from getpass import getpass

from authgate.auth.registration import register_user
from authgate.auth.users import UserStore
from authgate.config import load_settings
from authgate.db import make_engine
from authgate.log import configure_logging


def main() -> None:
    settings = load_settings()
    configure_logging(settings.log_level)
    store = UserStore(make_engine(settings.database_url))
    store.create_schema()

    name = input("Name: ").strip()
    email = input("Email: ").strip()
    pw1 = getpass("Password: ")
    pw2 = getpass("Repeat password: ")

    result = register_user(store, name, email, pw1, pw2)
    if not result.ok:
        for field_name, messages in result.errors.items():
            for m in messages:
                print(f"  {field_name}: {m}")
        raise SystemExit(result.message)

    print(f"OK -> {result.user.email} ({result.user.id})")


if __name__ == "__main__":
    main()
