#!/usr/bin/env python3
from __future__ import annotations

import sys
from pathlib import Path

from authgate.auth.users import UserStore
from authgate.config import default_seed_path, load_settings
from authgate.db import make_engine
from authgate.log import configure_logging
from authgate.seed import load_seed_file, seed_users


def main() -> None:
    settings = load_settings()
    configure_logging(settings.log_level)

    path = Path(sys.argv[1]).resolve() if len(sys.argv) > 1 else default_seed_path()
    entries = load_seed_file(path)
    if not entries:
        raise SystemExit(f"No users found in {path}")

    store = UserStore(make_engine(settings.database_url))
    store.create_schema()
    for u in seed_users(store, entries):
        print(u.to_dict())


if __name__ == "__main__":
    main()
