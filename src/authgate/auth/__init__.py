# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Authentication core.

This package provides:
- Password hashing/verification (argon2)
- User store on SQLAlchemy (users table, unique email)
- Input validators for login and registration
- Credential verification and registration services
- Signed session tokens (itsdangerous)
"""
