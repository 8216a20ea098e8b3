# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Route access decisions.

Every request path falls in one of three classes:

- public: always reachable
- auth-only: reachable only while signed out (login/register pages)
- protected: everything else, reachable only while signed in

Classification is by prefix: an entry matches the path itself and any
sub-path below it ("/api/auth" matches "/api/auth/session").
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Tuple
from urllib.parse import urlencode


class Action(str, Enum):
    ALLOW = "allow"
    REDIRECT_DASHBOARD = "redirect_dashboard"
    REDIRECT_LOGIN = "redirect_login"


@dataclass(frozen=True)
class RouteTable:
    public: Tuple[str, ...] = ("/", "/login", "/register", "/api/auth")
    auth_only: Tuple[str, ...] = ("/login", "/register")
    # Never gated at all.
    excluded: Tuple[str, ...] = ("/static", "/favicon.ico")
    login_path: str = "/login"
    dashboard_path: str = "/dashboard"
    callback_param: str = "callbackUrl"


@dataclass(frozen=True)
class Decision:
    action: Action
    location: Optional[str] = None
    callback: Optional[str] = None

    @property
    def allowed(self) -> bool:
        return self.action is Action.ALLOW


def matches(path: str, entries: Iterable[str]) -> bool:
    return any(path == entry or path.startswith(f"{entry}/") for entry in entries)


def is_excluded(path: str, routes: RouteTable) -> bool:
    return matches(path, routes.excluded)


def decide(path: str, authenticated: bool, routes: RouteTable = RouteTable()) -> Decision:
    is_public = matches(path, routes.public)
    is_auth_only = matches(path, routes.auth_only)

    if is_auth_only and authenticated:
        return Decision(Action.REDIRECT_DASHBOARD, location=routes.dashboard_path)

    if not is_public and not authenticated:
        query = urlencode({routes.callback_param: path})
        return Decision(Action.REDIRECT_LOGIN, location=f"{routes.login_path}?{query}", callback=path)

    return Decision(Action.ALLOW)


def safe_callback(target: Optional[str], default: str) -> str:
    """Keep post-login redirects on this site."""
    t = (target or "").strip()
    if not t.startswith("/") or t.startswith("//") or "\\" in t:
        return default
    return t
