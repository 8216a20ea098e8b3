# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from typing import Optional
from urllib.parse import urlencode

from fastapi import HTTPException, Request

from authgate.auth.session import SessionData
from authgate.auth.users import PublicUser


class StaleSession(Exception):
    """Validly signed session whose user no longer exists in the store."""

    def __init__(self, location: str):
        super().__init__(location)
        self.location = location


def current_session(request: Request) -> Optional[SessionData]:
    # Set by the gate middleware; excluded paths never carry one.
    return getattr(request.state, "session", None)


def current_user_optional(request: Request) -> Optional[PublicUser]:
    sess = current_session(request)
    if not sess:
        return None
    u = request.app.state.store.get_by_id(sess.user_id)
    if not u:
        return None
    return u.public()


def _login_location(request: Request) -> str:
    routes = request.app.state.routes
    next_url = str(request.url.path)
    if request.url.query:
        next_url += "?" + request.url.query
    return f"{routes.login_path}?{urlencode({routes.callback_param: next_url})}"


def require_user(request: Request) -> PublicUser:
    u = current_user_optional(request)
    if u:
        return u
    loc = _login_location(request)
    if current_session(request) is not None:
        # The cookie must be dropped or the gate keeps bouncing /login back here.
        raise StaleSession(loc)
    raise HTTPException(status_code=303, headers={"Location": loc})


def cookie_settings(request: Request) -> dict:
    settings = request.app.state.settings
    return {
        "httponly": True,
        "samesite": "lax",
        "secure": settings.cookie_secure,
        "max_age": settings.session_max_age,
    }
