# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from fastapi import Depends, FastAPI, Form, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette.concurrency import run_in_threadpool

from authgate.auth.credentials import verify_credentials
from authgate.auth.registration import register_user
from authgate.auth.results import AuthResult
from authgate.auth.session import SessionSigner
from authgate.auth.users import PublicUser, UserStore
from authgate.config import Settings, load_settings
from authgate.db import make_engine
from authgate.gate import RouteTable, decide, is_excluded, safe_callback
from authgate.log import configure_logging
from authgate.permissions import (
    StaleSession,
    cookie_settings,
    current_session,
    current_user_optional,
    require_user,
)

log = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent
templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))


def _render(request: Request, template_name: str, ctx: Optional[dict] = None, status_code: int = 200):
    """TemplateResponse wrapper injecting the signed-in user."""
    base_ctx = {"current_user": current_user_optional(request)}
    merged = {**base_ctx, **(ctx or {})}
    return templates.TemplateResponse(request, template_name, merged, status_code=status_code)


def _error_json(result: AuthResult) -> JSONResponse:
    body: dict = {"message": result.message}
    if result.errors:
        body["errors"] = result.errors
    return JSONResponse(body, status_code=result.status_code)


async def _json_body(request: Request) -> dict:
    try:
        body = await request.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[UserStore] = None,
    routes: RouteTable = RouteTable(),
) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    if store is None:
        store = UserStore(make_engine(settings.database_url))
    store.create_schema()

    app = FastAPI()
    app.state.settings = settings
    app.state.store = store
    app.state.routes = routes
    app.state.signer = SessionSigner(
        settings.secret_key,
        salt=settings.session_salt,
        max_age=settings.session_max_age,
    )

    @app.middleware("http")
    async def _gate_middleware(request: Request, call_next):
        path = request.url.path
        if is_excluded(path, routes):
            return await call_next(request)
        token = request.cookies.get(settings.cookie_name, "")
        request.state.session = app.state.signer.verify(token)
        decision = decide(path, request.state.session is not None, routes)
        if not decision.allowed:
            return RedirectResponse(url=decision.location, status_code=303)
        return await call_next(request)

    @app.exception_handler(StaleSession)
    async def _stale_session(request: Request, exc: StaleSession):
        log.info("dropping session for missing user on %s", request.url.path)
        resp = RedirectResponse(url=exc.location, status_code=303)
        resp.delete_cookie(settings.cookie_name)
        return resp

    @app.exception_handler(Exception)
    async def _internal_error(request: Request, exc: Exception):
        log.exception("unhandled error on %s %s", request.method, request.url.path)
        if request.url.path.startswith("/api/"):
            return JSONResponse({"message": "Internal server error"}, status_code=500)
        # No store lookups here; the store may be what failed.
        return templates.TemplateResponse(request, "error.html", {"current_user": None}, status_code=500)

    static_dir = BASE_DIR / "static"
    if static_dir.is_dir():
        app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")

    def _start_session(resp, request: Request, user: PublicUser):
        token = app.state.signer.sign(user.id)
        resp.set_cookie(settings.cookie_name, token, **cookie_settings(request))
        return resp

    # ------------------ Pages ------------------

    @app.get("/", response_class=HTMLResponse)
    def home(request: Request):
        return _render(request, "index.html")

    @app.get("/login", response_class=HTMLResponse)
    def login_get(request: Request, callbackUrl: str = "", registered: str = ""):
        return _render(
            request,
            "login.html",
            {"callback_url": callbackUrl, "registered": bool(registered), "error": "", "email": ""},
        )

    @app.post("/login")
    def login_post(
        request: Request,
        email: str = Form(""),
        password: str = Form(""),
        callbackUrl: str = Form(""),
    ):
        result = verify_credentials(store, email, password)
        if not result.ok:
            return _render(
                request,
                "login.html",
                {
                    "callback_url": callbackUrl,
                    "registered": False,
                    "error": result.message,
                    "errors": result.errors,
                    "email": email,
                },
                status_code=result.status_code,
            )
        target = safe_callback(callbackUrl, routes.dashboard_path)
        resp = RedirectResponse(url=target, status_code=303)
        return _start_session(resp, request, result.user)

    @app.get("/register", response_class=HTMLResponse)
    def register_get(request: Request):
        return _render(request, "register.html", {"error": "", "errors": {}, "form": {}})

    @app.post("/register")
    def register_post(
        request: Request,
        name: str = Form(""),
        email: str = Form(""),
        password: str = Form(""),
        confirm_password: str = Form(""),
    ):
        result = register_user(store, name, email, password, confirm_password)
        if not result.ok:
            return _render(
                request,
                "register.html",
                {
                    "error": result.message,
                    "errors": result.errors,
                    "form": {"name": name, "email": email},
                },
                status_code=result.status_code,
            )
        return RedirectResponse(url=f"{routes.login_path}?registered=1", status_code=303)

    @app.post("/logout")
    def logout_post(request: Request):
        resp = RedirectResponse(url=routes.login_path, status_code=303)
        resp.delete_cookie(settings.cookie_name)
        return resp

    @app.get("/dashboard", response_class=HTMLResponse)
    def dashboard(request: Request, user=Depends(require_user)):
        return _render(request, "dashboard.html", {"user": user})

    # ------------------ API ------------------

    @app.post("/api/auth/register")
    async def api_register(request: Request):
        body = await _json_body(request)
        result = await run_in_threadpool(
            register_user,
            store,
            body.get("name"),
            body.get("email"),
            body.get("password"),
        )
        if not result.ok:
            return _error_json(result)
        return JSONResponse(
            {"message": "User created successfully", "user": result.user.to_dict()},
            status_code=201,
        )

    @app.post("/api/auth/login")
    async def api_login(request: Request):
        body = await _json_body(request)
        result = await run_in_threadpool(verify_credentials, store, body.get("email"), body.get("password"))
        if not result.ok:
            return _error_json(result)
        resp = JSONResponse({"user": result.user.to_dict()})
        return _start_session(resp, request, result.user)

    @app.post("/api/auth/logout")
    def api_logout():
        resp = JSONResponse({"ok": True})
        resp.delete_cookie(settings.cookie_name)
        return resp

    @app.get("/api/auth/session")
    def api_session(request: Request):
        u = current_user_optional(request)
        resp = JSONResponse({"user": u.to_dict() if u else None})
        if u is None and current_session(request) is not None:
            resp.delete_cookie(settings.cookie_name)
        return resp

    return app
