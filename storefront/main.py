"""FastAPI entrypoint for the meat delivery storefront API."""

from __future__ import annotations

import logging
import os

from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware

from storefront.api.v1.api import api_router
from storefront.core.config import settings
from storefront.db import session as db_session
from storefront.db.base import Base
from storefront.db.seed import ensure_seed_data
from storefront.i18n import LANG_COOKIE
from storefront.services.account_service import ensure_default_admin
from storefront.services.delivery_calendar import normalize_language
from storefront.services.media_service import UPLOAD_URL_PREFIX, upload_root

logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name)
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.session_secret,
    same_site="lax",
    https_only=False,
    max_age=60 * 60 * 24 * 7,
)
app.include_router(api_router, prefix="/api/v1")
app.mount(UPLOAD_URL_PREFIX, StaticFiles(directory=upload_root()), name="uploads")


@app.on_event("startup")
def startup() -> None:
    secret_from_env = bool(os.getenv("SESSION_SECRET"))
    logger.info("Session secret source: %s", "env" if secret_from_env else "fallback")
    if not secret_from_env:
        logger.warning("SESSION_SECRET not set; using development fallback secret.")
    Base.metadata.create_all(bind=db_session.engine)
    with db_session.SessionLocal() as session:
        try:
            ensure_seed_data(session)
            admin_present = ensure_default_admin(session)
            logger.info("[BOOTSTRAP] default admin present: %s", "yes" if admin_present else "no")
        except Exception:
            logger.exception("[BOOTSTRAP] Seed/bootstrap failed; continuing startup.")


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/lang/{code}")
def switch_language(code: str, request: Request) -> RedirectResponse:
    """Remember the visitor's language and send them back where they came from."""
    language = normalize_language(code)
    response = RedirectResponse(url=request.headers.get("referer") or "/", status_code=303)
    response.set_cookie(LANG_COOKIE, language, max_age=60 * 60 * 24 * 365, samesite="lax")
    return response
