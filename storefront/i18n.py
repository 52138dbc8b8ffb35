"""Language selection for storefront responses."""

from __future__ import annotations

from fastapi import Request

from storefront.core.config import settings
from storefront.services.delivery_calendar import SUPPORTED_LANGUAGES, normalize_language

LANG_COOKIE = "lang"


def resolve_language(request: Request, explicit: str | None = None) -> str:
    """Pick the language from ``explicit``, then the cookie, then the default."""
    for candidate in (explicit, request.cookies.get(LANG_COOKIE), settings.default_language):
        if candidate and candidate.strip().lower() in SUPPORTED_LANGUAGES:
            return candidate.strip().lower()
    return normalize_language(None)
