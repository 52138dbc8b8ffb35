"""Cyrillic-capable font selection for ReportLab documents."""

from __future__ import annotations

import logging
from os import getenv
from pathlib import Path

logger = logging.getLogger(__name__)

FONT_NAME = "StorefrontSans"

_warned_about_fallback = False

_SYSTEM_FONTS = (
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/noto/NotoSans-Regular.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
    "/System/Library/Fonts/Supplemental/Arial Unicode.ttf",
    r"C:\Windows\Fonts\arial.ttf",
)


def find_cyrillic_ttf() -> str | None:
    """Return ``PDF_FONT_PATH`` if it exists, else the first known system font."""
    override = getenv("PDF_FONT_PATH")
    candidates = (override, *_SYSTEM_FONTS) if override else _SYSTEM_FONTS
    return next((path for path in candidates if Path(path).is_file()), None)


def register_pdf_font() -> str:
    """Register the TTF with ReportLab once and return the font name to use."""
    global _warned_about_fallback

    font_path = find_cyrillic_ttf()
    if font_path is None:
        if not _warned_about_fallback:
            logger.warning("[PDF] No TTF font found; Mongolian text will not render. Set PDF_FONT_PATH.")
            _warned_about_fallback = True
        return "Helvetica"

    from reportlab.pdfbase import pdfmetrics
    from reportlab.pdfbase.ttfonts import TTFont

    if FONT_NAME not in pdfmetrics.getRegisteredFontNames():
        pdfmetrics.registerFont(TTFont(FONT_NAME, font_path))
    return FONT_NAME
