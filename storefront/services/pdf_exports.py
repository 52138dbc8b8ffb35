"""PDF order report grouped by delivery date, for packing and dispatch."""

from __future__ import annotations

import re
from collections import defaultdict
from datetime import date
from decimal import Decimal
from io import BytesIO
from typing import Any, Iterable

from storefront.models import Order
from storefront.services.delivery_calendar import format_delivery_date
from storefront.utils.pdf_fonts import register_pdf_font

STATUS_LABELS: dict[str, str] = {
    "pending": "Хүлээгдэж буй",
    "processing": "Баталгаажсан",
    "completed": "Хүргэгдсэн",
    "cancelled": "Цуцлагдсан",
}


def _reportlab() -> dict[str, Any]:
    from reportlab.lib import colors
    from reportlab.lib.pagesizes import A4
    from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
    from reportlab.platypus import PageBreak, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

    return {
        "colors": colors,
        "A4": A4,
        "ParagraphStyle": ParagraphStyle,
        "getSampleStyleSheet": getSampleStyleSheet,
        "PageBreak": PageBreak,
        "Paragraph": Paragraph,
        "SimpleDocTemplate": SimpleDocTemplate,
        "Spacer": Spacer,
        "Table": Table,
        "TableStyle": TableStyle,
    }


def report_filename(start: date | None, end: date | None) -> str:
    """``orders_<start>_<end>.pdf`` with unsafe characters stripped."""
    parts = ["orders", start.isoformat() if start else "all", end.isoformat() if end else "all"]
    return re.sub(r"[^A-Za-z0-9_.-]+", "_", "_".join(parts)) + ".pdf"


def _money(value: Decimal | int | float | None) -> str:
    return f"{Decimal(value or 0):,.0f}₮"


def _quantity(value: Decimal | int | float) -> str:
    normalized = Decimal(value).normalize()
    return f"{normalized:f}"


def group_orders_by_delivery_date(orders: Iterable[Order]) -> dict[date, list[Order]]:
    grouped: dict[date, list[Order]] = defaultdict(list)
    for order in orders:
        grouped[order.delivery_date].append(order)
    return {day: sorted(grouped[day], key=lambda o: o.id) for day in sorted(grouped)}


def _build_styles() -> dict[str, Any]:
    font_name = register_pdf_font()
    rl = _reportlab()
    base = rl["getSampleStyleSheet"]()
    return {
        "font_name": font_name,
        "title": rl["ParagraphStyle"]("ReportTitle", parent=base["Title"], fontName=font_name),
        "day": rl["ParagraphStyle"]("ReportDay", parent=base["Heading2"], fontName=font_name),
        "order": rl["ParagraphStyle"]("ReportOrder", parent=base["Heading4"], fontName=font_name),
        "body": rl["ParagraphStyle"]("ReportBody", parent=base["Normal"], fontName=font_name),
    }


def _product_totals(orders: list[Order]) -> list[list[str]]:
    totals: dict[str, Decimal] = defaultdict(Decimal)
    for order in orders:
        for item in order.items:
            totals[item.name] += Decimal(item.quantity)
    return [[name, _quantity(qty)] for name, qty in sorted(totals.items(), key=lambda pair: pair[0].lower())]


def _day_story(day: date, orders: list[Order], styles: dict[str, Any]) -> list[Any]:
    rl = _reportlab()
    story: list[Any] = [
        rl["Paragraph"](f"Хүргэх өдөр: {format_delivery_date(day, 'mn')}", styles["day"]),
        rl["Paragraph"](f"Захиалгын тоо: {len(orders)}", styles["body"]),
        rl["Spacer"](1, 8),
    ]

    summary = rl["Table"]([["Бүтээгдэхүүн", "Тоо хэмжээ"], *_product_totals(orders)], colWidths=[360, 100])
    summary.setStyle(
        rl["TableStyle"](
            [
                ("BACKGROUND", (0, 0), (-1, 0), rl["colors"].lightgrey),
                ("GRID", (0, 0), (-1, -1), 0.5, rl["colors"].black),
                ("FONTNAME", (0, 0), (-1, -1), styles["font_name"]),
            ]
        )
    )
    story.extend([summary, rl["Spacer"](1, 10)])

    for order in orders:
        story.append(
            rl["Paragraph"](
                f"#{order.id} • {STATUS_LABELS.get(order.status, order.status)} • {order.customer_name} • {order.customer_phone}",
                styles["order"],
            )
        )
        story.append(rl["Paragraph"](f"Хаяг: {order.customer_address}", styles["body"]))
        if order.notes:
            story.append(rl["Paragraph"](f"Тэмдэглэл: {order.notes}", styles["body"]))
        for item in order.items:
            story.append(
                rl["Paragraph"](
                    f"• {item.name} x{_quantity(item.quantity)} = {_money(item.line_total)}",
                    styles["body"],
                )
            )
        story.append(
            rl["Paragraph"](
                f"Хүргэлт: {_money(order.shipping_fee)} • Нийт: {_money(order.total_amount)}",
                styles["body"],
            )
        )
        story.append(rl["Spacer"](1, 6))
    return story


def render_orders_pdf(orders: Iterable[Order], meta: dict[str, Any]) -> bytes:
    """Render one page per delivery date; ``meta`` carries ``title`` and ``generated_at``."""
    styles = _build_styles()
    rl = _reportlab()
    grouped = group_orders_by_delivery_date(orders)

    story: list[Any] = [
        rl["Paragraph"](meta.get("title", "Захиалгын тайлан"), styles["title"]),
        rl["Paragraph"](f"Үүсгэсэн: {meta.get('generated_at', '-')}", styles["body"]),
        rl["Spacer"](1, 12),
    ]
    if not grouped:
        story.append(rl["Paragraph"]("Захиалга байхгүй.", styles["body"]))

    for index, (day, day_orders) in enumerate(grouped.items()):
        if index:
            story.append(rl["PageBreak"]())
        story.extend(_day_story(day, day_orders, styles))

    buffer = BytesIO()
    rl["SimpleDocTemplate"](buffer, pagesize=rl["A4"], title=meta.get("title", "orders")).build(story)
    return buffer.getvalue()
