"""Receipt rendering: one planner, three outputs.

``build_render_plan`` projects a stored receipt through a layout and a
template style into positioned text blocks. The plan is then written out as a
screen page, a print page, or rasterized with Pillow and embedded in a
single-page PDF with reportlab. Amounts are read from the stored receipt and
only formatted here.
"""

import logging
import os
from dataclasses import dataclass, field
from decimal import Decimal
from functools import lru_cache
from html import escape
from io import BytesIO
from typing import List, Optional

from PIL import Image, ImageColor, ImageDraw, ImageFont, ImageOps
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from backend.app.core.money import format_money, to_decimal
from backend.app.core.settings import get_settings
from backend.app.crud.crud_receipt import display_date
from backend.app.models.receipt import Receipt
from backend.app.models.receipt_template import DEFAULT_TEMPLATE_VALUES, ReceiptTemplate
from backend.app.services.receipt_layouts import UNIT_PERCENT, ReceiptLayout

logger = logging.getLogger(__name__)

MM_PER_INCH = 25.4
POINTS_PER_INCH = 72


@dataclass(frozen=True)
class TemplateStyle:
    header_bg_color: str
    header_text_color: str
    body_bg_color: str
    body_text_color: str
    accent_color: str
    font_family: str

    @classmethod
    def from_template(cls, template: Optional[ReceiptTemplate]) -> "TemplateStyle":
        if template is None:
            return cls(**DEFAULT_TEMPLATE_VALUES)
        return cls(**{name: getattr(template, name) or default for name, default in DEFAULT_TEMPLATE_VALUES.items()})

    def color_for(self, role: str) -> str:
        if role == "header":
            return self.header_text_color
        if role == "accent":
            return self.accent_color
        return self.body_text_color


@dataclass(frozen=True)
class TextBlock:
    x: float
    y: float
    text: str
    size: float
    color: str
    align: str = "left"
    bold: bool = False


@dataclass
class RenderPlan:
    receipt_id: str
    layout: ReceiptLayout
    style: TemplateStyle
    blocks: List[TextBlock] = field(default_factory=list)
    header_band: float = 0
    rules: List[float] = field(default_factory=list)


def _format_quantity(value) -> str:
    quantity = to_decimal(value)
    if quantity == quantity.to_integral_value():
        return str(int(quantity))
    return str(quantity.normalize())


def _format_rate(value) -> str:
    rate = to_decimal(value)
    if rate == rate.to_integral_value():
        return str(int(rate))
    return str(rate.normalize())


def _field_values(receipt: Receipt, currency_symbol: str) -> dict:
    settings = get_settings()
    return {
        "business_name": settings.business_name,
        "title": "",
        "branch": receipt.branch or "",
        "receipt_id": receipt.id[:8].upper(),
        "receipt_date": display_date(receipt.receipt_date),
        "customer_name": receipt.customer_name,
        "mobile_number": receipt.mobile_number,
        "address": receipt.address or "",
        "age": receipt.age or "",
        "bp": receipt.bp or "",
        "pulse": receipt.pulse or "",
        "subtotal": format_money(receipt.subtotal, currency_symbol),
        "tax_amount": format_money(receipt.tax_amount, currency_symbol),
        "total_amount": format_money(receipt.total_amount, currency_symbol),
    }


def build_render_plan(
    receipt: Receipt,
    layout: ReceiptLayout,
    style: TemplateStyle,
    currency_symbol: str = "",
) -> RenderPlan:
    plan = RenderPlan(
        receipt_id=receipt.id,
        layout=layout,
        style=style,
        header_band=layout.y_fraction(layout.header_height),
        rules=[layout.y_fraction(y) for y in layout.rules],
    )
    values = _field_values(receipt, currency_symbol)
    rate = _format_rate(receipt.tax_rate if receipt.tax_rate is not None else Decimal("0"))

    for name, slot in layout.slots.items():
        value = values.get(name, "")
        if not value and name != "title":
            value = "-"
        plan.blocks.append(
            TextBlock(
                x=layout.x_fraction(slot.x),
                y=layout.y_fraction(slot.y),
                text=slot.label.format(rate=rate) + value,
                size=slot.size,
                color=style.color_for(slot.color),
                align=slot.align,
                bold=slot.bold,
            )
        )

    grid = layout.items
    row_y = grid.top
    if grid.show_header:
        headings = [(grid.name_x, "Item", "left"), (grid.quantity_x, "Qty", "right"), (grid.price_x, "Price", "right")]
        if grid.amount_x is not None:
            headings.append((grid.amount_x, "Amount", "right"))
        for x, text, align in headings:
            plan.blocks.append(
                TextBlock(
                    x=layout.x_fraction(x),
                    y=layout.y_fraction(row_y),
                    text=text,
                    size=grid.size,
                    color=style.accent_color,
                    align=align,
                    bold=True,
                )
            )
        row_y += grid.row_height

    for item in receipt.items or []:
        y = layout.y_fraction(row_y)
        columns = [
            (grid.name_x, str(item["name"]), "left"),
            (grid.quantity_x, grid.quantity_label + _format_quantity(item["quantity"]), "right"),
            (grid.price_x, format_money(item["price"], currency_symbol), "right"),
        ]
        if grid.amount_x is not None:
            line_amount = to_decimal(item["quantity"]) * to_decimal(item["price"])
            columns.append((grid.amount_x, format_money(line_amount, currency_symbol), "right"))
        for x, text, align in columns:
            plan.blocks.append(
                TextBlock(
                    x=layout.x_fraction(x),
                    y=y,
                    text=text,
                    size=grid.size,
                    color=style.body_text_color,
                    align=align,
                    bold=layout.unit == UNIT_PERCENT,
                )
            )
        row_y += grid.row_height

    return plan


# HTML ---------------------------------------------------------------------

_SHIFT = {"left": "none", "right": "translateX(-100%)", "center": "translateX(-50%)"}


def _css_string(value: str) -> str:
    """Single-quoted CSS string literal."""
    escaped = []
    for char in value:
        if char in "\\'\"<>" or ord(char) < 0x20:
            escaped.append(f"\\{ord(char):x} ")
        else:
            escaped.append(char)
    return "'" + "".join(escaped) + "'"


def _css_color(value: str, fallback: str) -> str:
    """The colour when Pillow can parse it, otherwise the fallback."""
    try:
        ImageColor.getrgb(value)
    except ValueError:
        return fallback
    return value


def _page_css(plan: RenderPlan) -> str:
    layout = plan.layout
    if layout.unit == UNIT_PERCENT:
        # Scales with the window at a fixed aspect ratio
        return (
            f"width:100%;max-width:{layout.page_width_mm}mm;"
            f"aspect-ratio:{layout.page_width_mm}/{layout.page_height_mm};"
        )
    return f"width:{layout.page_width_mm}mm;height:{layout.page_height_mm}mm;"


def render_receipt_html(plan: RenderPlan, *, print_mode: bool = False, background_url: Optional[str] = None) -> str:
    style = plan.style
    layout = plan.layout
    header_bg = _css_color(style.header_bg_color, DEFAULT_TEMPLATE_VALUES["header_bg_color"])
    body_bg = _css_color(style.body_bg_color, DEFAULT_TEMPLATE_VALUES["body_bg_color"])
    body_text = _css_color(style.body_text_color, DEFAULT_TEMPLATE_VALUES["body_text_color"])
    accent = _css_color(style.accent_color, DEFAULT_TEMPLATE_VALUES["accent_color"])
    lines = []
    lines.append("<!DOCTYPE html>")
    lines.append('<html lang="en">')
    lines.append("<head>")
    lines.append('<meta charset="utf-8">')
    lines.append(f"<title>Receipt {escape(plan.receipt_id)}</title>")
    lines.append("<style>")
    lines.append(f"body{{margin:0;background:#f3f4f6;font-family:{_css_string(style.font_family)},sans-serif;}}")
    lines.append(".toolbar{display:flex;gap:8px;justify-content:center;padding:12px;}")
    lines.append(
        f".page{{position:relative;margin:16px auto;overflow:hidden;"
        f"background:{body_bg};color:{body_text};{_page_css(plan)}}}"
    )
    lines.append(".page img.background{position:absolute;inset:0;width:100%;height:100%;object-fit:contain;}")
    lines.append(f".band{{position:absolute;left:0;top:0;width:100%;background:{header_bg};}}")
    lines.append(f".rule{{position:absolute;left:5%;width:90%;border-top:1px solid {accent};}}")
    lines.append(".block{position:absolute;white-space:nowrap;line-height:1;}")
    lines.append(f"@page{{size:{layout.page_css_size};margin:0;}}")
    lines.append(
        "@media print{body{background:none;print-color-adjust:exact;-webkit-print-color-adjust:exact;}"
        ".no-print,.background{display:none !important;}.page{margin:0;}}"
    )
    lines.append("</style>")
    lines.append("</head>")
    lines.append("<body>")

    lines.append('<nav class="toolbar no-print">')
    lines.append('<button type="button" onclick="window.print()">Print Receipt</button>')
    lines.append(f'<a href="/receipts/{escape(plan.receipt_id)}/pdf?layout={layout.key}">Download PDF</a>')
    lines.append('<a href="/receipts">History</a>')
    lines.append("</nav>")

    lines.append(f'<div class="page receipt-{layout.key}">')
    if layout.background_image and background_url:
        lines.append(f'<img class="background" src="{escape(background_url)}" alt="Receipt template">')
    if plan.header_band:
        lines.append(f'<div class="band" style="height:{plan.header_band * 100:.2f}%"></div>')
    for rule_y in plan.rules:
        lines.append(f'<div class="rule" style="top:{rule_y * 100:.2f}%"></div>')
    for block in plan.blocks:
        weight = "bold" if block.bold else "normal"
        lines.append(
            f'<div class="block" style="left:{block.x * 100:.2f}%;top:{block.y * 100:.2f}%;'
            f"transform:{_SHIFT.get(block.align, 'none')};font-size:{block.size}pt;"
            f'font-weight:{weight};color:{_css_color(block.color, body_text)}">{escape(block.text)}</div>'
        )
    lines.append("</div>")

    if print_mode:
        lines.append("<script>window.addEventListener('load',function(){window.print();});</script>")
    lines.append("</body>")
    lines.append("</html>")
    return "\n".join(lines)


# Raster / PDF -------------------------------------------------------------


def _color(value: str, fallback: str) -> tuple:
    try:
        return ImageColor.getrgb(value)
    except ValueError:
        return ImageColor.getrgb(fallback)


@lru_cache(maxsize=64)
def _load_font(family: str, size_px: int, bold: bool):
    candidates = []
    if bold:
        candidates += [f"{family} Bold.ttf", f"{family}bd.ttf", "DejaVuSans-Bold.ttf"]
    candidates += [f"{family}.ttf", f"{family.lower()}.ttf", "DejaVuSans.ttf"]
    for name in candidates:
        try:
            return ImageFont.truetype(name, size_px)
        except OSError:
            continue
    return ImageFont.load_default(size=size_px)


def _paste_background(image: Image.Image, path: Optional[str]) -> None:
    if not path:
        return
    if not os.path.exists(path):
        logger.warning("Receipt background image %s not found", path)
        return
    with Image.open(path) as background:
        # Fit the page like object-fit:contain, enlarging small sheets
        background = ImageOps.contain(background.convert("RGB"), image.size)
        offset = ((image.width - background.width) // 2, (image.height - background.height) // 2)
        image.paste(background, offset)


def render_receipt_image(plan: RenderPlan, *, dpi: int = 150, background_path: Optional[str] = None) -> Image.Image:
    layout = plan.layout
    style = plan.style
    width = round(layout.page_width_mm / MM_PER_INCH * dpi)
    height = round(layout.page_height_mm / MM_PER_INCH * dpi)

    image = Image.new("RGB", (width, height), _color(style.body_bg_color, DEFAULT_TEMPLATE_VALUES["body_bg_color"]))
    if layout.background_image:
        _paste_background(image, background_path)

    draw = ImageDraw.Draw(image)
    if plan.header_band:
        draw.rectangle(
            [0, 0, width, round(plan.header_band * height)],
            fill=_color(style.header_bg_color, DEFAULT_TEMPLATE_VALUES["header_bg_color"]),
        )
    accent = _color(style.accent_color, DEFAULT_TEMPLATE_VALUES["accent_color"])
    for rule_y in plan.rules:
        y = round(rule_y * height)
        draw.line([(round(width * 0.05), y), (round(width * 0.95), y)], fill=accent, width=max(1, dpi // 100))

    for block in plan.blocks:
        size_px = max(1, round(block.size * dpi / POINTS_PER_INCH))
        font = _load_font(style.font_family, size_px, block.bold)
        x = block.x * width
        text_width = draw.textlength(block.text, font=font)
        if block.align == "right":
            x -= text_width
        elif block.align == "center":
            x -= text_width / 2
        draw.text(
            (round(x), round(block.y * height)),
            block.text,
            font=font,
            fill=_color(block.color, DEFAULT_TEMPLATE_VALUES["body_text_color"]),
        )
    return image


def render_receipt_pdf(plan: RenderPlan, *, dpi: int = 150, background_path: Optional[str] = None) -> bytes:
    """Rasterize the plan and embed it in one PDF page sized to the image."""
    image = render_receipt_image(plan, dpi=dpi, background_path=background_path)
    page_width = image.width * POINTS_PER_INCH / dpi
    page_height = image.height * POINTS_PER_INCH / dpi

    buffer = BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=(page_width, page_height))
    pdf.setTitle(f"Receipt {plan.receipt_id}")
    pdf.drawImage(ImageReader(image), 0, 0, width=page_width, height=page_height)
    pdf.showPage()
    pdf.save()
    return buffer.getvalue()


def pdf_filename(receipt: Receipt) -> str:
    return f"receipt-{receipt.id}.pdf"
