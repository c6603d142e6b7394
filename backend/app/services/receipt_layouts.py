"""Receipt page layouts.

A layout places receipt fields on a page. Coordinates are either physical
millimetres (``unit="mm"``) or percentages of the page (``unit="percent"``),
font sizes are points. The renderer in ``receipt_rendering`` consumes these
definitions; adding a layout means adding data here, not code there.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional

UNIT_MM = "mm"
UNIT_PERCENT = "percent"


@dataclass(frozen=True)
class Slot:
    x: float
    y: float
    size: float = 10
    align: str = "left"
    bold: bool = False
    color: str = "body"
    label: str = ""


@dataclass(frozen=True)
class ItemGrid:
    top: float
    row_height: float
    name_x: float
    quantity_x: float
    price_x: float
    amount_x: Optional[float] = None
    size: float = 10
    show_header: bool = True
    quantity_label: str = ""


@dataclass(frozen=True)
class ReceiptLayout:
    key: str
    description: str
    page_width_mm: float
    page_height_mm: float
    page_css_size: str
    unit: str
    items: ItemGrid
    slots: Dict[str, Slot] = field(default_factory=dict)
    header_height: float = 0
    rules: tuple = ()
    background_image: bool = False

    def x_fraction(self, value: float) -> float:
        if self.unit == UNIT_PERCENT:
            return value / 100
        return value / self.page_width_mm

    def y_fraction(self, value: float) -> float:
        if self.unit == UNIT_PERCENT:
            return value / 100
        return value / self.page_height_mm


INVOICE = ReceiptLayout(
    key="invoice",
    description="Full-page A4 tax invoice",
    page_width_mm=210,
    page_height_mm=297,
    page_css_size="A4",
    unit=UNIT_MM,
    header_height=30,
    rules=(68, 236),
    slots={
        "business_name": Slot(12, 9, size=18, bold=True, color="header"),
        "title": Slot(198, 11, size=14, bold=True, align="right", color="header", label="TAX INVOICE"),
        "branch": Slot(12, 20, size=9, color="header"),
        "receipt_id": Slot(12, 37, size=9, label="Receipt No: "),
        "receipt_date": Slot(198, 37, size=10, align="right", label="Date: "),
        "customer_name": Slot(12, 45, size=11, bold=True, label="Billed to: "),
        "mobile_number": Slot(12, 52, label="Mobile: "),
        "address": Slot(12, 59, label="Address: "),
        "age": Slot(130, 45, label="Age: "),
        "bp": Slot(130, 52, label="BP: "),
        "pulse": Slot(130, 59, label="Pulse: "),
        "subtotal": Slot(198, 240, align="right", label="Subtotal: "),
        "tax_amount": Slot(198, 247, align="right", label="Tax ({rate}%): "),
        "total_amount": Slot(198, 255, size=13, bold=True, align="right", color="accent", label="Total: "),
    },
    items=ItemGrid(top=72, row_height=8, name_x=12, quantity_x=130, price_x=165, amount_x=198),
)

COMPACT = ReceiptLayout(
    key="compact",
    description="Half-page A5 receipt",
    page_width_mm=148,
    page_height_mm=210,
    page_css_size="A5",
    unit=UNIT_MM,
    header_height=18,
    rules=(44, 168),
    slots={
        "business_name": Slot(8, 6, size=13, bold=True, color="header"),
        "branch": Slot(140, 7, size=8, align="right", color="header"),
        "receipt_date": Slot(140, 24, size=9, align="right", label="Date: "),
        "customer_name": Slot(8, 24, size=10, bold=True),
        "mobile_number": Slot(8, 30, size=9, label="Mobile: "),
        "address": Slot(8, 36, size=9),
        "subtotal": Slot(140, 172, size=9, align="right", label="Subtotal: "),
        "tax_amount": Slot(140, 178, size=9, align="right", label="Tax ({rate}%): "),
        "total_amount": Slot(140, 185, size=11, bold=True, align="right", color="accent", label="Total: "),
    },
    items=ItemGrid(top=48, row_height=6, name_x=8, quantity_x=92, price_x=140, size=9),
)

# Text laid over a printed prescription sheet; positions follow the sheet's
# dotted lines as percentages so the overlay scales with the page.
OVERLAY = ReceiptLayout(
    key="overlay",
    description="Prescription sheet overlay",
    page_width_mm=215.9,
    page_height_mm=279.4,
    page_css_size="letter",
    unit=UNIT_PERCENT,
    background_image=True,
    slots={
        "customer_name": Slot(38, 28.5, size=11, bold=True),
        "age": Slot(66, 28.5, size=11),
        "receipt_date": Slot(95, 28.5, size=11, align="right"),
        "address": Slot(38, 32, size=11),
        "bp": Slot(74, 32, size=11),
        "pulse": Slot(95, 32, size=11, align="right"),
        "subtotal": Slot(88, 80, size=10, align="right", label="Subtotal: "),
        "tax_amount": Slot(88, 83, size=10, align="right", label="Tax: "),
        "total_amount": Slot(88, 86.5, size=11, bold=True, align="right", label="Total: "),
    },
    items=ItemGrid(
        top=38,
        row_height=3.4,
        name_x=12,
        quantity_x=62,
        price_x=88,
        size=12,
        show_header=False,
        quantity_label="Qty: ",
    ),
)

LAYOUTS = {layout.key: layout for layout in (INVOICE, COMPACT, OVERLAY)}


def get_layout(key: str) -> ReceiptLayout:
    try:
        return LAYOUTS[key]
    except KeyError:
        raise ValueError(f"Unknown layout '{key}'") from None
