"""Receipt computation and creation."""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from sqlalchemy.orm import Session

from backend.app.core.money import quantize_money, to_decimal, to_json_number
from backend.app.models.receipt import Receipt
from backend.app.schemas.receipt import ReceiptCreate

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")


@dataclass(frozen=True)
class ReceiptTotals:
    subtotal: Decimal
    tax_amount: Decimal
    total_amount: Decimal


def calculate_subtotal(items: Iterable) -> Decimal:
    """Sum of quantity x price over items exposing ``quantity``/``price`` attributes or keys."""
    subtotal = Decimal("0")
    for item in items:
        if isinstance(item, dict):
            quantity, price = item["quantity"], item["price"]
        else:
            quantity, price = item.quantity, item.price
        subtotal += to_decimal(quantity) * to_decimal(price)
    return subtotal


def calculate_totals(items: Iterable, tax_rate) -> ReceiptTotals:
    """Full-precision subtotal, tax and total; formatting happens at render time."""
    subtotal = calculate_subtotal(items)
    tax_amount = subtotal * to_decimal(tax_rate) / HUNDRED
    return ReceiptTotals(subtotal=subtotal, tax_amount=tax_amount, total_amount=subtotal + tax_amount)


def stored_totals(totals: ReceiptTotals) -> ReceiptTotals:
    """Cent-quantized amounts for the fixed-point columns; total stays subtotal + tax."""
    subtotal = quantize_money(totals.subtotal)
    tax_amount = quantize_money(totals.tax_amount)
    return ReceiptTotals(subtotal=subtotal, tax_amount=tax_amount, total_amount=subtotal + tax_amount)


def create_receipt(db: Session, *, owner_id: int, receipt_in: ReceiptCreate) -> Receipt:
    totals = stored_totals(calculate_totals(receipt_in.items, receipt_in.tax_rate))
    receipt = Receipt(
        user_id=owner_id,
        customer_name=receipt_in.customer_name,
        mobile_number=receipt_in.mobile_number,
        address=receipt_in.address,
        branch=receipt_in.branch,
        age=receipt_in.age,
        bp=receipt_in.bp,
        pulse=receipt_in.pulse,
        receipt_date=receipt_in.receipt_date,
        items=[
            {"name": item.name, "quantity": to_json_number(item.quantity), "price": to_json_number(item.price)}
            for item in receipt_in.items
        ],
        subtotal=totals.subtotal,
        tax_rate=receipt_in.tax_rate,
        tax_amount=totals.tax_amount,
        total_amount=totals.total_amount,
    )
    db.add(receipt)
    db.commit()
    db.refresh(receipt)
    logger.info("Created receipt %s for user %s (total %s)", receipt.id, owner_id, totals.total_amount)
    return receipt
