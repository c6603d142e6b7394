"""Dashboard aggregation over the caller's receipts."""

from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, Tuple

from sqlalchemy.orm import Session

from backend.app.core.money import quantize_money, to_decimal
from backend.app.crud.crud_receipt import receipt_crud

MONTH_WINDOW = 6
UNSPECIFIED_BRANCH = "Unspecified"


def month_label(value: date) -> str:
    return value.strftime("%b %Y")


def summarize_receipts(rows: Iterable[Tuple[Decimal, date, str | None]]) -> dict:
    """Aggregate (amount, receipt_date, branch) rows in the order given.

    Months are keyed in first-seen order and only the last ``MONTH_WINDOW``
    keys of that order are kept; the keys are not sorted chronologically
    before the cut.
    """
    total_income = Decimal("0")
    count = 0
    branch_map: Dict[str, Dict[str, Decimal | int]] = {}
    month_map: Dict[str, Decimal] = {}

    for amount, receipt_date, branch in rows:
        amount = to_decimal(amount)
        total_income += amount
        count += 1

        entry = branch_map.setdefault(branch or UNSPECIFIED_BRANCH, {"amount": Decimal("0"), "count": 0})
        entry["amount"] += amount
        entry["count"] += 1

        key = month_label(receipt_date)
        month_map[key] = month_map.get(key, Decimal("0")) + amount

    average = total_income / count if count > 0 else Decimal("0")
    monthly = [{"month": month, "amount": quantize_money(amount)} for month, amount in month_map.items()]

    return {
        "total_income": quantize_money(total_income),
        "total_receipts": count,
        "average_receipt_value": quantize_money(average),
        "branches": [
            {"branch": branch, "amount": quantize_money(agg["amount"]), "count": agg["count"]}
            for branch, agg in branch_map.items()
        ],
        "monthly": monthly[-MONTH_WINDOW:],
    }


def get_dashboard_summary(db: Session, *, owner_id: int) -> dict:
    return summarize_receipts(receipt_crud.get_amount_rows(db, owner_id=owner_id))
