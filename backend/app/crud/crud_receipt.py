"""CRUD operations for receipts, always scoped to the owning user."""

from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from backend.app.models.receipt import Receipt

DISPLAY_DATE_FORMAT = "%d/%m/%Y"


def display_date(value: date) -> str:
    return value.strftime(DISPLAY_DATE_FORMAT)


def matches_search(receipt: Receipt, term: str) -> bool:
    """Name (case-insensitive), mobile substring or displayed / ISO date substring."""
    lowered = term.lower()
    if lowered in (receipt.customer_name or "").lower():
        return True
    if term in (receipt.mobile_number or ""):
        return True
    return term in display_date(receipt.receipt_date) or term in receipt.receipt_date.isoformat()


class CRUDReceipt:
    def get(self, db: Session, *, receipt_id: str, owner_id: int) -> Optional[Receipt]:
        return (
            db.query(Receipt)
            .filter(Receipt.id == receipt_id, Receipt.user_id == owner_id)
            .first()
        )

    def get_multi(
        self,
        db: Session,
        *,
        owner_id: int,
        search: Optional[str] = None,
        branch: Optional[str] = None,
    ) -> List[Receipt]:
        query = db.query(Receipt).filter(Receipt.user_id == owner_id)
        if branch:
            query = query.filter(Receipt.branch == branch)
        receipts = query.order_by(Receipt.created_at.desc()).all()
        term = (search or "").strip()
        if term:
            receipts = [r for r in receipts if matches_search(r, term)]
        return receipts

    def get_multi_by_receipt_date(self, db: Session, *, owner_id: int) -> List[Receipt]:
        return (
            db.query(Receipt)
            .filter(Receipt.user_id == owner_id)
            .order_by(Receipt.receipt_date.desc(), Receipt.created_at.desc())
            .all()
        )

    def get_amount_rows(self, db: Session, *, owner_id: int):
        """(total_amount, receipt_date, branch) tuples in creation order."""
        return (
            db.query(Receipt.total_amount, Receipt.receipt_date, Receipt.branch)
            .filter(Receipt.user_id == owner_id)
            .order_by(Receipt.created_at.asc())
            .all()
        )

    def count_for_owner(self, db: Session, *, owner_id: int) -> int:
        return db.query(Receipt).filter(Receipt.user_id == owner_id).count()

    def delete(self, db: Session, *, db_obj: Receipt) -> Receipt:
        db.delete(db_obj)
        db.commit()
        return db_obj


receipt_crud = CRUDReceipt()
