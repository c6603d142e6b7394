"""CRUD operations for receipt templates."""

from typing import List, Optional

from sqlalchemy.orm import Session

from backend.app.models.receipt_template import ReceiptTemplate
from backend.app.schemas.receipt_template import ReceiptTemplateCreate


class CRUDReceiptTemplate:
    def create(self, db: Session, *, obj_in: ReceiptTemplateCreate, is_default: bool = False) -> ReceiptTemplate:
        obj = ReceiptTemplate(is_default=is_default, **obj_in.with_defaults())
        db.add(obj)
        db.commit()
        db.refresh(obj)
        return obj

    def get(self, db: Session, *, template_id: int) -> Optional[ReceiptTemplate]:
        return db.query(ReceiptTemplate).filter(ReceiptTemplate.id == template_id).first()

    def get_default(self, db: Session) -> Optional[ReceiptTemplate]:
        return (
            db.query(ReceiptTemplate)
            .filter(ReceiptTemplate.is_default.is_(True))
            .order_by(ReceiptTemplate.id.asc())
            .first()
        )

    def get_multi(self, db: Session) -> List[ReceiptTemplate]:
        return (
            db.query(ReceiptTemplate)
            .order_by(ReceiptTemplate.created_at.desc(), ReceiptTemplate.id.desc())
            .all()
        )

    def delete(self, db: Session, *, db_obj: ReceiptTemplate) -> ReceiptTemplate:
        db.delete(db_obj)
        db.commit()
        return db_obj


receipt_template_crud = CRUDReceiptTemplate()
