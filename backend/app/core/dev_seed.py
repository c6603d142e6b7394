import logging
import os

from sqlalchemy.orm import Session

from backend.app.crud.crud_receipt_template import receipt_template_crud
from backend.app.models.receipt_template import ReceiptTemplate
from backend.app.schemas.receipt_template import ReceiptTemplateCreate

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE_NAME = "Classic"


def ensure_default_template(db: Session) -> None:
    """
    Create the default receipt template for local development if none exists.
    Skips execution when running under pytest to avoid altering test expectations.
    """
    if os.getenv("PYTEST_CURRENT_TEST"):
        return

    existing = db.query(ReceiptTemplate).filter(ReceiptTemplate.is_default.is_(True)).first()
    if existing:
        return

    template = receipt_template_crud.create(db, obj_in=ReceiptTemplateCreate(name=DEFAULT_TEMPLATE_NAME), is_default=True)
    logger.info("Seeded default receipt template %s", template.id)
