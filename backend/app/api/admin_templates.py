"""Receipt template management for admins."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from backend.app.core.security import get_current_admin
from backend.app.crud.crud_receipt_template import receipt_template_crud
from backend.app.db.session import get_db
from backend.app.models.user import User
from backend.app.schemas.receipt_template import ReceiptTemplateCreate, ReceiptTemplateRead

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/templates", tags=["admin"])


@router.get("", response_model=list[ReceiptTemplateRead])
async def list_templates(db: Session = Depends(get_db), current_admin: User = Depends(get_current_admin)):
    return receipt_template_crud.get_multi(db)


@router.post("", response_model=ReceiptTemplateRead, status_code=status.HTTP_201_CREATED)
async def create_template(
    template_in: ReceiptTemplateCreate,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin),
):
    template = receipt_template_crud.create(db, obj_in=template_in)
    logger.info("Admin %s created receipt template %s (%s)", current_admin.id, template.id, template.name)
    return template


@router.delete("/{template_id}", response_model=ReceiptTemplateRead)
async def delete_template(template_id: int, db: Session = Depends(get_db), current_admin: User = Depends(get_current_admin)):
    template = receipt_template_crud.get(db, template_id=template_id)
    if not template:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Template not found")
    if template.is_default:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Default template cannot be deleted")
    deleted = ReceiptTemplateRead.model_validate(template)
    receipt_template_crud.delete(db, db_obj=template)
    logger.info("Admin %s deleted receipt template %s", current_admin.id, template_id)
    return deleted
