"""Receipt routes: create, history, fetch, delete and the rendered outputs."""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import HTMLResponse, Response
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.app.core.security import get_current_user, resolve_user, security_scheme
from backend.app.core.settings import get_settings
from backend.app.crud.crud_receipt import receipt_crud
from backend.app.crud.crud_receipt_template import receipt_template_crud
from backend.app.db.session import get_db
from backend.app.models.receipt import Receipt
from backend.app.models.user import User
from backend.app.schemas.receipt import BranchOptions, ReceiptCreate, ReceiptRead, ReceiptSummary
from backend.app.services.receipt_layouts import get_layout
from backend.app.services.receipt_rendering import (
    TemplateStyle,
    build_render_plan,
    pdf_filename,
    render_receipt_html,
    render_receipt_pdf,
)
from backend.app.services.receipts import create_receipt

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/receipts", tags=["receipts"])


def _get_owned_receipt(db: Session, receipt_id: str, owner_id: int) -> Receipt:
    receipt = receipt_crud.get(db, receipt_id=receipt_id, owner_id=owner_id)
    if not receipt:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Receipt not found")
    return receipt


def _resolve_style(db: Session, template_id: Optional[int]) -> TemplateStyle:
    if template_id is not None:
        template = receipt_template_crud.get(db, template_id=template_id)
        if not template:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Template not found")
        return TemplateStyle.from_template(template)
    return TemplateStyle.from_template(receipt_template_crud.get_default(db))


def _plan(db: Session, receipt: Receipt, layout_key: Optional[str], template_id: Optional[int], currency_symbol: str):
    settings = get_settings()
    try:
        layout = get_layout(layout_key or settings.receipt_layout)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    style = _resolve_style(db, template_id)
    return build_render_plan(receipt, layout, style, currency_symbol=currency_symbol)


@router.get("/branches", response_model=BranchOptions)
async def list_branches(current_user: User = Depends(get_current_user)):
    settings = get_settings()
    return BranchOptions(
        branches=settings.branches,
        default_branch=settings.default_branch,
        default_tax_rate=settings.default_tax_rate,
    )


@router.post("", response_model=ReceiptRead, status_code=status.HTTP_201_CREATED)
async def create_new_receipt(
    receipt_in: ReceiptCreate,
    db: Session = Depends(get_db),
    credentials: HTTPAuthorizationCredentials | None = Depends(security_scheme),
):
    # Authenticated after body validation
    current_user = resolve_user(db, credentials, detail="Please sign in to create receipts")
    try:
        return create_receipt(db, owner_id=current_user.id, receipt_in=receipt_in)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to create receipt for user %s", current_user.id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create receipt")


@router.get("", response_model=List[ReceiptSummary])
async def list_receipts(
    search: str | None = None,
    branch: str | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        return receipt_crud.get_multi(db, owner_id=current_user.id, search=search, branch=branch)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to load receipts for user %s", current_user.id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to load receipts")


@router.get("/{receipt_id}", response_model=ReceiptRead)
async def get_receipt(receipt_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return _get_owned_receipt(db, receipt_id, current_user.id)


@router.delete("/{receipt_id}")
async def delete_receipt(
    receipt_id: str,
    confirm: bool = False,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if not confirm:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Deletion must be confirmed")
    receipt = _get_owned_receipt(db, receipt_id, current_user.id)
    try:
        receipt_crud.delete(db, db_obj=receipt)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to delete receipt %s", receipt_id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to delete receipt")
    logger.info("Deleted receipt %s for user %s", receipt_id, current_user.id)
    return {"id": receipt_id, "deleted": True}


@router.get("/{receipt_id}/view", response_class=HTMLResponse)
async def view_receipt(
    receipt_id: str,
    layout: str | None = None,
    template_id: int | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    receipt = _get_owned_receipt(db, receipt_id, current_user.id)
    settings = get_settings()
    plan = _plan(db, receipt, layout, template_id, settings.currency_symbol)
    return HTMLResponse(render_receipt_html(plan, background_url=settings.receipt_background_url))


@router.get("/{receipt_id}/print", response_class=HTMLResponse)
async def print_receipt(
    receipt_id: str,
    layout: str | None = None,
    template_id: int | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    receipt = _get_owned_receipt(db, receipt_id, current_user.id)
    settings = get_settings()
    plan = _plan(db, receipt, layout, template_id, settings.currency_symbol)
    return HTMLResponse(render_receipt_html(plan, print_mode=True, background_url=settings.receipt_background_url))


@router.get("/{receipt_id}/pdf")
async def download_receipt_pdf(
    receipt_id: str,
    layout: str | None = None,
    template_id: int | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    receipt = _get_owned_receipt(db, receipt_id, current_user.id)
    settings = get_settings()
    plan = _plan(db, receipt, layout, template_id, settings.pdf_currency_symbol)
    content = render_receipt_pdf(plan, dpi=settings.pdf_dpi, background_path=settings.receipt_background_image)
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{pdf_filename(receipt)}"'},
    )
