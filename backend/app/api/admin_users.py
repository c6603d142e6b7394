"""Admin user management endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from backend.app.core.security import get_current_admin
from backend.app.crud.crud_receipt import receipt_crud
from backend.app.db.session import get_db
from backend.app.models.user import User
from backend.app.schemas.admin import AdminUserReceipts
from backend.app.schemas.receipt import ReceiptSummary
from backend.app.schemas.user import AdminPromoteRequest, AdminUserRead
from backend.app.services.accounts import AccountNotFoundError, make_user_admin_by_email, role_name
from backend.app.services.admin_actions import (
    BLOCK_USER,
    DELETE_USER,
    EDIT_CREDENTIALS,
    IMPERSONATE_USER,
    UNBLOCK_USER,
    reject_admin_action,
)

router = APIRouter(prefix="/admin/users", tags=["admin"])


def _get_user(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


def _display_name(user: User) -> str:
    if user.profile is not None and user.profile.full_name:
        return user.profile.full_name
    return user.email


def _admin_row(db: Session, user: User) -> AdminUserRead:
    profile = user.profile
    return AdminUserRead(
        id=user.id,
        email=user.email,
        full_name=profile.full_name if profile else None,
        phone=profile.phone if profile else None,
        profile_image_url=profile.profile_image_url if profile else None,
        role=role_name(user),
        receipt_count=receipt_crud.count_for_owner(db, owner_id=user.id),
    )


@router.get("", response_model=list[AdminUserRead])
async def list_users(db: Session = Depends(get_db), current_admin: User = Depends(get_current_admin)):
    # One count query per user
    return [_admin_row(db, user) for user in db.query(User).order_by(User.id.asc()).all()]


@router.post("/promote", response_model=AdminUserRead)
async def promote_user(
    request: AdminPromoteRequest,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin),
):
    try:
        user = make_user_admin_by_email(db, request.email)
    except AccountNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    return _admin_row(db, user)


@router.get("/{user_id}/receipts", response_model=AdminUserReceipts)
async def list_user_receipts(user_id: int, db: Session = Depends(get_db), current_admin: User = Depends(get_current_admin)):
    user = _get_user(db, user_id)
    return AdminUserReceipts(
        user_id=user.id,
        user_name=_display_name(user),
        receipts=[ReceiptSummary.model_validate(r) for r in receipt_crud.get_multi_by_receipt_date(db, owner_id=user.id)],
    )


@router.put("/{user_id}/credentials")
async def edit_user_credentials(user_id: int, current_admin: User = Depends(get_current_admin)):
    reject_admin_action(EDIT_CREDENTIALS, admin_id=current_admin.id, target_user_id=user_id)


@router.post("/{user_id}/block")
async def block_user(user_id: int, current_admin: User = Depends(get_current_admin)):
    reject_admin_action(BLOCK_USER, admin_id=current_admin.id, target_user_id=user_id)


@router.post("/{user_id}/unblock")
async def unblock_user(user_id: int, current_admin: User = Depends(get_current_admin)):
    reject_admin_action(UNBLOCK_USER, admin_id=current_admin.id, target_user_id=user_id)


@router.delete("/{user_id}")
async def delete_user(user_id: int, current_admin: User = Depends(get_current_admin)):
    reject_admin_action(DELETE_USER, admin_id=current_admin.id, target_user_id=user_id)


@router.post("/{user_id}/impersonate")
async def impersonate_user(user_id: int, current_admin: User = Depends(get_current_admin)):
    reject_admin_action(IMPERSONATE_USER, admin_id=current_admin.id, target_user_id=user_id)
