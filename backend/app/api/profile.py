"""User profile endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.app.core.security import get_current_user
from backend.app.core.settings import get_settings
from backend.app.crud.crud_profile import profile_crud
from backend.app.crud.crud_receipt import receipt_crud
from backend.app.db.session import get_db
from backend.app.models.user import User
from backend.app.schemas.user import BusinessContact, UserProfileRead, UserProfileUpdate
from backend.app.services.accounts import role_name

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profile", tags=["profile"])


def _profile_payload(db: Session, user: User) -> UserProfileRead:
    profile = profile_crud.get(db, user_id=user.id)
    return UserProfileRead(
        id=user.id,
        email=(profile.email if profile and profile.email else user.email),
        full_name=profile.full_name if profile else None,
        phone=profile.phone if profile else None,
        profile_image_url=profile.profile_image_url if profile else None,
        role=role_name(user),
        receipt_count=receipt_crud.count_for_owner(db, owner_id=user.id),
        created_at=profile.created_at if profile else user.created_at,
        updated_at=profile.updated_at if profile else user.updated_at,
    )


@router.get("/me", response_model=UserProfileRead)
async def get_my_profile(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return _profile_payload(db, current_user)


@router.put("/me", response_model=UserProfileRead)
async def update_my_profile(
    profile: UserProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        profile_crud.upsert(db, user_id=current_user.id, email=current_user.email, obj_in=profile)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to update profile for user %s", current_user.id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update profile")
    return _profile_payload(db, current_user)


@router.get("/business-contact", response_model=BusinessContact)
async def get_business_contact(current_user: User = Depends(get_current_user)):
    settings = get_settings()
    return BusinessContact(
        business_name=settings.business_name,
        email=settings.business_email,
        phone=settings.business_phone,
        branches=settings.branches,
    )
