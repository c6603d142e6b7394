"""Account provisioning and role assignment."""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from backend.app.core.security import get_password_hash
from backend.app.models.profile import Profile
from backend.app.models.user import User
from backend.app.models.user_role import ROLE_ADMIN, ROLE_USER, UserRole

logger = logging.getLogger(__name__)


class AccountExistsError(ValueError):
    pass


class AccountNotFoundError(LookupError):
    pass


def provision_account(db: Session, *, email: str, password: str, full_name: Optional[str] = None) -> User:
    """Create a user with its profile and role; the very first account becomes admin."""
    if db.query(User).filter(User.email == email).first():
        raise AccountExistsError("Email already registered")

    is_first_account = db.query(UserRole).count() == 0

    user = User(email=email, hashed_password=get_password_hash(password))
    db.add(user)
    db.flush()
    db.add(Profile(id=user.id, full_name=full_name, email=email))
    db.add(UserRole(user_id=user.id, role=ROLE_ADMIN if is_first_account else ROLE_USER))
    db.commit()
    db.refresh(user)

    if is_first_account:
        logger.info("Promoted first account %s to admin", email)
    logger.info("Provisioned account %s (id=%s)", email, user.id)
    return user


def make_user_admin_by_email(db: Session, email: str) -> User:
    user = db.query(User).filter(User.email == email).first()
    if user is None:
        raise AccountNotFoundError(f"User with email {email} not found")

    if user.role is None:
        user.role = UserRole(user_id=user.id, role=ROLE_ADMIN)
    else:
        user.role.role = ROLE_ADMIN
    db.commit()
    db.refresh(user)
    logger.info("Promoted %s to admin", email)
    return user


def role_name(user: User) -> str:
    return user.role.role if user.role is not None else ROLE_USER
