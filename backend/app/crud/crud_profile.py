"""Profile upsert keyed by user id."""

from typing import Optional

from sqlalchemy.orm import Session

from backend.app.models.profile import Profile
from backend.app.schemas.user import UserProfileUpdate


class CRUDProfile:
    def get(self, db: Session, *, user_id: int) -> Optional[Profile]:
        return db.query(Profile).filter(Profile.id == user_id).first()

    def upsert(self, db: Session, *, user_id: int, email: Optional[str], obj_in: UserProfileUpdate) -> Profile:
        profile = self.get(db, user_id=user_id)
        if profile is None:
            profile = Profile(id=user_id, email=email)
            db.add(profile)
        for field, value in obj_in.model_dump(exclude_unset=True).items():
            setattr(profile, field, value)
        db.commit()
        db.refresh(profile)
        return profile


profile_crud = CRUDProfile()
