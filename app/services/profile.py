from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.models.profile import Profile


def find_profile(db: Session, owner: str) -> Optional[Profile]:
    return db.query(Profile).filter(Profile.owner == owner).first()


def get_profile(db: Session, owner: str) -> Profile:
    profile = find_profile(db, owner)
    if profile is None:
        raise NotFoundError(
            message=f"No profile for owner '{owner}'.",
            details={"owner": owner},
        )
    return profile


def set_display_name(db: Session, owner: str, display_name: str) -> Profile:
    profile = find_profile(db, owner)
    if profile is None:
        profile = Profile(owner=owner, display_name=display_name)
        db.add(profile)
    else:
        profile.display_name = display_name
    db.commit()
    db.refresh(profile)
    return profile


def display_name_for(db: Session, owner: str) -> str:
    """Profile display name, or the owner id when no profile was set up."""
    profile = find_profile(db, owner)
    return profile.display_name if profile is not None else owner
