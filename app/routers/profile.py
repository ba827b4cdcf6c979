"""
Profile router.

GET /profile   — display name used in reports
PUT /profile   — set it
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.owner import current_owner
from app.db.base import get_db
from app.schemas.common import ErrorResponse
from app.schemas.profile import ProfileIn, ProfileOut
from app.services.profile import get_profile, set_display_name

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get(
    "",
    response_model=ProfileOut,
    responses={404: {"model": ErrorResponse, "description": "No profile yet."}},
)
def read_profile(owner: str = Depends(current_owner), db: Session = Depends(get_db)):
    p = get_profile(db, owner)
    return ProfileOut(owner=p.owner, display_name=p.display_name)


@router.put("", response_model=ProfileOut)
def write_profile(
    payload: ProfileIn,
    owner: str = Depends(current_owner),
    db: Session = Depends(get_db),
):
    p = set_display_name(db, owner, payload.display_name)
    return ProfileOut(owner=p.owner, display_name=p.display_name)
