"""
Export router.

GET /export?year=2025&month=5   — monthly CSV attachment
"""
from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session

from app.core.owner import current_owner
from app.db.base import get_db
from app.schemas.common import ErrorResponse
from app.services.export import export_month

router = APIRouter(prefix="/export", tags=["export"])


@router.get(
    "",
    summary="Download a monthly emissions report",
    response_class=Response,
    responses={
        200: {"content": {"text/csv": {}}, "description": "CSV report."},
        404: {"model": ErrorResponse, "description": "No owner context."},
        422: {"model": ErrorResponse, "description": "Year/month is not a calendar month (INVALID_RANGE)."},
    },
)
def export(
    year: int = Query(description="Four-digit year.", examples=[2025]),
    month: int = Query(description="Month number 1–12.", examples=[5]),
    owner: str = Depends(current_owner),
    db: Session = Depends(get_db),
):
    filename, text = export_month(db, owner, year, month)
    return Response(
        content=text,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
