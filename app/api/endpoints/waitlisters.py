from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import require_admin, waitlist_rate_limit
from app.schemas.waitlist import (
    ErrorResponse,
    Pagination,
    WaitlistCountResponse,
    WaitlistCountsOut,
    WaitlistEntryOut,
    WaitlistIn,
    WaitlistJoined,
    WaitlistJoinResponse,
    WaitlistListResponse,
)
from app.services.waitlist_service import WaitlistQueryService, WaitlistRegistrationService, parse_page_params

router = APIRouter(prefix="/waitlisters", tags=["waitlist"])

_errors = {
    400: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
    429: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
}


@router.post(
    "",
    response_model=WaitlistJoinResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_errors,
    dependencies=[Depends(waitlist_rate_limit)],
)
def add_to_waitlist(payload: WaitlistIn, db: Session = Depends(get_db)):
    """Public signup. Emails are unique after lower-casing and trimming."""
    entry = WaitlistRegistrationService(db).register(payload.model_dump())
    return WaitlistJoinResponse(data=WaitlistJoined(id=entry.id, email=entry.email, name=entry.name))


@router.get("", response_model=WaitlistListResponse, dependencies=[Depends(require_admin)])
def list_waitlisters(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    notified: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """List waitlist entries, newest first (admin)"""
    page_num, page_size, notified_filter = parse_page_params(page, limit, notified)
    result = WaitlistQueryService(db).list_entries(page_num, page_size, notified_filter)
    return WaitlistListResponse(
        data=[WaitlistEntryOut.model_validate(entry) for entry in result.items],
        pagination=Pagination(page=result.page, limit=result.limit, total=result.total, pages=result.pages),
    )


@router.get("/count", response_model=WaitlistCountResponse, dependencies=[Depends(require_admin)])
def waitlist_count(db: Session = Depends(get_db)):
    counts = WaitlistQueryService(db).count()
    return WaitlistCountResponse(
        data=WaitlistCountsOut(total=counts.total, notified=counts.notified, not_notified=counts.not_notified)
    )
