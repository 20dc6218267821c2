"""Notice board API routes."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from rentbook.api.schemas import MessageResponse, NoticePayload, NoticeResponse
from rentbook.services import get_db
from rentbook.services.notice_service import NoticeService

router = APIRouter(prefix="/api/notices", tags=["notices"])


@router.get("", response_model=list[NoticeResponse])
def list_notices(
    category: str | None = Query(None, description="Category filter; 'all' for every notice"),
    db: Session = Depends(get_db),
):
    return NoticeService(db).list_all(category)


@router.get("/{notice_id}", response_model=NoticeResponse)
def get_notice(notice_id: str, db: Session = Depends(get_db)):
    return NoticeService(db).get(notice_id)


@router.post("", response_model=NoticeResponse, status_code=status.HTTP_201_CREATED)
def create_notice(payload: NoticePayload, db: Session = Depends(get_db)):
    return NoticeService(db).create(
        title=payload.title,
        category=payload.category,
        content=payload.content,
        date=payload.date,
    )


@router.put("/{notice_id}", response_model=NoticeResponse)
def replace_notice(notice_id: str, payload: NoticePayload, db: Session = Depends(get_db)):
    """Full replacement; title, category and content are all required."""
    return NoticeService(db).replace(
        notice_id,
        title=payload.title,
        category=payload.category,
        content=payload.content,
        date=payload.date,
    )


@router.delete("/{notice_id}", response_model=MessageResponse)
def delete_notice(notice_id: str, db: Session = Depends(get_db)):
    NoticeService(db).delete(notice_id)
    return MessageResponse(message="Notice deleted successfully")
