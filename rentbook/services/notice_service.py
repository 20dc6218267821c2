"""Notice board store."""

import logging
from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from rentbook.models.notice import Notice, NoticeCategory
from rentbook.services.errors import NotFoundError, PersistenceError, ValidationError
from rentbook.services.validation import require_text

logger = logging.getLogger(__name__)


def parse_category(value: str | NoticeCategory) -> NoticeCategory:
    """Resolve a category name to NoticeCategory, rejecting unknown names with a 400."""
    try:
        return NoticeCategory(value)
    except ValueError as e:
        allowed = ", ".join(c.value for c in NoticeCategory)
        raise ValidationError(f"Invalid category {value!r}: expected one of {allowed}") from e


class NoticeService:
    """Service for notice board operations.

    Notices are replaced whole (no partial update) and deleted for good.
    """

    def __init__(self, db_session: Session):
        """Initialize with database session."""
        self.db = db_session

    def _commit(self, action: str) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Failed to %s: %s", action, e, exc_info=True)
            raise PersistenceError(f"Failed to {action}") from e

    def list_all(self, category: str | None = None) -> list[Notice]:
        """Notices, newest first, optionally limited to one category ("all" = no filter)."""
        query = self.db.query(Notice)
        if category and category != "all":
            query = query.filter(Notice.category == parse_category(category))
        return query.order_by(Notice.created_at.desc()).all()

    def get(self, notice_id: str) -> Notice:
        notice = self.db.query(Notice).filter(Notice.id == notice_id).first()
        if notice is None:
            raise NotFoundError("Notice not found")
        return notice

    def create(
        self,
        title: str,
        category: str | NoticeCategory,
        content: str,
        date: datetime | None = None,
    ) -> Notice:
        """Post a new notice. ``date`` defaults to now."""
        notice = Notice(
            title=require_text("title", title),
            category=parse_category(category),
            content=require_text("content", content),
            date=date or datetime.now(timezone.utc),
        )
        self.db.add(notice)
        self._commit("create notice")
        self.db.refresh(notice)

        logger.info("Created notice: id=%s, category=%s", notice.id, notice.category.value)
        return notice

    def replace(
        self,
        notice_id: str,
        title: str,
        category: str | NoticeCategory,
        content: str,
        date: datetime | None = None,
    ) -> Notice:
        """Replace every field of a notice; an omitted date keeps the current one."""
        notice = self.get(notice_id)
        notice.title = require_text("title", title)
        notice.category = parse_category(category)
        notice.content = require_text("content", content)
        if date is not None:
            notice.date = date
        self._commit("update notice")
        self.db.refresh(notice)

        logger.info("Replaced notice: id=%s", notice_id)
        return notice

    def delete(self, notice_id: str) -> None:
        notice = self.get(notice_id)
        self.db.delete(notice)
        self._commit("delete notice")
        logger.info("Deleted notice: id=%s", notice_id)


__all__ = ["NoticeService", "parse_category"]
