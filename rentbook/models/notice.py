"""Notice board ORM model."""

from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import DateTime, String, Text
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from rentbook.models import Base, BaseModel


class NoticeCategory(str, Enum):
    """Category of a notice board entry."""

    MAINTENANCE = "maintenance"
    COMPLAINT = "complaint"
    UPDATE = "update"
    ANNOUNCEMENT = "announcement"


class Notice(Base, BaseModel):
    """Model representing a notice board entry. Replaced whole, hard-deleted."""

    __tablename__ = "notices"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[NoticeCategory] = mapped_column(
        SQLEnum(NoticeCategory, values_callable=lambda e: [c.value for c in e]),
        nullable=False,
        index=True,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
        comment="Date shown on the notice board",
    )

    def __repr__(self) -> str:
        return f"<Notice(id={self.id!r}, title={self.title!r}, category={self.category})>"


__all__ = ["Notice", "NoticeCategory"]
