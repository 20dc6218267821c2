"""SQLAlchemy base model with common fields and model exports."""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, declarative_base, mapped_column

# Base class for all models
Base = declarative_base()


def new_document_id() -> str:
    """Opaque document identifier."""
    return uuid4().hex


class BaseModel:
    """Base model with an opaque id and timestamp fields."""

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_document_id)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
        index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )


# Import models to register them with Base (after Base is defined)
from rentbook.models.notice import Notice, NoticeCategory  # noqa: E402
from rentbook.models.tenant import Tenant  # noqa: E402

__all__ = [
    "Base",
    "BaseModel",
    "new_document_id",
    "Notice",
    "NoticeCategory",
    "Tenant",
]
