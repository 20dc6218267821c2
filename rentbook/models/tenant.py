"""Tenant ORM model: one row per tenant document, rent history embedded as JSON."""

from datetime import date, datetime
from typing import Any

from sqlalchemy import JSON, Boolean, Date, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from rentbook.models import Base, BaseModel
from rentbook.services.payments import Payment

STATUS_ACTIVE = "active"
STATUS_ARCHIVED = "archived"


class Tenant(Base, BaseModel):
    """Model representing a tenant and their monthly rent history.

    Tenants are never hard-deleted. Archiving sets ``deleted`` and stamps
    ``deleted_at``; ``rent_history`` is left untouched so the archive view
    can still show every recorded payment.
    """

    __tablename__ = "tenants"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    room_number: Mapped[str] = mapped_column(String(50), nullable=False)
    contact: Mapped[str] = mapped_column(String(255), nullable=False)

    # Minor currency units
    rent_amount: Mapped[int] = mapped_column(Integer, nullable=False)
    deposit: Mapped[int] = mapped_column(Integer, nullable=False)

    join_date: Mapped[date] = mapped_column(Date, nullable=False, default=date.today)

    deleted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False, index=True)
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    rent_history: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list, nullable=False)
    """Embedded payment documents, unique by month, newest month first."""

    # Bumped on every UPDATE; a write against a stale read raises StaleDataError
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    @property
    def history(self) -> list[Payment]:
        """Rent history as Payment values."""
        return [Payment.from_dict(entry) for entry in self.rent_history or []]

    @property
    def status(self) -> str:
        return STATUS_ARCHIVED if self.deleted else STATUS_ACTIVE

    def __repr__(self) -> str:
        return (
            f"<Tenant(id={self.id!r}, name={self.name!r}, room_number={self.room_number!r}, "
            f"rent_amount={self.rent_amount}, join_date={self.join_date}, deleted={self.deleted})>"
        )


__all__ = ["Tenant", "STATUS_ACTIVE", "STATUS_ARCHIVED"]
