"""Tenant store: CRUD, soft delete and payment recording."""

import logging
from datetime import date, datetime, timezone
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from rentbook.models.tenant import Tenant
from rentbook.services.errors import NotFoundError, PersistenceError, ValidationError
from rentbook.services.payments import Payment, upsert_payment
from rentbook.services.validation import require_amount, require_text

logger = logging.getLogger(__name__)

TEXT_FIELDS = ("name", "room_number", "contact")
AMOUNT_FIELDS = ("rent_amount", "deposit")
PROFILE_FIELDS = TEXT_FIELDS + AMOUNT_FIELDS + ("join_date",)

# Attempts at a payment write before giving up on a tenant under contention
PAYMENT_ATTEMPTS = 5


def _clean_profile(changes: dict[str, Any]) -> dict[str, Any]:
    """Validate and trim profile fields; unknown fields are rejected."""
    unknown = set(changes) - set(PROFILE_FIELDS)
    if unknown:
        raise ValidationError(f"Unknown tenant fields: {', '.join(sorted(unknown))}")

    cleaned: dict[str, Any] = {}
    for field, value in changes.items():
        if field in TEXT_FIELDS:
            cleaned[field] = require_text(field, value)
        elif field in AMOUNT_FIELDS:
            cleaned[field] = require_amount(field, value)
        elif field == "join_date":
            if not isinstance(value, date):
                raise ValidationError("join_date must be a date")
            cleaned[field] = value
    return cleaned


class TenantService:
    """Service for tenant database operations.

    Listings are ordered newest-created first. Tenants are never removed:
    soft_delete() archives them and keeps their rent history.
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

    def list_active(self) -> list[Tenant]:
        """Tenants that are not archived."""
        return (
            self.db.query(Tenant)
            .filter(Tenant.deleted.is_(False))
            .order_by(Tenant.created_at.desc())
            .all()
        )

    def list_all(self) -> list[Tenant]:
        """Every tenant, archived included, for the archive view.

        Each tenant exposes ``status`` ("active"/"archived") and ``deleted_at``.
        """
        return self.db.query(Tenant).order_by(Tenant.created_at.desc()).all()

    def get(self, tenant_id: str) -> Tenant:
        """Get tenant by ID.

        Raises:
            NotFoundError: If no tenant has this ID
        """
        tenant = self.db.query(Tenant).filter(Tenant.id == tenant_id).first()
        if tenant is None:
            raise NotFoundError("Tenant not found")
        return tenant

    def create(
        self,
        name: str,
        room_number: str,
        contact: str,
        rent_amount: int,
        deposit: int,
        join_date: date | None = None,
    ) -> Tenant:
        """Create a tenant with an empty rent history.

        Args:
            name: Tenant name
            room_number: Room the tenant occupies
            contact: Phone or other contact string
            rent_amount: Monthly rent in minor units
            deposit: Deposit in minor units
            join_date: First billable day (default: today)

        Returns:
            Created Tenant
        """
        fields = _clean_profile(
            {
                "name": name,
                "room_number": room_number,
                "contact": contact,
                "rent_amount": rent_amount,
                "deposit": deposit,
                "join_date": join_date or date.today(),
            }
        )
        tenant = Tenant(**fields, deleted=False, rent_history=[])
        self.db.add(tenant)
        self._commit("create tenant")
        self.db.refresh(tenant)

        logger.info("Created tenant: id=%s, name=%s, room=%s", tenant.id, tenant.name, tenant.room_number)
        return tenant

    def update(self, tenant_id: str, changes: dict[str, Any]) -> Tenant:
        """Update profile fields of a tenant.

        Only the keys present in ``changes`` are touched. Rent history and
        archive state cannot be changed here.
        """
        tenant = self.get(tenant_id)
        cleaned = _clean_profile(changes)
        for field, value in cleaned.items():
            setattr(tenant, field, value)
        self._commit("update tenant")
        self.db.refresh(tenant)

        logger.info("Updated tenant: id=%s, fields=%s", tenant_id, sorted(cleaned))
        return tenant

    def soft_delete(self, tenant_id: str) -> Tenant:
        """Archive a tenant.

        Sets ``deleted`` and stamps ``deleted_at`` once; archiving an already
        archived tenant keeps the original timestamp.
        """
        tenant = self.get(tenant_id)
        if tenant.deleted:
            logger.info("Tenant already archived: id=%s", tenant_id)
            return tenant

        tenant.deleted = True
        tenant.deleted_at = datetime.now(timezone.utc)
        self._commit("archive tenant")

        logger.info("Archived tenant: id=%s, name=%s", tenant_id, tenant.name)
        return tenant

    def record_payment(self, tenant_id: str, payment: Payment) -> Tenant:
        """Insert or replace the payment for its month in the tenant's history.

        The write is guarded by the tenant's version counter: if another
        writer changed the row after it was read, the history is re-read and
        the payment merged again. Databases with row locks also take
        ``SELECT ... FOR UPDATE`` on the read.

        Raises:
            NotFoundError: Unknown tenant
            ValidationError: Invalid payment; history is left unchanged
            PersistenceError: Write failed, or the row kept changing underneath
        """
        for attempt in range(1, PAYMENT_ATTEMPTS + 1):
            tenant = (
                self.db.query(Tenant)
                .filter(Tenant.id == tenant_id)
                .with_for_update()
                .populate_existing()
                .first()
            )
            if tenant is None:
                raise NotFoundError("Tenant not found")

            history = upsert_payment(tenant.history, payment)
            tenant.rent_history = [entry.to_dict() for entry in history]
            try:
                self.db.commit()
            except StaleDataError:
                self.db.rollback()
                logger.warning(
                    "Tenant changed during payment write, retrying: id=%s, month=%s, attempt=%d",
                    tenant_id,
                    payment.month,
                    attempt,
                )
                continue
            except SQLAlchemyError as e:
                self.db.rollback()
                logger.error("Failed to record payment: %s", e, exc_info=True)
                raise PersistenceError("Failed to record payment") from e
            break
        else:
            logger.error("Gave up recording payment after %d attempts: id=%s", PAYMENT_ATTEMPTS, tenant_id)
            raise PersistenceError("Failed to record payment: tenant is being updated concurrently")

        self.db.refresh(tenant)
        logger.info(
            "Recorded payment: tenant_id=%s, month=%s, amount=%d, paid=%s",
            tenant_id,
            payment.month,
            payment.amount,
            payment.paid,
        )
        return tenant


__all__ = ["TenantService"]
