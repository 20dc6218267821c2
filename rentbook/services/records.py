"""Rent record rows for the live rent report and dashboard counters."""

from dataclasses import dataclass
from datetime import date
from typing import Iterable

from rentbook.models.tenant import Tenant
from rentbook.services.errors import ValidationError
from rentbook.services.months import billing_months, current_month_key, parse_month_key
from rentbook.services.payments import find_payment

NO_PAYMENT_DATE = "-"

STATUS_PAID = "paid"
STATUS_UNPAID = "unpaid"
STATUS_FILTERS = (STATUS_PAID, STATUS_UNPAID)


@dataclass
class RentRecord:
    """One (tenant, month) row of the rent report.

    ``amount`` is the tenant's current rent, even for months recorded at a
    different amount; the historical amount lives on the payment itself.
    """

    tenant_id: str
    tenant_name: str
    room_number: str
    month: str
    amount: int
    paid: bool
    payment_date: str
    proof_url: str


@dataclass
class RentSummary:
    """Dashboard counters for the current month."""

    month: str
    total_tenants: int
    occupied_rooms: int
    paid: int
    pending: int


def _normalize_status(status: str | None) -> str | None:
    if status in (None, "", "all"):
        return None
    if status not in STATUS_FILTERS:
        raise ValidationError(f"Unknown status filter {status!r}: expected 'paid' or 'unpaid'")
    return status


def build_records(
    tenants: Iterable[Tenant],
    month: str | None = None,
    status: str | None = None,
    today: date | None = None,
) -> list[RentRecord]:
    """Cross active tenants with their billing months and rent history.

    Args:
        tenants: Tenants in display order; archived ones are skipped
        month: Optional month key; keep only rows for that month
        status: Optional "paid"/"unpaid" filter
        today: Reference date for billing months (default: today)

    Returns:
        Rows in tenant order, months newest first per tenant

    Raises:
        ValidationError: If month is malformed or status is unknown
    """
    if month:
        parse_month_key(month)
    status = _normalize_status(status)

    records = []
    for tenant in tenants:
        if tenant.deleted:
            continue
        history = tenant.history
        for billing_month in billing_months(tenant.join_date, today):
            payment = find_payment(history, billing_month)
            records.append(
                RentRecord(
                    tenant_id=tenant.id,
                    tenant_name=tenant.name,
                    room_number=tenant.room_number,
                    month=billing_month,
                    amount=tenant.rent_amount,
                    paid=payment.paid if payment else False,
                    payment_date=payment.date.isoformat() if payment else NO_PAYMENT_DATE,
                    proof_url=payment.proof_url if payment else "",
                )
            )

    if month:
        records = [record for record in records if record.month == month]
    if status == STATUS_PAID:
        records = [record for record in records if record.paid]
    elif status == STATUS_UNPAID:
        records = [record for record in records if not record.paid]
    return records


def rent_summary(tenants: Iterable[Tenant], today: date | None = None) -> RentSummary:
    """Count active tenants and how many have paid for the current month."""
    month = current_month_key(today)
    active = [tenant for tenant in tenants if not tenant.deleted]

    paid = 0
    for tenant in active:
        payment = find_payment(tenant.history, month)
        if payment and payment.paid:
            paid += 1

    return RentSummary(
        month=month,
        total_tenants=len(active),
        occupied_rooms=len({tenant.room_number for tenant in active}),
        paid=paid,
        pending=len(active) - paid,
    )


__all__ = [
    "NO_PAYMENT_DATE",
    "RentRecord",
    "RentSummary",
    "build_records",
    "rent_summary",
]
