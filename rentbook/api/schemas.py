"""Pydantic schemas for the tenant, notice and rent record endpoints.

Field names go over the wire in camelCase (roomNumber, rentHistory, proofUrl)
and are accepted in either camelCase or snake_case.
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from rentbook.models.notice import NoticeCategory
from rentbook.services.errors import ValidationError
from rentbook.services.payments import Payment, normalize_paid


class CamelModel(BaseModel):
    """Base schema with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# Tenants


class TenantCreatePayload(CamelModel):
    """Request payload for POST /api/tenants."""

    name: str
    room_number: str
    contact: str
    rent_amount: int = Field(..., description="Monthly rent in minor units")
    deposit: int = Field(..., description="Deposit in minor units")
    join_date: date | None = Field(None, description="Defaults to today")


class TenantUpdatePayload(CamelModel):
    """Request payload for PUT /api/tenants/{id}. Only sent fields are changed."""

    name: str | None = None
    room_number: str | None = None
    contact: str | None = None
    rent_amount: int | None = None
    deposit: int | None = None
    join_date: date | None = None


class PaymentPayload(CamelModel):
    """Request payload for POST /api/tenants/{id}/payment."""

    month: str = Field(..., description="Month key YYYY-MM")
    amount: int
    date: date
    paid: bool = False
    proof_url: str | None = Field(None, description="Link to a receipt or screenshot")

    @field_validator("paid", mode="before")
    @classmethod
    def normalize_paid_flag(cls, value):
        try:
            return normalize_paid(value)
        except ValidationError as e:
            raise ValueError(e.message) from e

    def to_payment(self) -> Payment:
        return Payment(
            month=self.month.strip(),
            amount=self.amount,
            date=self.date,
            paid=self.paid,
            proof_url=(self.proof_url or "").strip(),
        )


class PaymentResponse(CamelModel):
    month: str
    amount: int
    date: date
    paid: bool
    proof_url: str = ""


class TenantResponse(CamelModel):
    """Tenant document."""

    id: str
    name: str
    room_number: str
    contact: str
    rent_amount: int
    deposit: int
    join_date: date
    deleted: bool
    deleted_at: datetime | None = None
    rent_history: list[PaymentResponse]
    created_at: datetime
    updated_at: datetime


class ArchivedTenantResponse(TenantResponse):
    """Tenant document annotated for the archive view."""

    status: str


# Notices


class NoticePayload(CamelModel):
    """Request payload for creating or replacing a notice."""

    title: str
    category: NoticeCategory
    content: str
    date: datetime | None = None


class NoticeResponse(CamelModel):
    id: str
    title: str
    category: NoticeCategory
    content: str
    date: datetime
    created_at: datetime
    updated_at: datetime


# Rent records


class RentRecordResponse(CamelModel):
    """One (tenant, month) row of the rent report."""

    tenant_id: str
    tenant_name: str
    room_number: str
    month: str
    amount: int
    paid: bool
    payment_date: str
    proof_url: str


class RentSummaryResponse(CamelModel):
    month: str
    total_tenants: int
    occupied_rooms: int
    paid: int
    pending: int


class MonthOption(CamelModel):
    month: str
    label: str


class MessageResponse(BaseModel):
    message: str
