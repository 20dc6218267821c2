"""Tenant API routes: listing, archive, CRUD and payment recording."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from rentbook.api.schemas import (
    ArchivedTenantResponse,
    MessageResponse,
    PaymentPayload,
    TenantCreatePayload,
    TenantResponse,
    TenantUpdatePayload,
)
from rentbook.services import get_db
from rentbook.services.tenant_service import TenantService

router = APIRouter(prefix="/api/tenants", tags=["tenants"])


@router.get("", response_model=list[TenantResponse])
def list_active_tenants(db: Session = Depends(get_db)):
    """Active (non-archived) tenants, newest first."""
    return TenantService(db).list_active()


@router.get("/all", response_model=list[ArchivedTenantResponse])
def list_all_tenants(db: Session = Depends(get_db)):
    """Archive view: every tenant with its status and deletedAt."""
    return TenantService(db).list_all()


@router.get("/{tenant_id}", response_model=TenantResponse)
def get_tenant(tenant_id: str, db: Session = Depends(get_db)):
    return TenantService(db).get(tenant_id)


@router.post("", response_model=TenantResponse, status_code=status.HTTP_201_CREATED)
def create_tenant(payload: TenantCreatePayload, db: Session = Depends(get_db)):
    """
    Create a tenant.

    Returns:
        201: Created tenant
        400: Missing or invalid fields
    """
    return TenantService(db).create(
        name=payload.name,
        room_number=payload.room_number,
        contact=payload.contact,
        rent_amount=payload.rent_amount,
        deposit=payload.deposit,
        join_date=payload.join_date,
    )


@router.put("/{tenant_id}", response_model=TenantResponse)
def update_tenant(tenant_id: str, payload: TenantUpdatePayload, db: Session = Depends(get_db)):
    """Update the fields present in the body."""
    return TenantService(db).update(tenant_id, payload.model_dump(exclude_unset=True))


@router.delete("/{tenant_id}", response_model=MessageResponse)
def delete_tenant(tenant_id: str, db: Session = Depends(get_db)):
    """Archive (soft delete) a tenant; rent history is kept."""
    TenantService(db).soft_delete(tenant_id)
    return MessageResponse(message="Tenant archived (soft deleted)")


@router.post("/{tenant_id}/payment", response_model=TenantResponse)
def record_payment(tenant_id: str, payload: PaymentPayload, db: Session = Depends(get_db)):
    """
    Add or replace the payment for a month.

    Returns:
        200: Tenant with updated rentHistory (newest month first)
        400: Malformed month, negative amount or bad paid flag
        404: Unknown tenant
    """
    return TenantService(db).record_payment(tenant_id, payload.to_payment())
