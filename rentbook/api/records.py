"""Rent report API routes: record rows, dashboard summary, month filter options."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from rentbook.api.schemas import MonthOption, RentRecordResponse, RentSummaryResponse
from rentbook.services import get_db
from rentbook.services.months import format_month_label, recent_months
from rentbook.services.records import build_records, rent_summary
from rentbook.services.tenant_service import TenantService

router = APIRouter(prefix="/api/records", tags=["records"])


@router.get("", response_model=list[RentRecordResponse])
def list_records(
    month: str | None = Query(None, description="Month key YYYY-MM"),
    status: str | None = Query(None, description="'paid' or 'unpaid'"),
    db: Session = Depends(get_db),
):
    """One row per active tenant and billing month, newest month first."""
    return build_records(TenantService(db).list_active(), month=month, status=status)


@router.get("/summary", response_model=RentSummaryResponse)
def get_summary(db: Session = Depends(get_db)):
    return rent_summary(TenantService(db).list_active())


@router.get("/months", response_model=list[MonthOption])
def list_month_options(count: int = Query(6, ge=1, le=36)):
    """Recent months for the report's month filter."""
    return [MonthOption(month=key, label=format_month_label(key)) for key in recent_months(count)]
