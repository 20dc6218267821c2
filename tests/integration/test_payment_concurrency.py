"""Integration tests for concurrent payment writes on a file-backed SQLite database."""

import threading
from datetime import date

import pytest
from sqlalchemy.orm import sessionmaker

from rentbook.models import Base
from rentbook.services import build_engine
from rentbook.services import tenant_service as tenant_service_module
from rentbook.services.errors import PersistenceError
from rentbook.services.payments import Payment
from rentbook.services.tenant_service import PAYMENT_ATTEMPTS, TenantService


def pay(month: str) -> Payment:
    return Payment(month=month, amount=5000, date=date(2025, 5, 2), paid=True)


@pytest.fixture
def file_sessions(tmp_path):
    """Session factory over a SQLite file, one connection per session."""
    engine = build_engine(f"sqlite:///{tmp_path / 'rentbook.db'}")
    Base.metadata.create_all(engine)
    yield sessionmaker(bind=engine, autocommit=False, autoflush=False)
    engine.dispose()


@pytest.fixture
def tenant_id(file_sessions):
    with file_sessions() as session:
        return TenantService(session).create(
            name="Asha Rao",
            room_number="101",
            contact="555-0100",
            rent_amount=5000,
            deposit=10000,
            join_date=date(2025, 1, 15),
        ).id


def stored_months(file_sessions, tenant_id: str) -> list[str]:
    with file_sessions() as session:
        return [entry.month for entry in TenantService(session).get(tenant_id).history]


class TestConcurrentPayments:
    """Test that interleaved payment writes for one tenant are all kept."""

    def test_two_threads_reading_before_either_writes(self, file_sessions, tenant_id, monkeypatch):
        barrier = threading.Barrier(2, timeout=10)
        first_calls = set()
        real_upsert = tenant_service_module.upsert_payment

        def upsert_once_both_have_read(history, payment):
            # Only the first merge per month waits; retries go straight through
            if payment.month not in first_calls:
                first_calls.add(payment.month)
                barrier.wait()
            return real_upsert(history, payment)

        monkeypatch.setattr(tenant_service_module, "upsert_payment", upsert_once_both_have_read)

        errors = []

        def submit(month: str) -> None:
            with file_sessions() as session:
                try:
                    TenantService(session).record_payment(tenant_id, pay(month))
                except Exception as e:
                    errors.append(e)

        threads = [threading.Thread(target=submit, args=(month,)) for month in ("2025-01", "2025-02")]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=30)

        assert errors == []
        assert stored_months(file_sessions, tenant_id) == ["2025-02", "2025-01"]

    def test_write_against_stale_read_is_merged_again(self, file_sessions, tenant_id, monkeypatch):
        real_upsert = tenant_service_module.upsert_payment
        calls = []

        def upsert_with_competing_write(history, payment):
            calls.append(payment.month)
            if len(calls) == 1:
                with file_sessions() as other:
                    TenantService(other).record_payment(tenant_id, pay("2025-01"))
            return real_upsert(history, payment)

        monkeypatch.setattr(tenant_service_module, "upsert_payment", upsert_with_competing_write)

        with file_sessions() as session:
            tenant = TenantService(session).record_payment(tenant_id, pay("2025-03"))
            assert [entry.month for entry in tenant.history] == ["2025-03", "2025-01"]

        # First attempt, the competing write, then the retry
        assert calls == ["2025-03", "2025-01", "2025-03"]
        assert stored_months(file_sessions, tenant_id) == ["2025-03", "2025-01"]

    def test_gives_up_when_row_keeps_changing(self, file_sessions, tenant_id, monkeypatch):
        real_upsert = tenant_service_module.upsert_payment
        competing = iter(f"2024-{month:02d}" for month in range(1, 13))

        def upsert_always_overtaken(history, payment):
            if payment.month == "2025-03":
                with file_sessions() as other:
                    TenantService(other).record_payment(tenant_id, pay(next(competing)))
            return real_upsert(history, payment)

        monkeypatch.setattr(tenant_service_module, "upsert_payment", upsert_always_overtaken)

        with file_sessions() as session:
            with pytest.raises(PersistenceError, match="concurrently"):
                TenantService(session).record_payment(tenant_id, pay("2025-03"))

        months = stored_months(file_sessions, tenant_id)
        assert "2025-03" not in months
        assert len(months) == PAYMENT_ATTEMPTS
