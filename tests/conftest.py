"""Pytest configuration: in-memory database, session and API client fixtures."""

import os

# Set test database URL BEFORE any imports from rentbook
# so the module-level engine never touches a file database
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from datetime import date  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from rentbook.api.app import app  # noqa: E402
from rentbook.models import Base  # noqa: E402
from rentbook.services import build_engine, get_db  # noqa: E402
from rentbook.services.tenant_service import TenantService  # noqa: E402


@pytest.fixture
def db_session():
    """Create a fresh in-memory database session per test."""
    engine = build_engine("sqlite://")
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    yield session
    session.close()
    engine.dispose()


@pytest.fixture
def client(db_session):
    """FastAPI test client bound to the test session."""

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def tenant_service(db_session):
    return TenantService(db_session)


@pytest.fixture
def make_tenant(tenant_service):
    """Factory creating tenants with sensible defaults."""

    def _make(**overrides):
        fields = {
            "name": "Asha Rao",
            "room_number": "101",
            "contact": "+91 98450 00000",
            "rent_amount": 5000,
            "deposit": 10000,
            "join_date": date(2025, 1, 15),
        }
        fields.update(overrides)
        return tenant_service.create(**fields)

    return _make
