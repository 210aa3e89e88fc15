"""
Shared pytest fixtures

- in-memory SQLite (StaticPool) so every session in a test sees the same data
- two tenants to exercise isolation side by side
"""

import os
import tempfile

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="jewelbook-logs-"))
os.environ.setdefault("JWT_SECRET", "jewelbook-test-secret-key-0123456789abcdef")

from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import jewelbook.models  # noqa: F401  registers tables
from jewelbook.core.security import TenantContext, create_access_token
from jewelbook.schemas.customer_schemas import CustomerCreate
from jewelbook.schemas.transaction_schemas import PaymentCreate, PurchaseCreate, SaleCreate
from jewelbook.services.customer_service import register_customer
from jewelbook.utils.database import Base, build_engine, get_db

TRADE_DATE = date(2026, 3, 14)


@pytest.fixture
def engine():
    eng = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def tenant_a() -> TenantContext:
    return TenantContext(tenant_id="acme-jewellers", user_id="user-a")


@pytest.fixture
def tenant_b() -> TenantContext:
    return TenantContext(tenant_id="bright-gold", user_id="user-b")


@pytest.fixture
def customer(db, tenant_a):
    """Customer with opening 1000 amount / 10 fine"""
    return register_customer(
        db,
        tenant_a,
        CustomerCreate(
            name="Ramesh Soni",
            mobile_no="9876543210",
            city="Rajkot",
            opening_amount=Decimal("1000"),
            opening_fine=Decimal("10"),
        ),
    )


@pytest.fixture
def sale_payload():
    """Factory: net 1000, ghat 5/kg, touch 2, wastage 1, rate 500 -> amount 500, fine 30.15"""

    def _make(customer_id: int, **overrides) -> SaleCreate:
        data = dict(
            date=TRADE_DATE,
            customer_id=customer_id,
            item_name="Silver chain",
            weight=Decimal("1050"),
            bag=Decimal("50"),
            net_weight=Decimal("1000"),
            ghat_per_kg=Decimal("5"),
            touch=Decimal("2"),
            wastage=Decimal("1"),
            rate=Decimal("500"),
        )
        data.update(overrides)
        return SaleCreate(**data)

    return _make


@pytest.fixture
def purchase_payload():
    def _make(customer_id: int, **overrides) -> PurchaseCreate:
        data = dict(
            date=TRADE_DATE,
            customer_id=customer_id,
            item_name="Fine silver bar",
            net_weight=Decimal("2000"),
            ghat_per_kg=Decimal("0"),
            touch=Decimal("99"),
            wastage=Decimal("0"),
            rate=Decimal("300"),
        )
        data.update(overrides)
        return PurchaseCreate(**data)

    return _make


@pytest.fixture
def payment_payload():
    def _make(customer_id: int, transaction_type: str = "receipt", **overrides) -> PaymentCreate:
        data = dict(
            date=TRADE_DATE,
            customer_id=customer_id,
            transaction_type=transaction_type,
            payment_type="cash",
            amount=Decimal("200"),
        )
        data.update(overrides)
        return PaymentCreate(**data)

    return _make


# ----------------------------
# HTTP
# ----------------------------
@pytest.fixture
def client(session_factory):
    from main import app

    def _override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def auth_a(tenant_a) -> dict:
    return {"Authorization": f"Bearer {create_access_token(tenant_a.tenant_id, tenant_a.user_id)}"}


@pytest.fixture
def auth_b(tenant_b) -> dict:
    return {"Authorization": f"Bearer {create_access_token(tenant_b.tenant_id, tenant_b.user_id)}"}
