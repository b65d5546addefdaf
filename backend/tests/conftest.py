from datetime import date, datetime, timezone
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

import models  # noqa: F401
from api.deps import get_push_client, get_whatsapp_client
from db.session import get_db
from main import app
from models.customers import Customer
from models.debts import Debt
from models.enums import Currency, DebtStatus, DebtType

NOW = datetime(2025, 3, 10, 9, 30, tzinfo=timezone.utc)
TODAY = date(2025, 3, 10)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def whatsapp():
    client = AsyncMock()
    client.send_text = AsyncMock(return_value={"messages": [{"id": "wamid.1"}]})
    return client


@pytest.fixture
def push():
    client = AsyncMock()
    client.send_to_subscribers = AsyncMock(return_value={"id": "notif-1"})
    return client


@pytest.fixture
def client(db, whatsapp, push):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_whatsapp_client] = lambda: whatsapp
    app.dependency_overrides[get_push_client] = lambda: push
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_customer(db):
    def _make(name="Ali", phone="03158798", **kwargs):
        customer = Customer(name=name, phone=phone, **kwargs)
        db.add(customer)
        db.commit()
        db.refresh(customer)
        return customer
    return _make


@pytest.fixture
def make_debt(db, make_customer):
    def _make(customer=None, **kwargs):
        customer = customer or make_customer()
        values = {
            "type": DebtType.MOBILE,
            "currency": Currency.USD,
            "amount": Decimal("12.50"),
            "due_date": TODAY,
            "status": DebtStatus.PENDING,
        }
        values.update(kwargs)
        debt = Debt(customer_id=customer.id, **values)
        db.add(debt)
        db.commit()
        db.refresh(debt)
        return debt
    return _make
