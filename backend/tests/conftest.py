"""
Test Configuration and Fixtures
===============================

Provides pytest fixtures for:
- An in-memory SQLite database with a fresh schema per test
- A session shared by the test body and the API under test
- Company, customer, ledger and product records
- A TestClient with auth and tenancy dependencies overridden
"""

import os
import tempfile

# Must be set before the application modules are imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "ledger-backend-test-logs"))

from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import models  # noqa: F401
from database import Base, get_db
from main import app
from models.company import Company
from models.ledgers import Ledger, LedgerGroup, LedgerNature
from models.parties import Party
from models.products import Product
from models.stock_items import StockItem, StockUnit
from utils.auth_utils import get_current_user
from utils.tenancy import get_company_id

TEST_USER = {"sub": "user-1", "username": "pytest_user"}
HOME_STATE = "Tamil Nadu"


# ======================
# Database Fixtures
# ======================

@pytest.fixture
def engine():
    """In-memory SQLite engine; one connection shared by every session in the test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        # Let SQLAlchemy emit BEGIN itself so SAVEPOINT behaves as on PostgreSQL
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()


# ======================
# Record Fixtures
# ======================

@pytest.fixture
def company(db):
    company = Company(company_name="Sri Murugan Traders", state=HOME_STATE, state_code="33")
    db.add(company)
    db.commit()
    return company


@pytest.fixture
def other_company(db):
    company = Company(company_name="Coastal Supplies", state="Kerala", state_code="32")
    db.add(company)
    db.commit()
    return company


@pytest.fixture
def local_customer(db, company):
    customer = Party(company_id=company.id, name="Local Retail", state="tamil nadu", state_code="33")
    db.add(customer)
    db.commit()
    return customer


@pytest.fixture
def outstation_customer(db, company):
    customer = Party(company_id=company.id, name="Bengaluru Wholesale", state="Karnataka", state_code="29")
    db.add(customer)
    db.commit()
    return customer


@pytest.fixture
def make_product(db, company):
    def _make_product(name="Steel Rod", stock="10", threshold="0", company_id=None):
        product = Product(
            company_id=company_id or company.id,
            product_name=name,
            sale_price=Decimal("100"),
            current_stock=Decimal(stock),
            low_stock_threshold=Decimal(threshold),
        )
        db.add(product)
        db.commit()
        return product
    return _make_product


@pytest.fixture
def product(make_product):
    return make_product()


@pytest.fixture
def ledgers(db, company):
    """Cash, Sales and a party ledger under their groups."""
    assets = LedgerGroup(company_id=company.id, name="Current Assets", nature=LedgerNature.ASSET)
    income = LedgerGroup(company_id=company.id, name="Sales Accounts", nature=LedgerNature.INCOME)
    db.add_all([assets, income])
    db.flush()
    cash = Ledger(company_id=company.id, name="Cash", group_id=assets.id, opening_balance=Decimal("500"), is_dr=True)
    sales = Ledger(company_id=company.id, name="Sales", group_id=income.id, opening_balance=Decimal("0"), is_dr=False)
    party = Ledger(company_id=company.id, name="Bengaluru Wholesale", group_id=assets.id, state="Karnataka")
    db.add_all([cash, sales, party])
    db.commit()
    return {"cash": cash, "sales": sales, "party": party, "assets": assets, "income": income}


@pytest.fixture
def stock_item(db, company):
    unit = StockUnit(company_id=company.id, name="pcs")
    db.add(unit)
    db.flush()
    item = StockItem(company_id=company.id, name="Cement Bag", unit_id=unit.id, opening_qty=Decimal("20"))
    db.add(item)
    db.commit()
    return item


# ======================
# HTTP Client Fixtures
# ======================

@pytest.fixture
def client(db, company):
    """TestClient bound to the test session, an authenticated user and the test company."""
    def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_current_user] = lambda: TEST_USER
    app.dependency_overrides[get_company_id] = lambda: company.id
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# ======================
# Payload Helpers
# ======================

@pytest.fixture
def invoice_payload():
    def _invoice_payload(customer_id, product_id=None, quantity="2", unit_price="100", **overrides):
        payload = {
            "invoice_number": "INV-00001",
            "customer_id": customer_id,
            "invoice_date": date(2025, 1, 15).isoformat(),
            "due_date": date(2025, 2, 14).isoformat(),
            "invoice_type": "TAX_INVOICE",
            "cgst_rate": "9",
            "sgst_rate": "9",
            "igst_rate": "18",
            "line_items": [
                {
                    "product_id": product_id,
                    "description": "Steel Rod 12mm",
                    "quantity": quantity,
                    "unit_price": unit_price,
                }
            ],
        }
        payload.update(overrides)
        return payload
    return _invoice_payload
