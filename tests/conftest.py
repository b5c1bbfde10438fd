"""
Pytest configuration and shared fixtures
"""
import os
from datetime import date, timedelta

import pytest

# Must be set before smartair.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-minimum-32-chars-long-for-security"
os.environ["DB_LOG_SLOW_QUERIES"] = "false"

from fastapi.testclient import TestClient  # noqa: E402

from smartair import models, models_booking  # noqa: E402,F401
from smartair.database import Base, SessionLocal, engine, get_db  # noqa: E402
from smartair.main import app  # noqa: E402
from smartair.models import AirconUnit, Customer, Technician, User  # noqa: E402
from smartair.models_booking import Booking  # noqa: E402
from smartair.security_utils import create_access_token  # noqa: E402


@pytest.fixture
def db():
    """Fresh in-memory schema per test"""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def seed(db):
    """Reference entities every booking test needs"""
    admin = User(username="admin", email="admin@smartair.test", role="Admin")
    tech_user = User(username="tech", email="tech@smartair.test", role="Technician")
    cust_user = User(username="alice", email="alice@example.com", role="Customer")
    other_user = User(username="bob", email="bob@example.com", role="Customer")
    db.add_all([admin, tech_user, cust_user, other_user])
    db.flush()

    technician = Technician(user_id=tech_user.id, name="Tan Wei", phone="91234567", specialization="split")
    customer = Customer(user_id=cust_user.id, name="Alice Lim", phone="98765432", email="alice@example.com")
    other_customer = Customer(user_id=other_user.id, name="Bob Ong", phone="87654321")
    db.add_all([technician, customer, other_customer])
    db.flush()

    unit = AirconUnit(customer_id=customer.id, brand="Daikin", model="FTKM25", serial_number="DK-001")
    other_unit = AirconUnit(customer_id=other_customer.id, brand="Mitsubishi", model="MSY-GN")
    db.add_all([unit, other_unit])
    db.commit()

    return {
        "admin": admin,
        "tech_user": tech_user,
        "cust_user": cust_user,
        "other_user": other_user,
        "technician": technician,
        "customer": customer,
        "other_customer": other_customer,
        "unit": unit,
        "other_unit": other_unit,
    }


@pytest.fixture
def make_booking(db, seed):
    """Insert a booking straight through the ORM so past dates are allowed"""

    def _make(**overrides):
        data = {
            "customer_id": seed["customer"].id,
            "aircon_unit_id": seed["unit"].id,
            "service_type": "maintenance",
            "preferred_date": date.today() + timedelta(days=7),
            "preferred_time": "morning",
            "service_address": "10 Bukit Timah Road",
            "contact_phone": "98765432",
            "status": "pending",
        }
        data.update(overrides)
        booking = Booking(**data)
        db.add(booking)
        db.commit()
        db.refresh(booking)
        return booking

    return _make


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with_client = TestClient(app)
    try:
        yield with_client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(seed):
    """Bearer headers keyed by role name"""

    def header(user):
        return {"Authorization": f"Bearer {create_access_token(user.id, user.role)}"}

    return {
        "admin": header(seed["admin"]),
        "technician": header(seed["tech_user"]),
        "customer": header(seed["cust_user"]),
        "other_customer": header(seed["other_user"]),
    }


@pytest.fixture
def future_booking_payload(seed):
    return {
        "customer_id": seed["customer"].id,
        "aircon_unit_id": seed["unit"].id,
        "service_type": "repair",
        "preferred_date": (date.today() + timedelta(days=3)).isoformat(),
        "preferred_time": "afternoon",
        "service_address": "10 Bukit Timah Road",
        "postal_code": "259760",
        "contact_phone": "9876 5432",
        "issue_description": "Unit leaking water",
    }
