import os

os.environ.setdefault("SERVICE_URL", "https://backend.test")
os.environ.setdefault("SERVICE_KEY", "test-service-key")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["DB_LOG_SLOW_QUERIES"] = "false"

from datetime import time  # noqa: E402

import pytest  # noqa: E402
from fastapi import Depends  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402

from photobooth.auth import get_current_staff  # noqa: E402
from photobooth.database import Base, SessionLocal, engine, get_db  # noqa: E402
from photobooth.main import app  # noqa: E402
from photobooth.models import Booking, Customer, Product, UserProfile  # noqa: E402

STAFF_ID = "00000000-0000-0000-0000-000000000001"


@pytest.fixture(autouse=True)
def setup_database():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def staff(db):
    profile = UserProfile(
        id=STAFF_ID, email="claire.martin@gmail.com", full_name="Claire Martin", role="admin"
    )
    db.add(profile)
    db.commit()
    return profile


@pytest.fixture
def admin_client(client, staff):
    def current_staff_override(db: Session = Depends(get_db)):
        return db.query(UserProfile).filter(UserProfile.id == STAFF_ID).first()

    app.dependency_overrides[get_current_staff] = current_staff_override
    return client


@pytest.fixture
def product(db):
    item = Product(
        name="Photobooth Classique",
        description="Impressions illimitées",
        price=750,
        category="standard",
        features=["Impressions illimitées", "Accessoires"],
        available=True,
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


@pytest.fixture
def make_booking(db, product):
    def _make(email="marie.dupont@gmail.com", event_time=time(14, 0), status="pending", **fields):
        from datetime import date

        customer = db.query(Customer).filter(Customer.email == email).first()
        if not customer:
            customer = Customer(
                first_name="Marie", last_name="Dupont", email=email, phone="0612345678", address="Paris"
            )
            db.add(customer)
            db.commit()
        booking = Booking(
            customer_id=customer.id,
            product_id=fields.pop("product_id", product.id),
            event_date=fields.pop("event_date", date(2026, 6, 20)),
            event_time=event_time,
            duration=4,
            address="12 rue de la Paix, Paris",
            event_type="Mariage",
            total_price=fields.pop("total_price", 750),
            status=status,
            **fields,
        )
        db.add(booking)
        db.commit()
        db.refresh(booking)
        return booking

    return _make
