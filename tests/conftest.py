import os

# settings are read at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["LOGIN_RATE_LIMIT"] = "1000/minute"
os.environ["AUTO_CREATE_TABLES"] = "false"

import pytest
from fastapi.testclient import TestClient

from app.core.config import settings
from app.core.security import hash_password, make_token
from app.db.base import Base
from app.db.init_db import create_tables
from app.db.session import SessionLocal, engine
from app.main import app
from app.models.listing import Listing
from app.models.offer import Offer
from app.models.staff import StaffAccount, StaffRole
from app.models.user import User


@pytest.fixture
def db():
    create_tables(engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    return TestClient(app)


@pytest.fixture
def make_staff(db):
    def _make(username, role=StaffRole.admin, region=None, password="secret-pass"):
        acc = StaffAccount(
            username=username,
            email=f"{username}@example.com",
            hashed_password=hash_password(password),
            role=role,
            region=region,
        )
        db.add(acc)
        db.commit()
        db.refresh(acc)
        return acc
    return _make


@pytest.fixture
def manager(make_staff):
    return make_staff("boss", role=StaffRole.manager)


@pytest.fixture
def make_listing(db):
    counter = {"n": 0}

    def _make(**fields):
        counter["n"] += 1
        data = {
            "title": f"Listing {counter['n']}",
            "description": "Lightly used",
            "seller_no": f"S-{counter['n']}",
            "price": 100.0,
            "category": "furniture",
            "cover_image": "cover.jpg",
        }
        data.update(fields)
        obj = Listing(**data)
        db.add(obj)
        db.commit()
        db.refresh(obj)
        return obj
    return _make


@pytest.fixture
def make_customer(db):
    def _make(username, **fields):
        u = User(username=username, email=f"{username}@mail.test", user_password="x", **fields)
        db.add(u)
        db.commit()
        db.refresh(u)
        return u
    return _make


@pytest.fixture
def make_offer(db):
    def _make(listing, buyer=None, seller=None, **fields):
        data = {
            "listing_id": listing.id,
            "buyer_id": buyer.id if buyer else None,
            "seller_id": seller.id if seller else None,
            "offer_amount": 90.0,
            "contact_name": "Asha",
            "contact_phone": "9999999999",
            "message": "Still available?",
        }
        data.update(fields)
        obj = Offer(**data)
        db.add(obj)
        db.commit()
        db.refresh(obj)
        return obj
    return _make


def auth_headers(account) -> dict:
    return {"Authorization": f"Bearer {make_token(account)}"}


def login_cookie(client, account) -> None:
    client.cookies.set(settings.auth_cookie_name, make_token(account))
