"""
Pytest configuration and fixtures for backend tests.
"""

import os
import tempfile

# Settings are read once at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("SEED_ON_STARTUP", "false")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="cityfood-uploads-"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from cityfood_api.main import app
from cityfood_api.models import (
    Address, Base, Business, Category, MenuItem, MenuSection, User,
)
from shared.infrastructure.db import build_engine, get_db
from shared.security.password import hash_password


# SQLite in-memory database for testing
engine = build_engine("sqlite://")
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

ADMIN_EMAIL = "admin@test.com"
ADMIN_PASSWORD = "testpass123"


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    Uses SQLite in-memory for isolation.
    """
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """
    Create a test client with database session override.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def seed_admin_user(db_session):
    """Create an admin user for testing authenticated endpoints."""
    user = User(
        email=ADMIN_EMAIL,
        password=hash_password(ADMIN_PASSWORD),
        name="Amadou Traoré",
        phone="+22370000000",
        is_admin=True,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def auth_headers(client, seed_admin_user):
    """Get authentication headers for API calls."""
    response = client.post(
        "/api/auth/login",
        json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200, f"Login failed: {response.json()}"
    token = response.json()["accessToken"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def seed_customer(db_session):
    """Create a non-admin customer."""
    user = User(
        email="client@test.com",
        password=hash_password("client123"),
        name="Mariam Diallo",
        phone="+22376000000",
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def customer_auth_headers(client, seed_customer):
    """Bearer headers for a valid token without the admin claim."""
    from shared.security.auth import sign_jwt

    token = sign_jwt({"sub": seed_customer.id, "email": seed_customer.email, "isAdmin": False})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def seed_address(db_session, seed_customer):
    address = Address(
        street="Rue 12 Hamdallaye",
        city="Bamako",
        zip_code="1000",
        country="Mali",
        user_id=seed_customer.id,
    )
    db_session.add(address)
    db_session.commit()
    db_session.refresh(address)
    return address


@pytest.fixture
def seed_category(db_session):
    """Create a test category - shared fixture for all tests."""
    category = Category(name="Restaurant", slug="restaurant")
    db_session.add(category)
    db_session.commit()
    db_session.refresh(category)
    return category


@pytest.fixture
def seed_business(db_session, seed_category, seed_admin_user):
    business = Business(
        name="Chez Fatou",
        slug="chez-fatou",
        description="Cuisine malienne",
        category_id=seed_category.id,
        is_open=True,
    )
    business.admins = [seed_admin_user]
    db_session.add(business)
    db_session.commit()
    db_session.refresh(business)
    return business


@pytest.fixture
def seed_section(db_session, seed_business):
    section = MenuSection(name="Plat Principal", business_id=seed_business.id)
    db_session.add(section)
    db_session.commit()
    db_session.refresh(section)
    return section


@pytest.fixture
def seed_menu_item(db_session, seed_section):
    item = MenuItem(
        name="Poulet Yassa",
        description="Poulet mariné aux oignons",
        price=2000,
        type="plat",
        menu_section_id=seed_section.id,
    )
    db_session.add(item)
    db_session.commit()
    db_session.refresh(item)
    return item
