"""Pytest fixtures for testing"""

import os

# Point the app at SQLite before settings are loaded
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import pytest
from datetime import date
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from visaloan_gateway.api.main import create_app
from visaloan_gateway.infrastructure.database.models import Base
from visaloan_gateway.infrastructure.database.session import get_db


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def today() -> date:
    """Fixed calculation date so visa windows are reproducible"""
    return date(2025, 1, 15)


@pytest.fixture
def lead_payload() -> dict:
    """Email-flow request body for a customer with a 10M / 36-month quote"""
    return {
        "customer_name": "Nguyen Van A",
        "customer_phone": "01012345678",
        "customer_email": "nguyen.vana@gmail.com",
        "loan_amount": 10_000_000,
        "monthly_payment": 372_000,
        "loan_duration": 36,
        "manager_name": "Kim Minsu",
        "manager_contact": "01098765432",
        "corridor": "VN",
    }
