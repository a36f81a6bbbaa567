"""Pytest fixtures for testing"""

import pytest
from datetime import date
from decimal import Decimal
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from budget_planner.api.main import create_app
from budget_planner.infrastructure.database.models import Base, User
from budget_planner.infrastructure.database.session import get_db
from budget_planner.domain.models import Expense, ExpenseCategory, ExpenseType


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
def user(db: Session) -> User:
    """Persisted user with no records yet"""
    db_user = User(name="John Doe", email="john.doe@example.com")
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user


@pytest.fixture
def sample_expenses() -> list[Expense]:
    """Typical month: rent, food, transport, entertainment, savings ($3600 total)"""
    day = date(2026, 3, 15)
    return [
        Expense(ExpenseCategory.HOUSING, Decimal("1800"), ExpenseType.FIXED, day),
        Expense(ExpenseCategory.FOOD, Decimal("600"), ExpenseType.VARIABLE, day),
        Expense(ExpenseCategory.TRANSPORTATION, Decimal("300"), ExpenseType.FIXED, day),
        Expense(ExpenseCategory.ENTERTAINMENT, Decimal("400"), ExpenseType.VARIABLE, day),
        Expense(ExpenseCategory.SAVINGS, Decimal("500"), ExpenseType.FIXED, day),
    ]
