"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Header, HTTPException, Request
from sqlalchemy.orm import Session
from budget_planner.domain.monthly import MonthlyComparisonReporter
from budget_planner.domain.scenarios import ScenarioSimulator
from budget_planner.infrastructure.database.repositories import FinanceRecordStore
from budget_planner.infrastructure.database.session import get_db


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_current_user_id(x_user_id: int | None = Header(None, alias="X-User-ID")) -> int:
    """User id resolved upstream by the auth gateway"""
    if x_user_id is None:
        raise HTTPException(status_code=401, detail="User not authenticated")
    return x_user_id


def get_scenario_simulator() -> ScenarioSimulator:
    return ScenarioSimulator()


def get_monthly_reporter(db: Session = Depends(get_db)) -> MonthlyComparisonReporter:
    """Monthly reporter reading from the request's database session"""
    return MonthlyComparisonReporter(FinanceRecordStore(db))
