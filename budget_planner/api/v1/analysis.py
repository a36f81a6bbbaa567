"""/v1/analysis - financial health, budget adherence, spending behavior and monthly comparison"""

import time
import logging
from datetime import date
from decimal import Decimal
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from budget_planner.api.v1.schemas import (
    BehaviorRequest,
    BudgetAdherenceResponse,
    FinancialHealthResponse,
    FinancialInputRequest,
    HealthRequest,
    MonthlyAnalysisResponse,
    SpendingBehaviorResponse,
)
from budget_planner.api.dependencies import get_current_user_id, get_monthly_reporter, get_request_id
from budget_planner.config import settings
from budget_planner.domain.budget import evaluate_budget_adherence, evaluate_category_budget
from budget_planner.domain.exceptions import BudgetRuleNotFoundError, UserNotFoundError
from budget_planner.domain.health import calculate_financial_health
from budget_planner.domain.models import ExpenseCategory, Income
from budget_planner.domain.monthly import MonthlyComparisonReporter
from budget_planner.domain.spending import analyze_spending_behavior
from budget_planner.infrastructure.database.repositories import (
    BudgetRuleRepository,
    ExpenseRepository,
    FinanceRecordStore,
    IncomeRepository,
    UserRepository,
    to_domain_budget_rule,
)
from budget_planner.infrastructure.database.session import get_db
from budget_planner.infrastructure.observability.logging import log_analysis
from budget_planner.infrastructure.observability.metrics import record_analysis, record_health
from budget_planner.utils.date_utils import month_bounds

router = APIRouter()


def _elapsed_ms(start_time: float) -> float:
    return (time.time() - start_time) * 1000


@router.post("/analysis/health", response_model=FinancialHealthResponse)
def financial_health(body: HealthRequest, request: Request):
    """Score financial health from income and a list of expense amounts"""
    start_time = time.time()

    report = calculate_financial_health(body.income, body.expenses)

    record_health(report.health_status.value)
    log_analysis(get_request_id(request), "health", report.health_status.value, _elapsed_ms(start_time))
    return FinancialHealthResponse.model_validate(report)


@router.post("/analysis/input", response_model=FinancialHealthResponse)
def submit_financial_input(
    body: FinancialInputRequest,
    request: Request,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    Record this month's income and expenses for the user, then score them.

    Flow:
    1. Verify the user exists
    2. Persist income and expense records
    3. Compute financial health from the submitted amounts
    """
    start_time = time.time()
    request_id = get_request_id(request)
    record_date = body.date or date.today()

    try:
        if UserRepository(db).get_user(user_id) is None:
            raise UserNotFoundError(user_id)

        expenses = [e.to_domain() for e in body.expenses]
        IncomeRepository(db).create_income(user_id, Income(amount=body.income, date=record_date))
        ExpenseRepository(db).create_expenses(user_id, expenses, default_date=record_date)

        report = calculate_financial_health(body.income, [e.amount for e in expenses])
        db.commit()

    except UserNotFoundError as e:
        db.rollback()
        logging.warning(f"Input rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    record_health(report.health_status.value)
    log_analysis(request_id, "input", report.health_status.value, _elapsed_ms(start_time), user_id=user_id)
    return FinancialHealthResponse.model_validate(report)


@router.get("/analysis/budget", response_model=BudgetAdherenceResponse)
def budget_adherence(
    request: Request,
    actual: Decimal = Query(..., ge=0, description="Actual spending"),
    budget_limit: Decimal = Query(..., gt=0, description="Budget limit"),
):
    start_time = time.time()

    report = evaluate_budget_adherence(actual, budget_limit, on_track_label=settings.budget_on_track_label)

    record_analysis("budget")
    log_analysis(get_request_id(request), "budget", report.status, _elapsed_ms(start_time))
    return BudgetAdherenceResponse.model_validate(report)


@router.get("/analysis/budget/{category}", response_model=BudgetAdherenceResponse)
def category_budget_adherence(
    category: ExpenseCategory,
    request: Request,
    year: int = Query(..., ge=2000, le=2100),
    month: int = Query(..., ge=1, le=12),
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Compare a month's stored spending in one category with the user's budget rule"""
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        record = BudgetRuleRepository(db).get_rule(user_id, category)
        if record is None:
            raise BudgetRuleNotFoundError(category.value)
    except BudgetRuleNotFoundError as e:
        logging.warning(f"Budget lookup failed: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail=str(e))

    start, end = month_bounds(year, month)
    expenses = FinanceRecordStore(db).get_expenses(user_id, start, end)
    report = evaluate_category_budget(
        expenses, to_domain_budget_rule(record), on_track_label=settings.budget_on_track_label
    )

    record_analysis("budget")
    log_analysis(request_id, "budget", report.status, _elapsed_ms(start_time), user_id=user_id)
    return BudgetAdherenceResponse.model_validate(report)


@router.post("/analysis/behavior", response_model=SpendingBehaviorResponse)
def spending_behavior(body: BehaviorRequest, request: Request):
    start_time = time.time()

    report = analyze_spending_behavior([e.to_domain() for e in body.expenses])

    record_analysis("behavior")
    log_analysis(get_request_id(request), "behavior", report.top_category.value, _elapsed_ms(start_time))
    return SpendingBehaviorResponse.model_validate(report)


@router.get("/analysis/monthly", response_model=MonthlyAnalysisResponse)
def monthly_analysis(
    request: Request,
    year: int = Query(..., ge=2000, le=2100),
    month: int = Query(..., ge=1, le=12),
    user_id: int = Depends(get_current_user_id),
    reporter: MonthlyComparisonReporter = Depends(get_monthly_reporter),
):
    """
    Compare the requested month with the one before.

    Returns:
        Totals, percent changes, category breakdown and recommendations
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        report = reporter.get_monthly_analysis(user_id, year, month)
    except UserNotFoundError as e:
        logging.warning(f"Monthly analysis rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail=str(e))

    outcome = "sufficient_data" if report.has_sufficient_data else "insufficient_data"
    record_analysis("monthly")
    log_analysis(request_id, "monthly", outcome, _elapsed_ms(start_time), user_id=user_id)
    return MonthlyAnalysisResponse.model_validate(report)
