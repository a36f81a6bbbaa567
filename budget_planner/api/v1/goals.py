"""/v1/goals - savings goal feasibility"""

import time
import logging
from decimal import Decimal
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from budget_planner.api.v1.schemas import GoalAnalysisRequest, GoalFeasibilityResponse
from budget_planner.api.dependencies import get_current_user_id, get_request_id
from budget_planner.config import settings
from budget_planner.domain.exceptions import GoalNotFoundError
from budget_planner.domain.goals import evaluate_goal_feasibility, evaluate_multiple_goals
from budget_planner.infrastructure.database.repositories import GoalRepository, to_domain_goal
from budget_planner.infrastructure.database.session import get_db
from budget_planner.infrastructure.observability.logging import log_analysis
from budget_planner.infrastructure.observability.metrics import record_goal_statuses

router = APIRouter()


@router.post("/goals/analysis", response_model=List[GoalFeasibilityResponse])
def analyze_goals(body: GoalAnalysisRequest, request: Request):
    """Evaluate several goals together, closest deadline first"""
    start_time = time.time()

    results = evaluate_multiple_goals(
        [g.to_domain() for g in body.goals],
        body.monthly_income,
        body.monthly_expenses,
        allocation=body.allocation or settings.goal_allocation,
    )

    statuses = [r.feasibility_status.value for r in results]
    record_goal_statuses(statuses)
    log_analysis(get_request_id(request), "goals", ",".join(statuses), (time.time() - start_time) * 1000)
    return [GoalFeasibilityResponse.model_validate(r) for r in results]


@router.get("/goals/{goal_id}/feasibility", response_model=GoalFeasibilityResponse)
def stored_goal_feasibility(
    goal_id: int,
    request: Request,
    monthly_income: Decimal = Query(..., ge=0),
    monthly_expenses: Decimal = Query(..., ge=0),
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Evaluate one of the user's saved goals"""
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        record = GoalRepository(db).get_goal(user_id, goal_id)
        if record is None:
            raise GoalNotFoundError(goal_id)
    except GoalNotFoundError as e:
        logging.warning(f"Goal lookup failed: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail=str(e))

    report = evaluate_goal_feasibility(to_domain_goal(record), monthly_income, monthly_expenses)

    record_goal_statuses([report.feasibility_status.value])
    log_analysis(
        request_id,
        "goal",
        report.feasibility_status.value,
        (time.time() - start_time) * 1000,
        user_id=user_id,
    )
    return GoalFeasibilityResponse.model_validate(report)
