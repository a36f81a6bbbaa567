"""/v1/budget-rules - per-category monthly spending limits"""

import time
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from budget_planner.api.v1.schemas import BudgetRuleRequest, BudgetRuleResponse
from budget_planner.api.dependencies import get_current_user_id, get_request_id
from budget_planner.domain.exceptions import UserNotFoundError
from budget_planner.infrastructure.database.repositories import BudgetRuleRepository, UserRepository
from budget_planner.infrastructure.database.session import get_db
from budget_planner.infrastructure.observability.logging import log_analysis

router = APIRouter()


@router.post("/budget-rules", response_model=BudgetRuleResponse)
def set_budget_rule(
    body: BudgetRuleRequest,
    request: Request,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Create or update the user's monthly limit for a category"""
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        if UserRepository(db).get_user(user_id) is None:
            raise UserNotFoundError(user_id)

        record = BudgetRuleRepository(db).upsert_rule(user_id, body.category, body.monthly_limit)
        db.commit()
        db.refresh(record)

    except UserNotFoundError as e:
        db.rollback()
        logging.warning(f"Budget rule rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    log_analysis(request_id, "budget_rule", body.category.value, (time.time() - start_time) * 1000, user_id=user_id)
    return BudgetRuleResponse.model_validate(record)


@router.get("/budget-rules", response_model=List[BudgetRuleResponse])
def list_budget_rules(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return [BudgetRuleResponse.model_validate(r) for r in BudgetRuleRepository(db).list_rules(user_id)]
