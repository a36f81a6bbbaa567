"""/v1/scenarios - what-if simulations against the current budget"""

import time
from fastapi import APIRouter, Depends, Request

from budget_planner.api.v1.schemas import (
    CustomScenarioRequest,
    ExpenseIncreaseRequest,
    IncomeReductionRequest,
    ScenarioComparisonResponse,
)
from budget_planner.api.dependencies import get_request_id, get_scenario_simulator
from budget_planner.domain.models import ScenarioComparisonReport
from budget_planner.domain.scenarios import ScenarioSimulator
from budget_planner.infrastructure.observability.logging import log_analysis
from budget_planner.infrastructure.observability.metrics import record_scenario

router = APIRouter()


def _respond(report: ScenarioComparisonReport, request: Request, start_time: float) -> ScenarioComparisonResponse:
    severity = report.impact_severity.value
    record_scenario(severity)
    log_analysis(get_request_id(request), "scenario", severity, (time.time() - start_time) * 1000)
    return ScenarioComparisonResponse.model_validate(report)


@router.post("/scenarios/income-reduction", response_model=ScenarioComparisonResponse)
def income_reduction(
    body: IncomeReductionRequest,
    request: Request,
    simulator: ScenarioSimulator = Depends(get_scenario_simulator),
):
    start_time = time.time()
    report = simulator.simulate_income_reduction(
        body.current_income,
        body.current_expenses,
        body.reduction_percentage,
        goals=[g.to_domain() for g in body.goals],
    )
    return _respond(report, request, start_time)


@router.post("/scenarios/expense-increase", response_model=ScenarioComparisonResponse)
def expense_increase(
    body: ExpenseIncreaseRequest,
    request: Request,
    simulator: ScenarioSimulator = Depends(get_scenario_simulator),
):
    start_time = time.time()
    report = simulator.simulate_expense_increase(
        body.current_income,
        body.current_expenses,
        body.increase_amount,
        goals=[g.to_domain() for g in body.goals],
    )
    return _respond(report, request, start_time)


@router.post("/scenarios/custom", response_model=ScenarioComparisonResponse)
def custom_scenario(
    body: CustomScenarioRequest,
    request: Request,
    simulator: ScenarioSimulator = Depends(get_scenario_simulator),
):
    """Compare the current state with arbitrary new income and expenses"""
    start_time = time.time()
    report = simulator.simulate_custom(
        body.current_income,
        body.current_expenses,
        body.new_income,
        body.new_expenses,
        body.scenario_name,
        goals=[g.to_domain() for g in body.goals],
    )
    return _respond(report, request, start_time)
