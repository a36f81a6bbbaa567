"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, ConfigDict, Field
import datetime as dt
from decimal import Decimal
from typing import Dict, List, Optional

from budget_planner.domain.models import (
    Expense,
    ExpenseCategory,
    ExpenseType,
    FeasibilityStatus,
    Goal,
    GoalAllocation,
    HealthStatus,
    ImpactSeverity,
)


# ---- Requests ----


class ExpenseSchema(BaseModel):
    """Single expense in a request body"""

    category: ExpenseCategory
    amount: Decimal = Field(..., ge=0, description="Expense amount")
    type: ExpenseType = ExpenseType.VARIABLE
    date: Optional[dt.date] = None

    def to_domain(self) -> Expense:
        return Expense(category=self.category, amount=self.amount, type=self.type, date=self.date)


class GoalSchema(BaseModel):
    id: Optional[int] = None
    title: str = Field(..., min_length=1)
    target_amount: Decimal = Field(..., gt=0)
    current_saved: Decimal = Field(Decimal("0"), ge=0)
    deadline: dt.date

    def to_domain(self) -> Goal:
        return Goal(
            id=self.id,
            title=self.title,
            target_amount=self.target_amount,
            current_saved=self.current_saved,
            deadline=self.deadline,
        )


class HealthRequest(BaseModel):
    """Request body for POST /v1/analysis/health"""

    income: Decimal = Field(..., gt=0, description="Monthly income")
    expenses: List[Decimal] = Field(..., min_length=1, description="Expense amounts")


class FinancialInputRequest(BaseModel):
    """Request body for POST /v1/analysis/input"""

    income: Decimal = Field(..., gt=0)
    expenses: List[ExpenseSchema] = Field(..., min_length=1)
    date: Optional[dt.date] = Field(None, description="Date stamped on records without one (default: today)")


class BudgetRuleRequest(BaseModel):
    """Request body for POST /v1/budget-rules"""

    category: ExpenseCategory
    monthly_limit: Decimal = Field(..., gt=0, description="Monthly spending limit")


class BehaviorRequest(BaseModel):
    expenses: List[ExpenseSchema] = Field(..., min_length=1)


class GoalAnalysisRequest(BaseModel):
    """Request body for POST /v1/goals/analysis"""

    monthly_income: Decimal = Field(..., ge=0)
    monthly_expenses: Decimal = Field(..., ge=0)
    goals: List[GoalSchema] = Field(..., min_length=1)
    allocation: Optional[GoalAllocation] = None


class ScenarioBase(BaseModel):
    current_income: Decimal = Field(..., gt=0)
    current_expenses: Decimal = Field(..., ge=0)
    goals: List[GoalSchema] = Field(default_factory=list)


class IncomeReductionRequest(ScenarioBase):
    reduction_percentage: Decimal = Field(..., gt=0, le=100)


class ExpenseIncreaseRequest(ScenarioBase):
    increase_amount: Decimal = Field(..., gt=0)


class CustomScenarioRequest(ScenarioBase):
    new_income: Decimal = Field(..., ge=0)
    new_expenses: Decimal = Field(..., ge=0)
    scenario_name: str = ""


# ---- Responses ----


class ReportSchema(BaseModel):
    """Responses are built straight from domain report dataclasses"""

    model_config = ConfigDict(from_attributes=True)


class FinancialHealthResponse(ReportSchema):
    total_income: Decimal
    total_expenses: Decimal
    savings_amount: Decimal
    savings_rate: Decimal
    expense_ratio: Decimal
    health_score: Decimal
    health_status: HealthStatus
    recommendation: str


class BudgetAdherenceResponse(ReportSchema):
    actual: Decimal
    limit: Decimal
    variance: Decimal
    variance_percent: Decimal
    adherence_score: Decimal
    is_within_budget: bool
    status: str


class BudgetRuleResponse(ReportSchema):
    id: int
    category: ExpenseCategory
    monthly_limit: Decimal


class SpendingBehaviorResponse(ReportSchema):
    category_breakdown: Dict[ExpenseCategory, Decimal]
    top_category: ExpenseCategory
    top_category_amount: Decimal
    average_amount: Decimal
    transaction_count: int
    type_distribution: Dict[ExpenseType, int]
    insights: List[str]


class GoalFeasibilityResponse(ReportSchema):
    goal_id: Optional[int] = None
    goal_title: str
    target_amount: Decimal
    current_saved: Decimal
    deadline: dt.date
    remaining_amount: Decimal
    months_remaining: int
    required_monthly_savings: Decimal
    available_surplus: Decimal
    surplus_after_goal: Decimal
    feasibility_score: Decimal
    feasibility_status: FeasibilityStatus
    recommendation: str


class GoalComparisonSchema(ReportSchema):
    goal_title: str
    baseline_status: FeasibilityStatus
    scenario_status: FeasibilityStatus
    baseline_surplus_after_goal: Decimal
    scenario_surplus_after_goal: Decimal
    status_changed: bool
    impact: str


class ScenarioComparisonResponse(ReportSchema):
    scenario_name: str
    scenario_description: str
    baseline_income: Decimal
    baseline_expenses: Decimal
    baseline_health: FinancialHealthResponse
    scenario_income: Decimal
    scenario_expenses: Decimal
    scenario_health: FinancialHealthResponse
    income_difference: Decimal
    expenses_difference: Decimal
    savings_difference: Decimal
    savings_rate_difference: Decimal
    health_status_change: str
    goal_impacts: List[GoalComparisonSchema]
    impact_severity: ImpactSeverity
    recommendations: List[str]


class RecommendationSchema(ReportSchema):
    type: str
    icon: str
    title: str
    message: str
    highlighted_value: str


class CategoryShareSchema(ReportSchema):
    category: ExpenseCategory
    amount: Decimal
    percentage: Decimal


class MonthlyAnalysisResponse(ReportSchema):
    year: int
    month: int
    total_income: Decimal
    total_expenses: Decimal
    total_savings: Decimal
    savings_rate: Decimal
    income_change: Decimal
    expense_change: Decimal
    savings_change: Decimal
    savings_rate_change: Decimal
    expense_breakdown: List[CategoryShareSchema]
    recommendations: List[RecommendationSchema]
    has_sufficient_data: bool
