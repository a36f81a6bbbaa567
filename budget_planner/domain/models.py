"""Domain models - pure Python dataclasses representing budget entities and reports"""

from dataclasses import dataclass, field
import datetime as dt
from decimal import Decimal, ROUND_HALF_EVEN, ROUND_HALF_UP
from enum import Enum
from typing import Dict, List, Optional, Union

Number = Union[Decimal, int, float, str]

CENTS = Decimal("0.01")


def to_decimal(value: Number) -> Decimal:
    """Coerce a numeric input to Decimal without float artefacts"""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_money(value: Decimal) -> Decimal:
    """Round to 2 decimal places (banker's rounding) for display"""
    return value.quantize(CENTS, rounding=ROUND_HALF_EVEN)


def format_fixed(value: Number, places: int = 2) -> str:
    """Fixed-point text for messages; halves round away from zero (512.5 -> '513')"""
    exponent = Decimal(1).scaleb(-places)
    return f"{to_decimal(value).quantize(exponent, rounding=ROUND_HALF_UP):f}"


class ExpenseCategory(str, Enum):
    HOUSING = "Housing"
    TRANSPORTATION = "Transportation"
    FOOD = "Food"
    UTILITIES = "Utilities"
    HEALTHCARE = "Healthcare"
    ENTERTAINMENT = "Entertainment"
    SHOPPING = "Shopping"
    EDUCATION = "Education"
    INSURANCE = "Insurance"
    SAVINGS = "Savings"
    OTHER = "Other"


class ExpenseType(str, Enum):
    FIXED = "Fixed"
    VARIABLE = "Variable"
    ONE_TIME = "OneTime"


class HealthStatus(str, Enum):
    CRITICAL = "Critical"
    POOR = "Poor"
    FAIR = "Fair"
    GOOD = "Good"
    EXCELLENT = "Excellent"

    @property
    def rank(self) -> int:
        return _HEALTH_RANK[self]


_HEALTH_RANK = {
    HealthStatus.CRITICAL: 1,
    HealthStatus.POOR: 2,
    HealthStatus.FAIR: 3,
    HealthStatus.GOOD: 4,
    HealthStatus.EXCELLENT: 5,
}


class FeasibilityStatus(str, Enum):
    DEADLINE_PASSED = "Deadline Passed"
    ACHIEVED = "Achieved"
    FEASIBLE = "Feasible"
    AT_RISK = "At Risk"
    NOT_FEASIBLE = "Not Feasible"


class ImpactSeverity(str, Enum):
    SEVERE = "Severe"
    MODERATE = "Moderate"
    MINOR = "Minor"
    MINIMAL = "Minimal"
    POSITIVE = "Positive"


class GoalAllocation(str, Enum):
    """How surplus is shared when several goals are evaluated together"""

    INDEPENDENT = "independent"  # every goal sees the full surplus
    SEQUENTIAL = "sequential"  # earlier deadlines consume surplus first


@dataclass(frozen=True)
class Expense:
    """Single categorized expense record"""

    category: ExpenseCategory
    amount: Decimal
    type: ExpenseType = ExpenseType.VARIABLE
    date: Optional[dt.date] = None


@dataclass(frozen=True)
class Income:
    """Income received on a given day"""

    amount: Decimal
    date: dt.date


@dataclass(frozen=True)
class Goal:
    """Savings goal owned by the user; the engine only reads it"""

    title: str
    target_amount: Decimal
    current_saved: Decimal
    deadline: dt.date
    id: Optional[int] = None


@dataclass(frozen=True)
class BudgetRule:
    """Monthly spending limit the user set for one category"""

    category: ExpenseCategory
    monthly_limit: Decimal


@dataclass
class FinancialHealthReport:
    total_income: Decimal
    total_expenses: Decimal
    savings_amount: Decimal
    savings_rate: Decimal
    expense_ratio: Decimal
    health_score: Decimal
    health_status: HealthStatus
    recommendation: str


@dataclass
class BudgetAdherenceReport:
    actual: Decimal
    limit: Decimal
    variance: Decimal
    variance_percent: Decimal
    adherence_score: Decimal
    is_within_budget: bool
    status: str


@dataclass
class SpendingBehaviorReport:
    category_breakdown: Dict[ExpenseCategory, Decimal]
    top_category: ExpenseCategory
    top_category_amount: Decimal
    average_amount: Decimal
    transaction_count: int
    type_distribution: Dict[ExpenseType, int]
    insights: List[str]


@dataclass
class GoalFeasibilityReport:
    goal_id: Optional[int]
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


@dataclass
class GoalFeasibilityComparison:
    """How a single goal fares under baseline vs scenario conditions"""

    goal_title: str
    baseline_status: FeasibilityStatus
    scenario_status: FeasibilityStatus
    baseline_surplus_after_goal: Decimal
    scenario_surplus_after_goal: Decimal
    status_changed: bool
    impact: str
    worsened: bool


@dataclass
class ScenarioComparisonReport:
    scenario_name: str
    scenario_description: str
    baseline_income: Decimal
    baseline_expenses: Decimal
    baseline_health: FinancialHealthReport
    scenario_income: Decimal
    scenario_expenses: Decimal
    scenario_health: FinancialHealthReport
    income_difference: Decimal
    expenses_difference: Decimal
    savings_difference: Decimal
    savings_rate_difference: Decimal
    health_status_change: str
    goal_impacts: List[GoalFeasibilityComparison]
    impact_severity: ImpactSeverity
    recommendations: List[str]


@dataclass
class Recommendation:
    """Month-over-month tip rendered as a card by the frontend"""

    type: str  # "success", "warning", "tip" or "info"
    icon: str  # "up", "down", "check" or "lightbulb"
    title: str
    message: str
    highlighted_value: str


@dataclass
class CategoryShare:
    category: ExpenseCategory
    amount: Decimal
    percentage: Decimal


@dataclass
class MonthlyAnalysisReport:
    year: int
    month: int
    total_income: Decimal = Decimal("0")
    total_expenses: Decimal = Decimal("0")
    total_savings: Decimal = Decimal("0")
    savings_rate: Decimal = Decimal("0")
    income_change: Decimal = Decimal("0")
    expense_change: Decimal = Decimal("0")
    savings_change: Decimal = Decimal("0")
    savings_rate_change: Decimal = Decimal("0")
    expense_breakdown: List[CategoryShare] = field(default_factory=list)
    recommendations: List[Recommendation] = field(default_factory=list)
    has_sufficient_data: bool = False
