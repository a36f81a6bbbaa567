"""Goal feasibility - can the monthly surplus fund a savings goal by its deadline"""

from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional, Tuple
from budget_planner.domain.models import (
    FeasibilityStatus,
    Goal,
    GoalAllocation,
    GoalFeasibilityReport,
    Number,
    format_fixed,
    round_money,
    to_decimal,
)
from budget_planner.utils.date_utils import months_between

COMFORTABLE_SHARE = Decimal("0.3")
AT_RISK_SHARE = Decimal("-0.2")

# Statuses that do not need any further monthly savings
SETTLED_STATUSES = (FeasibilityStatus.ACHIEVED, FeasibilityStatus.DEADLINE_PASSED)
# Statuses whose required savings are committed in sequential allocation
COMMITTED_STATUSES = (FeasibilityStatus.FEASIBLE, FeasibilityStatus.AT_RISK)


def determine_feasibility(
    months_remaining: int,
    remaining_amount: Decimal,
    required_monthly_savings: Decimal,
    available_surplus: Decimal,
    surplus_after_goal: Decimal,
) -> Tuple[FeasibilityStatus, str]:
    """
    Pick the feasibility status and advisory text, first match wins.

    Bands are relative to the available surplus:
    - after-goal surplus >= 30% of surplus: comfortably feasible
    - after-goal surplus >= 0: feasible but tight
    - deficit within 20% of surplus: at risk
    - otherwise not feasible
    """
    if months_remaining <= 0:
        return (
            FeasibilityStatus.DEADLINE_PASSED,
            "The goal deadline has passed. Consider extending the deadline or adjusting the target amount.",
        )
    if remaining_amount <= 0:
        return FeasibilityStatus.ACHIEVED, "Congratulations! You've already reached this goal."
    if surplus_after_goal >= available_surplus * COMFORTABLE_SHARE:
        return (
            FeasibilityStatus.FEASIBLE,
            f"This goal is easily achievable. You'll have ${format_fixed(surplus_after_goal)} remaining each month "
            "after saving for this goal.",
        )
    if surplus_after_goal >= 0:
        return (
            FeasibilityStatus.FEASIBLE,
            f"This goal is achievable but will leave limited surplus (${format_fixed(surplus_after_goal)}/month). "
            "Monitor your spending carefully.",
        )
    if surplus_after_goal >= available_surplus * AT_RISK_SHARE:
        return (
            FeasibilityStatus.AT_RISK,
            f"This goal is challenging. You need to reduce expenses by ${format_fixed(abs(surplus_after_goal))}/month "
            "or increase income to meet this goal comfortably.",
        )
    if available_surplus <= 0:
        return (
            FeasibilityStatus.NOT_FEASIBLE,
            "You're currently spending more than you earn. Focus on reducing expenses and increasing income "
            "before pursuing this goal.",
        )
    return (
        FeasibilityStatus.NOT_FEASIBLE,
        f"This goal requires ${format_fixed(required_monthly_savings)}/month "
        f"but you only have ${format_fixed(available_surplus)} available. "
        "Consider extending the deadline, reducing the target amount, or significantly cutting expenses.",
    )


def evaluate_goal_feasibility(
    goal: Goal,
    monthly_income: Number,
    monthly_expenses: Number,
    today: Optional[date] = None,
) -> GoalFeasibilityReport:
    """
    Project whether a goal is reachable from the current monthly surplus.

    Args:
        goal: Goal to evaluate
        monthly_income: Income per month
        monthly_expenses: Expenses per month
        today: Reference date (default: date.today())

    Returns:
        GoalFeasibilityReport with required savings, surplus and status
    """
    if today is None:
        today = date.today()

    target_amount = to_decimal(goal.target_amount)
    current_saved = to_decimal(goal.current_saved)

    remaining_amount = target_amount - current_saved
    months_remaining = months_between(today, goal.deadline)

    # Past or current-month deadlines need the whole remainder now
    required_monthly_savings = remaining_amount / months_remaining if months_remaining > 0 else remaining_amount

    available_surplus = to_decimal(monthly_income) - to_decimal(monthly_expenses)
    surplus_after_goal = available_surplus - required_monthly_savings

    # > 100 means the surplus covers the goal with room to spare
    feasibility_score = (
        available_surplus / required_monthly_savings * 100 if required_monthly_savings > 0 else Decimal("100")
    )

    status, recommendation = determine_feasibility(
        months_remaining,
        remaining_amount,
        required_monthly_savings,
        available_surplus,
        surplus_after_goal,
    )

    return GoalFeasibilityReport(
        goal_id=goal.id,
        goal_title=goal.title,
        target_amount=target_amount,
        current_saved=current_saved,
        deadline=goal.deadline,
        remaining_amount=round_money(remaining_amount),
        months_remaining=months_remaining,
        required_monthly_savings=round_money(required_monthly_savings),
        available_surplus=round_money(available_surplus),
        surplus_after_goal=round_money(surplus_after_goal),
        feasibility_score=round_money(feasibility_score),
        feasibility_status=status,
        recommendation=recommendation,
    )


def evaluate_multiple_goals(
    goals: Iterable[Goal],
    monthly_income: Number,
    monthly_expenses: Number,
    today: Optional[date] = None,
    allocation: GoalAllocation = GoalAllocation.INDEPENDENT,
) -> List[GoalFeasibilityReport]:
    """
    Evaluate goals in deadline order (closest first).

    INDEPENDENT evaluates every goal against the full surplus. SEQUENTIAL
    treats savings committed to earlier Feasible/At Risk goals as extra
    expenses for the later ones.

    In both modes, if the combined monthly requirement of the open goals
    exceeds the full surplus, every Feasible goal gets a collective warning.
    """
    if today is None:
        today = date.today()

    monthly_income = to_decimal(monthly_income)
    monthly_expenses = to_decimal(monthly_expenses)
    available_surplus = monthly_income - monthly_expenses

    committed = Decimal("0")
    results: List[GoalFeasibilityReport] = []

    for goal in sorted(goals, key=lambda g: g.deadline):
        expenses = monthly_expenses + committed if allocation == GoalAllocation.SEQUENTIAL else monthly_expenses
        feasibility = evaluate_goal_feasibility(goal, monthly_income, expenses, today=today)

        if feasibility.feasibility_status in COMMITTED_STATUSES:
            committed += feasibility.required_monthly_savings

        results.append(feasibility)

    if len(results) > 1:
        total_required = sum(
            (r.required_monthly_savings for r in results if r.feasibility_status not in SETTLED_STATUSES),
            Decimal("0"),
        )

        if total_required > available_surplus:
            for result in results:
                if result.feasibility_status == FeasibilityStatus.FEASIBLE:
                    result.recommendation += (
                        f" Note: Pursuing all {len(results)} goals simultaneously requires "
                        f"${format_fixed(total_required)}/month "
                        f"but you only have ${format_fixed(available_surplus)} available."
                    )

    return results
