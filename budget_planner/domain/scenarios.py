"""What-if scenario simulation - baseline vs hypothetical income/expense state"""

from datetime import date
from decimal import Decimal
from typing import Callable, Iterable, List, Optional, Tuple
from budget_planner.domain.goals import evaluate_goal_feasibility
from budget_planner.domain.health import calculate_financial_health
from budget_planner.domain.models import (
    FeasibilityStatus,
    FinancialHealthReport,
    Goal,
    GoalFeasibilityComparison,
    GoalFeasibilityReport,
    HealthStatus,
    ImpactSeverity,
    Number,
    ScenarioComparisonReport,
    format_fixed,
    round_money,
    to_decimal,
)

HealthCalculator = Callable[[Number, Iterable[Number]], FinancialHealthReport]
GoalEvaluator = Callable[..., GoalFeasibilityReport]

# Surplus changes below this are reported as "Minimal impact"
MINIMAL_SURPLUS_CHANGE = Decimal("10")

_GOAL_STATUS_RANK = {
    FeasibilityStatus.NOT_FEASIBLE: 1,
    FeasibilityStatus.AT_RISK: 2,
    FeasibilityStatus.FEASIBLE: 3,
    FeasibilityStatus.ACHIEVED: 4,
}


def describe_health_change(baseline: HealthStatus, scenario: HealthStatus) -> str:
    if baseline == scenario:
        return f"No change (remains {baseline.value})"
    if scenario.rank > baseline.rank:
        return f"Improved: {baseline.value} → {scenario.value}"
    return f"Declined: {baseline.value} → {scenario.value}"


def describe_goal_impact(baseline: GoalFeasibilityReport, scenario: GoalFeasibilityReport) -> Tuple[str, bool]:
    """Return (impact text, worsened flag) for one goal"""
    surplus_change = scenario.surplus_after_goal - baseline.surplus_after_goal

    if baseline.feasibility_status == scenario.feasibility_status:
        if abs(surplus_change) < MINIMAL_SURPLUS_CHANGE:
            return "Minimal impact", False
        if surplus_change > 0:
            return f"Easier to achieve (${format_fixed(abs(surplus_change))} more surplus)", False
        return f"Harder to achieve (${format_fixed(abs(surplus_change))} less surplus)", True

    baseline_rank = _GOAL_STATUS_RANK.get(baseline.feasibility_status, 0)
    scenario_rank = _GOAL_STATUS_RANK.get(scenario.feasibility_status, 0)
    transition = f"{baseline.feasibility_status.value} → {scenario.feasibility_status.value}"

    if scenario_rank > baseline_rank:
        return f"Status improved: {transition}", False
    return f"Status worsened: {transition}", True


def determine_impact_severity(
    savings_difference: Decimal,
    savings_rate_difference: Decimal,
    baseline_status: HealthStatus,
    scenario_status: HealthStatus,
) -> ImpactSeverity:
    """
    Overall severity of a scenario.

    - Status declined: Severe (rate drop >= 20 pts), Moderate (>= 10), else Minor
    - Status improved: Positive
    - Unchanged: Minimal (|rate change| < 5), Minor if savings fell, else Positive
    """
    if scenario_status.rank < baseline_status.rank:
        if savings_rate_difference <= -20:
            return ImpactSeverity.SEVERE
        elif savings_rate_difference <= -10:
            return ImpactSeverity.MODERATE
        return ImpactSeverity.MINOR

    if scenario_status.rank > baseline_status.rank:
        return ImpactSeverity.POSITIVE

    if abs(savings_rate_difference) < 5:
        return ImpactSeverity.MINIMAL
    elif savings_difference < 0:
        return ImpactSeverity.MINOR
    return ImpactSeverity.POSITIVE


def build_recommendations(
    baseline: FinancialHealthReport,
    scenario: FinancialHealthReport,
    income_difference: Decimal,
    expenses_difference: Decimal,
    goal_impacts: List[GoalFeasibilityComparison],
) -> List[str]:
    """Every applicable rule contributes one sentence"""
    recommendations = []

    if scenario.savings_amount < baseline.savings_amount:
        savings_loss = baseline.savings_amount - scenario.savings_amount
        recommendations.append(f"You would lose ${format_fixed(savings_loss)} in monthly savings under this scenario.")

    if income_difference < 0:
        recommendations.append(
            f"To maintain your current financial health, consider reducing expenses by "
            f"${format_fixed(abs(income_difference))}/month."
        )

    if expenses_difference > 0:
        if scenario.savings_amount < 0:
            recommendations.append(
                "This expense increase would push you into deficit. Find ways to offset it or avoid if possible."
            )
        else:
            recommendations.append(
                f"This expense increase would reduce your monthly savings to ${format_fixed(scenario.savings_amount)}."
            )

    worsened = [g for g in goal_impacts if g.worsened]
    if worsened:
        recommendations.append(
            f"{len(worsened)} goal(s) would become harder or impossible to achieve. "
            "Consider adjusting goal timelines or amounts."
        )

    if scenario.savings_amount > baseline.savings_amount:
        gain = scenario.savings_amount - baseline.savings_amount
        recommendations.append(
            f"This scenario would improve your savings by ${format_fixed(gain)}/month. "
            "Consider using this for additional goals or investments."
        )

    if scenario.health_status in (HealthStatus.POOR, HealthStatus.CRITICAL):
        recommendations.append("Build an emergency fund of 3-6 months of expenses before this scenario occurs.")

    return recommendations


def _format_percentage(value: Decimal) -> str:
    """20.0 -> '20', 12.5 -> '12.5'"""
    return f"{value.normalize():f}"


class ScenarioSimulator:
    """Compares the current financial state against a hypothetical one"""

    def __init__(
        self,
        health_calculator: HealthCalculator = calculate_financial_health,
        goal_evaluator: GoalEvaluator = evaluate_goal_feasibility,
    ):
        self.health_calculator = health_calculator
        self.goal_evaluator = goal_evaluator

    def simulate_income_reduction(
        self,
        current_income: Number,
        current_expenses: Number,
        reduction_percentage: Number,
        goals: Optional[Iterable[Goal]] = None,
        today: Optional[date] = None,
    ) -> ScenarioComparisonReport:
        """New income = income x (1 - pct / 100); expenses unchanged"""
        current_income = to_decimal(current_income)
        reduction_percentage = to_decimal(reduction_percentage)
        scenario_income = current_income * (1 - reduction_percentage / 100)

        pct = _format_percentage(reduction_percentage)
        return self.simulate_custom(
            current_income,
            current_expenses,
            scenario_income,
            current_expenses,
            f"Income Reduction: {pct}%",
            goals=goals,
            description=(
                f"Simulates the impact of a {pct}% reduction in income from "
                f"${format_fixed(current_income)} to ${format_fixed(scenario_income)}."
            ),
            today=today,
        )

    def simulate_expense_increase(
        self,
        current_income: Number,
        current_expenses: Number,
        increase_amount: Number,
        goals: Optional[Iterable[Goal]] = None,
        today: Optional[date] = None,
    ) -> ScenarioComparisonReport:
        """New expenses = expenses + amount; income unchanged"""
        current_expenses = to_decimal(current_expenses)
        increase_amount = to_decimal(increase_amount)
        scenario_expenses = current_expenses + increase_amount

        return self.simulate_custom(
            current_income,
            current_expenses,
            current_income,
            scenario_expenses,
            f"Expense Increase: +${format_fixed(increase_amount)}",
            goals=goals,
            description=(
                f"Simulates the impact of increasing monthly expenses by ${format_fixed(increase_amount)} "
                f"from ${format_fixed(current_expenses)} to ${format_fixed(scenario_expenses)}."
            ),
            today=today,
        )

    def simulate_custom(
        self,
        current_income: Number,
        current_expenses: Number,
        new_income: Number,
        new_expenses: Number,
        scenario_name: str,
        goals: Optional[Iterable[Goal]] = None,
        description: Optional[str] = None,
        today: Optional[date] = None,
    ) -> ScenarioComparisonReport:
        """
        Main entry point: compare baseline and scenario health and goal outlook.

        Each side is scored as a single-total expense list.
        """
        current_income = to_decimal(current_income)
        current_expenses = to_decimal(current_expenses)
        new_income = to_decimal(new_income)
        new_expenses = to_decimal(new_expenses)

        baseline_health = self.health_calculator(current_income, [current_expenses])
        scenario_health = self.health_calculator(new_income, [new_expenses])

        income_difference = new_income - current_income
        expenses_difference = new_expenses - current_expenses
        savings_difference = scenario_health.savings_amount - baseline_health.savings_amount
        savings_rate_difference = scenario_health.savings_rate - baseline_health.savings_rate

        goal_impacts = []
        if goals:
            goal_impacts = self.compare_goals(
                goals, current_income, current_expenses, new_income, new_expenses, today=today
            )

        if description is None:
            description = scenario_name or (
                f"Custom scenario with income ${format_fixed(new_income)} and expenses ${format_fixed(new_expenses)}."
            )

        return ScenarioComparisonReport(
            scenario_name=scenario_name,
            scenario_description=description,
            baseline_income=current_income,
            baseline_expenses=current_expenses,
            baseline_health=baseline_health,
            scenario_income=new_income,
            scenario_expenses=new_expenses,
            scenario_health=scenario_health,
            income_difference=round_money(income_difference),
            expenses_difference=round_money(expenses_difference),
            savings_difference=round_money(savings_difference),
            savings_rate_difference=round_money(savings_rate_difference),
            health_status_change=describe_health_change(
                baseline_health.health_status, scenario_health.health_status
            ),
            goal_impacts=goal_impacts,
            impact_severity=determine_impact_severity(
                savings_difference,
                savings_rate_difference,
                baseline_health.health_status,
                scenario_health.health_status,
            ),
            recommendations=build_recommendations(
                baseline_health,
                scenario_health,
                income_difference,
                expenses_difference,
                goal_impacts,
            ),
        )

    def compare_goals(
        self,
        goals: Iterable[Goal],
        baseline_income: Decimal,
        baseline_expenses: Decimal,
        scenario_income: Decimal,
        scenario_expenses: Decimal,
        today: Optional[date] = None,
    ) -> List[GoalFeasibilityComparison]:
        """Evaluate each goal under both states"""
        comparisons = []

        for goal in goals:
            baseline = self.goal_evaluator(goal, baseline_income, baseline_expenses, today=today)
            scenario = self.goal_evaluator(goal, scenario_income, scenario_expenses, today=today)
            impact, worsened = describe_goal_impact(baseline, scenario)

            comparisons.append(
                GoalFeasibilityComparison(
                    goal_title=goal.title,
                    baseline_status=baseline.feasibility_status,
                    scenario_status=scenario.feasibility_status,
                    baseline_surplus_after_goal=baseline.surplus_after_goal,
                    scenario_surplus_after_goal=scenario.surplus_after_goal,
                    status_changed=baseline.feasibility_status != scenario.feasibility_status,
                    impact=impact,
                    worsened=worsened,
                )
            )

        return comparisons
