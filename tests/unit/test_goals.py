"""Unit tests for goal feasibility"""

import pytest
from datetime import date
from decimal import Decimal
from budget_planner.domain.goals import evaluate_goal_feasibility, evaluate_multiple_goals
from budget_planner.domain.models import FeasibilityStatus, Goal, GoalAllocation
from budget_planner.utils.date_utils import months_between

TODAY = date(2026, 1, 15)


def _goal(title="Emergency fund", target=10000, saved=2000, deadline=date(2027, 1, 15)):
    return Goal(title=title, target_amount=Decimal(target), current_saved=Decimal(saved), deadline=deadline)


def test_reference_goal_is_feasible():
    """$8000 left over 12 months against a $1400 surplus"""
    report = evaluate_goal_feasibility(_goal(), 5000, 3600, today=TODAY)

    assert report.remaining_amount == Decimal("8000.00")
    assert report.months_remaining == 12
    assert report.required_monthly_savings == Decimal("666.67")
    assert report.available_surplus == Decimal("1400.00")
    assert report.surplus_after_goal == Decimal("733.33")
    assert report.feasibility_score == Decimal("210.00")
    assert report.feasibility_status == FeasibilityStatus.FEASIBLE
    assert report.recommendation == (
        "This goal is easily achievable. You'll have $733.33 remaining each month after saving for this goal."
    )


@pytest.mark.parametrize(
    "deadline,expected",
    [
        (date(2026, 1, 15), 0),  # today
        (date(2025, 12, 1), 0),  # past
        (date(2026, 2, 14), 0),  # day not reached yet
        (date(2026, 2, 15), 1),
        (date(2026, 3, 10), 1),
        (date(2028, 1, 20), 24),
    ],
)
def test_months_between(deadline, expected):
    assert months_between(TODAY, deadline) == expected


def test_deadline_today_has_passed():
    report = evaluate_goal_feasibility(_goal(deadline=TODAY), 5000, 3600, today=TODAY)

    assert report.months_remaining == 0
    assert report.feasibility_status == FeasibilityStatus.DEADLINE_PASSED
    # Whole remainder is due at once
    assert report.required_monthly_savings == Decimal("8000.00")


def test_deadline_check_precedes_achieved():
    report = evaluate_goal_feasibility(_goal(saved=12000, deadline=date(2025, 6, 1)), 5000, 3600, today=TODAY)
    assert report.feasibility_status == FeasibilityStatus.DEADLINE_PASSED


def test_achieved_goal():
    report = evaluate_goal_feasibility(_goal(saved=10000), 5000, 3600, today=TODAY)

    assert report.feasibility_status == FeasibilityStatus.ACHIEVED
    assert report.feasibility_score == Decimal("100.00")
    assert report.recommendation == "Congratulations! You've already reached this goal."


def test_tight_but_feasible():
    """$800/month required from a $1000 surplus leaves less than 30%"""
    report = evaluate_goal_feasibility(_goal(target=9600, saved=0), 4000, 3000, today=TODAY)

    assert report.feasibility_status == FeasibilityStatus.FEASIBLE
    assert report.recommendation == (
        "This goal is achievable but will leave limited surplus ($200.00/month). Monitor your spending carefully."
    )


def test_at_risk():
    report = evaluate_goal_feasibility(_goal(target=13200, saved=0), 4000, 3000, today=TODAY)

    assert report.surplus_after_goal == Decimal("-100.00")
    assert report.feasibility_status == FeasibilityStatus.AT_RISK
    assert "reduce expenses by $100.00/month" in report.recommendation


def test_not_feasible_without_surplus():
    report = evaluate_goal_feasibility(_goal(target=6000, saved=0), 3000, 3000, today=TODAY)

    assert report.feasibility_status == FeasibilityStatus.NOT_FEASIBLE
    assert report.recommendation.startswith("You're currently spending more than you earn.")


def test_not_feasible_large_deficit():
    report = evaluate_goal_feasibility(_goal(target=24000, saved=0), 4000, 3000, today=TODAY)

    assert report.feasibility_status == FeasibilityStatus.NOT_FEASIBLE
    assert report.feasibility_score == Decimal("50.00")
    assert report.recommendation.startswith(
        "This goal requires $2000.00/month but you only have $1000.00 available."
    )


def _competing_goals():
    # Both need $1000/month; the car deadline comes first
    house = _goal(title="House", target=12000, saved=0, deadline=date(2027, 1, 15))
    car = _goal(title="Car", target=6000, saved=0, deadline=date(2026, 7, 15))
    return [house, car]


def test_multiple_goals_sorted_by_deadline_with_collective_warning():
    results = evaluate_multiple_goals(_competing_goals(), 5000, 3600, today=TODAY)

    assert [r.goal_title for r in results] == ["Car", "House"]
    # Each goal alone sees the full $1400 surplus
    assert all(r.available_surplus == Decimal("1400.00") for r in results)
    assert all(r.feasibility_status == FeasibilityStatus.FEASIBLE for r in results)
    for result in results:
        assert result.recommendation.endswith(
            " Note: Pursuing all 2 goals simultaneously requires $2000.00/month but you only have $1400.00 available."
        )


def test_sequential_allocation_consumes_surplus():
    results = evaluate_multiple_goals(
        _competing_goals(), 5000, 3600, today=TODAY, allocation=GoalAllocation.SEQUENTIAL
    )

    car, house = results
    assert car.feasibility_status == FeasibilityStatus.FEASIBLE
    assert house.available_surplus == Decimal("400.00")
    assert house.feasibility_status == FeasibilityStatus.NOT_FEASIBLE
    assert "Note: Pursuing all 2 goals" in car.recommendation
    assert "Note:" not in house.recommendation


def test_no_warning_when_surplus_covers_all_goals():
    goals = [
        _goal(title="Trip", target=1200, saved=0, deadline=date(2027, 1, 15)),
        _goal(title="Laptop", target=600, saved=0, deadline=date(2026, 7, 15)),
        _goal(title="Old", target=600, saved=0, deadline=date(2025, 7, 15)),
    ]
    results = evaluate_multiple_goals(goals, 5000, 3600, today=TODAY)

    assert [r.goal_title for r in results] == ["Old", "Laptop", "Trip"]
    assert results[0].feasibility_status == FeasibilityStatus.DEADLINE_PASSED
    assert not any("Note:" in r.recommendation for r in results)


def test_single_goal_never_gets_collective_warning():
    results = evaluate_multiple_goals([_goal(target=30000, saved=0)], 5000, 3600, today=TODAY)
    assert "Note:" not in results[0].recommendation
