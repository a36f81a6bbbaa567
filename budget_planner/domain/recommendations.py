"""Rule-based month-over-month recommendations"""

from decimal import Decimal
from typing import Dict, List, Sequence
from budget_planner.domain.models import (
    Expense,
    ExpenseCategory,
    Number,
    Recommendation,
    format_fixed,
    to_decimal,
)
from budget_planner.domain.spending import build_category_breakdown

# Category change (in %) considered significant
SIGNIFICANT_CHANGE_THRESHOLD = Decimal("10")
# Total expense growth (in %) that triggers a warning
EXPENSE_GROWTH_THRESHOLD = Decimal("15")
SUGGESTED_CUT = Decimal("0.2")


def _savings_comparison(current_savings: Decimal, previous_savings: Decimal) -> List[Recommendation]:
    if current_savings > previous_savings:
        diff = current_savings - previous_savings
        return [
            Recommendation(
                type="success",
                icon="down",
                title="Great job!",
                message="Keep it up to reach your savings goals.",
                highlighted_value=f"${format_fixed(diff, 0)} more",
            )
        ]
    if current_savings < previous_savings:
        diff = previous_savings - current_savings
        return [
            Recommendation(
                type="warning",
                icon="up",
                title="Savings decreased",
                message=f"You saved ${format_fixed(diff, 0)} less than last month. Consider reviewing your expenses.",
                highlighted_value=f"-${format_fixed(diff, 0)}",
            )
        ]
    return []


def _category_changes(
    current: Dict[ExpenseCategory, Decimal],
    previous: Dict[ExpenseCategory, Decimal],
) -> List[Recommendation]:
    """Categories missing from either month are skipped"""
    recommendations = []

    for category, amount in current.items():
        previous_amount = previous.get(category)
        if previous_amount is None or previous_amount <= 0:
            continue

        name = category.value
        change = (amount - previous_amount) / previous_amount * 100

        if change > SIGNIFICANT_CHANGE_THRESHOLD:
            recommendations.append(
                Recommendation(
                    type="warning",
                    icon="up",
                    title=f"Spending Alert: {name}",
                    message=(
                        f"You spent {format_fixed(change, 0)}% more on {name} than last month. "
                        f"Consider reducing {name.lower()} expenses to stay within your budget."
                    ),
                    highlighted_value=f"{format_fixed(change, 0)}% more",
                )
            )
        elif change < -SIGNIFICANT_CHANGE_THRESHOLD:
            recommendations.append(
                Recommendation(
                    type="success",
                    icon="down",
                    title=f"Good Progress: {name}",
                    message=f"You reduced {name} spending by {format_fixed(abs(change), 0)}%. Keep it up!",
                    highlighted_value=f"{format_fixed(abs(change), 0)}% less",
                )
            )

    return recommendations


def _savings_rate_check(savings_rate: Decimal, current: Dict[ExpenseCategory, Decimal]) -> List[Recommendation]:
    if savings_rate >= 20:
        return [
            Recommendation(
                type="success",
                icon="check",
                title="Excellent Savings!",
                message="Keep it up! You're on track with your savings goals.",
                highlighted_value=f"{format_fixed(savings_rate, 0)}%",
            )
        ]

    if 0 < savings_rate < 10 and current:
        # max() keeps the first category on ties
        category, amount = max(current.items(), key=lambda kv: kv[1])
        cut = amount * SUGGESTED_CUT
        return [
            Recommendation(
                type="tip",
                icon="lightbulb",
                title="Savings Tip",
                message=(
                    f"Limit {category.value} to ${format_fixed(amount - cut, 0)} next month to boost your savings. "
                    "This can help you stay on track with your budget."
                ),
                highlighted_value=f"${format_fixed(cut, 0)}",
            )
        ]

    return []


def _expense_trend(current_total: Decimal, previous_total: Decimal) -> List[Recommendation]:
    if previous_total <= 0 or current_total <= previous_total:
        return []

    increase = (current_total - previous_total) / previous_total * 100
    if increase <= EXPENSE_GROWTH_THRESHOLD:
        return []

    return [
        Recommendation(
            type="warning",
            icon="up",
            title="Total Expenses Increased",
            message=(
                f"Your overall spending increased by {format_fixed(increase, 0)}%. "
                "Review your budget to identify areas for improvement."
            ),
            highlighted_value=f"+{format_fixed(increase, 0)}%",
        )
    ]


def generate_recommendations(
    current_expenses: Sequence[Expense],
    previous_expenses: Sequence[Expense],
    current_income: Number,
    previous_income: Number,
) -> List[Recommendation]:
    """
    Compare this month with the previous one and emit tips.

    Rules (all independent):
    1. Savings went up or down
    2. Per-category change beyond +/-10%
    3. Savings rate >= 20% (praise) or between 0 and 10% (cut the top category by 20%)
    4. Total expenses grew more than 15%

    Returns an empty list unless both months have expenses.
    """
    if not current_expenses or not previous_expenses:
        return []

    current_income = to_decimal(current_income)
    previous_income = to_decimal(previous_income)

    current_by_category = build_category_breakdown(current_expenses)
    previous_by_category = build_category_breakdown(previous_expenses)

    current_total = sum(current_by_category.values(), Decimal("0"))
    previous_total = sum(previous_by_category.values(), Decimal("0"))

    current_savings = current_income - current_total
    previous_savings = previous_income - previous_total
    savings_rate = current_savings / current_income * 100 if current_income > 0 else Decimal("0")

    recommendations = _savings_comparison(current_savings, previous_savings)
    recommendations += _category_changes(current_by_category, previous_by_category)
    recommendations += _savings_rate_check(savings_rate, current_by_category)
    recommendations += _expense_trend(current_total, previous_total)

    return recommendations
