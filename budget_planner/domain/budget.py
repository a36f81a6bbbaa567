"""Budget adherence - actual spending vs a budget limit"""

from decimal import Decimal
from typing import Sequence
from budget_planner.domain.models import (
    BudgetAdherenceReport,
    BudgetRule,
    Expense,
    Number,
    round_money,
    to_decimal,
)

ON_TRACK_LABEL = "On Track"
WITHIN_BUDGET_LABEL = "Within Budget"


def classify_adherence(
    variance_percent: Decimal,
    is_within_budget: bool,
    on_track_label: str = ON_TRACK_LABEL,
) -> str:
    """
    Status tiers by variance percentage.

    Within budget: <= -20% well under, <= -10% under, otherwise on track.
    Over budget: >= 50% severe, >= 25% significant, >= 10% over, else slight.
    """
    if is_within_budget:
        if variance_percent <= -20:
            return "Well Under Budget"
        elif variance_percent <= -10:
            return "Under Budget"
        return on_track_label

    if variance_percent >= 50:
        return "Severely Over Budget"
    elif variance_percent >= 25:
        return "Significantly Over Budget"
    elif variance_percent >= 10:
        return "Over Budget"
    return "Slightly Over Budget"


def evaluate_budget_adherence(
    actual: Number,
    limit: Number,
    on_track_label: str = ON_TRACK_LABEL,
) -> BudgetAdherenceReport:
    """Compare actual spending to a limit; positive variance means overspending"""
    actual = to_decimal(actual)
    limit = to_decimal(limit)

    variance = actual - limit
    variance_percent = variance / limit * 100 if limit > 0 else Decimal("0")
    is_within_budget = actual <= limit

    # 100 is perfect adherence, floored at 0
    adherence_score = max(Decimal("0"), 100 - abs(variance_percent))

    return BudgetAdherenceReport(
        actual=actual,
        limit=limit,
        variance=round_money(variance),
        variance_percent=round_money(variance_percent),
        adherence_score=round_money(adherence_score),
        is_within_budget=is_within_budget,
        status=classify_adherence(variance_percent, is_within_budget, on_track_label),
    )


def evaluate_category_budget(
    expenses: Sequence[Expense],
    rule: BudgetRule,
    on_track_label: str = ON_TRACK_LABEL,
) -> BudgetAdherenceReport:
    """Adherence of one category's spending to the user's stored monthly limit"""
    actual = sum((to_decimal(e.amount) for e in expenses if e.category == rule.category), Decimal("0"))
    return evaluate_budget_adherence(actual, rule.monthly_limit, on_track_label)
