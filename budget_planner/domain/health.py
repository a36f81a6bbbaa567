"""Financial health scoring - savings rate, expense ratio and status tiers"""

from decimal import Decimal
from typing import Iterable, Tuple
from budget_planner.domain.models import (
    FinancialHealthReport,
    HealthStatus,
    Number,
    round_money,
    to_decimal,
)

HUNDRED = Decimal("100")
HALF = Decimal("0.5")

# (minimum score, status, advice), checked top-down
HEALTH_TIERS: Tuple[Tuple[Decimal, HealthStatus, str], ...] = (
    (
        Decimal("80"),
        HealthStatus.EXCELLENT,
        "You're managing your finances exceptionally well. Consider increasing your investments.",
    ),
    (
        Decimal("60"),
        HealthStatus.GOOD,
        "Your financial health is solid. Look for opportunities to reduce expenses and increase savings.",
    ),
    (
        Decimal("40"),
        HealthStatus.FAIR,
        "Your finances need attention. Review your expenses and create a stricter budget.",
    ),
    (
        Decimal("20"),
        HealthStatus.POOR,
        "Immediate action required. Significantly reduce discretionary spending and seek financial advice.",
    ),
)

CRITICAL_ADVICE = "Urgent financial intervention needed. Consider consulting a financial advisor immediately."


def classify_health(score: Decimal) -> Tuple[HealthStatus, str]:
    """Map a health score to its status tier and advisory sentence"""
    for threshold, status, advice in HEALTH_TIERS:
        if score >= threshold:
            return status, advice
    return HealthStatus.CRITICAL, CRITICAL_ADVICE


def calculate_financial_health(income: Number, expenses: Iterable[Number]) -> FinancialHealthReport:
    """
    Build a financial health report from monthly income and expense amounts.

    Scoring weights:
    - 50%: Savings rate (higher is better)
    - 50%: Inverted expense ratio (100 - ratio, lower spending is better)

    The score is left unclamped: overspending pushes it below 0 and the
    tier thresholds are defined against that raw value.
    """
    income = to_decimal(income)
    total_expenses = sum((to_decimal(e) for e in expenses), Decimal("0"))

    savings_amount = income - total_expenses

    # Avoid division by zero for non-positive income
    savings_rate = savings_amount / income * HUNDRED if income > 0 else Decimal("0")
    expense_ratio = total_expenses / income * HUNDRED if income > 0 else Decimal("0")

    health_score = HALF * savings_rate + HALF * (HUNDRED - expense_ratio)
    status, recommendation = classify_health(health_score)

    return FinancialHealthReport(
        total_income=income,
        total_expenses=total_expenses,
        savings_amount=savings_amount,
        savings_rate=round_money(savings_rate),
        expense_ratio=round_money(expense_ratio),
        health_score=round_money(health_score),
        health_status=status,
        recommendation=recommendation,
    )
