"""Spending behavior analysis - category/type breakdowns and pattern insights"""

from decimal import Decimal
from typing import Dict, List, Sequence
from budget_planner.domain.models import (
    Expense,
    ExpenseCategory,
    ExpenseType,
    SpendingBehaviorReport,
    format_fixed,
    round_money,
    to_decimal,
)

NO_DATA_INSIGHT = "No expense data available for analysis."
BALANCED_INSIGHT = "Your spending patterns appear balanced and consistent."


def build_category_breakdown(expenses: Sequence[Expense]) -> Dict[ExpenseCategory, Decimal]:
    """Sum of amounts per category, keyed in first-encountered order"""
    breakdown: Dict[ExpenseCategory, Decimal] = {}
    for expense in expenses:
        breakdown[expense.category] = breakdown.get(expense.category, Decimal("0")) + to_decimal(expense.amount)
    return breakdown


def build_type_distribution(expenses: Sequence[Expense]) -> Dict[ExpenseType, int]:
    distribution: Dict[ExpenseType, int] = {}
    for expense in expenses:
        distribution[expense.type] = distribution.get(expense.type, 0) + 1
    return distribution


def generate_insights(
    category_breakdown: Dict[ExpenseCategory, Decimal],
    type_distribution: Dict[ExpenseType, int],
    top_category: ExpenseCategory,
    total_spending: Decimal,
    average_amount: Decimal,
    transaction_count: int,
) -> List[str]:
    """
    Evaluate every insight rule in a fixed order and collect those that apply.

    Rules:
    1. Top category above 40% of spending
    2. Average transaction above $100
    3. Fixed vs variable transaction mix (needs both types present)
    4. Transaction frequency (> 50 or < 10)
    5. Category diversity (<= 3 or >= 7 categories)
    """
    insights = []

    if total_spending > 0:
        top_percentage = category_breakdown[top_category] / total_spending * 100
        if top_percentage > 40:
            insights.append(
                f"{top_category.value} dominates your spending at {format_fixed(top_percentage, 1)}% of total expenses."
            )

    if average_amount > 100:
        insights.append(
            f"Your average transaction amount is ${format_fixed(average_amount)}, which is relatively high."
        )

    if ExpenseType.FIXED in type_distribution and ExpenseType.VARIABLE in type_distribution:
        fixed_percentage = Decimal(type_distribution[ExpenseType.FIXED]) / transaction_count * 100
        if fixed_percentage > 60:
            insights.append(
                f"Fixed expenses make up {format_fixed(fixed_percentage, 1)}% of your transactions, "
                "limiting budget flexibility."
            )
        elif fixed_percentage < 30:
            insights.append(
                f"Variable expenses dominate at {format_fixed(100 - fixed_percentage, 1)}%, "
                "offering opportunities for cost reduction."
            )

    if transaction_count > 50:
        insights.append(
            f"High transaction frequency ({transaction_count} transactions) suggests frequent spending habits."
        )
    elif transaction_count < 10:
        insights.append("Low transaction frequency indicates consolidated or infrequent spending.")

    category_count = len(category_breakdown)
    if category_count <= 3:
        insights.append(f"Spending is concentrated in only {category_count} categories, showing focused expenses.")
    elif category_count >= 7:
        insights.append(f"Expenses span {category_count} categories, indicating diverse spending patterns.")

    if not insights:
        insights.append(BALANCED_INSIGHT)

    return insights


def analyze_spending_behavior(expenses: Sequence[Expense]) -> SpendingBehaviorReport:
    """Aggregate an expense list into breakdowns and textual insights"""
    expenses = list(expenses)

    if not expenses:
        return SpendingBehaviorReport(
            category_breakdown={},
            top_category=ExpenseCategory.OTHER,
            top_category_amount=Decimal("0"),
            average_amount=Decimal("0"),
            transaction_count=0,
            type_distribution={},
            insights=[NO_DATA_INSIGHT],
        )

    category_breakdown = build_category_breakdown(expenses)
    type_distribution = build_type_distribution(expenses)

    # Stable descending sort: ties go to the first category encountered
    top_category, top_amount = sorted(category_breakdown.items(), key=lambda kv: kv[1], reverse=True)[0]

    transaction_count = len(expenses)
    total_spending = sum(category_breakdown.values(), Decimal("0"))
    average_amount = total_spending / transaction_count

    insights = generate_insights(
        category_breakdown,
        type_distribution,
        top_category,
        total_spending,
        average_amount,
        transaction_count,
    )

    return SpendingBehaviorReport(
        category_breakdown=category_breakdown,
        top_category=top_category,
        top_category_amount=round_money(top_amount),
        average_amount=round_money(average_amount),
        transaction_count=transaction_count,
        type_distribution=type_distribution,
        insights=insights,
    )
