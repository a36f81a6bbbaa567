"""Month-over-month analysis over records pulled from a finance store"""

import logging
from datetime import date
from decimal import Decimal
from typing import Callable, List, Protocol, Sequence
from budget_planner.domain.exceptions import UserNotFoundError
from budget_planner.domain.models import (
    CategoryShare,
    Expense,
    Income,
    MonthlyAnalysisReport,
    Recommendation,
    round_money,
)
from budget_planner.domain.recommendations import generate_recommendations
from budget_planner.domain.spending import build_category_breakdown
from budget_planner.utils.date_utils import month_bounds, previous_month

logger = logging.getLogger(__name__)

Recommender = Callable[[Sequence[Expense], Sequence[Expense], Decimal, Decimal], List[Recommendation]]


class FinanceStore(Protocol):
    """Read access to a user's records; date ranges are inclusive"""

    def has_user(self, user_id: int) -> bool: ...

    def get_expenses(self, user_id: int, start: date, end: date) -> List[Expense]: ...

    def get_income(self, user_id: int, start: date, end: date) -> List[Income]: ...


def percent_change(current: Decimal, previous: Decimal, absolute_base: bool = False) -> Decimal:
    """(current - previous) / previous x 100, or 0 when previous is 0"""
    if previous == 0:
        return Decimal("0")
    base = abs(previous) if absolute_base else previous
    return (current - previous) / base * 100


def _savings_rate(savings: Decimal, income: Decimal) -> Decimal:
    return savings / income * 100 if income > 0 else Decimal("0")


class MonthlyComparisonReporter:
    """Builds a monthly report and compares it with the month before"""

    def __init__(self, store: FinanceStore, recommender: Recommender = generate_recommendations):
        self.store = store
        self.recommender = recommender

    def get_monthly_analysis(self, user_id: int, year: int, month: int) -> MonthlyAnalysisReport:
        if not self.store.has_user(user_id):
            raise UserNotFoundError(user_id)

        current_start, current_end = month_bounds(year, month)
        previous_start, previous_end = month_bounds(*previous_month(year, month))

        current_expenses = self.store.get_expenses(user_id, current_start, current_end)
        previous_expenses = self.store.get_expenses(user_id, previous_start, previous_end)
        current_income_records = self.store.get_income(user_id, current_start, current_end)
        previous_income_records = self.store.get_income(user_id, previous_start, previous_end)

        report = MonthlyAnalysisReport(year=year, month=month)
        report.has_sufficient_data = bool(current_expenses) and bool(previous_expenses)

        current_income = sum((i.amount for i in current_income_records), Decimal("0"))
        current_total = sum((e.amount for e in current_expenses), Decimal("0"))
        current_savings = current_income - current_total
        current_rate = _savings_rate(current_savings, current_income)

        report.total_income = round_money(current_income)
        report.total_expenses = round_money(current_total)
        report.total_savings = round_money(current_savings)
        report.savings_rate = round_money(current_rate)

        if report.has_sufficient_data:
            previous_income = sum((i.amount for i in previous_income_records), Decimal("0"))
            previous_total = sum((e.amount for e in previous_expenses), Decimal("0"))
            previous_savings = previous_income - previous_total
            previous_rate = _savings_rate(previous_savings, previous_income)

            report.income_change = round_money(percent_change(current_income, previous_income))
            report.expense_change = round_money(percent_change(current_total, previous_total))
            # Savings can be negative, so compare against the magnitude
            report.savings_change = round_money(
                percent_change(current_savings, previous_savings, absolute_base=True)
            )
            report.savings_rate_change = round_money(
                percent_change(current_rate, previous_rate, absolute_base=True)
            )

            report.recommendations = self.recommender(
                current_expenses, previous_expenses, current_income, previous_income
            )
        else:
            logger.info(
                "Insufficient data for monthly comparison",
                extra={"user_id": user_id, "year": year, "month": month},
            )

        for category, amount in build_category_breakdown(current_expenses).items():
            percentage = amount / current_total * 100 if current_total > 0 else Decimal("0")
            report.expense_breakdown.append(
                CategoryShare(category=category, amount=round_money(amount), percentage=round_money(percentage))
            )

        return report
