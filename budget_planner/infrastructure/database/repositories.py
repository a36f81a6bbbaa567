"""Data access layer for users and their financial records"""

from datetime import date
from decimal import Decimal
from typing import List, Optional, Sequence
from sqlalchemy.orm import Session
from budget_planner.infrastructure.database.models import (
    BudgetRuleRecord,
    ExpenseRecord,
    GoalRecord,
    IncomeRecord,
    User,
)
from budget_planner.domain.models import BudgetRule, Expense, ExpenseCategory, Goal, Income


class UserRepository:
    """Repository for users"""

    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: int) -> Optional[User]:
        return self.db.get(User, user_id)


class ExpenseRepository:
    """Repository for expense records"""

    def __init__(self, db: Session):
        self.db = db

    def create_expenses(self, user_id: int, expenses: Sequence[Expense], default_date: date) -> List[ExpenseRecord]:
        """Persist expenses; records without a date are stamped with default_date"""
        records = [
            ExpenseRecord(
                user_id=user_id,
                category=expense.category,
                amount=expense.amount,
                date=expense.date or default_date,
                type=expense.type,
            )
            for expense in expenses
        ]
        self.db.add_all(records)
        self.db.flush()  # Get IDs without committing
        return records

    def get_expenses_between(self, user_id: int, start: date, end: date) -> List[ExpenseRecord]:
        """Expenses dated within [start, end]"""
        return (
            self.db.query(ExpenseRecord)
            .filter(
                ExpenseRecord.user_id == user_id,
                ExpenseRecord.date >= start,
                ExpenseRecord.date <= end,
            )
            .order_by(ExpenseRecord.date, ExpenseRecord.id)
            .all()
        )


class IncomeRepository:
    """Repository for income records"""

    def __init__(self, db: Session):
        self.db = db

    def create_income(self, user_id: int, income: Income) -> IncomeRecord:
        record = IncomeRecord(user_id=user_id, amount=income.amount, date=income.date)
        self.db.add(record)
        self.db.flush()
        return record

    def get_income_between(self, user_id: int, start: date, end: date) -> List[IncomeRecord]:
        return (
            self.db.query(IncomeRecord)
            .filter(
                IncomeRecord.user_id == user_id,
                IncomeRecord.date >= start,
                IncomeRecord.date <= end,
            )
            .order_by(IncomeRecord.date, IncomeRecord.id)
            .all()
        )


class GoalRepository:
    """Repository for savings goals"""

    def __init__(self, db: Session):
        self.db = db

    def get_goal(self, user_id: int, goal_id: int) -> Optional[GoalRecord]:
        return (
            self.db.query(GoalRecord)
            .filter(GoalRecord.id == goal_id, GoalRecord.user_id == user_id)
            .first()
        )


class BudgetRuleRepository:
    """Repository for per-category monthly limits"""

    def __init__(self, db: Session):
        self.db = db

    def upsert_rule(self, user_id: int, category: ExpenseCategory, monthly_limit: Decimal) -> BudgetRuleRecord:
        """Create the rule, or replace the limit of the existing one"""
        record = self.get_rule(user_id, category)
        if record is None:
            record = BudgetRuleRecord(user_id=user_id, category=category, monthly_limit=monthly_limit)
            self.db.add(record)
        else:
            record.monthly_limit = monthly_limit
        self.db.flush()
        return record

    def get_rule(self, user_id: int, category: ExpenseCategory) -> Optional[BudgetRuleRecord]:
        return (
            self.db.query(BudgetRuleRecord)
            .filter(BudgetRuleRecord.user_id == user_id, BudgetRuleRecord.category == category)
            .first()
        )

    def list_rules(self, user_id: int) -> List[BudgetRuleRecord]:
        return (
            self.db.query(BudgetRuleRecord)
            .filter(BudgetRuleRecord.user_id == user_id)
            .order_by(BudgetRuleRecord.id)
            .all()
        )


def to_domain_goal(record: GoalRecord) -> Goal:
    return Goal(
        id=record.id,
        title=record.title,
        target_amount=record.target_amount,
        current_saved=record.current_saved,
        deadline=record.deadline,
    )


def to_domain_budget_rule(record: BudgetRuleRecord) -> BudgetRule:
    return BudgetRule(category=record.category, monthly_limit=record.monthly_limit)


class FinanceRecordStore:
    """Read-only view over the repositories, handing plain domain records to the engine"""

    def __init__(self, db: Session):
        self.users = UserRepository(db)
        self.expenses = ExpenseRepository(db)
        self.incomes = IncomeRepository(db)

    def has_user(self, user_id: int) -> bool:
        return self.users.get_user(user_id) is not None

    def get_expenses(self, user_id: int, start: date, end: date) -> List[Expense]:
        return [
            Expense(category=r.category, amount=r.amount, type=r.type, date=r.date)
            for r in self.expenses.get_expenses_between(user_id, start, end)
        ]

    def get_income(self, user_id: int, start: date, end: date) -> List[Income]:
        return [Income(amount=r.amount, date=r.date) for r in self.incomes.get_income_between(user_id, start, end)]
