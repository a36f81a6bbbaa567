"""SQLAlchemy ORM models for users and their financial records"""

from sqlalchemy import Column, Date, DateTime, Enum, ForeignKey, Integer, Numeric, Text, UniqueConstraint
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func
from budget_planner.domain.models import ExpenseCategory, ExpenseType

Base = declarative_base()

Money = Numeric(12, 2, asdecimal=True)


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class User(Base):
    """Account owner; authentication lives outside this service"""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    email = Column(Text, nullable=False, unique=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    expenses = relationship("ExpenseRecord", back_populates="user", cascade="all, delete-orphan")
    incomes = relationship("IncomeRecord", back_populates="user", cascade="all, delete-orphan")
    goals = relationship("GoalRecord", back_populates="user", cascade="all, delete-orphan")
    budget_rules = relationship("BudgetRuleRecord", back_populates="user", cascade="all, delete-orphan")


class ExpenseRecord(Base):
    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    category = Column(
        Enum(ExpenseCategory, native_enum=False, values_callable=_enum_values, length=32),
        nullable=False,
    )
    amount = Column(Money, nullable=False)
    date = Column(Date, nullable=False, index=True)
    type = Column(
        Enum(ExpenseType, native_enum=False, values_callable=_enum_values, length=16),
        nullable=False,
        default=ExpenseType.VARIABLE,
    )

    user = relationship("User", back_populates="expenses")


class IncomeRecord(Base):
    __tablename__ = "incomes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    amount = Column(Money, nullable=False)
    date = Column(Date, nullable=False, index=True)

    user = relationship("User", back_populates="incomes")


class GoalRecord(Base):
    __tablename__ = "goals"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(Text, nullable=False)
    target_amount = Column(Money, nullable=False)
    current_saved = Column(Money, nullable=False, default=0)
    deadline = Column(Date, nullable=False)

    user = relationship("User", back_populates="goals")


class BudgetRuleRecord(Base):
    """Monthly spending limit for one category, at most one per user and category"""

    __tablename__ = "budget_rules"
    __table_args__ = (UniqueConstraint("user_id", "category", name="uq_budget_rules_user_category"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    category = Column(
        Enum(ExpenseCategory, native_enum=False, values_callable=_enum_values, length=32),
        nullable=False,
    )
    monthly_limit = Column(Money, nullable=False)

    user = relationship("User", back_populates="budget_rules")
