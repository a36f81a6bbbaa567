"""Integration tests for API endpoints"""

import pytest
from datetime import date, timedelta
from decimal import Decimal
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session
from budget_planner.infrastructure.database.models import ExpenseRecord, GoalRecord, IncomeRecord, User
from budget_planner.domain.models import ExpenseCategory, ExpenseType


def _auth(user: User) -> dict:
    return {"X-User-ID": str(user.id)}


@pytest.fixture
def two_months(db: Session, user: User, sample_expenses) -> User:
    """February and March 2026 records for the test user"""
    for expense in sample_expenses:
        db.add(ExpenseRecord(user_id=user.id, category=expense.category, amount=expense.amount,
                             date=expense.date, type=expense.type))
    db.add(ExpenseRecord(user_id=user.id, category=ExpenseCategory.HOUSING, amount=Decimal("1800"),
                         date=date(2026, 2, 3), type=ExpenseType.FIXED))
    db.add(ExpenseRecord(user_id=user.id, category=ExpenseCategory.FOOD, amount=Decimal("500"),
                         date=date(2026, 2, 28), type=ExpenseType.VARIABLE))
    db.add(IncomeRecord(user_id=user.id, amount=Decimal("5000"), date=date(2026, 2, 1)))
    db.add(IncomeRecord(user_id=user.id, amount=Decimal("5000"), date=date(2026, 3, 1)))
    db.commit()
    return user


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    client.get("/v1/analysis/budget", params={"actual": 100, "budget_limit": 200})

    response = client.get("/metrics")
    assert response.status_code == 200
    assert "budget_analysis_total" in response.text


def test_request_id_is_echoed(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


def test_financial_health(client: TestClient):
    """POST /v1/analysis/health with the reference budget"""
    response = client.post(
        "/v1/analysis/health",
        json={"income": "5000", "expenses": ["1800", "600", "300", "400", "500"]},
    )

    assert response.status_code == 200
    data = response.json()
    assert Decimal(data["savings_amount"]) == Decimal("1400")
    assert Decimal(data["savings_rate"]) == Decimal("28")
    assert Decimal(data["health_score"]) == Decimal("28")
    assert data["health_status"] == "Poor"


def test_financial_health_validation(client: TestClient):
    assert client.post("/v1/analysis/health", json={"income": 0, "expenses": [100]}).status_code == 422
    assert client.post("/v1/analysis/health", json={"income": 1000, "expenses": []}).status_code == 422


def test_budget_adherence(client: TestClient):
    response = client.get("/v1/analysis/budget", params={"actual": 1800, "budget_limit": 2000})

    assert response.status_code == 200
    data = response.json()
    assert Decimal(data["variance"]) == Decimal("-200")
    assert data["is_within_budget"] is True
    assert data["status"] == "Under Budget"


def test_budget_adherence_rejects_zero_limit(client: TestClient):
    response = client.get("/v1/analysis/budget", params={"actual": 100, "budget_limit": 0})
    assert response.status_code == 422


def test_spending_behavior(client: TestClient):
    response = client.post(
        "/v1/analysis/behavior",
        json={
            "expenses": [
                {"category": "Housing", "amount": "1800", "type": "Fixed"},
                {"category": "Food", "amount": "600"},
            ]
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["top_category"] == "Housing"
    assert Decimal(data["category_breakdown"]["Food"]) == Decimal("600")
    assert data["type_distribution"] == {"Fixed": 1, "Variable": 1}
    assert data["transaction_count"] == 2


def test_spending_behavior_rejects_unknown_category(client: TestClient):
    response = client.post("/v1/analysis/behavior", json={"expenses": [{"category": "Pets", "amount": 10}]})
    assert response.status_code == 422


def test_submit_input_persists_records(client: TestClient, db: Session, user: User):
    response = client.post(
        "/v1/analysis/input",
        headers=_auth(user),
        json={
            "income": "4000",
            "date": "2026-03-01",
            "expenses": [
                {"category": "Housing", "amount": "1500", "type": "Fixed"},
                {"category": "Food", "amount": "500", "date": "2026-03-10"},
            ],
        },
    )

    assert response.status_code == 200
    assert Decimal(response.json()["savings_amount"]) == Decimal("2000")

    expenses = db.query(ExpenseRecord).filter(ExpenseRecord.user_id == user.id).order_by(ExpenseRecord.id).all()
    assert [(e.category, e.date) for e in expenses] == [
        (ExpenseCategory.HOUSING, date(2026, 3, 1)),
        (ExpenseCategory.FOOD, date(2026, 3, 10)),
    ]
    income = db.query(IncomeRecord).filter(IncomeRecord.user_id == user.id).one()
    assert income.amount == Decimal("4000")


def test_submit_input_unknown_user(client: TestClient, db: Session):
    response = client.post(
        "/v1/analysis/input",
        headers={"X-User-ID": "999"},
        json={"income": "4000", "expenses": [{"category": "Food", "amount": "100"}]},
    )

    assert response.status_code == 404
    assert response.json()["detail"] == "User 999 not found"
    assert db.query(ExpenseRecord).count() == 0


def test_submit_input_requires_user_header(client: TestClient):
    response = client.post(
        "/v1/analysis/input",
        json={"income": "4000", "expenses": [{"category": "Food", "amount": "100"}]},
    )
    assert response.status_code == 401


def test_monthly_analysis(client: TestClient, two_months: User):
    response = client.get("/v1/analysis/monthly", headers=_auth(two_months), params={"year": 2026, "month": 3})

    assert response.status_code == 200
    data = response.json()
    assert data["has_sufficient_data"] is True
    assert Decimal(data["total_expenses"]) == Decimal("3600")
    assert Decimal(data["expense_change"]) == Decimal("56.52")
    assert data["expense_breakdown"][0]["category"] == "Housing"
    assert Decimal(data["expense_breakdown"][0]["percentage"]) == Decimal("50")
    assert data["recommendations"][0]["title"] == "Savings decreased"


def test_monthly_analysis_without_history(client: TestClient, user: User):
    response = client.get("/v1/analysis/monthly", headers=_auth(user), params={"year": 2026, "month": 3})

    assert response.status_code == 200
    data = response.json()
    assert data["has_sufficient_data"] is False
    assert data["recommendations"] == []


def test_monthly_analysis_unknown_user(client: TestClient, db: Session):
    response = client.get("/v1/analysis/monthly", headers={"X-User-ID": "42"}, params={"year": 2026, "month": 3})
    assert response.status_code == 404


def test_monthly_analysis_rejects_bad_month(client: TestClient, user: User):
    response = client.get("/v1/analysis/monthly", headers=_auth(user), params={"year": 2026, "month": 13})
    assert response.status_code == 422


def test_goal_analysis_sorted_by_deadline(client: TestClient):
    today = date.today()
    response = client.post(
        "/v1/goals/analysis",
        json={
            "monthly_income": "5000",
            "monthly_expenses": "3600",
            "goals": [
                {"title": "Trip", "target_amount": "1200", "deadline": str(today + timedelta(days=800))},
                {"title": "Laptop", "target_amount": "800", "current_saved": "800",
                 "deadline": str(today + timedelta(days=200))},
                {"title": "Old", "target_amount": "500", "deadline": str(today - timedelta(days=10))},
            ],
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert [g["goal_title"] for g in data] == ["Old", "Laptop", "Trip"]
    assert [g["feasibility_status"] for g in data] == ["Deadline Passed", "Achieved", "Feasible"]


def test_goal_analysis_sequential_allocation(client: TestClient):
    deadline = str(date.today() + timedelta(days=800))
    response = client.post(
        "/v1/goals/analysis",
        json={
            "monthly_income": "5000",
            "monthly_expenses": "3600",
            "allocation": "sequential",
            "goals": [
                {"title": "A", "target_amount": "1200", "deadline": deadline},
                {"title": "B", "target_amount": "1200", "deadline": deadline},
            ],
        },
    )

    assert response.status_code == 200
    first, second = response.json()
    assert Decimal(second["available_surplus"]) < Decimal(first["available_surplus"])


def test_stored_goal_feasibility(client: TestClient, db: Session, user: User):
    goal = GoalRecord(
        user_id=user.id,
        title="Emergency fund",
        target_amount=Decimal("10000"),
        current_saved=Decimal("2000"),
        deadline=date.today() + timedelta(days=800),
    )
    db.add(goal)
    db.commit()

    response = client.get(
        f"/v1/goals/{goal.id}/feasibility",
        headers=_auth(user),
        params={"monthly_income": 5000, "monthly_expenses": 3600},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["goal_id"] == goal.id
    assert Decimal(data["remaining_amount"]) == Decimal("8000")
    assert data["feasibility_status"] == "Feasible"


def test_stored_goal_not_found(client: TestClient, user: User):
    response = client.get(
        "/v1/goals/123/feasibility",
        headers=_auth(user),
        params={"monthly_income": 5000, "monthly_expenses": 3600},
    )

    assert response.status_code == 404
    assert response.json()["detail"] == "Goal 123 not found"


def test_income_reduction_scenario(client: TestClient):
    response = client.post(
        "/v1/scenarios/income-reduction",
        json={"current_income": "5000", "current_expenses": "3600", "reduction_percentage": "20"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["scenario_name"] == "Income Reduction: 20%"
    assert data["health_status_change"] == "Declined: Poor → Critical"
    assert data["impact_severity"] == "Moderate"
    assert data["scenario_health"]["health_status"] == "Critical"
    assert Decimal(data["savings_difference"]) == Decimal("-1000")


def test_expense_increase_scenario_with_goal(client: TestClient):
    response = client.post(
        "/v1/scenarios/expense-increase",
        json={
            "current_income": "5000",
            "current_expenses": "3600",
            "increase_amount": "500",
            "goals": [
                {"title": "Trip", "target_amount": "1200", "deadline": str(date.today() + timedelta(days=800))}
            ],
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["scenario_name"] == "Expense Increase: +$500.00"
    assert data["goal_impacts"][0]["impact"] == "Harder to achieve ($500.00 less surplus)"


def test_custom_scenario(client: TestClient):
    response = client.post(
        "/v1/scenarios/custom",
        json={
            "current_income": "5000",
            "current_expenses": "3600",
            "new_income": "6000",
            "new_expenses": "3600",
            "scenario_name": "Promotion",
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["scenario_description"] == "Promotion"
    assert data["impact_severity"] == "Positive"


def test_scenario_rejects_reduction_over_100(client: TestClient):
    response = client.post(
        "/v1/scenarios/income-reduction",
        json={"current_income": "5000", "current_expenses": "3600", "reduction_percentage": "150"},
    )
    assert response.status_code == 422


def test_budget_rule_endpoints(client: TestClient, user: User):
    response = client.post(
        "/v1/budget-rules", headers=_auth(user), json={"category": "Food", "monthly_limit": "500"}
    )
    assert response.status_code == 200
    assert response.json()["category"] == "Food"

    client.post("/v1/budget-rules", headers=_auth(user), json={"category": "Food", "monthly_limit": "550"})

    rules = client.get("/v1/budget-rules", headers=_auth(user)).json()
    assert len(rules) == 1
    assert Decimal(rules[0]["monthly_limit"]) == Decimal("550")


def test_budget_rule_rejects_zero_limit(client: TestClient, user: User):
    response = client.post("/v1/budget-rules", headers=_auth(user), json={"category": "Food", "monthly_limit": 0})
    assert response.status_code == 422


def test_budget_rule_unknown_user(client: TestClient, db: Session):
    response = client.post(
        "/v1/budget-rules", headers={"X-User-ID": "77"}, json={"category": "Food", "monthly_limit": "500"}
    )
    assert response.status_code == 404
    assert response.json()["detail"] == "User 77 not found"


def test_category_budget_uses_stored_rule(client: TestClient, two_months: User):
    """March Food spending is $600 against a $500 rule"""
    client.post("/v1/budget-rules", headers=_auth(two_months), json={"category": "Food", "monthly_limit": "500"})

    response = client.get(
        "/v1/analysis/budget/Food", headers=_auth(two_months), params={"year": 2026, "month": 3}
    )

    assert response.status_code == 200
    data = response.json()
    assert Decimal(data["actual"]) == Decimal("600")
    assert Decimal(data["limit"]) == Decimal("500")
    assert data["status"] == "Over Budget"


def test_category_budget_without_rule(client: TestClient, user: User):
    response = client.get("/v1/analysis/budget/Food", headers=_auth(user), params={"year": 2026, "month": 3})

    assert response.status_code == 404
    assert response.json()["detail"] == "No budget rule for Food"
