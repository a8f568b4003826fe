"""Tests for the summary API endpoint."""

from datetime import date

import pytest


def _create(client, headers, value, txn_type, category, day):
    response = client.post(
        "/transactions",
        json={"value": value, "type": txn_type, "category": category, "date": day},
        headers=headers,
    )
    assert response.status_code == 201


class TestGetSummary:
    """Test GET /summary."""

    def test_empty_user(self, client, auth_headers):
        response = client.get("/summary", params={"period": "all"}, headers=auth_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["summary"]["balance"] == 0
        assert data["summary"]["transactionCount"] == 0
        assert data["byCategory"] == []

    def test_defaults_to_current_month(self, client, auth_headers):
        today = date.today().isoformat()
        _create(client, auth_headers, 100, "income", "gift", today)
        _create(client, auth_headers, 40, "expense", "leisure", "2000-01-01")

        data = client.get("/summary", headers=auth_headers).json()
        assert data["summary"]["period"] == "month"
        assert data["summary"]["transactionCount"] == 1
        assert data["summary"]["periodRange"]["start"] == date.today().replace(day=1).isoformat()

    def test_balance_equals_income_minus_expense(self, client, auth_headers):
        _create(client, auth_headers, 2500.75, "income", "salary", "2024-01-10")
        _create(client, auth_headers, 300.25, "income", "investment", "2024-01-11")
        _create(client, auth_headers, 99.99, "expense", "shopping", "2024-01-12")
        _create(client, auth_headers, 0.01, "expense", "others", "2024-01-13")

        summary = client.get("/summary", params={"period": "all"}, headers=auth_headers).json()[
            "summary"
        ]
        assert summary["totalIncome"] == pytest.approx(2801.00)
        assert summary["totalExpense"] == pytest.approx(100.00)
        assert summary["balance"] == pytest.approx(summary["totalIncome"] - summary["totalExpense"])

    def test_custom_period(self, client, auth_headers):
        _create(client, auth_headers, 10, "expense", "food", "2024-01-10")
        _create(client, auth_headers, 20, "expense", "food", "2024-02-10")

        data = client.get(
            "/summary",
            params={"period": "custom", "startDate": "2024-02-01", "endDate": "2024-02-29"},
            headers=auth_headers,
        ).json()
        assert data["summary"]["totalExpense"] == 20
        assert data["byCategory"] == [
            {"category": "food", "type": "expense", "total": 20.0, "count": 1}
        ]

    def test_excludes_other_users(self, client, auth_headers, other_headers):
        _create(client, other_headers, 500, "income", "salary", "2024-01-10")

        data = client.get("/summary", params={"period": "all"}, headers=auth_headers).json()
        assert data["summary"]["transactionCount"] == 0

    @pytest.mark.parametrize(
        "params",
        [
            {"period": "decade"},
            {"period": "custom"},
            {"period": "custom", "startDate": "2024-03-01", "endDate": "2024-01-01"},
        ],
    )
    def test_invalid_period_returns_400(self, client, auth_headers, params):
        response = client.get("/summary", params=params, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["error"]
