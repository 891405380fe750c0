"""Integration tests for personal transaction endpoints"""

import pytest
from fastapi.testclient import TestClient

pytestmark = pytest.mark.integration


USER = {"X-User-ID": "user_1"}


def _create(client: TestClient, title: str, amount: int, type: str, headers: dict = USER) -> dict:
    response = client.post("/v1/transactions", json={"title": title, "amount": amount, "type": type}, headers=headers)
    assert response.status_code == 201
    return response.json()


def test_create_and_list(client: TestClient):
    created = _create(client, "Salary", 3000, "Income")

    assert created["title"] == "Salary"
    assert created["type"] == "Income"
    assert created["date"]

    listed = client.get("/v1/transactions", headers=USER).json()
    assert [t["transactionId"] for t in listed] == [created["transactionId"]]


def test_transactions_are_private(client: TestClient):
    _create(client, "Salary", 3000, "Income")

    assert client.get("/v1/transactions", headers={"X-User-ID": "user_2"}).json() == []


def test_summary(client: TestClient):
    _create(client, "Salary", 3000, "Income")
    _create(client, "Rent", 1200, "Expenses")
    _create(client, "Food", 300, "Expenses")

    data = client.get("/v1/transactions/summary", headers=USER).json()

    assert data == {"totalIncome": 3000, "totalExpenses": 1500, "remaining": 1500, "count": 3}


def test_update_transaction(client: TestClient):
    created = _create(client, "Rent", 1200, "Expenses")

    response = client.put(
        f"/v1/transactions/{created['transactionId']}",
        json={"title": "Rent (March)", "amount": 1250, "type": "Expenses"},
        headers=USER,
    )

    assert response.status_code == 200
    assert response.json()["amount"] == 1250
    assert response.json()["title"] == "Rent (March)"


def test_update_someone_elses_transaction(client: TestClient):
    created = _create(client, "Rent", 1200, "Expenses")

    response = client.put(
        f"/v1/transactions/{created['transactionId']}",
        json={"title": "Mine", "amount": 1, "type": "Income"},
        headers={"X-User-ID": "user_2"},
    )
    assert response.status_code == 404


def test_invalid_transaction_rejected(client: TestClient):
    for body in (
        {"title": "Salary", "amount": 0, "type": "Income"},
        {"title": "Salary", "amount": 10, "type": "Bonus"},
        {"title": "", "amount": 10, "type": "Income"},
        {"title": "Salary", "amount": 10**20, "type": "Income"},
    ):
        assert client.post("/v1/transactions", json=body, headers=USER).status_code == 422


def test_delete_transaction(client: TestClient):
    created = _create(client, "Food", 300, "Expenses")
    path = f"/v1/transactions/{created['transactionId']}"

    assert client.delete(path, headers=USER).status_code == 200
    assert client.delete(path, headers=USER).status_code == 404


def test_clear_transactions(client: TestClient):
    _create(client, "Salary", 3000, "Income")
    _create(client, "Food", 300, "Expenses")

    assert client.delete("/v1/transactions", headers=USER).status_code == 200
    assert client.get("/v1/transactions", headers=USER).json() == []
    assert client.delete("/v1/transactions", headers=USER).status_code == 404
