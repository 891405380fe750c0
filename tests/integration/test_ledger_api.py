"""Integration tests for group ledger and balance endpoints"""

import pytest
from fastapi.testclient import TestClient

pytestmark = pytest.mark.integration


def _balance(client: TestClient, group_id: str, headers: dict) -> dict:
    response = client.get(f"/v1/groups/{group_id}/balance", headers=headers)
    assert response.status_code == 200
    return response.json()


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert "X-Request-ID" in response.headers


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "fund_manager_balance_reports_total" in response.text


def test_balance_after_shared_expense(client: TestClient, roommates: dict, owner_headers: dict):
    group_id, ids = roommates["group_id"], roommates["ids"]

    response = client.post(
        f"/v1/groups/{group_id}/expenses",
        json={"title": "Groceries", "amount": 300, "paidBy": ids["A"]},
        headers=owner_headers,
    )
    assert response.status_code == 201

    data = _balance(client, group_id, owner_headers)

    assert [(b["name"], b["totalPaid"], b["balance"]) for b in data["balances"]] == [
        ("A", 300, 200),
        ("B", 0, -100),
        ("C", 0, -100),
    ]
    assert [(s["from"], s["to"], s["amount"]) for s in data["settlements"]] == [
        ("B", "A", 100),
        ("C", "A", 100),
    ]
    assert data["settlements"][0]["fromId"] == ids["B"]
    assert data["totalExpenses"] == 300
    assert data["totalMembers"] == 3
    assert data["monthlyContribution"] == 1500


def test_payment_reduces_debt(client: TestClient, roommates: dict, owner_headers: dict):
    group_id, ids = roommates["group_id"], roommates["ids"]
    client.post(
        f"/v1/groups/{group_id}/expenses",
        json={"title": "Groceries", "amount": 300, "paidBy": ids["A"]},
        headers=owner_headers,
    )

    # B is a linked member and may record their own payment
    response = client.post(
        f"/v1/groups/{group_id}/pay",
        json={"from": ids["B"], "to": ids["A"], "amount": 100},
        headers={"X-User-ID": "user_b"},
    )
    assert response.status_code == 201

    data = _balance(client, group_id, owner_headers)
    assert {b["name"]: b["balance"] for b in data["balances"]} == {"A": 100, "B": 0, "C": -100}
    assert [(s["from"], s["to"], s["amount"]) for s in data["settlements"]] == [("C", "A", 100)]

    entries = client.get(f"/v1/groups/{group_id}/expenses", headers=owner_headers).json()
    payment = next(e for e in entries if e["type"] == "Payment")
    assert payment["title"] == "Payment from B to A"
    assert payment["splitBetween"] == [ids["A"]]


def test_uneven_split_settlement_is_rounded(client: TestClient, owner_headers: dict):
    group = client.post(
        "/v1/groups",
        json={"groupName": "Pair", "ownerName": "A", "members": [{"name": "B"}]},
        headers=owner_headers,
    ).json()
    ids = {m["name"]: m["memberId"] for m in group["members"]}

    client.post(
        f"/v1/groups/{group['groupId']}/expenses",
        json={"title": "Dinner", "amount": 101, "paidBy": ids["A"]},
        headers=owner_headers,
    )

    data = _balance(client, group["groupId"], owner_headers)
    assert {b["name"]: b["balance"] for b in data["balances"]} == {"A": 50.5, "B": -50.5}
    assert data["settlements"][0]["amount"] == 51


def test_add_money_split_across_members(client: TestClient, roommates: dict, owner_headers: dict):
    group_id, ids = roommates["group_id"], roommates["ids"]

    response = client.post(
        f"/v1/groups/{group_id}/add-money",
        json={"memberId": ids["C"], "amount": 90},
        headers=owner_headers,
    )
    assert response.status_code == 201

    data = _balance(client, group_id, owner_headers)
    assert {b["name"]: b["balance"] for b in data["balances"]} == {"A": -30, "B": -30, "C": 60}

    entries = client.get(f"/v1/groups/{group_id}/expenses", headers=owner_headers).json()
    assert entries[0]["title"] == "C added money"


def test_explicit_split_and_legacy_type(client: TestClient, roommates: dict, owner_headers: dict):
    group_id, ids = roommates["group_id"], roommates["ids"]

    response = client.post(
        f"/v1/groups/{group_id}/expenses",
        json={
            "title": "Cinema",
            "amount": 40,
            "paidBy": ids["B"],
            "splitBetween": [ids["B"], ids["C"]],
            "type": "Common",
        },
        headers=owner_headers,
    )
    assert response.status_code == 201

    entries = client.get(f"/v1/groups/{group_id}/expenses", headers=owner_headers).json()
    assert entries[0]["type"] == "Expense"

    data = _balance(client, group_id, owner_headers)
    assert {b["name"]: b["balance"] for b in data["balances"]} == {"A": 0, "B": 20, "C": -20}


def test_invalid_expense_rejected(client: TestClient, roommates: dict, owner_headers: dict):
    group_id, ids = roommates["group_id"], roommates["ids"]

    for body in (
        {"title": "Zero", "amount": 0, "paidBy": ids["A"]},
        {"title": "Empty split", "amount": 10, "paidBy": ids["A"], "splitBetween": []},
        {"title": "No payer", "amount": 10},
    ):
        response = client.post(f"/v1/groups/{group_id}/expenses", json=body, headers=owner_headers)
        assert response.status_code == 422

    assert client.get(f"/v1/groups/{group_id}/expenses", headers=owner_headers).json() == []


def test_delete_expense(client: TestClient, roommates: dict, owner_headers: dict):
    group_id, ids = roommates["group_id"], roommates["ids"]
    entry_id = client.post(
        f"/v1/groups/{group_id}/expenses",
        json={"title": "Groceries", "amount": 300, "paidBy": ids["A"]},
        headers=owner_headers,
    ).json()["id"]

    response = client.delete(f"/v1/groups/{group_id}/expenses/{entry_id}", headers=owner_headers)
    assert response.status_code == 200

    data = _balance(client, group_id, owner_headers)
    assert data["settlements"] == []
    assert data["totalExpenses"] == 0

    missing = client.delete(f"/v1/groups/{group_id}/expenses/{entry_id}", headers=owner_headers)
    assert missing.status_code == 404


def test_removed_member_entries_are_skipped(client: TestClient, roommates: dict, owner_headers: dict):
    group_id, ids = roommates["group_id"], roommates["ids"]
    client.post(
        f"/v1/groups/{group_id}/expenses",
        json={"title": "Groceries", "amount": 300, "paidBy": ids["A"]},
        headers=owner_headers,
    )

    response = client.delete(f"/v1/groups/{group_id}/members/{ids['C']}", headers=owner_headers)
    assert response.status_code == 200

    data = _balance(client, group_id, owner_headers)
    assert {b["name"]: b["balance"] for b in data["balances"]} == {"A": 200, "B": -100}
    assert [(s["from"], s["to"], s["amount"]) for s in data["settlements"]] == [("B", "A", 100)]
    assert data["totalMembers"] == 2


def test_rename_keeps_balances(client: TestClient, roommates: dict, owner_headers: dict):
    group_id, ids = roommates["group_id"], roommates["ids"]
    client.post(
        f"/v1/groups/{group_id}/expenses",
        json={"title": "Groceries", "amount": 300, "paidBy": ids["A"]},
        headers=owner_headers,
    )

    response = client.put(
        f"/v1/groups/{group_id}/members/{ids['B']}",
        json={"name": "Bea"},
        headers=owner_headers,
    )
    assert response.status_code == 200

    data = _balance(client, group_id, owner_headers)
    assert {b["name"]: b["balance"] for b in data["balances"]} == {"A": 200, "Bea": -100, "C": -100}


def test_reset_balances_owner_only(client: TestClient, roommates: dict, owner_headers: dict):
    group_id, ids = roommates["group_id"], roommates["ids"]
    client.post(
        f"/v1/groups/{group_id}/expenses",
        json={"title": "Groceries", "amount": 300, "paidBy": ids["A"]},
        headers=owner_headers,
    )

    forbidden = client.post(f"/v1/groups/{group_id}/reset-balances", headers={"X-User-ID": "user_b"})
    assert forbidden.status_code == 403

    response = client.post(f"/v1/groups/{group_id}/reset-balances", headers=owner_headers)
    assert response.status_code == 200

    data = _balance(client, group_id, owner_headers)
    assert all(b["balance"] == 0 and b["totalPaid"] == 0 for b in data["balances"])
    assert data["settlements"] == []


def test_outsider_cannot_read_balance(client: TestClient, roommates: dict):
    response = client.get(
        f"/v1/groups/{roommates['group_id']}/balance",
        headers={"X-User-ID": "stranger"},
    )
    assert response.status_code == 403


def test_balance_for_unknown_group(client: TestClient, owner_headers: dict):
    response = client.get("/v1/groups/does-not-exist/balance", headers=owner_headers)
    assert response.status_code == 404


def test_missing_identity_header(client: TestClient, roommates: dict):
    response = client.get(f"/v1/groups/{roommates['group_id']}/balance")
    assert response.status_code == 401


def test_expenses_listed_newest_first(client: TestClient, roommates: dict, owner_headers: dict):
    group_id, ids = roommates["group_id"], roommates["ids"]
    titles = [f"Item {n}" for n in range(5)]
    for title in titles:
        response = client.post(
            f"/v1/groups/{group_id}/expenses",
            json={"title": title, "amount": 30, "paidBy": ids["A"]},
            headers=owner_headers,
        )
        assert response.status_code == 201

    entries = client.get(f"/v1/groups/{group_id}/expenses", headers=owner_headers).json()

    assert [e["title"] for e in entries] == list(reversed(titles))


def test_oversized_amounts_rejected(client: TestClient, roommates: dict, owner_headers: dict):
    group_id, ids = roommates["group_id"], roommates["ids"]
    too_large = 10**20

    for path, body in (
        ("expenses", {"title": "Yacht", "amount": too_large, "paidBy": ids["A"]}),
        ("pay", {"from": ids["B"], "to": ids["A"], "amount": too_large}),
        ("add-money", {"memberId": ids["C"], "amount": too_large}),
    ):
        response = client.post(f"/v1/groups/{group_id}/{path}", json=body, headers=owner_headers)
        assert response.status_code == 422

    assert client.get(f"/v1/groups/{group_id}/expenses", headers=owner_headers).json() == []
    assert _balance(client, group_id, owner_headers)["totalExpenses"] == 0
