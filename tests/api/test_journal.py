"""
Tests for journal endpoints.

Covers the HTTP contract: capability headers, status codes
for each error kind and the {"detail", "code"} error body.
"""

from datetime import date
from decimal import Decimal

import pytest

POSTER = {"X-Actor-Id": "api-user", "X-Can-Post-Financial-Entries": "true"}


@pytest.fixture
def accounts(client):
    client.post("/periods/initialize/2025")
    client.post(f"/periods/initialize/{date.today().year}")
    ids = {}
    for code, name, account_type, control in (
        ("1000", "Cash", "ASSET", False),
        ("1200", "Receivables", "ASSET", True),
        ("4000", "Revenue", "REVENUE", False),
    ):
        response = client.post("/ledger/accounts", json={
            "code": code,
            "name": name,
            "account_type": account_type,
            "is_control_account": control,
        })
        ids[code] = response.json()["id"]
    return ids


def sale(debit="1000", credit="1000", debit_account="1000", **extra):
    return {
        "entry_date": "2025-03-15",
        "memo": "Cash sale",
        "lines": [
            {"account_code": debit_account, "debit": debit},
            {"account_code": "4000", "credit": credit},
        ],
        **extra,
    }


class TestPostEntry:

    def test_post_returns_201(self, client, accounts):
        response = client.post("/journal/entries", json=sale(), headers=POSTER)

        assert response.status_code == 201
        data = response.json()
        assert data["sequence_number"] == 1
        assert data["document_number"] == "JE-000001"
        assert data["status"] == "POSTED"
        assert data["posted_by"] == "api-user"
        assert len(data["lines"]) == 2
        assert Decimal(data["lines"][0]["debit"]) == Decimal("1000")

    def test_missing_capability_header_returns_403(self, client, accounts):
        response = client.post("/journal/entries", json=sale())

        assert response.status_code == 403
        assert response.json()["code"] == "NOT_AUTHORIZED"

    def test_unbalanced_returns_400(self, client, accounts):
        response = client.post(
            "/journal/entries", json=sale(debit="500", credit="400"), headers=POSTER
        )

        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "UNBALANCED"
        assert "does not balance" in body["detail"]

    def test_control_account_returns_403(self, client, accounts):
        response = client.post(
            "/journal/entries", json=sale(debit_account="1200"), headers=POSTER
        )
        assert response.status_code == 403
        assert response.json()["code"] == "CONTROL_ACCOUNT"

    def test_reversal_source_returns_403(self, client, accounts):
        response = client.post(
            "/journal/entries",
            json=sale(debit_account="1200", source_type="REVERSAL"),
            headers=POSTER,
        )
        assert response.status_code == 403
        assert response.json()["code"] == "RESERVED_SOURCE"
        assert client.get("/journal/entries/1").status_code == 404

    def test_outside_periods_returns_403(self, client, accounts):
        payload = sale()
        payload["entry_date"] = "2031-01-01"

        response = client.post("/journal/entries", json=payload, headers=POSTER)
        assert response.json()["code"] == "NO_PERIOD"

    def test_replay_returns_same_entry(self, client, accounts):
        payload = sale(source_type="INVOICE", source_id="INV-42")
        first = client.post("/journal/entries", json=payload, headers=POSTER)
        second = client.post("/journal/entries", json=payload, headers=POSTER)

        assert second.json()["id"] == first.json()["id"]

    def test_get_entry(self, client, accounts):
        entry_id = client.post(
            "/journal/entries", json=sale(), headers=POSTER
        ).json()["id"]

        response = client.get(f"/journal/entries/{entry_id}")
        assert response.json()["memo"] == "Cash sale"

    def test_get_missing_entry_returns_404(self, client):
        response = client.get("/journal/entries/999")

        assert response.status_code == 404
        assert response.json()["code"] == "ENTRY_NOT_FOUND"


class TestReverseEntry:

    def test_reverse_returns_mirror(self, client, accounts):
        entry_id = client.post(
            "/journal/entries", json=sale(), headers=POSTER
        ).json()["id"]

        response = client.post(
            f"/journal/entries/{entry_id}/reverse", headers=POSTER
        )

        assert response.status_code == 201
        data = response.json()
        assert data["sequence_number"] == 2
        assert data["reverses_entry_id"] == entry_id
        assert Decimal(data["lines"][0]["credit"]) == Decimal("1000")

        original = client.get(f"/journal/entries/{entry_id}").json()
        assert original["status"] == "REVERSED"
        assert original["reversed_by_entry_id"] == data["id"]

    def test_reverse_with_date(self, client, accounts):
        entry_id = client.post(
            "/journal/entries", json=sale(), headers=POSTER
        ).json()["id"]

        response = client.post(
            f"/journal/entries/{entry_id}/reverse",
            json={"reversal_date": "2025-04-01"},
            headers=POSTER,
        )
        assert response.json()["entry_date"] == "2025-04-01"

    def test_double_reversal_returns_409(self, client, accounts):
        entry_id = client.post(
            "/journal/entries", json=sale(), headers=POSTER
        ).json()["id"]
        client.post(f"/journal/entries/{entry_id}/reverse", headers=POSTER)

        response = client.post(
            f"/journal/entries/{entry_id}/reverse", headers=POSTER
        )
        assert response.status_code == 409
        assert response.json()["code"] == "NOT_REVERSIBLE"

    def test_reverse_missing_entry_returns_404(self, client):
        response = client.post("/journal/entries/999/reverse", headers=POSTER)
        assert response.status_code == 404
