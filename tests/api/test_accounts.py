"""
Tests for chart-of-accounts endpoints.

These test the HTTP layer: status codes, response format and
the error body. Registry rules are tested in
tests/services/test_chart_of_accounts.py.
"""

import pytest


def create(client, code="1000", name="Cash", account_type="ASSET", **extra):
    return client.post("/ledger/accounts", json={
        "code": code, "name": name, "account_type": account_type, **extra,
    })


class TestCreateAccount:

    def test_create_account_returns_201(self, client):
        response = create(client)
        assert response.status_code == 201

    def test_create_account_returns_data(self, client):
        data = create(client, "4000", "Revenue", "REVENUE").json()
        assert data["code"] == "4000"
        assert data["normal_balance"] == "CREDIT"
        assert data["is_active"] is True

    def test_duplicate_code_returns_409(self, client):
        create(client)
        response = create(client, name="Cash Again")

        assert response.status_code == 409
        assert response.json()["code"] == "DUPLICATE_ACCOUNT"

    def test_invalid_type_returns_422(self, client):
        assert create(client, account_type="GOODWILL").status_code == 422


class TestReadAccounts:

    def test_list_accounts(self, client):
        create(client, "4000", "Revenue", "REVENUE")
        create(client, "1000", "Cash", "ASSET")

        codes = [a["code"] for a in client.get("/ledger/accounts").json()]
        assert codes == ["1000", "4000"]

    def test_get_account(self, client):
        account_id = create(client).json()["id"]
        response = client.get(f"/ledger/accounts/{account_id}")
        assert response.json()["name"] == "Cash"

    def test_get_missing_account_returns_404(self, client):
        response = client.get("/ledger/accounts/999")

        assert response.status_code == 404
        assert response.json() == {
            "detail": "Account 999 not found",
            "code": "ACCOUNT_NOT_FOUND",
        }


class TestModifyAccounts:

    def test_patch_account(self, client):
        account_id = create(client).json()["id"]
        response = client.patch(
            f"/ledger/accounts/{account_id}", json={"name": "Petty Cash"}
        )
        assert response.status_code == 200
        assert response.json()["name"] == "Petty Cash"

    @pytest.mark.parametrize("field", [
        "name", "code", "account_type", "is_control_account",
    ])
    def test_patch_null_required_field_returns_422(self, client, field):
        account_id = create(client).json()["id"]

        response = client.patch(
            f"/ledger/accounts/{account_id}", json={field: None}
        )

        assert response.status_code == 422
        account = client.get(f"/ledger/accounts/{account_id}").json()
        assert account["name"] == "Cash"
        assert account["code"] == "1000"

    def test_patch_locked_account_structure_returns_409(self, client):
        account_id = create(
            client, "3000", "Retained Earnings", "EQUITY", is_locked=True
        ).json()["id"]

        response = client.patch(
            f"/ledger/accounts/{account_id}", json={"code": "3100"}
        )
        assert response.status_code == 409
        assert response.json()["code"] == "ACCOUNT_LOCKED"

    def test_deactivate_account(self, client):
        account_id = create(client).json()["id"]
        response = client.post(f"/ledger/accounts/{account_id}/deactivate")
        assert response.json()["is_active"] is False

    def test_delete_unused_account(self, client):
        account_id = create(client).json()["id"]

        assert client.delete(f"/ledger/accounts/{account_id}").status_code == 204
        assert client.get(f"/ledger/accounts/{account_id}").status_code == 404
