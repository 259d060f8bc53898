"""
Tests for the chart of accounts endpoints.

These test the HTTP layer: status codes, response format,
and error handling. Business logic is tested in
tests/services/test_account_service.py.
"""

from decimal import Decimal


def create(client, code, name, account_type="ASSET", parent_id=None):
    return client.post("/api/accounts", json={
        "code": code,
        "name": name,
        "account_type": account_type,
        "parent_id": parent_id,
    })


class TestCreateAccount:

    def test_create_account_returns_201(self, client):
        response = create(client, "1110", "Cash")
        assert response.status_code == 201

    def test_create_account_returns_data(self, client):
        data = create(client, "4100", "Sales Revenue", "REVENUE").json()
        assert data["code"] == "4100"
        assert data["account_type"] == "REVENUE"
        assert data["parent_id"] is None
        assert Decimal(data["balance"]) == Decimal("0")

    def test_duplicate_code_returns_400(self, client):
        create(client, "1110", "Cash")
        response = create(client, "1110", "Cash Again")
        assert response.status_code == 400
        assert "already exists" in response.json()["detail"]

    def test_missing_parent_returns_400(self, client):
        response = create(client, "1110", "Cash", parent_id=999)
        assert response.status_code == 400

    def test_unknown_type_returns_422(self, client):
        response = create(client, "1110", "Cash", account_type="SAVINGS")
        assert response.status_code == 422

    def test_empty_code_returns_422(self, client):
        response = create(client, "", "Cash")
        assert response.status_code == 422


class TestReadAccounts:

    def test_get_account(self, client):
        account_id = create(client, "1110", "Cash").json()["id"]
        response = client.get(f"/api/accounts/{account_id}")
        assert response.status_code == 200
        assert response.json()["name"] == "Cash"

    def test_get_missing_returns_404(self, client):
        response = client.get("/api/accounts/999")
        assert response.status_code == 404

    def test_list_ordered_by_code(self, client):
        create(client, "4100", "Sales", "REVENUE")
        create(client, "1110", "Cash")

        codes = [a["code"] for a in client.get("/api/accounts").json()]
        assert codes == ["1110", "4100"]

    def test_list_filtered_by_type(self, client):
        create(client, "4100", "Sales", "REVENUE")
        create(client, "1110", "Cash")

        response = client.get("/api/accounts", params={"account_type": "REVENUE"})
        assert [a["code"] for a in response.json()] == ["4100"]


class TestUpdateAccount:

    def test_rename(self, client):
        account_id = create(client, "1110", "Cash").json()["id"]
        response = client.put(
            f"/api/accounts/{account_id}", json={"name": "Petty Cash"}
        )
        assert response.status_code == 200
        assert response.json()["name"] == "Petty Cash"

    def test_own_parent_returns_400(self, client):
        account_id = create(client, "1110", "Cash").json()["id"]
        response = client.put(
            f"/api/accounts/{account_id}", json={"parent_id": account_id}
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Account cannot be its own parent"

    def test_missing_returns_404(self, client):
        response = client.put("/api/accounts/999", json={"name": "Nope"})
        assert response.status_code == 404


class TestDeleteAccount:

    def test_delete_returns_204(self, client):
        account_id = create(client, "1110", "Cash").json()["id"]
        response = client.delete(f"/api/accounts/{account_id}")
        assert response.status_code == 204
        assert client.get(f"/api/accounts/{account_id}").status_code == 404

    def test_delete_missing_returns_404(self, client):
        assert client.delete("/api/accounts/999").status_code == 404

    def test_delete_account_with_entries_returns_400(self, client):
        cash = create(client, "1110", "Cash").json()["id"]
        sales = create(client, "4100", "Sales", "REVENUE").json()["id"]
        client.post("/api/transactions", json={
            "description": "Cash sale",
            "transaction_date": "2024-01-15",
            "journal_entries": [
                {"account_id": cash, "debit_amount": "100.00"},
                {"account_id": sales, "credit_amount": "100.00"},
            ],
        })

        response = client.delete(f"/api/accounts/{cash}")
        assert response.status_code == 400


class TestBalanceAndStatement:

    def _sale(self, client):
        cash = create(client, "1110", "Cash").json()["id"]
        sales = create(client, "4100", "Sales", "REVENUE").json()["id"]
        client.post("/api/transactions", json={
            "description": "Cash sale",
            "transaction_date": "2024-01-15",
            "journal_entries": [
                {"account_id": cash, "debit_amount": "100.00"},
                {"account_id": sales, "credit_amount": "100.00"},
            ],
        })
        return cash, sales

    def test_balance(self, client):
        cash, sales = self._sale(client)

        data = client.get(f"/api/accounts/{sales}/balance").json()
        assert Decimal(data["balance"]) == Decimal("-100.00")
        assert Decimal(data["credit_total"]) == Decimal("100.00")

        account = client.get(f"/api/accounts/{cash}").json()
        assert Decimal(account["balance"]) == Decimal("100.00")

    def test_balance_missing_returns_404(self, client):
        assert client.get("/api/accounts/999/balance").status_code == 404

    def test_statement(self, client):
        cash, _ = self._sale(client)

        response = client.get(
            f"/api/accounts/{cash}/statement",
            params={"start_date": "2024-01-01", "end_date": "2024-01-31"},
        )
        assert response.status_code == 200
        data = response.json()
        assert len(data["entries"]) == 1
        assert Decimal(data["closing_balance"]) == Decimal("100.00")

    def test_statement_missing_returns_404(self, client):
        assert client.get("/api/accounts/999/statement").status_code == 404
