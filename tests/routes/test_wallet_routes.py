from decimal import Decimal

from fastapi.testclient import TestClient

from tourney.models.request import Request


class TestWalletRoutes:

    def test_wallet_requires_authentication(self, client: TestClient):
        assert client.get("/wallet/").status_code == 401

    def test_get_balance(self, client: TestClient, make_user, auth_headers):
        user = make_user(balance="75.50")

        response = client.get("/wallet/", headers=auth_headers(user))

        assert response.status_code == 200
        assert response.json()["user_id"] == user.id
        assert Decimal(response.json()["wallet_balance"]) == Decimal("75.50")

    def test_submit_deposit(self, client: TestClient, db, make_user, auth_headers):
        user = make_user(balance="0")

        response = client.post(
            "/wallet/deposits",
            json={"amount": "300", "transaction_ref": "UPI-4471"},
            headers=auth_headers(user),
        )

        assert response.status_code == 201
        data = response.json()
        assert data["type"] == "Deposit"
        assert data["status"] == "Pending"
        assert data["transaction_ref"] == "UPI-4471"
        assert db.query(Request).filter(Request.user_id == user.id).count() == 1

        # Nothing is credited until an admin approves the request
        balance = client.get("/wallet/", headers=auth_headers(user)).json()["wallet_balance"]
        assert Decimal(balance) == 0

    def test_deposit_missing_reference(self, client: TestClient, make_user, auth_headers):
        response = client.post("/wallet/deposits", json={"amount": "300"}, headers=auth_headers(make_user()))
        assert response.status_code == 422

    def test_deposit_rejects_non_positive_amount(self, client: TestClient, make_user, auth_headers):
        response = client.post(
            "/wallet/deposits",
            json={"amount": "0", "transaction_ref": "UPI-1"},
            headers=auth_headers(make_user()),
        )
        assert response.status_code == 422

    def test_submit_withdrawal(self, client: TestClient, make_user, auth_headers):
        user = make_user(balance="500")

        response = client.post(
            "/wallet/withdrawals",
            json={"amount": "200", "upi_id": "winner@okaxis"},
            headers=auth_headers(user),
        )

        assert response.status_code == 201
        assert response.json()["upi_id"] == "winner@okaxis"
        assert response.json()["status"] == "Pending"

    def test_withdrawal_refusals(self, client: TestClient, make_user, auth_headers):
        user = make_user(balance="150")

        too_small = client.post(
            "/wallet/withdrawals", json={"amount": "50", "upi_id": "a@b"}, headers=auth_headers(user)
        )
        too_large = client.post(
            "/wallet/withdrawals", json={"amount": "151", "upi_id": "a@b"}, headers=auth_headers(user)
        )

        assert too_small.status_code == 400
        assert too_small.json()["detail"]["code"] == "InvalidRequest"
        assert "Minimum withdrawal amount" in too_small.json()["detail"]["message"]
        assert too_large.status_code == 400
        assert too_large.json()["detail"]["message"] == "Withdrawal amount cannot exceed your wallet balance."

    def test_history(self, client: TestClient, make_user, make_tournament, auth_headers):
        user = make_user(balance="300")
        tournament = make_tournament(entry_fee="40", title="Sanhok Squads")
        client.post(f"/tournaments/{tournament.id}/join", headers=auth_headers(user))
        client.post("/wallet/withdrawals", json={"amount": "100", "upi_id": "a@b"}, headers=auth_headers(user))

        transactions = client.get("/wallet/transactions", headers=auth_headers(user)).json()
        requests = client.get("/wallet/requests", headers=auth_headers(user)).json()
        history = client.get("/wallet/history", headers=auth_headers(user)).json()

        assert len(transactions) == 1
        assert transactions[0]["description"] == "Joined: Sanhok Squads"
        assert Decimal(transactions[0]["amount"]) == Decimal("-40")
        assert transactions[0]["tournament_id"] == tournament.id
        assert [r["type"] for r in requests] == ["Withdrawal"]
        assert sorted(entry["kind"] for entry in history) == ["request", "transaction"]
