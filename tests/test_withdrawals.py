from decimal import Decimal

from quillmarket.models.user import User
from quillmarket.models.transaction import Transaction
from quillmarket.models.enums import UserRole, TransactionType

from conftest import fresh

PAYOUT = {"payment_method": "paypal", "payment_details": {"email": "me@example.com"}}


class TestWithdrawals:
    def test_insufficient_balance_is_rejected(self, client, make_user, auth):
        writer = make_user(balance=30)
        r = client.post("/api/withdrawals", json=dict(PAYOUT, amount=50), headers=auth(writer))
        assert r.status_code == 400
        assert r.get_json()["error"]["code"] == "INSUFFICIENT_BALANCE"

        assert fresh(User, writer.id).balance == Decimal("30.00")
        assert Transaction.query.filter_by(type=TransactionType.WITHDRAWAL).count() == 0

    def test_withdrawal_debits_and_records_pending(self, client, make_user, auth):
        writer = make_user(balance=200)
        r = client.post("/api/withdrawals", json=dict(PAYOUT, amount=50), headers=auth(writer))
        assert r.status_code == 201
        tx = r.get_json()["transaction"]
        assert tx["amount"] == -50
        assert tx["status"] == "pending"
        assert tx["type"] == "withdrawal"
        assert tx["payment_method"] == "paypal"
        assert "me@example.com" in tx["payment_details"]

        assert fresh(User, writer.id).balance == Decimal("150.00")

    def test_whole_balance_can_be_withdrawn(self, client, make_user, auth):
        payer = make_user(UserRole.CLIENT, balance=40)
        r = client.post("/api/withdrawals", json=dict(PAYOUT, amount=40), headers=auth(payer))
        assert r.status_code == 201
        assert fresh(User, payer.id).balance == Decimal("0.00")

    def test_amount_bounds(self, client, make_user, auth):
        writer = make_user(balance=10000)
        assert client.post("/api/withdrawals", json=dict(PAYOUT, amount=5), headers=auth(writer)).status_code == 422
        assert client.post("/api/withdrawals", json=dict(PAYOUT, amount=5001), headers=auth(writer)).status_code == 422
        assert fresh(User, writer.id).balance == Decimal("10000.00")

    def test_unknown_payment_method(self, client, make_user, auth):
        writer = make_user(balance=100)
        r = client.post(
            "/api/withdrawals",
            json={"amount": 20, "payment_method": "carrier_pigeon", "payment_details": "x"},
            headers=auth(writer),
        )
        assert r.status_code == 422
        paths = [i["path"] for i in r.get_json()["error"]["details"]["issues"]]
        assert "payment_method" in paths

    def test_admins_cannot_withdraw(self, client, admin, auth):
        r = client.post("/api/withdrawals", json=dict(PAYOUT, amount=20), headers=auth(admin))
        assert r.status_code == 403


class TestBalanceAndLedger:
    def test_balance(self, client, make_user, auth):
        writer = make_user(balance=75)
        r = client.get("/api/balance", headers=auth(writer))
        assert r.get_json()["balance"] == 75

    def test_transactions_are_paginated(self, client, make_user, auth):
        writer = make_user(balance=100)
        for _ in range(3):
            client.post("/api/withdrawals", json=dict(PAYOUT, amount=10), headers=auth(writer))

        r = client.get("/api/transactions?page=1&limit=2", headers=auth(writer))
        body = r.get_json()
        assert len(body["transactions"]) == 2
        assert body["pagination"] == {"total": 4, "page": 1, "limit": 2, "total_pages": 2}
