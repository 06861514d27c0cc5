"""
Tests for the dashboard summary
"""

from decimal import Decimal


class TestDashboardAPI:

    def test_empty_dashboard(self, client):
        data = client.get("/dashboard").json()
        assert data["invoice_count"] == 0
        assert Decimal(data["total_sales"]) == Decimal("0")
        assert Decimal(data["average_invoice_value"]) == Decimal("0")
        assert data["net_balance"]["label"] == "Cr"
        assert data["recent_invoices"] == []

    def test_summary(self, client, party_payload):
        party_id = client.post("/parties", json=party_payload).json()["id"]
        for rate in ("50", "20", "30"):
            client.post("/invoices", json={
                "party_id": party_id,
                "items": [{"description": "Rice", "quantity": "10", "rate": rate}],
            })
        client.post("/ledger", json={
            "party_id": party_id, "voucher_type": "Receipt", "transaction_type": "credit", "amount": "1200",
        })

        data = client.get("/dashboard").json()
        assert data["invoice_count"] == 3
        assert data["party_count"] == 1
        assert Decimal(data["total_sales"]) == Decimal("1000")
        assert Decimal(data["average_invoice_value"]) == Decimal("333.33")
        assert Decimal(data["total_debits"]) == Decimal("1000")
        assert Decimal(data["total_credits"]) == Decimal("1200")
        assert data["net_balance"]["label"] == "Cr"
        assert Decimal(data["net_balance"]["amount"]) == Decimal("200")
        assert [i["invoice_no"] for i in data["recent_invoices"]] == [3, 2, 1]
