"""
Tests for the ledger module

- entry form validation
- API: voucher numbering per type, statement balances and party filter, edits
"""

import pytest
from decimal import Decimal
from pydantic import ValidationError
from uuid import uuid4

from app.modules.ledger.models import VoucherType
from app.modules.ledger.schemas import LedgerEntryCreate, LedgerEntryData, LedgerEntryUpdate, TransactionType


# ===== FIXTURES =====

@pytest.fixture
def party_id(client, party_payload):
    return client.post("/parties", json=party_payload).json()["id"]


def post_entry(client, party_id, voucher_type="Receipt", transaction_type="credit", amount="100", **extra):
    return client.post("/ledger", json={
        "party_id": party_id,
        "date": extra.pop("date", "2024-04-15"),
        "voucher_type": voucher_type,
        "transaction_type": transaction_type,
        "amount": amount,
        **extra,
    })


# ===== VALIDATION =====

class TestLedgerForms:

    def test_amount_must_be_positive(self):
        with pytest.raises(ValidationError):
            LedgerEntryCreate(party_id=uuid4(), voucher_type="Receipt", transaction_type="credit", amount="0")

    def test_voucher_type_enumeration(self):
        assert [v.value for v in VoucherType] == ["Receipt", "Payment", "Sales", "Purchase", "Journal", "Contra"]
        with pytest.raises(ValidationError):
            LedgerEntryCreate(party_id=uuid4(), voucher_type="Invoice", transaction_type="credit", amount="1")

    def test_blank_particulars(self):
        form = LedgerEntryCreate(
            party_id=uuid4(), voucher_type="Receipt", transaction_type=TransactionType.CREDIT,
            amount="1", particulars="   "
        )
        assert form.particulars is None

    def test_zero_amount_stored_as_unset(self):
        entry = LedgerEntryData(
            date="2024-04-15", voucher_type="Payment", voucher_no=1, debit="0", credit="25"
        )
        assert entry.debit is None
        assert entry.amount == Decimal("25")
        assert entry.transaction_type == TransactionType.CREDIT

    def test_update_rejects_null_voucher(self):
        with pytest.raises(ValidationError):
            LedgerEntryUpdate(voucher_no=None)

    def test_update_rejects_null_party(self):
        with pytest.raises(ValidationError):
            LedgerEntryUpdate(party_id=None)
        assert LedgerEntryUpdate(particulars="x").model_dump(exclude_unset=True) == {"particulars": "x"}

    def test_amount_rounded_to_paise(self):
        form = LedgerEntryCreate(party_id=uuid4(), voucher_type="Receipt", transaction_type="credit", amount="10.005")
        assert form.amount == Decimal("10.01")
        with pytest.raises(ValidationError):
            LedgerEntryCreate(party_id=uuid4(), voucher_type="Receipt", transaction_type="credit", amount="0.004")
        assert LedgerEntryUpdate(debit="12.345").debit == Decimal("12.35")


# ===== API =====

class TestLedgerAPI:

    def test_create_entry(self, client, party_id):
        response = post_entry(client, party_id, amount="1000")
        assert response.status_code == 201
        data = response.json()
        assert data["voucher_no"] == 1
        assert Decimal(data["credit"]) == Decimal("1000")
        assert data["debit"] is None
        assert data["particulars"] == "By Gupta Enterprises"

    def test_unknown_party(self, client):
        assert post_entry(client, str(uuid4())).status_code == 404

    def test_next_voucher_numbers(self, client, party_id):
        """Payment {1, 2} and Receipt {1} -> next Payment 3, next Receipt 2"""
        post_entry(client, party_id, voucher_type="Payment", transaction_type="debit")
        post_entry(client, party_id, voucher_type="Payment", transaction_type="debit")
        post_entry(client, party_id, voucher_type="Receipt")

        def next_no(voucher_type):
            response = client.get("/ledger/next-voucher-no", params={"voucher_type": voucher_type})
            return response.json()["voucher_no"]

        assert next_no("Payment") == 3
        assert next_no("Receipt") == 2
        assert next_no("Contra") == 1
        assert client.get("/ledger/next-voucher-no", params={"voucher_type": "Bogus"}).status_code == 422

    def test_statement_for_party(self, client, party_id, party_payload):
        """credit 1000, debit 400 -> 600 Cr"""
        other_id = client.post("/parties", json={**party_payload, "name": "Other"}).json()["id"]
        post_entry(client, party_id, amount="1000")
        post_entry(client, party_id, voucher_type="Payment", transaction_type="debit", amount="400",
                   date="2024-04-16", particulars="To Cash")
        post_entry(client, other_id, voucher_type="Payment", transaction_type="debit", amount="5000")

        statement = client.get("/ledger", params={"party_id": party_id}).json()
        assert statement["party_name"] == "Gupta Enterprises"
        assert statement["total"] == 2
        assert Decimal(statement["total_credit"]) == Decimal("1000")
        assert Decimal(statement["total_debit"]) == Decimal("400")
        assert Decimal(statement["closing_balance"]["amount"]) == Decimal("600")
        assert statement["closing_balance"]["label"] == "Cr"
        assert [e["particulars"] for e in statement["entries"]] == ["By Gupta Enterprises", "To Cash"]
        assert [e["display_date"] for e in statement["entries"]] == ["15-Apr-24", "16-Apr-24"]

        everything = client.get("/ledger").json()
        assert everything["total"] == 3
        assert everything["party_name"] is None
        assert everything["closing_balance"]["label"] == "Dr"
        assert Decimal(everything["closing_balance"]["amount"]) == Decimal("4400")

    def test_patch_entry(self, client, party_id):
        entry = post_entry(client, party_id, amount="100").json()
        response = client.patch(f"/ledger/{entry['id']}", json={"credit": "150", "particulars": "By Cheque"})
        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["credit"]) == Decimal("150")
        assert data["particulars"] == "By Cheque"
        assert data["voucher_no"] == entry["voucher_no"]
        assert client.get(f"/ledger/{entry['id']}").json() == data

    def test_delete_entry(self, client, party_id):
        entry = post_entry(client, party_id).json()
        assert client.delete(f"/ledger/{entry['id']}").status_code == 204
        assert client.get(f"/ledger/{entry['id']}").status_code == 404
        assert client.delete(f"/ledger/{entry['id']}").status_code == 404
