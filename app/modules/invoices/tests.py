"""
Tests for the invoices module

- line and total calculation
- form validation
- API: numbering, paired Sales entry on create/delete, revision, HTML document
"""

import datetime
import pytest
from decimal import Decimal
from pydantic import ValidationError
from uuid import uuid4

from app.modules.company.schemas import CompanyOut
from app.modules.invoices.calculator import build_items, calculate_totals
from app.modules.invoices.document import document_filename, render_invoice
from app.modules.invoices.schemas import InvoiceCreate, InvoiceItemIn, InvoiceOut, InvoiceUpdate
from app.modules.parties.schemas import PartyOut


# ===== FIXTURES =====

@pytest.fixture
def party_id(client, party_payload):
    return client.post("/parties", json=party_payload).json()["id"]


@pytest.fixture
def invoice_payload(party_id):
    return {
        "party_id": party_id,
        "date": "2024-04-15",
        "mode_of_payment": "Credit",
        "destination": "Mumbai",
        "items": [
            {"description": "Basmati Rice", "quantity": "10", "rate": "50"},
            {"description": "Toor Dal", "quantity": "3", "unit": "bag", "rate": "20"},
        ],
    }


# ===== CALCULATOR =====

class TestCalculator:

    def test_build_items(self):
        items = build_items([
            InvoiceItemIn(description="Rice", quantity=Decimal("10"), rate=Decimal("50")),
            InvoiceItemIn(description="Dal", quantity=Decimal("1.5"), unit="bag", rate=Decimal("33.33")),
        ])
        assert [i.sl_no for i in items] == [1, 2]
        assert items[0].amount == Decimal("500.00")
        assert items[1].amount == Decimal("50.00")  # 49.995 rounded half up
        assert items[1].per == "bag"

    def test_totals(self):
        """(10 x 50) + (3 x 20) -> 560, quantity 13"""
        items = build_items([
            InvoiceItemIn(description="A", quantity=Decimal("10"), rate=Decimal("50")),
            InvoiceItemIn(description="B", quantity=Decimal("3"), rate=Decimal("20")),
        ])
        totals = calculate_totals(items)
        assert totals.total_amount == Decimal("560")
        assert totals.total_quantity == Decimal("13")

    def test_totals_of_nothing(self):
        totals = calculate_totals([])
        assert totals.total_amount == Decimal("0")
        assert totals.total_quantity == Decimal("0")


# ===== VALIDATION =====

class TestInvoiceForms:

    def test_items_required(self):
        with pytest.raises(ValidationError):
            InvoiceCreate(party_id=uuid4(), items=[])

    @pytest.mark.parametrize("field", ["quantity", "rate"])
    def test_positive_quantity_and_rate(self, field):
        line = {"description": "Rice", "quantity": "1", "rate": "1", field: "0"}
        with pytest.raises(ValidationError):
            InvoiceItemIn(**line)

    def test_description_required(self):
        with pytest.raises(ValidationError):
            InvoiceItemIn(description="  ", quantity="1", rate="1")

    def test_defaults(self):
        form = InvoiceCreate(
            party_id=uuid4(),
            items=[InvoiceItemIn(description="Rice", quantity="1", rate="1", unit=" ")],
            destination="  ",
        )
        assert form.date == datetime.date.today()
        assert form.items[0].unit == "kg"
        assert form.destination is None

    def test_update_rejects_null_for_required_columns(self):
        with pytest.raises(ValidationError):
            InvoiceUpdate(total_amount=None)


# ===== DOCUMENT =====

class TestInvoiceDocument:

    def test_filename(self):
        assert document_filename(7) == "Invoice_7.html"
        assert document_filename(7, "pdf") == "Invoice_7.pdf"

    def test_render(self):
        items = build_items([InvoiceItemIn(description="Rice <long grain>", quantity="1000", rate="95")])
        invoice = InvoiceOut(
            id=uuid4(),
            invoice_no=12,
            date=datetime.date(2024, 4, 15),
            party=PartyOut(id=uuid4(), name="Gupta Enterprises", address=["Pune"], state="Maharashtra", state_code="27"),
            items=items,
            total_quantity=Decimal("1000"),
            total_amount=Decimal("95000.00"),
            amount_in_words="Rupees Ninety Five Thousand Only",
        )
        company = CompanyOut(name="Sharma Traders", address=["12, Market Yard", "Pune"], gstin="27AAPFU0939F1ZV")

        html = render_invoice(invoice, company)
        assert "TAX INVOICE" in html
        assert "15-Apr-24" in html
        assert "95,000.00" in html
        assert "Rice &lt;long grain&gt;" in html
        assert "GSTIN:</span> N/A" in html
        assert "Mode:</span> Credit" in html
        assert "For Sharma Traders" in html
        assert "12, Market Yard, Pune" in html


# ===== API =====

class TestInvoicesAPI:

    def test_create_invoice(self, client, invoice_payload):
        response = client.post("/invoices", json=invoice_payload)
        assert response.status_code == 201
        data = response.json()
        assert data["invoice_no"] == 1
        assert Decimal(data["total_amount"]) == Decimal("560")
        assert Decimal(data["total_quantity"]) == Decimal("13")
        assert data["amount_in_words"] == "Rupees Five Hundred Sixty Only"
        assert data["party"]["name"] == "Gupta Enterprises"
        assert [i["unit"] for i in data["items"]] == ["kg", "bag"]

        ledger = client.get("/ledger").json()
        assert ledger["total"] == 1
        entry = ledger["entries"][0]
        assert entry["voucher_type"] == "Sales"
        assert entry["voucher_no"] == 1
        assert Decimal(entry["debit"]) == Decimal("560")
        assert entry["particulars"] == "To Sales"

    def test_numbers_increase(self, client, invoice_payload):
        numbers = [client.post("/invoices", json=invoice_payload).json()["invoice_no"] for _ in range(3)]
        assert numbers == [1, 2, 3]
        assert client.get("/invoices/next-number").json() == {"invoice_no": 4}

    def test_list_with_grand_total(self, client, invoice_payload):
        client.post("/invoices", json=invoice_payload)
        client.post("/invoices", json={**invoice_payload, "items": [{"description": "X", "quantity": "1", "rate": "40"}]})
        data = client.get("/invoices").json()
        assert data["total"] == 2
        assert [i["invoice_no"] for i in data["invoices"]] == [1, 2]
        assert Decimal(data["grand_total"]) == Decimal("600")

    def test_create_for_unknown_party(self, client, invoice_payload):
        response = client.post("/invoices", json={**invoice_payload, "party_id": str(uuid4())})
        assert response.status_code == 404
        assert client.get("/invoices").json()["total"] == 0

    def test_create_validation_error(self, client, invoice_payload):
        payload = {**invoice_payload, "items": [{"description": "Rice", "quantity": "-1", "rate": "50"}]}
        assert client.post("/invoices", json=payload).status_code == 422

    def test_delete_removes_paired_entry(self, client, invoice_payload, party_id):
        first = client.post("/invoices", json=invoice_payload).json()
        second = client.post("/invoices", json=invoice_payload).json()
        client.post("/ledger", json={
            "party_id": party_id, "date": "2024-04-20", "voucher_type": "Receipt",
            "transaction_type": "credit", "amount": "500",
        })

        assert client.delete(f"/invoices/{first['id']}").status_code == 204
        assert client.get(f"/invoices/{first['id']}").status_code == 404

        entries = client.get("/ledger").json()["entries"]
        assert [(e["voucher_type"], e["voucher_no"]) for e in entries] == [("Sales", 2), ("Receipt", 1)]
        assert client.get(f"/invoices/{second['id']}").status_code == 200

    def test_delete_missing_invoice(self, client):
        assert client.delete(f"/invoices/{uuid4()}").status_code == 404

    def test_patch_recomputes_totals(self, client, invoice_payload):
        invoice = client.post("/invoices", json=invoice_payload).json()
        response = client.patch(f"/invoices/{invoice['id']}", json={
            "items": [{"description": "Sugar", "quantity": "2", "rate": "42"}],
            "date": "2024-04-16",
        })
        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["total_amount"]) == Decimal("84")
        assert data["date"] == "2024-04-16"
        assert data["destination"] == "Mumbai"
        assert data["items"][0]["sl_no"] == 1

    def test_document(self, client, invoice_payload):
        client.put("/company", json={"name": "Sharma Traders", "address": "12, Market Yard\nPune", "state": "Maharashtra"})
        invoice = client.post("/invoices", json=invoice_payload).json()

        response = client.get(f"/invoices/{invoice['id']}/document")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert 'filename="Invoice_1.html"' in response.headers["content-disposition"]
        assert "Sharma Traders" in response.text
        assert "Basmati Rice" in response.text

    def test_document_missing_invoice(self, client):
        assert client.get(f"/invoices/{uuid4()}/document").status_code == 404
