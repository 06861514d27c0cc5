"""
Tests for the accounting store, workflows and aggregates

Covers:
- invoice and voucher numbering (max + 1, independent per voucher type)
- invoice <-> Sales ledger entry pairing on create and delete
- totals recomputed from line items
- balances and their Cr/Dr labels
- write-through behaviour: reload returns what was written, failed writes leave the snapshot alone
- tolerance of deleted parties ("Unknown")
"""

import datetime
from decimal import Decimal
from uuid import uuid4

import pytest
from sqlalchemy import update
from sqlalchemy.exc import OperationalError

from app.modules.accounting import aggregates, workflows
from app.modules.accounting.exceptions import PartyNotFoundError, PersistenceError, RecordNotFoundError
from app.modules.company.schemas import CompanyOut
from app.modules.invoices.crud import InvoiceCrud
from app.modules.invoices.models import Invoice
from app.modules.invoices.schemas import InvoiceCreate, InvoiceItemIn, InvoiceRevision
from app.modules.ledger.crud import LedgerCrud
from app.modules.ledger.models import VoucherType
from app.modules.ledger.schemas import (
    BalanceLabel, LedgerEntryCreate, LedgerEntryData, LedgerEntryUpdate, TransactionType
)
from app.modules.parties.crud import PartyCrud
from app.modules.parties.schemas import PartyCreate, PartyUpdate


INVOICE_DATE = datetime.date(2024, 4, 15)


# ===== HELPERS =====

async def add_party(store, name="Gupta Enterprises", state="Maharashtra"):
    return await workflows.register_party(store, PartyCreate(
        name=name,
        address="14, Station Road\nKothrud",
        district="Pune",
        state=state,
    ))


def invoice_form(party_id, lines=((10, 50), (3, 20)), **extra):
    return InvoiceCreate(
        party_id=party_id,
        date=INVOICE_DATE,
        items=[
            InvoiceItemIn(description=f"Item {n}", quantity=Decimal(qty), rate=Decimal(rate))
            for n, (qty, rate) in enumerate(lines, start=1)
        ],
        **extra
    )


def entry_data(voucher_type, voucher_no, party_id=None, debit=None, credit=None):
    return LedgerEntryData(
        date=INVOICE_DATE,
        party_id=party_id,
        particulars="Manual",
        voucher_type=voucher_type,
        voucher_no=voucher_no,
        debit=debit,
        credit=credit,
    )


def fail_with_database_error(*args, **kwargs):
    raise OperationalError("INSERT", {}, Exception("database is unavailable"))


# ===== SEQUENCES =====

class TestSequences:
    """Invoice and voucher numbers come from the snapshot"""

    def test_first_invoice_number_is_one(self, run_with_store):
        async def scenario(store):
            return store.get_next_invoice_no()

        assert run_with_store(scenario) == 1

    def test_next_invoice_number_skips_gaps(self, run_with_store):
        """Invoices {1, 2, 4} (3 deleted) -> next is 5"""
        async def scenario(store):
            party = await add_party(store)
            created = [await workflows.create_invoice(store, invoice_form(party.id)) for _ in range(4)]
            await workflows.delete_invoice(store, created[2].id)
            return [i.invoice_no for i in store.invoices], store.get_next_invoice_no()

        numbers, next_no = run_with_store(scenario)
        assert numbers == [1, 2, 4]
        assert next_no == 5

    def test_voucher_numbers_are_independent_per_type(self, run_with_store):
        """Payment {1, 2} and Receipt {1} -> next Payment 3, next Receipt 2"""
        async def scenario(store):
            await store.add_ledger_entry(entry_data(VoucherType.PAYMENT, 1, debit=Decimal("100")))
            await store.add_ledger_entry(entry_data(VoucherType.PAYMENT, 2, debit=Decimal("200")))
            await store.add_ledger_entry(entry_data(VoucherType.RECEIPT, 1, credit=Decimal("300")))
            return (
                store.get_next_voucher_no(VoucherType.PAYMENT),
                store.get_next_voucher_no(VoucherType.RECEIPT),
                store.get_next_voucher_no(VoucherType.JOURNAL),
            )

        assert run_with_store(scenario) == (3, 2, 1)

    def test_recorded_entries_take_next_number_of_their_type(self, run_with_store):
        async def scenario(store):
            party = await add_party(store)
            numbers = []
            for voucher_type in (VoucherType.RECEIPT, VoucherType.RECEIPT, VoucherType.PAYMENT):
                entry = await workflows.record_ledger_entry(store, LedgerEntryCreate(
                    party_id=party.id,
                    date=INVOICE_DATE,
                    voucher_type=voucher_type,
                    transaction_type=TransactionType.CREDIT,
                    amount=Decimal("10"),
                ))
                numbers.append((entry.voucher_type, entry.voucher_no))
            return numbers

        assert run_with_store(scenario) == [
            (VoucherType.RECEIPT, 1), (VoucherType.RECEIPT, 2), (VoucherType.PAYMENT, 1)
        ]


# ===== INVOICE WORKFLOWS =====

class TestInvoiceWorkflows:
    """Invoice creation, revision and deletion with the paired Sales entry"""

    def test_totals_are_computed_from_items(self, run_with_store):
        """(10 x 50) + (3 x 20) -> 560, quantity 13"""
        async def scenario(store):
            party = await add_party(store)
            return await workflows.create_invoice(store, invoice_form(party.id))

        invoice = run_with_store(scenario)
        assert invoice.total_amount == Decimal("560")
        assert invoice.total_quantity == Decimal("13")
        assert [item.amount for item in invoice.items] == [Decimal("500"), Decimal("60")]
        assert [item.sl_no for item in invoice.items] == [1, 2]
        assert all(item.per == item.unit == "kg" for item in invoice.items)
        assert invoice.amount_in_words == "Rupees Five Hundred Sixty Only"

    def test_create_invoice_records_paired_sales_entry(self, run_with_store):
        async def scenario(store):
            party = await add_party(store)
            invoice = await workflows.create_invoice(store, invoice_form(party.id))
            return invoice, store.ledger_entries

        invoice, entries = run_with_store(scenario)
        paired = [e for e in entries if e.voucher_type == VoucherType.SALES and e.voucher_no == invoice.invoice_no]
        assert len(paired) == 1
        assert paired[0].debit == invoice.total_amount
        assert paired[0].credit is None
        assert paired[0].particulars == "To Sales"
        assert paired[0].party_id == invoice.party.id
        assert paired[0].date == invoice.date

    def test_create_invoice_snapshots_party(self, run_with_store):
        async def scenario(store):
            party = await add_party(store)
            invoice = await workflows.create_invoice(store, invoice_form(party.id, mode_of_payment="Cash"))
            await workflows.edit_party(store, party.id, PartyUpdate(name="Renamed Traders"))
            await store.load_all()
            return store.get_invoice(invoice.id)

        invoice = run_with_store(scenario)
        assert invoice.party.name == "Gupta Enterprises"
        assert invoice.party.state_code == "27"
        assert invoice.mode_of_payment == "Cash"

    def test_create_invoice_unknown_party(self, run_with_store):
        async def scenario(store):
            with pytest.raises(PartyNotFoundError):
                await workflows.create_invoice(store, invoice_form(uuid4()))
            return store.invoices, store.ledger_entries

        assert run_with_store(scenario) == ([], [])

    def test_delete_invoice_removes_paired_entry_only(self, run_with_store):
        async def scenario(store):
            party = await add_party(store)
            first = await workflows.create_invoice(store, invoice_form(party.id))
            second = await workflows.create_invoice(store, invoice_form(party.id, lines=((2, 100),)))
            receipt = await store.add_ledger_entry(
                entry_data(VoucherType.RECEIPT, 1, party_id=party.id, credit=Decimal("100"))
            )

            await workflows.delete_invoice(store, first.id)
            await store.load_all()
            return first, second, receipt, store

        first, second, receipt, store = run_with_store(scenario)
        assert store.get_invoice(first.id) is None
        assert store.find_sales_entry(first.invoice_no) is None
        assert store.get_invoice(second.id) is not None
        assert store.find_sales_entry(second.invoice_no) is not None
        assert store.get_ledger_entry(receipt.id) is not None

    def test_manual_sales_voucher_sharing_next_invoice_number(self, run_with_store):
        """A hand-entered Sales voucher takes the number the next invoice gets"""
        async def scenario(store):
            party = await add_party(store)
            await workflows.create_invoice(store, invoice_form(party.id, lines=((1, 10),)))
            manual = await workflows.record_ledger_entry(store, LedgerEntryCreate(
                party_id=party.id, voucher_type=VoucherType.SALES,
                transaction_type=TransactionType.DEBIT, amount=Decimal("5"),
            ))
            invoice = await workflows.create_invoice(store, invoice_form(party.id, lines=((2, 10),)))
            paired = store.find_sales_entry(invoice.invoice_no, invoice.total_amount)

            await workflows.delete_invoice(store, invoice.id)
            await store.load_all()
            return manual, invoice, paired, store

        manual, invoice, paired, store = run_with_store(scenario)
        assert manual.voucher_no == invoice.invoice_no == 2
        assert paired.id != manual.id
        assert paired.debit == Decimal("20")
        assert store.get_ledger_entry(paired.id) is None
        assert store.get_ledger_entry(manual.id) is not None
        assert [(e.voucher_no, e.debit) for e in store.ledger_entries] == [(1, Decimal("10")), (2, Decimal("5"))]

    def test_delete_unknown_invoice(self, run_with_store):
        async def scenario(store):
            with pytest.raises(RecordNotFoundError):
                await workflows.delete_invoice(store, uuid4())

        run_with_store(scenario)

    def test_pairing_is_not_atomic(self, run_with_store, monkeypatch):
        """A failed Sales entry leaves the stored invoice in place"""
        async def scenario(store):
            party = await add_party(store)
            monkeypatch.setattr(LedgerCrud, "create", fail_with_database_error)
            with pytest.raises(PersistenceError):
                await workflows.create_invoice(store, invoice_form(party.id))
            in_memory = (len(store.invoices), len(store.ledger_entries))
            await store.load_all()
            return in_memory, (len(store.invoices), len(store.ledger_entries))

        in_memory, reloaded = run_with_store(scenario)
        assert in_memory == (1, 0)
        assert reloaded == (1, 0)

    def test_revise_invoice_recomputes_totals(self, run_with_store):
        async def scenario(store):
            party = await add_party(store)
            invoice = await workflows.create_invoice(store, invoice_form(party.id))
            revised = await workflows.revise_invoice(store, invoice.id, InvoiceRevision(
                items=[InvoiceItemIn(description="Rice", quantity=Decimal("4"), rate=Decimal("25.50"))],
                destination="Nashik",
            ))
            await store.load_all()
            return revised, store.get_invoice(invoice.id), store.find_sales_entry(invoice.invoice_no)

        revised, reloaded, sales_entry = run_with_store(scenario)
        assert revised.total_amount == Decimal("102.00")
        assert revised.total_quantity == Decimal("4")
        assert revised.amount_in_words == "Rupees One Hundred Two Only"
        assert revised.destination == "Nashik"
        assert revised == reloaded
        # paired entry keeps the original amount
        assert sales_entry.debit == Decimal("560")

    def test_revise_without_items_keeps_totals(self, run_with_store):
        async def scenario(store):
            party = await add_party(store)
            invoice = await workflows.create_invoice(store, invoice_form(party.id))
            return await workflows.revise_invoice(store, invoice.id, InvoiceRevision(mode_of_payment="NEFT"))

        revised = run_with_store(scenario)
        assert revised.total_amount == Decimal("560")
        assert revised.mode_of_payment == "NEFT"


# ===== LEDGER WORKFLOWS =====

class TestLedgerWorkflows:

    def test_default_particulars(self, run_with_store):
        async def scenario(store):
            party = await add_party(store)
            credit = await workflows.record_ledger_entry(store, LedgerEntryCreate(
                party_id=party.id, voucher_type=VoucherType.RECEIPT,
                transaction_type=TransactionType.CREDIT, amount=Decimal("1000"),
            ))
            debit = await workflows.record_ledger_entry(store, LedgerEntryCreate(
                party_id=party.id, voucher_type=VoucherType.PAYMENT,
                transaction_type=TransactionType.DEBIT, amount=Decimal("400"),
                particulars="By IDBI",
            ))
            return credit, debit

        credit, debit = run_with_store(scenario)
        assert credit.particulars == "By Gupta Enterprises"
        assert (credit.credit, credit.debit) == (Decimal("1000"), None)
        assert debit.particulars == "By IDBI"
        assert (debit.debit, debit.credit) == (Decimal("400"), None)

    def test_record_entry_unknown_party(self, run_with_store):
        async def scenario(store):
            with pytest.raises(PartyNotFoundError):
                await workflows.record_ledger_entry(store, LedgerEntryCreate(
                    party_id=uuid4(), voucher_type=VoucherType.RECEIPT,
                    transaction_type=TransactionType.CREDIT, amount=Decimal("1"),
                ))

        run_with_store(scenario)


# ===== STORE =====

class TestAccountingStore:
    """Write-through snapshot"""

    def test_empty_load_uses_default_company(self, run_with_store):
        async def scenario(store):
            return store

        store = run_with_store(scenario)
        assert store.loading is False
        assert store.last_error is None
        assert store.company.id is None
        assert store.parties == [] and store.invoices == [] and store.ledger_entries == []

    def test_round_trip_after_reload(self, run_with_store):
        async def scenario(store):
            party = await workflows.register_party(store, PartyCreate(
                name="Nair Spices", email="hello@nair.example.com", address=["Market Road", "Fort Kochi"],
                district="Ernakulam", state="Kerala", gstin="32AAPFU0939F1ZX",
            ))
            invoice = await workflows.create_invoice(store, invoice_form(
                party.id, lines=((Decimal("2.5"), Decimal("99.99")),), destination="Kochi"
            ))
            entry = store.find_sales_entry(invoice.invoice_no)

            before = (list(store.parties), list(store.invoices), list(store.ledger_entries))
            await store.load_all()
            after = (store.get_party(party.id), store.get_invoice(invoice.id), store.get_ledger_entry(entry.id))
            return before, after, (party, invoice, entry)

        before, after, (party, invoice, entry) = run_with_store(scenario)
        assert after == (party, invoice, entry)
        assert party.state_code == "32"
        assert party.gstin == "32AAPFU0939F1ZX"
        assert invoice.total_amount == Decimal("249.98")

    def test_amounts_stored_at_column_precision(self, run_with_store):
        async def scenario(store):
            party = await add_party(store)
            entry = await workflows.record_ledger_entry(store, LedgerEntryCreate(
                party_id=party.id, voucher_type=VoucherType.RECEIPT,
                transaction_type=TransactionType.CREDIT, amount=Decimal("10.005"),
            ))
            invoice = await workflows.create_invoice(store, invoice_form(party.id, lines=((Decimal("2.3334"), 3),)))

            before = (store.get_ledger_entry(entry.id), store.get_invoice(invoice.id))
            await store.load_all()
            return before, (store.get_ledger_entry(entry.id), store.get_invoice(invoice.id))

        before, after = run_with_store(scenario)
        assert before == after
        entry, invoice = after
        assert entry.credit == Decimal("10.01")
        assert invoice.total_quantity == Decimal("2.333")
        assert invoice.total_amount == Decimal("7.00")

    def test_parties_most_recent_first(self, run_with_store):
        async def scenario(store):
            for name in ("First", "Second", "Third"):
                await add_party(store, name=name)
            in_memory = [p.name for p in store.parties]
            await store.load_all()
            return in_memory, [p.name for p in store.parties]

        in_memory, reloaded = run_with_store(scenario)
        assert in_memory == ["Third", "Second", "First"]
        assert reloaded == in_memory

    def test_add_party_resolves_state_code(self, run_with_store):
        async def scenario(store):
            known = await add_party(store, state="tamil nadu")
            unknown = await add_party(store, name="Elsewhere", state="Atlantis")
            return known, unknown

        known, unknown = run_with_store(scenario)
        assert known.state_code == "33"
        assert unknown.state_code == ""

    def test_edit_party_state_updates_code(self, run_with_store):
        async def scenario(store):
            party = await add_party(store)
            updated = await workflows.edit_party(store, party.id, PartyUpdate(state="Gujarat"))
            await store.load_all()
            return updated, store.get_party(party.id)

        updated, reloaded = run_with_store(scenario)
        assert updated.state_code == "24"
        assert updated.district == "Pune"
        assert reloaded == updated

    def test_failed_write_leaves_snapshot_unchanged(self, run_with_store, monkeypatch):
        async def scenario(store):
            party = await add_party(store)
            before = list(store.parties)

            monkeypatch.setattr(PartyCrud, "create", fail_with_database_error)
            with pytest.raises(PersistenceError):
                await add_party(store, name="Never Stored")

            monkeypatch.setattr(PartyCrud, "update", fail_with_database_error)
            with pytest.raises(PersistenceError):
                await workflows.edit_party(store, party.id, PartyUpdate(name="Never Renamed"))

            return before, list(store.parties)

        before, after = run_with_store(scenario)
        assert after == before

    def test_update_or_delete_missing_record(self, run_with_store):
        async def scenario(store):
            missing = uuid4()
            with pytest.raises(RecordNotFoundError):
                await store.update_party(missing, PartyUpdate(name="Ghost"))
            with pytest.raises(RecordNotFoundError):
                await store.delete_party(missing)
            with pytest.raises(RecordNotFoundError):
                await store.update_ledger_entry(missing, LedgerEntryUpdate(particulars="x"))
            with pytest.raises(RecordNotFoundError):
                await store.delete_ledger_entry(missing)

        run_with_store(scenario)

    def test_update_ledger_entry_partial(self, run_with_store):
        async def scenario(store):
            entry = await store.add_ledger_entry(entry_data(VoucherType.JOURNAL, 1, credit=Decimal("50")))
            updated = await store.update_ledger_entry(entry.id, LedgerEntryUpdate(particulars="Adjusted"))
            await store.load_all()
            return entry, updated, store.get_ledger_entry(entry.id)

        entry, updated, reloaded = run_with_store(scenario)
        assert updated.particulars == "Adjusted"
        assert updated.credit == entry.credit
        assert reloaded == updated

    def test_deleted_party_reads_as_unknown(self, run_with_store):
        async def scenario(store):
            party = await add_party(store)
            invoice = await workflows.create_invoice(store, invoice_form(party.id))
            await store.delete_party(party.id)
            await store.load_all()
            return store, invoice, party

        store, invoice, party = run_with_store(scenario)
        assert store.get_party(party.id) is None
        assert store.party_name(party.id) == "Unknown"
        # the invoice still carries the party as it was
        assert store.get_invoice(invoice.id).party.name == "Gupta Enterprises"
        statement = aggregates.ledger_statement(store)
        assert statement.entries[0].party_name == "Unknown"

    def test_invoice_without_snapshot_resolves_party(self, run_with_store):
        async def scenario(store):
            party = await add_party(store)
            invoice = await workflows.create_invoice(store, invoice_form(party.id))
            async with store.session_factory() as session:
                await session.execute(update(Invoice).where(Invoice.id == invoice.id).values(party=None))
                await session.commit()
            await store.load_all()
            resolved = store.get_invoice(invoice.id).party
            await store.delete_party(party.id)
            await store.load_all()
            return resolved, store.get_invoice(invoice.id).party

        resolved, dangling = run_with_store(scenario)
        assert resolved.name == "Gupta Enterprises"
        assert dangling.name == "Unknown"
        assert dangling.id is None

    def test_load_failure_keeps_snapshot(self, run_with_store, monkeypatch):
        async def scenario(store):
            await add_party(store)
            monkeypatch.setattr(InvoiceCrud, "get_all", fail_with_database_error)
            await store.load_all()
            return store

        store = run_with_store(scenario)
        assert store.loading is False
        assert "database is unavailable" in store.last_error
        assert [p.name for p in store.parties] == ["Gupta Enterprises"]

    def test_set_company(self, run_with_store):
        async def scenario(store):
            profile = CompanyOut(name="Sharma Traders", address=["12, Market Yard"], state="Maharashtra", state_code="27")

            await store.set_company(profile)
            await store.load_all()
            in_memory_only = store.company

            saved = await store.set_company(profile, create_if_missing=True)
            renamed = await store.set_company(profile.model_copy(update={"name": "Sharma & Co"}))
            await store.load_all()
            return in_memory_only, saved, renamed, store.company

        in_memory_only, saved, renamed, reloaded = run_with_store(scenario)
        assert in_memory_only.id is None
        assert in_memory_only.name != "Sharma Traders"
        assert saved.id is not None
        assert renamed.id == saved.id
        assert reloaded == renamed


# ===== AGGREGATES =====

class TestAggregates:

    def test_party_balance_credit(self, run_with_store):
        """credit 1000, debit 400 -> 600 Cr"""
        async def scenario(store):
            party = await add_party(store)
            other = await add_party(store, name="Other")
            await store.add_ledger_entry(entry_data(VoucherType.RECEIPT, 1, party_id=party.id, credit=Decimal("1000")))
            await store.add_ledger_entry(entry_data(VoucherType.PAYMENT, 1, party_id=party.id, debit=Decimal("400")))
            await store.add_ledger_entry(entry_data(VoucherType.PAYMENT, 2, party_id=other.id, debit=Decimal("5000")))
            return store, party

        store, party = run_with_store(scenario)
        balance = aggregates.net_balance(store.ledger_entries, party.id)
        assert balance.net == Decimal("600")
        assert balance.amount == Decimal("600")
        assert balance.label == BalanceLabel.CR

        overall = aggregates.net_balance(store.ledger_entries)
        assert overall.net == Decimal("-4400")
        assert overall.amount == Decimal("4400")
        assert overall.label == BalanceLabel.DR

    def test_zero_balance_is_credit(self):
        assert aggregates.net_balance([]).label == BalanceLabel.CR

    def test_aggregates_are_idempotent(self, run_with_store):
        async def scenario(store):
            party = await add_party(store)
            for lines in (((10, 50),), ((1, 99.5),), ((3, 20),)):
                await workflows.create_invoice(store, invoice_form(party.id, lines=lines))
            return store

        store = run_with_store(scenario)
        first = (aggregates.total_sales(store.invoices), aggregates.net_balance(store.ledger_entries))
        second = (aggregates.total_sales(store.invoices), aggregates.net_balance(store.ledger_entries))
        assert first == second
        assert first[0] == Decimal("659.50")
        assert aggregates.average_invoice_value(store.invoices) == Decimal("219.83")

    def test_average_invoice_value_without_invoices(self):
        assert aggregates.average_invoice_value([]) == Decimal("0")

    def test_running_balances_and_statement(self, run_with_store):
        async def scenario(store):
            party = await add_party(store)
            await workflows.create_invoice(store, invoice_form(party.id))  # debit 560
            await workflows.record_ledger_entry(store, LedgerEntryCreate(
                party_id=party.id, date=INVOICE_DATE + datetime.timedelta(days=1),
                voucher_type=VoucherType.RECEIPT, transaction_type=TransactionType.CREDIT,
                amount=Decimal("600"),
            ))
            return aggregates.ledger_statement(store, party.id)

        statement = run_with_store(scenario)
        assert statement.party_name == "Gupta Enterprises"
        assert statement.total == 2
        assert [line.balance.net for line in statement.entries] == [Decimal("-560"), Decimal("40")]
        assert [line.balance.label for line in statement.entries] == [BalanceLabel.DR, BalanceLabel.CR]
        assert statement.entries[0].display_date == "15-Apr-24"
        assert statement.total_debit == Decimal("560")
        assert statement.total_credit == Decimal("600")
        assert statement.closing_balance.label == BalanceLabel.CR

    def test_dashboard_recent_invoices_newest_first(self, run_with_store):
        async def scenario(store):
            party = await add_party(store)
            for _ in range(7):
                await workflows.create_invoice(store, invoice_form(party.id))
            return aggregates.dashboard_summary(store)

        summary = run_with_store(scenario)
        assert summary.invoice_count == 7
        assert [i.invoice_no for i in summary.recent_invoices] == [7, 6, 5, 4, 3]
        assert summary.total_sales == Decimal("3920.00")
        assert summary.total_debits == Decimal("3920.00")
        assert summary.net_balance.label == BalanceLabel.DR


# ===== API =====

class TestAccountingAPI:

    def test_status_and_refresh(self, client, party_payload):
        status = client.get("/accounting/status").json()
        assert status["loading"] is False
        assert status["last_error"] is None
        assert status["company_persisted"] is False
        assert status["next_invoice_no"] == 1

        client.post("/parties", json=party_payload)
        refreshed = client.post("/accounting/refresh").json()
        assert refreshed["parties"] == 1
        assert refreshed["invoices"] == 0

    def test_health(self, client):
        data = client.get("/health").json()
        assert data["status"] == "healthy"
        assert data["loading"] is False
