"""
Accounting state store

Holds the in-memory snapshot of the company profile, parties, invoices and
ledger entries, and keeps it in step with the database:

- load_all() replaces the whole snapshot from the database
- every mutation is written and committed first; the snapshot only changes
  after the commit succeeds, so a failure leaves it as it was
- invoice and voucher numbers are derived from the snapshot (max + 1)

The store does not pair invoices with their Sales ledger entries; see
app.modules.accounting.workflows for that.
"""
from contextlib import asynccontextmanager
from decimal import Decimal
from typing import List, Optional
from uuid import UUID
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from app.modules.accounting.exceptions import PersistenceError, RecordNotFoundError
from app.modules.company.crud import CompanyCrud
from app.modules.company.schemas import CompanyOut, default_company
from app.modules.invoices.crud import InvoiceCrud
from app.modules.invoices.schemas import InvoiceData, InvoiceOut, InvoiceUpdate
from app.modules.ledger.crud import LedgerCrud
from app.modules.ledger.models import VoucherType
from app.modules.ledger.schemas import LedgerEntryData, LedgerEntryOut, LedgerEntryUpdate
from app.modules.locations.crud import get_state_code
from app.modules.parties.crud import PartyCrud
from app.modules.parties.schemas import PartyCreate, PartyOut, PartyUpdate, UNKNOWN_PARTY_NAME

logger = logging.getLogger(__name__)


class AccountingStore:
    """Write-through snapshot of all accounting data"""

    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory
        self.company: CompanyOut = default_company()
        self.parties: List[PartyOut] = []
        self.invoices: List[InvoiceOut] = []
        self.ledger_entries: List[LedgerEntryOut] = []
        self.loading: bool = True
        self.last_error: Optional[str] = None

    @asynccontextmanager
    async def _transaction(self, operation: str):
        """Session committed on success; database errors become PersistenceError"""
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                logger.exception(f"{operation} failed")
                raise PersistenceError(operation, str(e)) from e

    # ===== LOADING =====

    async def load_all(self) -> None:
        """Replace the snapshot with what the database holds.

        Never raises: on failure the error is logged and kept in `last_error`,
        loading is marked finished and the previous snapshot stays in place.
        """
        self.loading = True
        try:
            async with self.session_factory() as session:
                company = await CompanyCrud(session).get_first()
                parties = await PartyCrud(session).get_all()
                invoices = await InvoiceCrud(session).get_all(parties)
                ledger_entries = await LedgerCrud(session).get_all()
        except Exception as e:
            logger.exception("Error loading accounting data")
            self.last_error = str(e)
            self.loading = False
            return

        self.company = company or default_company()
        self.parties = parties
        self.invoices = invoices
        self.ledger_entries = ledger_entries
        self.last_error = None
        self.loading = False
        logger.info(
            f"Accounting data loaded: {len(parties)} parties, {len(invoices)} invoices, "
            f"{len(ledger_entries)} ledger entries"
        )

    async def refresh_data(self) -> None:
        await self.load_all()

    # ===== COMPANY =====

    async def set_company(self, company: CompanyOut, create_if_missing: bool = False) -> CompanyOut:
        """Replace the company profile.

        The row is updated when the current profile is persisted. Otherwise only
        the snapshot changes, unless `create_if_missing` asks for a row to be inserted.
        """
        if self.company.id is not None:
            async with self._transaction("Update company") as session:
                touched = await CompanyCrud(session).update(self.company.id, company)
                if not touched:
                    raise RecordNotFoundError("Company", self.company.id)
            company = company.model_copy(update={"id": self.company.id})
        elif create_if_missing:
            async with self._transaction("Create company") as session:
                company = await CompanyCrud(session).create(company)

        self.company = company
        logger.info(f"Company profile set: {company.name}")
        return company

    # ===== PARTIES =====

    async def add_party(self, data: PartyCreate) -> PartyOut:
        values = data.model_dump()
        values["state_code"] = get_state_code(data.state)

        async with self._transaction("Add party") as session:
            party = await PartyCrud(session).create(values)

        self.parties.insert(0, party)
        logger.info(f"Party added: {party.name} ({party.id})")
        return party

    async def update_party(self, party_id: UUID, data: PartyUpdate) -> PartyOut:
        changes = data.model_dump(exclude_unset=True)

        async with self._transaction("Update party") as session:
            touched = await PartyCrud(session).update(party_id, changes)
            if not touched:
                raise RecordNotFoundError("Party", party_id)

        return self._merge(self.parties, party_id, changes, PartyOut)

    async def delete_party(self, party_id: UUID) -> None:
        async with self._transaction("Delete party") as session:
            touched = await PartyCrud(session).delete(party_id)
            if not touched:
                raise RecordNotFoundError("Party", party_id)

        self.parties = [p for p in self.parties if p.id != party_id]
        logger.info(f"Party deleted: {party_id}")

    # ===== INVOICES =====

    async def add_invoice(self, data: InvoiceData) -> InvoiceOut:
        """Persist an invoice as given; totals are the caller's responsibility"""
        async with self._transaction("Add invoice") as session:
            invoice = await InvoiceCrud(session).create(data)

        self.invoices.append(invoice)
        logger.info(f"Invoice {invoice.invoice_no} added ({invoice.id})")
        return invoice

    async def update_invoice(self, invoice_id: UUID, data: InvoiceUpdate) -> InvoiceOut:
        changes = data.model_dump(exclude_unset=True)

        async with self._transaction("Update invoice") as session:
            touched = await InvoiceCrud(session).update(invoice_id, changes)
            if not touched:
                raise RecordNotFoundError("Invoice", invoice_id)

        return self._merge(self.invoices, invoice_id, changes, InvoiceOut)

    async def delete_invoice(self, invoice_id: UUID) -> None:
        """Delete the invoice only; its Sales ledger entry is left alone"""
        async with self._transaction("Delete invoice") as session:
            touched = await InvoiceCrud(session).delete(invoice_id)
            if not touched:
                raise RecordNotFoundError("Invoice", invoice_id)

        self.invoices = [i for i in self.invoices if i.id != invoice_id]
        logger.info(f"Invoice deleted: {invoice_id}")

    # ===== LEDGER =====

    async def add_ledger_entry(self, data: LedgerEntryData) -> LedgerEntryOut:
        async with self._transaction("Add ledger entry") as session:
            entry = await LedgerCrud(session).create(data)

        self.ledger_entries.append(entry)
        logger.info(f"Ledger entry {entry.voucher_type.value} #{entry.voucher_no} added ({entry.id})")
        return entry

    async def update_ledger_entry(self, entry_id: UUID, data: LedgerEntryUpdate) -> LedgerEntryOut:
        changes = data.model_dump(exclude_unset=True)

        async with self._transaction("Update ledger entry") as session:
            touched = await LedgerCrud(session).update(entry_id, changes)
            if not touched:
                raise RecordNotFoundError("Ledger entry", entry_id)

        return self._merge(self.ledger_entries, entry_id, changes, LedgerEntryOut)

    async def delete_ledger_entry(self, entry_id: UUID) -> None:
        async with self._transaction("Delete ledger entry") as session:
            touched = await LedgerCrud(session).delete(entry_id)
            if not touched:
                raise RecordNotFoundError("Ledger entry", entry_id)

        self.ledger_entries = [e for e in self.ledger_entries if e.id != entry_id]
        logger.info(f"Ledger entry deleted: {entry_id}")

    # ===== SEQUENCES =====

    def get_next_invoice_no(self) -> int:
        """max(invoice_no) + 1 over the snapshot, 1 when there are no invoices.

        Not reserved: two creations started before either is stored get the same number.
        """
        if not self.invoices:
            return 1
        return max(i.invoice_no for i in self.invoices) + 1

    def get_next_voucher_no(self, voucher_type: VoucherType) -> int:
        """Same as get_next_invoice_no, counted within one voucher type"""
        numbers = [e.voucher_no for e in self.ledger_entries if e.voucher_type == voucher_type]
        if not numbers:
            return 1
        return max(numbers) + 1

    # ===== LOOKUPS =====

    def get_party(self, party_id: Optional[UUID]) -> Optional[PartyOut]:
        return next((p for p in self.parties if p.id == party_id), None)

    def get_invoice(self, invoice_id: UUID) -> Optional[InvoiceOut]:
        return next((i for i in self.invoices if i.id == invoice_id), None)

    def get_ledger_entry(self, entry_id: UUID) -> Optional[LedgerEntryOut]:
        return next((e for e in self.ledger_entries if e.id == entry_id), None)

    def find_sales_entry(self, invoice_no: int, amount: Optional[Decimal] = None) -> Optional[LedgerEntryOut]:
        """The Sales voucher paired with an invoice number, if any.

        Manual Sales vouchers can carry the same number; when `amount` is given
        the entry debiting exactly that amount wins.
        """
        matches = [
            e for e in self.ledger_entries if e.voucher_type == VoucherType.SALES and e.voucher_no == invoice_no
        ]
        if amount is not None:
            exact = [e for e in matches if e.debit == amount]
            if exact:
                return exact[0]
        return matches[0] if matches else None

    def party_name(self, party_id: Optional[UUID]) -> str:
        party = self.get_party(party_id)
        return party.name if party else UNKNOWN_PARTY_NAME

    def entries_for_party(self, party_id: UUID) -> List[LedgerEntryOut]:
        return [e for e in self.ledger_entries if e.party_id == party_id]

    @staticmethod
    def _merge(records: list, record_id: UUID, changes: dict, schema):
        """Apply persisted changes to the matching snapshot record in place"""
        for index, record in enumerate(records):
            if record.id == record_id:
                records[index] = schema.model_validate({**record.model_dump(), **changes})
                return records[index]
        # persisted but not in the snapshot (e.g. created elsewhere); the next load picks it up
        logger.warning(f"{schema.__name__} {record_id} updated but missing from snapshot")
        return None
