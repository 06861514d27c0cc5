"""
CRUD operations for invoices

Maps between the at-rest row (items and party snapshot as JSON) and InvoiceOut.
"""

from sqlalchemy import select, update, delete
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Dict, Any, Iterable
from uuid import UUID

from app.modules.invoices.models import Invoice
from app.modules.invoices.schemas import InvoiceData, InvoiceOut, InvoiceItem, INVOICE_METADATA_FIELDS
from app.modules.parties.schemas import PartyOut, unknown_party


class InvoiceCrud:
    """Database operations for invoices"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_all(self, parties: Iterable[PartyOut] = ()) -> List[InvoiceOut]:
        """All invoices by invoice number; `parties` resolves rows stored without a party snapshot"""
        parties_by_id = {p.id: p for p in parties if p.id is not None}
        result = await self.db.execute(select(Invoice).order_by(Invoice.invoice_no.asc()))
        return [self._to_schema(row, parties_by_id) for row in result.scalars().all()]

    async def create(self, data: InvoiceData) -> InvoiceOut:
        invoice = Invoice(
            invoice_no=data.invoice_no,
            date=data.date,
            party_id=data.party.id,
            party=data.party.model_dump(mode="json"),
            items=[item.model_dump(mode="json") for item in data.items],
            total_quantity=data.total_quantity,
            total_amount=data.total_amount,
            amount_in_words=data.amount_in_words,
            **{field: getattr(data, field) for field in INVOICE_METADATA_FIELDS},
        )
        self.db.add(invoice)
        await self.db.flush()
        return InvoiceOut(id=invoice.id, **data.model_dump())

    async def update(self, invoice_id: UUID, changes: Dict[str, Any]) -> int:
        """Write only the given fields; returns number of rows touched"""
        values = dict(changes)
        if "items" in values:
            values["items"] = [
                InvoiceItem.model_validate(item).model_dump(mode="json") for item in values["items"] or []
            ]
        for field in INVOICE_METADATA_FIELDS:
            if field in values:
                values[field] = values[field] or None

        if not values:
            return await self.exists(invoice_id)

        result = await self.db.execute(update(Invoice).where(Invoice.id == invoice_id).values(**values))
        return result.rowcount

    async def exists(self, invoice_id: UUID) -> int:
        result = await self.db.execute(select(Invoice.id).where(Invoice.id == invoice_id))
        return 1 if result.first() else 0

    async def delete(self, invoice_id: UUID) -> int:
        result = await self.db.execute(delete(Invoice).where(Invoice.id == invoice_id))
        return result.rowcount

    @staticmethod
    def _to_schema(row: Invoice, parties_by_id: Dict[UUID, PartyOut]) -> InvoiceOut:
        if row.party:
            party = PartyOut.model_validate(row.party)
        else:
            party = parties_by_id.get(row.party_id) or unknown_party()

        return InvoiceOut(
            id=row.id,
            invoice_no=row.invoice_no,
            date=row.date,
            party=party,
            items=[InvoiceItem.model_validate(item) for item in row.items or []],
            total_quantity=row.total_quantity,
            total_amount=row.total_amount,
            amount_in_words=row.amount_in_words or "",
            **{field: getattr(row, field) for field in INVOICE_METADATA_FIELDS},
        )
