"""
CRUD operations for ledger entries
"""

from sqlalchemy import select, update, delete
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Dict, Any
from uuid import UUID

from app.modules.ledger.models import LedgerEntry
from app.modules.ledger.schemas import LedgerEntryData, LedgerEntryOut


class LedgerCrud:
    """Database operations for ledger entries"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_all(self) -> List[LedgerEntryOut]:
        """All entries in date order (insertion order within a day)"""
        result = await self.db.execute(
            select(LedgerEntry).order_by(LedgerEntry.date.asc(), LedgerEntry.created_at.asc())
        )
        return [LedgerEntryOut.model_validate(e) for e in result.scalars().all()]

    async def create(self, data: LedgerEntryData) -> LedgerEntryOut:
        entry = LedgerEntry(
            date=data.date,
            party_id=data.party_id,
            particulars=data.particulars,
            voucher_type=data.voucher_type,
            voucher_no=data.voucher_no,
            debit=data.debit or None,
            credit=data.credit or None,
        )
        self.db.add(entry)
        await self.db.flush()
        return LedgerEntryOut(id=entry.id, **data.model_dump())

    async def update(self, entry_id: UUID, changes: Dict[str, Any]) -> int:
        """Write only the given fields; returns number of rows touched"""
        values = dict(changes)
        for amount in ("debit", "credit"):
            if amount in values:
                values[amount] = values[amount] or None

        if not values:
            return await self.exists(entry_id)

        result = await self.db.execute(update(LedgerEntry).where(LedgerEntry.id == entry_id).values(**values))
        return result.rowcount

    async def exists(self, entry_id: UUID) -> int:
        result = await self.db.execute(select(LedgerEntry.id).where(LedgerEntry.id == entry_id))
        return 1 if result.first() else 0

    async def delete(self, entry_id: UUID) -> int:
        result = await self.db.execute(delete(LedgerEntry).where(LedgerEntry.id == entry_id))
        return result.rowcount
