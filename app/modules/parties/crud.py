"""
CRUD operations for the party directory

Returns PartyOut records; callers never see ORM rows.
"""

from sqlalchemy import select, update, delete
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Dict, Any
from uuid import UUID

from app.modules.parties.models import Party
from app.modules.parties.schemas import PartyOut


class PartyCrud:
    """Database operations for parties"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_all(self) -> List[PartyOut]:
        """All parties, most recently created first"""
        result = await self.db.execute(select(Party).order_by(Party.created_at.desc()))
        return [PartyOut.model_validate(p) for p in result.scalars().all()]

    async def create(self, party_data: Dict[str, Any]) -> PartyOut:
        party = Party(
            name=party_data["name"],
            email=party_data.get("email") or None,
            address=list(party_data.get("address") or []),
            district=party_data.get("district", ""),
            state=party_data.get("state", ""),
            state_code=party_data.get("state_code", ""),
            gstin=party_data.get("gstin") or None,
        )
        self.db.add(party)
        await self.db.flush()
        return PartyOut.model_validate(party)

    async def update(self, party_id: UUID, changes: Dict[str, Any]) -> int:
        """Write only the given fields; returns number of rows touched"""
        values = dict(changes)
        for nullable in ("email", "gstin"):
            if nullable in values:
                values[nullable] = values[nullable] or None

        if not values:
            return await self.exists(party_id)

        result = await self.db.execute(update(Party).where(Party.id == party_id).values(**values))
        return result.rowcount

    async def exists(self, party_id: UUID) -> int:
        result = await self.db.execute(select(Party.id).where(Party.id == party_id))
        return 1 if result.first() else 0

    async def delete(self, party_id: UUID) -> int:
        result = await self.db.execute(delete(Party).where(Party.id == party_id))
        return result.rowcount
