"""
Database operations for the company profile.
"""
from typing import Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.company.models import Company
from app.modules.company.schemas import CompanyOut


class CompanyCrud:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_first(self) -> Optional[CompanyOut]:
        """The persisted company, if any (first row)"""
        result = await self.db.execute(select(Company).order_by(Company.created_at).limit(1))
        company = result.scalars().first()
        return CompanyOut.model_validate(company) if company else None

    async def create(self, data: CompanyOut) -> CompanyOut:
        company = Company(
            name=data.name,
            address=list(data.address),
            gstin=data.gstin,
            state=data.state,
            state_code=data.state_code,
        )
        self.db.add(company)
        await self.db.flush()
        return CompanyOut.model_validate(company)

    async def update(self, company_id: UUID, data: CompanyOut) -> int:
        """Overwrite the profile; returns number of rows touched"""
        result = await self.db.execute(
            update(Company)
            .where(Company.id == company_id)
            .values(
                name=data.name,
                address=list(data.address),
                gstin=data.gstin,
                state=data.state,
                state_code=data.state_code,
            )
        )
        return result.rowcount
