from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional, List, Union
from uuid import UUID
from app.common.validators import normalize_gstin, validate_gstin, split_address_lines
from app.core.config import settings


class CompanyOut(BaseModel):
    """Company profile as held in the snapshot (id is None until persisted)"""
    id: Optional[UUID] = None
    name: str
    address: List[str] = Field(default_factory=list)
    gstin: str = ""
    state: str = ""
    state_code: str = ""

    class Config:
        from_attributes = True


class CompanyIn(BaseModel):
    """Full replacement of the company profile"""
    name: str = Field(..., min_length=1, max_length=200)
    address: Union[str, List[str]] = Field(default_factory=list, description="Address lines (list or newline separated text)")
    gstin: Optional[str] = Field(None, max_length=20)
    state: str = Field("", max_length=100)
    state_code: Optional[str] = Field(None, max_length=2, description="Derived from state when omitted")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('Company name is required')
        return v

    @field_validator('address')
    @classmethod
    def validate_address(cls, v):
        return split_address_lines(v)

    @field_validator('gstin')
    @classmethod
    def validate_company_gstin(cls, v):
        v = normalize_gstin(v)
        if v and not validate_gstin(v):
            raise ValueError('Invalid GSTIN. Expected 15 characters: state code, PAN, entity number, Z, check character')
        return v

    @model_validator(mode='after')
    def resolve_state_code(self):
        if not self.state_code:
            from app.modules.locations.crud import get_state_code
            self.state_code = get_state_code(self.state)
        return self

    def to_company(self, company_id: Optional[UUID]) -> CompanyOut:
        return CompanyOut(
            id=company_id,
            name=self.name,
            address=list(self.address),
            gstin=self.gstin or "",
            state=self.state,
            state_code=self.state_code or "",
        )


def default_company() -> CompanyOut:
    """Profile used while no company row exists"""
    return CompanyOut(
        id=None,
        name=settings.DEFAULT_COMPANY_NAME,
        address=list(settings.DEFAULT_COMPANY_ADDRESS),
        gstin=settings.DEFAULT_COMPANY_GSTIN,
        state=settings.DEFAULT_COMPANY_STATE,
        state_code=settings.DEFAULT_COMPANY_STATE_CODE,
    )
