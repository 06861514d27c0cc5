"""
Pydantic schemas for parties

- PartyOut: record held in the accounting snapshot (also the invoice's party snapshot)
- PartyCreate / PartyUpdate: form input, validated before anything reaches the store
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Union
from uuid import UUID
from app.common.validators import normalize_gstin, split_address_lines, validate_email_address, GSTIN_LENGTH

UNKNOWN_PARTY_NAME = "Unknown"


class PartyOut(BaseModel):
    # None only for the Unknown placeholder
    id: Optional[UUID] = None
    name: str
    email: Optional[str] = None
    address: List[str] = Field(default_factory=list)
    district: str = ""
    state: str = ""
    state_code: str = ""
    gstin: Optional[str] = None

    class Config:
        from_attributes = True


def unknown_party() -> PartyOut:
    """Placeholder for references that no longer resolve"""
    return PartyOut(id=None, name=UNKNOWN_PARTY_NAME, address=[], district="", state="", state_code="")


class PartyFormBase(BaseModel):
    """Field rules shared by the create and edit forms"""

    @field_validator('email', check_fields=False)
    @classmethod
    def validate_email(cls, v):
        if v is None or not v.strip():
            return None
        if not validate_email_address(v):
            raise ValueError('Invalid email')
        return v.strip()

    @field_validator('gstin', check_fields=False)
    @classmethod
    def validate_gstin(cls, v):
        v = normalize_gstin(v)
        if v and len(v) > GSTIN_LENGTH:
            raise ValueError('Invalid GSTIN')
        return v

    @field_validator('address', check_fields=False)
    @classmethod
    def validate_address(cls, v):
        if isinstance(v, str) and len(v.strip()) > 500:
            raise ValueError('Address too long')
        return split_address_lines(v)


class PartyCreate(PartyFormBase):
    name: str = Field(..., max_length=100)
    email: Optional[str] = None
    address: Union[str, List[str]] = Field(default_factory=list, description="Newline separated text or list of lines")
    district: str = Field(..., max_length=100)
    state: str
    gstin: Optional[str] = None

    @field_validator('name', 'district', 'state')
    @classmethod
    def require_text(cls, v, info):
        v = v.strip()
        if not v:
            raise ValueError(f'{info.field_name.capitalize()} is required')
        return v


class PartyUpdate(PartyFormBase):
    """Partial update: only fields explicitly sent are written"""
    name: Optional[str] = Field(None, max_length=100)
    email: Optional[str] = None
    address: Optional[Union[str, List[str]]] = None
    district: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = None
    state_code: Optional[str] = Field(None, max_length=2)
    gstin: Optional[str] = None

    @field_validator('name', 'district', 'state')
    @classmethod
    def require_text(cls, v, info):
        v = (v or "").strip()
        if not v:
            raise ValueError(f'{info.field_name.capitalize()} cannot be empty')
        return v

    @field_validator('state_code')
    @classmethod
    def validate_state_code(cls, v):
        return (v or "").strip()


class PartyList(BaseModel):
    parties: List[PartyOut]
    total: int
