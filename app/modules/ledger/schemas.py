"""
Pydantic schemas for ledger entries and statements
"""

from pydantic import BaseModel, Field, field_validator
from decimal import Decimal
from typing import Optional, List
from uuid import UUID
import datetime
import enum

from app.common.formatters import to_money
from app.modules.ledger.models import VoucherType


class TransactionType(str, enum.Enum):
    DEBIT = "debit"
    CREDIT = "credit"


class BalanceLabel(str, enum.Enum):
    CR = "Cr"
    DR = "Dr"


# ===== LEDGER ENTRY =====

class LedgerEntryData(BaseModel):
    """Everything a ledger entry carries except its identity"""
    date: datetime.date
    party_id: Optional[UUID] = None
    particulars: str = ""
    voucher_type: VoucherType
    voucher_no: int = Field(..., ge=1)
    debit: Optional[Decimal] = Field(None, ge=0)
    credit: Optional[Decimal] = Field(None, ge=0)

    @field_validator('debit', 'credit')
    @classmethod
    def zero_to_none(cls, v):
        if v is None:
            return None
        return to_money(v) or None

    @property
    def amount(self) -> Decimal:
        return self.debit or self.credit or Decimal("0")

    @property
    def transaction_type(self) -> TransactionType:
        return TransactionType.DEBIT if self.debit else TransactionType.CREDIT


class LedgerEntryOut(LedgerEntryData):
    id: UUID

    class Config:
        from_attributes = True


class LedgerEntryCreate(BaseModel):
    """Ledger entry form: one amount, booked as debit or credit"""
    party_id: UUID
    date: datetime.date = Field(default_factory=datetime.date.today)
    voucher_type: VoucherType
    transaction_type: TransactionType
    amount: Decimal = Field(..., gt=0, description="Amount must be positive")
    particulars: Optional[str] = Field(None, max_length=500, description="Defaults to 'By <party>' / 'To <party>'")

    @field_validator('amount')
    @classmethod
    def round_amount(cls, v):
        v = to_money(v)
        if v <= 0:
            raise ValueError('Amount must be at least 0.01')
        return v

    @field_validator('particulars')
    @classmethod
    def blank_to_none(cls, v):
        if v is None:
            return None
        return v.strip() or None


class LedgerEntryUpdate(BaseModel):
    """Partial update: only fields explicitly sent are written"""
    date: Optional[datetime.date] = None
    party_id: Optional[UUID] = None
    particulars: Optional[str] = Field(None, max_length=500)
    voucher_type: Optional[VoucherType] = None
    voucher_no: Optional[int] = Field(None, ge=1)
    debit: Optional[Decimal] = Field(None, ge=0)
    credit: Optional[Decimal] = Field(None, ge=0)

    @field_validator('date', 'party_id', 'voucher_type', 'voucher_no')
    @classmethod
    def reject_null(cls, v, info):
        if v is None:
            raise ValueError(f'{info.field_name} cannot be null')
        return v

    @field_validator('particulars')
    @classmethod
    def null_to_blank(cls, v):
        return (v or "").strip()

    @field_validator('debit', 'credit')
    @classmethod
    def zero_to_none(cls, v):
        if v is None:
            return None
        return to_money(v) or None


class NextVoucherNumber(BaseModel):
    voucher_type: VoucherType
    voucher_no: int


# ===== BALANCES & STATEMENT =====

class LedgerBalance(BaseModel):
    """Credits minus debits; `amount` is the magnitude shown next to the label"""
    net: Decimal
    amount: Decimal
    label: BalanceLabel


class LedgerLine(LedgerEntryOut):
    party_name: str
    display_date: str
    balance: LedgerBalance


class LedgerStatement(BaseModel):
    party_id: Optional[UUID] = None
    party_name: Optional[str] = None
    company_name: str
    entries: List[LedgerLine]
    total: int
    total_debit: Decimal
    total_credit: Decimal
    closing_balance: LedgerBalance
