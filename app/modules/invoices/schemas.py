from pydantic import BaseModel, Field, field_validator
from decimal import Decimal
from typing import Optional, List
from uuid import UUID
import datetime
from app.common.formatters import format_display_date, to_money, to_quantity
from app.modules.parties.schemas import PartyOut


# Free-text metadata printed in the invoice header grid
INVOICE_METADATA_FIELDS = (
    "delivery_note",
    "mode_of_payment",
    "reference_no",
    "reference_date",
    "other_references",
    "buyer_order_no",
    "buyer_order_date",
    "dispatch_doc_no",
    "delivery_note_date",
    "dispatched_through",
    "destination",
    "terms_of_delivery",
)


class InvoiceMetadata(BaseModel):
    delivery_note: Optional[str] = None
    mode_of_payment: Optional[str] = None
    reference_no: Optional[str] = None
    reference_date: Optional[str] = None
    other_references: Optional[str] = None
    buyer_order_no: Optional[str] = None
    buyer_order_date: Optional[str] = None
    dispatch_doc_no: Optional[str] = None
    delivery_note_date: Optional[str] = None
    dispatched_through: Optional[str] = None
    destination: Optional[str] = None
    terms_of_delivery: Optional[str] = None

    @field_validator(*INVOICE_METADATA_FIELDS)
    @classmethod
    def blank_to_none(cls, v):
        if v is None:
            return None
        v = v.strip()
        return v or None


# Invoice Line Item Schemas
class InvoiceItem(BaseModel):
    """Stored line: amount is always quantity x rate (set by the calculator)"""
    sl_no: int = Field(..., ge=1)
    description: str
    quantity: Decimal
    unit: str
    rate: Decimal
    per: str
    amount: Decimal


class InvoiceItemIn(BaseModel):
    description: str = Field(..., max_length=500)
    quantity: Decimal = Field(..., gt=0, description="Quantity must be positive")
    unit: str = Field("kg", max_length=20)
    rate: Decimal = Field(..., gt=0, description="Rate must be positive")

    @field_validator('quantity')
    @classmethod
    def round_quantity(cls, v):
        v = to_quantity(v)
        if v <= 0:
            raise ValueError('Quantity must be at least 0.001')
        return v

    @field_validator('description')
    @classmethod
    def validate_description(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('Description required')
        return v

    @field_validator('unit')
    @classmethod
    def validate_unit(cls, v):
        return v.strip() or "kg"


# Invoice Schemas
class InvoiceData(InvoiceMetadata):
    """Everything an invoice carries except its identity"""
    invoice_no: int = Field(..., ge=1)
    date: datetime.date
    party: PartyOut
    items: List[InvoiceItem] = Field(default_factory=list)
    total_quantity: Decimal = Decimal("0")
    total_amount: Decimal = Decimal("0.00")
    amount_in_words: str = ""

    @field_validator('total_quantity')
    @classmethod
    def round_total_quantity(cls, v):
        return to_quantity(v)

    @field_validator('total_amount')
    @classmethod
    def round_total_amount(cls, v):
        return to_money(v)

    @property
    def display_date(self) -> str:
        return format_display_date(self.date)


class InvoiceOut(InvoiceData):
    id: UUID


class InvoiceCreate(InvoiceMetadata):
    """Invoice form"""
    party_id: UUID
    date: datetime.date = Field(default_factory=datetime.date.today)
    items: List[InvoiceItemIn] = Field(..., min_length=1, description="At least one item is required")


class InvoiceRevision(InvoiceMetadata):
    """Edit form: only fields sent are changed; new items recompute the totals"""
    date: Optional[datetime.date] = None
    items: Optional[List[InvoiceItemIn]] = Field(None, min_length=1)

    @field_validator('date', 'items')
    @classmethod
    def reject_null(cls, v, info):
        if v is None:
            raise ValueError(f'{info.field_name} cannot be null')
        return v


class InvoiceUpdate(InvoiceMetadata):
    """Partial update applied by the store as-is (no recomputation)"""
    invoice_no: Optional[int] = Field(None, ge=1)
    date: Optional[datetime.date] = None
    items: Optional[List[InvoiceItem]] = None
    total_quantity: Optional[Decimal] = None
    total_amount: Optional[Decimal] = None
    amount_in_words: Optional[str] = None

    @field_validator('invoice_no', 'date', 'items', 'total_quantity', 'total_amount', 'amount_in_words')
    @classmethod
    def reject_null(cls, v, info):
        if v is None:
            raise ValueError(f'{info.field_name} cannot be null')
        return v

    @field_validator('total_quantity')
    @classmethod
    def round_total_quantity(cls, v):
        return to_quantity(v)

    @field_validator('total_amount')
    @classmethod
    def round_total_amount(cls, v):
        return to_money(v)


class InvoiceTotals(BaseModel):
    total_quantity: Decimal
    total_amount: Decimal


class InvoiceList(BaseModel):
    invoices: List[InvoiceOut]
    total: int
    grand_total: Decimal


class NextInvoiceNumber(BaseModel):
    invoice_no: int
