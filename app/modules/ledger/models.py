from app.database.database import Base
from sqlalchemy import Column, Integer, String, Date, Numeric, Enum, Uuid
from app.common.mixins import BaseMixin
import enum


# ===== ENUMS =====

class VoucherType(str, enum.Enum):
    """Voucher types; each one numbers its entries independently"""
    RECEIPT = "Receipt"
    PAYMENT = "Payment"
    SALES = "Sales"
    PURCHASE = "Purchase"
    JOURNAL = "Journal"
    CONTRA = "Contra"


# ===== MODELS =====

class LedgerEntry(Base, BaseMixin):
    """One debit or credit transaction against a party.

    Exactly one of debit/credit is set by convention; the other stays NULL.
    """
    __tablename__ = "ledger_entries"

    date = Column(Date, nullable=False, index=True)
    party_id = Column(Uuid(as_uuid=True), nullable=True, index=True)  # no FK, see Invoice.party_id
    particulars = Column(String(500), nullable=False, default="")

    voucher_type = Column(Enum(VoucherType, name="voucher_type"), nullable=False)
    voucher_no = Column(Integer, nullable=False, index=True)  # not unique: manual Sales vouchers may reuse invoice numbers

    debit = Column(Numeric(15, 2), nullable=True)
    credit = Column(Numeric(15, 2), nullable=True)
