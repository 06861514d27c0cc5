from app.database.database import Base
from sqlalchemy import Column, Integer, String, Date, Numeric, Text, JSON, Uuid
from app.common.mixins import BaseMixin


class Invoice(Base, BaseMixin):
    """Sales (tax) invoice.

    Line items live in a JSON blob; `party` keeps a copy of the buyer as it was
    when the invoice was raised. `party_id` has no foreign key so deleting a
    party never blocks or cascades to its invoices.
    """
    __tablename__ = "invoices"

    invoice_no = Column(Integer, nullable=False, unique=True, index=True)
    date = Column(Date, nullable=False)

    party_id = Column(Uuid(as_uuid=True), nullable=True, index=True)
    party = Column(JSON, nullable=True)

    # Optional dispatch / reference metadata
    delivery_note = Column(String(100), nullable=True)
    mode_of_payment = Column(String(100), nullable=True)
    reference_no = Column(String(100), nullable=True)
    reference_date = Column(String(50), nullable=True)
    other_references = Column(String(200), nullable=True)
    buyer_order_no = Column(String(100), nullable=True)
    buyer_order_date = Column(String(50), nullable=True)
    dispatch_doc_no = Column(String(100), nullable=True)
    delivery_note_date = Column(String(50), nullable=True)
    dispatched_through = Column(String(200), nullable=True)
    destination = Column(String(200), nullable=True)
    terms_of_delivery = Column(Text, nullable=True)

    items = Column(JSON, nullable=False, default=list)

    # Totals (calculated from items by the caller)
    total_quantity = Column(Numeric(15, 3), nullable=False, default=0)
    total_amount = Column(Numeric(15, 2), nullable=False, default=0)
    amount_in_words = Column(Text, nullable=False, default="")
