"""
SQLAlchemy model for the party directory (customers and vendors).

Invoices and ledger entries refer to parties by id without a foreign key:
deleting a party leaves those references dangling on purpose, readers show
them as "Unknown".
"""

from app.database.database import Base
from sqlalchemy import Column, String, JSON
from app.common.mixins import BaseMixin


class Party(Base, BaseMixin):
    __tablename__ = "parties"

    name = Column(String(100), nullable=False, index=True)
    email = Column(String(254), nullable=True)
    address = Column(JSON, nullable=False, default=list)  # ordered free-text lines
    district = Column(String(100), nullable=False, default="")
    state = Column(String(100), nullable=False, default="")
    state_code = Column(String(2), nullable=False, default="")
    gstin = Column(String(15), nullable=True)
