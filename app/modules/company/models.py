from app.database.database import Base
from sqlalchemy import Column, String, JSON
from app.common.mixins import BaseMixin


class Company(Base, BaseMixin):
    """Company profile printed on every invoice. A single row is expected."""
    __tablename__ = "companies"

    name = Column(String(200), nullable=False)
    address = Column(JSON, nullable=False, default=list)  # ordered address lines
    gstin = Column(String(15), nullable=False, default="")
    state = Column(String(100), nullable=False, default="")
    state_code = Column(String(2), nullable=False, default="")
