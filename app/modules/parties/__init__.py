"""
Parties module

Customers and vendors referenced by invoices and ledger entries.

- models.py: parties table
- schemas.py: PartyOut, create/edit forms, the "Unknown" placeholder
- crud.py: database access
- router.py: REST endpoints
- tests.py: form validation and API tests
"""

from .models import Party
from .schemas import PartyOut, PartyCreate, PartyUpdate

__all__ = ["Party", "PartyOut", "PartyCreate", "PartyUpdate"]
