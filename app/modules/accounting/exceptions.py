"""
Errors raised by the accounting store and the workflows built on it
"""
from typing import Any


class AccountingError(Exception):
    """Base class for accounting failures"""
    pass


class PersistenceError(AccountingError):
    """The database rejected or failed an operation; the snapshot was left unchanged."""

    def __init__(self, operation: str, detail: str = ""):
        self.operation = operation
        self.detail = detail
        message = f"{operation} failed"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class RecordNotFoundError(AccountingError):
    """No record with that identity exists."""

    def __init__(self, entity: str, record_id: Any):
        self.entity = entity
        self.record_id = record_id
        super().__init__(f"{entity} {record_id} not found")


class PartyNotFoundError(RecordNotFoundError):
    """A form referenced a party that is not in the current snapshot."""

    def __init__(self, party_id: Any):
        super().__init__("Party", party_id)
