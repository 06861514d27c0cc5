from typing import Annotated
from fastapi import Depends, Request, HTTPException, status
from app.modules.accounting.exceptions import AccountingError, PersistenceError, RecordNotFoundError
from app.modules.accounting.store import AccountingStore

GENERIC_FAILURE = "Operation failed, please try again"


def get_store(request: Request) -> AccountingStore:
    """Accounting store created at startup and kept on app.state"""
    store = getattr(request.app.state, "accounting_store", None)
    if store is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Accounting store not initialised"
        )
    return store


StoreDependency = Annotated[AccountingStore, Depends(get_store)]


def http_error(error: AccountingError) -> HTTPException:
    """Map an accounting error to the HTTP error returned to clients"""
    if isinstance(error, RecordNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, PersistenceError):
        # details are in the log
        return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=GENERIC_FAILURE)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
