"""
Accounting store maintenance endpoints
"""
from fastapi import APIRouter

from app.modules.accounting.dependencies import StoreDependency
from app.modules.accounting.schemas import StoreStatus

router = APIRouter(prefix="/accounting", tags=["Accounting"])


def _status(store) -> StoreStatus:
    return StoreStatus(
        loading=store.loading,
        last_error=store.last_error,
        company_persisted=store.company.id is not None,
        parties=len(store.parties),
        invoices=len(store.invoices),
        ledger_entries=len(store.ledger_entries),
        next_invoice_no=store.get_next_invoice_no(),
    )


@router.get("/status", response_model=StoreStatus)
async def get_status(store: StoreDependency):
    """Snapshot sizes and the outcome of the last load"""
    return _status(store)


@router.post("/refresh", response_model=StoreStatus)
async def refresh(store: StoreDependency):
    """
    Reload the whole snapshot from the database.

    A failed load does not raise; check `last_error` in the response.
    """
    await store.refresh_data()
    return _status(store)
