from fastapi import APIRouter

from app.modules.accounting.aggregates import dashboard_summary
from app.modules.accounting.dependencies import StoreDependency
from app.modules.dashboard.schemas import DashboardSummary

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("", response_model=DashboardSummary)
async def get_dashboard(store: StoreDependency):
    """
    Sales and ledger totals, average invoice value, the Cr/Dr net balance
    and the most recent invoices (newest first).
    """
    return dashboard_summary(store)
