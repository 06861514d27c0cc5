from fastapi import APIRouter, status
from app.modules.accounting.dependencies import StoreDependency, http_error
from app.modules.accounting.exceptions import AccountingError
from app.modules.company.schemas import CompanyIn, CompanyOut


company_router = APIRouter(prefix="/company", tags=["Company"])


@company_router.get("", response_model=CompanyOut, status_code=status.HTTP_200_OK)
async def get_company(store: StoreDependency):
    """
    Company profile printed on invoices (defaults until one is saved).
    """
    return store.company


@company_router.put("", response_model=CompanyOut, status_code=status.HTTP_200_OK)
async def update_company(company: CompanyIn, store: StoreDependency):
    """
    Replace the company profile.
    The state code is looked up from the state name when not given.
    """
    try:
        return await store.set_company(company.to_company(store.company.id), create_if_missing=True)
    except AccountingError as e:
        raise http_error(e)
