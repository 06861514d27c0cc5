"""
Router for the party directory

Parties are read from the accounting snapshot; writes go through the store
so the snapshot only changes once the database has accepted them.
Deleting a party leaves its invoices and ledger entries in place.
"""

from fastapi import APIRouter, HTTPException, status, Path
from uuid import UUID

from app.modules.accounting import workflows
from app.modules.accounting.dependencies import StoreDependency, http_error
from app.modules.accounting.exceptions import AccountingError
from app.modules.parties.schemas import PartyCreate, PartyUpdate, PartyOut, PartyList

router = APIRouter(
    prefix="/parties",
    tags=["Parties"],
    responses={404: {"description": "Not found"}}
)


@router.get("", response_model=PartyList)
async def get_parties(store: StoreDependency):
    """All parties, most recently added first"""
    return PartyList(parties=store.parties, total=len(store.parties))


@router.post("", response_model=PartyOut, status_code=status.HTTP_201_CREATED)
async def create_party(party_data: PartyCreate, store: StoreDependency):
    """
    Add a party

    - **name**, **district**, **state**: required
    - **email**, **gstin**: optional
    - **address**: newline separated text or list of lines
    - the state code is derived from **state**
    """
    try:
        return await workflows.register_party(store, party_data)
    except AccountingError as e:
        raise http_error(e)


@router.get("/{party_id}", response_model=PartyOut)
async def get_party(store: StoreDependency, party_id: UUID = Path(..., description="Party ID")):
    party = store.get_party(party_id)
    if not party:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Party {party_id} not found")
    return party


@router.patch("/{party_id}", response_model=PartyOut)
async def update_party(
    party_data: PartyUpdate,
    store: StoreDependency,
    party_id: UUID = Path(..., description="Party ID")
):
    """Only the fields sent are changed"""
    try:
        return await workflows.edit_party(store, party_id, party_data)
    except AccountingError as e:
        raise http_error(e)


@router.delete("/{party_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_party(store: StoreDependency, party_id: UUID = Path(..., description="Party ID")):
    try:
        await store.delete_party(party_id)
    except AccountingError as e:
        raise http_error(e)
