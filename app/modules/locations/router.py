"""
API routes for the state reference list used by party and company forms.
"""
from fastapi import APIRouter, HTTPException

from . import schemas
from .crud import LocationsCRUD

router = APIRouter(prefix="/locations", tags=["Locations"])


@router.get(
    "/states",
    response_model=schemas.StateList,
    summary="Get all states",
    description="""
    States and union territories with their GST state codes.

    Used to populate the state selector; the party's state code is derived from it.
    """
)
async def get_states():
    states = LocationsCRUD.get_all_states()
    return schemas.StateList(states=states, total=len(states))


@router.get("/states/{code}", response_model=schemas.StateOut, summary="Get state by GST code")
async def get_state(code: str):
    state = LocationsCRUD.get_state_by_code(code)
    if not state:
        raise HTTPException(
            status_code=404,
            detail=f"State with code {code} not found"
        )
    return state
