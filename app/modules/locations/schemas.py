"""
Pydantic schemas for the state reference data.
"""
from typing import List
from pydantic import BaseModel, Field


class StateOut(BaseModel):
    name: str = Field(..., description="State / union territory name")
    code: str = Field(..., description="Two digit GST state code")


class StateList(BaseModel):
    states: List[StateOut] = Field(default_factory=list)
    total: int
