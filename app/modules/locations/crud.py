"""
Lookups over the static state reference data.
"""
from typing import List, Optional

from .seed_data import INDIA_STATES
from .schemas import StateOut


class LocationsCRUD:
    """Read-only access to Indian states and their GST codes."""

    @staticmethod
    def get_all_states() -> List[StateOut]:
        """All states ordered by name."""
        return sorted((StateOut(**s) for s in INDIA_STATES), key=lambda s: s.name)

    @staticmethod
    def get_state_by_name(name: Optional[str]) -> Optional[StateOut]:
        if not name:
            return None
        wanted = name.strip().lower()
        for state in INDIA_STATES:
            if state["name"].lower() == wanted:
                return StateOut(**state)
        return None

    @staticmethod
    def get_state_by_code(code: str) -> Optional[StateOut]:
        for state in INDIA_STATES:
            if state["code"] == code:
                return StateOut(**state)
        return None


def get_state_code(state_name: Optional[str]) -> str:
    """GST state code for a state name, or "" when the name is not known."""
    state = LocationsCRUD.get_state_by_name(state_name)
    return state.code if state else ""
