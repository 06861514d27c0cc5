"""
Tests for the state reference data
"""

from app.modules.locations.crud import LocationsCRUD, get_state_code


class TestStateLookup:

    def test_lookup_by_name(self):
        assert get_state_code("Maharashtra") == "27"
        assert get_state_code("  tamil nadu ") == "33"
        assert get_state_code("Atlantis") == ""
        assert get_state_code(None) == ""

    def test_codes_are_unique(self):
        codes = [s.code for s in LocationsCRUD.get_all_states()]
        assert len(codes) == len(set(codes))


class TestLocationsAPI:

    def test_list_states(self, client):
        data = client.get("/locations/states").json()
        assert data["total"] == len(data["states"])
        names = [s["name"] for s in data["states"]]
        assert names == sorted(names)

    def test_state_by_code(self, client):
        assert client.get("/locations/states/29").json() == {"name": "Karnataka", "code": "29"}
        assert client.get("/locations/states/00").status_code == 404
