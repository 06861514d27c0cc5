"""
Tests for the parties module

- form validation (required fields, email, GSTIN, address lines)
- API: create, list order, partial edit, delete without cascading
"""

import pytest
from pydantic import ValidationError
from uuid import uuid4

from app.modules.parties.schemas import PartyCreate, PartyUpdate, unknown_party


# ===== VALIDATION =====

class TestPartyForms:

    def test_create_normalises_input(self, party_payload):
        party = PartyCreate(**party_payload)
        assert party.address == ["14, Station Road", "Kothrud"]
        assert party.gstin == "27AAPFU0939F1ZV"
        assert party.email == "accounts@gupta.example.com"

    def test_blank_optional_fields_become_none(self, party_payload):
        party = PartyCreate(**{**party_payload, "email": "  ", "gstin": ""})
        assert party.email is None
        assert party.gstin is None

    @pytest.mark.parametrize("field", ["name", "district", "state"])
    def test_required_text(self, party_payload, field):
        with pytest.raises(ValidationError):
            PartyCreate(**{**party_payload, field: "   "})

    def test_invalid_email(self, party_payload):
        with pytest.raises(ValidationError):
            PartyCreate(**{**party_payload, "email": "not-an-email"})

    def test_gstin_too_long(self, party_payload):
        with pytest.raises(ValidationError):
            PartyCreate(**{**party_payload, "gstin": "27AAPFU0939F1ZVX"})

    def test_limits(self, party_payload):
        with pytest.raises(ValidationError):
            PartyCreate(**{**party_payload, "name": "x" * 101})
        with pytest.raises(ValidationError):
            PartyCreate(**{**party_payload, "address": "x" * 501})

    def test_update_tracks_only_sent_fields(self):
        update = PartyUpdate(district="Nagpur")
        assert update.model_dump(exclude_unset=True) == {"district": "Nagpur"}

    def test_update_rejects_clearing_required_fields(self):
        with pytest.raises(ValidationError):
            PartyUpdate(name=None)

    def test_unknown_placeholder(self):
        party = unknown_party()
        assert party.id is None
        assert party.name == "Unknown"
        assert party.address == []


# ===== API =====

class TestPartiesAPI:

    def test_create_party(self, client, party_payload):
        response = client.post("/parties", json=party_payload)
        assert response.status_code == 201
        data = response.json()
        assert data["id"]
        assert data["state_code"] == "27"
        assert data["address"] == ["14, Station Road", "Kothrud"]
        assert data["gstin"] == "27AAPFU0939F1ZV"

    def test_create_party_validation_error(self, client, party_payload):
        response = client.post("/parties", json={**party_payload, "name": ""})
        assert response.status_code == 422
        assert client.get("/parties").json()["total"] == 0

    def test_list_most_recent_first(self, client, party_payload):
        for name in ("First", "Second"):
            client.post("/parties", json={**party_payload, "name": name})
        data = client.get("/parties").json()
        assert data["total"] == 2
        assert [p["name"] for p in data["parties"]] == ["Second", "First"]

    def test_patch_party(self, client, party_payload):
        party_id = client.post("/parties", json=party_payload).json()["id"]

        response = client.patch(f"/parties/{party_id}", json={"state": "Karnataka", "email": ""})
        assert response.status_code == 200
        data = response.json()
        assert data["state"] == "Karnataka"
        assert data["state_code"] == "29"
        assert data["email"] is None
        assert data["name"] == party_payload["name"]

        assert client.get(f"/parties/{party_id}").json() == data

    def test_get_missing_party(self, client):
        assert client.get(f"/parties/{uuid4()}").status_code == 404

    def test_patch_missing_party(self, client):
        assert client.patch(f"/parties/{uuid4()}", json={"name": "Ghost"}).status_code == 404

    def test_delete_keeps_invoices_and_entries(self, client, party_payload):
        party_id = client.post("/parties", json=party_payload).json()["id"]
        invoice = client.post("/invoices", json={
            "party_id": party_id,
            "date": "2024-04-15",
            "items": [{"description": "Rice", "quantity": "10", "rate": "50"}],
        }).json()

        assert client.delete(f"/parties/{party_id}").status_code == 204
        assert client.get(f"/parties/{party_id}").status_code == 404

        assert client.get(f"/invoices/{invoice['id']}").json()["party"]["name"] == party_payload["name"]
        ledger = client.get("/ledger").json()
        assert ledger["total"] == 1
        assert ledger["entries"][0]["party_name"] == "Unknown"

    def test_delete_missing_party(self, client):
        assert client.delete(f"/parties/{uuid4()}").status_code == 404
