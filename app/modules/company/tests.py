"""
Tests for the company profile
"""

import pytest
from pydantic import ValidationError

from app.core.config import settings
from app.modules.company.schemas import CompanyIn


class TestCompanyForm:

    def test_state_code_from_state(self):
        company = CompanyIn(name="Sharma Traders", address="12, Market Yard\n\nPune", state="Maharashtra")
        assert company.state_code == "27"
        assert company.address == ["12, Market Yard", "Pune"]

    def test_explicit_state_code_kept(self):
        assert CompanyIn(name="X", state="Maharashtra", state_code="99").state_code == "99"

    def test_gstin_checked(self):
        assert CompanyIn(name="X", gstin="27aapfu0939f1zv").gstin == "27AAPFU0939F1ZV"
        with pytest.raises(ValidationError):
            CompanyIn(name="X", gstin="27AAPFU0939F1ZW")

    def test_name_required(self):
        with pytest.raises(ValidationError):
            CompanyIn(name="   ")


class TestCompanyAPI:

    def test_default_profile(self, client):
        data = client.get("/company").json()
        assert data["id"] is None
        assert data["name"] == settings.DEFAULT_COMPANY_NAME

    def test_put_creates_then_updates(self, client):
        created = client.put("/company", json={"name": "Sharma Traders", "state": "Maharashtra"}).json()
        assert created["id"]
        assert created["state_code"] == "27"

        updated = client.put("/company", json={"name": "Sharma & Co", "state": "Gujarat", "gstin": "27AAPFU0939F1ZV"})
        assert updated.status_code == 200
        assert updated.json()["id"] == created["id"]
        assert updated.json()["state_code"] == "24"

        client.post("/accounting/refresh")
        assert client.get("/company").json() == updated.json()

    def test_put_invalid_gstin(self, client):
        response = client.put("/company", json={"name": "Sharma Traders", "gstin": "NOT-A-GSTIN"})
        assert response.status_code == 422
