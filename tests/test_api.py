"""
Tests for calculation and scenario API endpoints.
"""

import pytest


# ============================================================================
# HEALTH
# ============================================================================

def test_health_check(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


# ============================================================================
# CALCULATION API TESTS
# ============================================================================

class TestCalculationAPI:
    """Test calculation endpoints."""

    def test_basic_defaults(self, client):
        response = client.post("/api/calculate/basic", json={})
        assert response.status_code == 200
        data = response.json()
        assert data["metrics"]["total_projected_annual_rent"] == pytest.approx(2_800_000)
        assert data["metrics"]["first_year_total_return"] == pytest.approx(3_076_000)
        assert data["projection_years"] == 5
        assert len(data["cash_flow_projection"]) == 5
        assert data["cash_flow_projection"][-1]["break_even"] is True

    def test_basic_coerces_invalid_numbers_to_zero(self, client):
        response = client.post(
            "/api/calculate/basic",
            json={"vacancy_rate": "", "management_fee": "abc", "maintenance_reserve": None},
        )
        assert response.status_code == 200
        metrics = response.json()["metrics"]
        assert metrics["effective_annual_rent"] == pytest.approx(2_800_000)
        assert metrics["annual_management_fees"] == 0
        assert metrics["annual_maintenance_reserve"] == 0

    def test_basic_accepts_numeric_strings(self, client):
        response = client.post("/api/calculate/basic", json={"number_of_units": " 2 "})
        assert response.status_code == 200
        assert response.json()["metrics"]["total_projected_annual_rent"] == pytest.approx(1_400_000)

    def test_basic_non_finite_payback_is_null(self, client):
        response = client.post("/api/calculate/basic", json={"number_of_units": 0})
        assert response.status_code == 200
        data = response.json()
        assert data["metrics"]["payback_with_agreement_fees"] is None
        assert data["projection_years"] == 5

    def test_advanced_defaults(self, client):
        response = client.post("/api/calculate/advanced", json={})
        assert response.status_code == 200
        data = response.json()
        assert len(data["projection"]) == 12
        assert len(data["cash_flows"]) == 13
        assert data["cash_flows"][0] == -8_000_000
        assert data["metrics"]["payback_reached"] is True
        assert data["metrics"]["irr_converged"] is True
        assert data["projection"][3]["landlord_payment_percent"] == 25

    def test_advanced_projection_years_truncated(self, client):
        response = client.post("/api/calculate/advanced", json={"projection_years": "7.9"})
        assert response.status_code == 200
        assert len(response.json()["projection"]) == 7

    def test_advanced_projection_years_capped(self, client):
        response = client.post("/api/calculate/advanced", json={"projection_years": 300000})
        assert response.status_code == 200
        data = response.json()
        assert len(data["projection"]) == 100
        assert len(data["cash_flows"]) == 101

    def test_advanced_negative_projection_years(self, client):
        response = client.post("/api/calculate/advanced", json={"projection_years": -4})
        assert response.status_code == 200
        data = response.json()
        assert data["projection"] == []
        assert data["cash_flows"] == [-8_000_000]

    def test_advanced_cost_shock(self, client):
        response = client.post("/api/calculate/advanced", json={"cost_sensitivity": 20})
        assert response.status_code == 200
        assert response.json()["metrics"]["total_investment"] == pytest.approx(9_600_000)

    def test_analysis(self, client):
        response = client.post(
            "/api/calculate/analysis", json={"project_name": "Lekki Terraces"}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["project_name"] == "Lekki Terraces"
        assert [s["scenario"] for s in data["scenarios"]] == [
            "Bear Case",
            "Base Case",
            "Bull Case",
        ]
        assert data["risk"] == {"level": "LOW", "impact": "MINIMAL"}
        assert data["performance"]["grade"] == "SOLID"
        assert data["performance"]["creates_value"] is True

    def test_irr(self, client):
        response = client.post(
            "/api/calculate/irr",
            json={"cash_flows": [-100, 20, 20, 20, 20, 120], "discount_rate": 20},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["irr"] == pytest.approx(20.0, abs=0.01)
        assert data["converged"] is True
        assert data["npv"] == pytest.approx(0, abs=1e-6)
        assert data["profit"] == pytest.approx(100)
        assert data["multiple"] == pytest.approx(2.0)

    def test_irr_reports_non_convergence(self, client):
        response = client.post("/api/calculate/irr", json={"cash_flows": [100, 100]})
        assert response.status_code == 200
        data = response.json()
        assert data["converged"] is False
        assert data["irr"] == pytest.approx(500.0)
        assert data["multiple"] is None

    def test_irr_requires_two_cash_flows(self, client):
        response = client.post("/api/calculate/irr", json={"cash_flows": [-100]})
        assert response.status_code == 400

    def test_irr_rejects_malformed_body(self, client):
        response = client.post("/api/calculate/irr", json={"cash_flows": "nope"})
        assert response.status_code == 422

    def test_risk(self, client):
        response = client.post(
            "/api/calculate/risk", json={"total_roi": 50, "payback_years": 7}
        )
        assert response.status_code == 200
        assert response.json() == {"level": "MEDIUM", "impact": "MODERATE"}


# ============================================================================
# SCENARIO API TESTS
# ============================================================================

class TestScenarioAPI:
    """Test scenario endpoints."""

    def test_presets(self, client):
        response = client.get("/api/scenarios/presets")
        assert response.status_code == 200
        presets = response.json()
        assert [p["name"] for p in presets] == ["Bear Case", "Base Case", "Bull Case"]
        assert presets[0]["vacancy_rate"] == 15
        assert presets[1]["vacancy_rate"] is None

    def test_compare_scenarios(self, client):
        response = client.post("/api/scenarios/", json={})
        assert response.status_code == 200
        scenarios = response.json()["scenarios"]
        bear, base, bull = (s["sustained_roi"] for s in scenarios)
        assert bull >= base >= bear
        assert base == pytest.approx(23.45)
