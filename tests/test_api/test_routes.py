"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from api.main import create_app
from config.settings import settings


@pytest.fixture
def client():
    return TestClient(create_app())


def as_payload(points):
    return [{"period": p.period, "value": p.value} for p in points]


class TestHealth:
    """Tests for service endpoints."""

    def test_health(self, client):
        """Test health check reports the API version."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "version": settings.api_version}

    def test_root(self, client):
        """Test root endpoint lists docs location."""
        assert client.get("/").json()["docs"] == "/docs"


class TestTrendRoutes:
    """Tests for /api/v1/trends."""

    def test_analyze(self, client, emami_annual, emami_quarterly):
        """Test full historical analysis over HTTP."""
        response = client.post(
            "/api/v1/trends/analyze",
            json={
                "annual_data": as_payload(emami_annual),
                "quarterly_data": as_payload(emami_quarterly),
                "company_info": {"name": "Emami Ltd", "sector": "FMCG", "type": "non_finance"},
            },
        )
        assert response.status_code == 200
        body = response.json()
        assert body["company_name"] == "Emami Ltd"
        assert "data_timestamp" in body

        analysis = body["analysis"]
        assert analysis["cagr_1y"] == pytest.approx(0.064, abs=5e-3)
        assert analysis["cagr_10y"] != 0
        assert analysis["trend_direction"] == "upward"
        assert set(analysis["growth_pattern"]["quarterly_averages"]) == {"Q1", "Q2", "Q3", "Q4"}
        assert 0 <= analysis["trend_score"] <= 100

    def test_analyze_empty(self, client):
        """Test an empty request yields the zeroed result."""
        response = client.post("/api/v1/trends/analyze", json={})
        assert response.status_code == 200
        assert response.json()["analysis"]["trend_direction"] == "stable"
        assert response.json()["company_name"] is None

    def test_null_values_tolerated(self, client):
        """Test null values are treated as zero."""
        # Older value missing: zero base gives no growth
        response = client.post(
            "/api/v1/trends/classify",
            json={"data": [{"period": "2025", "value": 100}, {"period": "2024", "value": None}]},
        )
        assert response.status_code == 200
        assert response.json()["classification"]["primary"] == "stable"
        assert response.json()["strength_metrics"]["magnitude"] == 0

        # Newest value missing: a decline to zero
        response = client.post(
            "/api/v1/trends/classify",
            json={"data": [{"period": "2025", "value": None}, {"period": "2024", "value": 100}]},
        )
        assert response.status_code == 200
        assert response.json()["classification"]["primary"] == "downward"

    def test_classify(self, client, axis_annual):
        """Test classification endpoint."""
        response = client.post("/api/v1/trends/classify", json={"data": as_payload(axis_annual)})
        body = response.json()
        assert body["classification"]["primary"] == "upward"
        assert body["classification"]["strength"] == "strong"
        assert body["strength_metrics"]["magnitude"] == 1.0
        assert body["volatility"] >= 0

    def test_seasonality(self, client, emami_quarterly):
        """Test seasonality endpoint returns indices and adjusted data."""
        response = client.post(
            "/api/v1/trends/seasonality", json={"data": as_payload(emami_quarterly)}
        )
        body = response.json()
        assert sum(body["seasonal_indices"].values()) == pytest.approx(4.0)
        assert len(body["adjusted_data"]) == len(emami_quarterly)
        assert body["pattern"]["data_completeness"] == 1.0

    def test_cagr(self, client):
        """Test CAGR endpoint including the decline sentinel."""
        response = client.post(
            "/api/v1/trends/cagr", json={"end_value": 1100, "start_value": 1000, "years": 1}
        )
        assert response.json()["cagr"] == pytest.approx(0.10)

        response = client.post(
            "/api/v1/trends/cagr", json={"end_value": 0, "start_value": 1000, "years": 5}
        )
        assert response.json()["cagr"] == -1

    def test_oversized_series_rejected(self, client):
        """Test series beyond the configured limit fail validation."""
        data = [{"period": str(i), "value": 1.0} for i in range(settings.max_series_length + 1)]
        response = client.post("/api/v1/trends/classify", json={"data": data})
        assert response.status_code == 422


class TestTTMRoutes:
    """Tests for /api/v1/ttm."""

    def test_series(self, client, emami_quarter_payload):
        """Test rolling TTM series with default window count."""
        response = client.post("/api/v1/ttm/series", json={"quarters": emami_quarter_payload})
        assert response.status_code == 200
        periods = response.json()["periods"]
        assert len(periods) == settings.default_ttm_periods
        assert periods[0]["ttm_revenue"] == 3223
        assert periods[0]["margins"]["net_profit_margin"] == pytest.approx(16.5, abs=0.01)
        assert periods[0]["growth"]["revenue_growth"] == pytest.approx(4.98, abs=0.01)
        assert periods[1]["growth"] is None

    def test_series_periods_param(self, client, emami_quarter_payload):
        """Test the periods query parameter limits the windows."""
        response = client.post(
            "/api/v1/ttm/series?periods=2", json={"quarters": emami_quarter_payload}
        )
        assert len(response.json()["periods"]) == 2

    def test_series_periods_bounds(self, client, emami_quarter_payload):
        """Test out-of-range periods are rejected."""
        response = client.post(
            f"/api/v1/ttm/series?periods={settings.max_ttm_periods + 1}",
            json={"quarters": emami_quarter_payload},
        )
        assert response.status_code == 422

    def test_analyze(self, client, emami_quarter_payload):
        """Test TTM analysis endpoint."""
        response = client.post("/api/v1/ttm/analyze", json={"quarters": emami_quarter_payload})
        body = response.json()
        assert body["current"]["period"] == "TTM Q4 FY24"
        assert body["previous"]["period"] == "TTM Q3 FY24"
        assert body["trend"]["direction"] == "stable"
        assert body["growth"]["profit_growth"] == pytest.approx(4.52, abs=0.01)

    def test_analyze_insufficient(self, client, emami_quarter_payload):
        """Test short history returns an empty analysis, not an error."""
        response = client.post(
            "/api/v1/ttm/analyze", json={"quarters": emami_quarter_payload[:2]}
        )
        assert response.status_code == 200
        assert response.json()["current"] is None

    def test_validate(self, client, emami_quarter_payload):
        """Test validation endpoint."""
        response = client.post("/api/v1/ttm/validate", json={"quarters": emami_quarter_payload})
        body = response.json()
        assert body["is_valid"] is True
        assert body["warnings"] == []

        response = client.post("/api/v1/ttm/validate", json={"quarters": []})
        assert response.json()["is_valid"] is False
