"""
Tests for health, metrics and service info endpoints
"""

from solar_inventory.core.health import HealthStatus, ServiceHealth


class TestHealthEndpoints:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "pass"
        assert response.json()["service"] == "solar-inventory"

    def test_liveness(self, client):
        assert client.get("/health/live").json() == {"status": "alive"}

    def test_readiness_checks_database(self, client):
        response = client.get("/health/ready")
        assert response.status_code in (200, 503)
        checks = response.json()["checks"]
        assert checks["database:connectivity"]["status"] == "pass"
        assert "storage:disk_space" in checks
        assert "system:memory" in checks

    def test_startup_without_migrations_table(self, client):
        # tests build the schema with create_all, so alembic_version is absent
        response = client.get("/health/startup")
        assert response.status_code == 503
        assert response.json()["status"] == "starting"

    def test_metrics(self, client):
        data = client.get("/metrics").json()
        assert data["service"] == "solar-inventory"
        assert "uptime_seconds" in data
        assert "memory_rss_bytes" in data["system"]

    def test_request_id_echoed(self, client):
        response = client.get("/health/live", headers={"X-Request-ID": "req-123"})
        assert response.headers["X-Request-ID"] == "req-123"

    def test_info(self, client):
        data = client.get("/info").json()
        assert data["endpoints"]["ready"] == "/health/ready"


class TestOverallStatus:
    def test_fail_wins_over_warn(self):
        checks = {"a": {"status": HealthStatus.WARN}, "b": {"status": HealthStatus.FAIL}}
        assert ServiceHealth.calculate_overall_status(checks) == HealthStatus.FAIL

    def test_warn(self):
        checks = {"a": {"status": HealthStatus.PASS}, "b": {"status": HealthStatus.WARN}}
        assert ServiceHealth.calculate_overall_status(checks) == HealthStatus.WARN

    def test_pass(self):
        assert ServiceHealth.calculate_overall_status({}) == HealthStatus.PASS
