"""
Tests for the health check and root endpoints.
"""


def test_health_check_returns_200(client):
    """
    Verify the health endpoint responds with HTTP 200.

    If this fails, nothing else will work.
    """
    response = client.get("/health")
    assert response.status_code == 200


def test_health_check_returns_service_name(client):
    """
    Verify the response includes the correct service name.

    Monitoring systems parse this field.
    """
    response = client.get("/health")
    data = response.json()
    assert data["service"] == "inventory-manager"


def test_health_check_reports_database_status(client):
    """The health endpoint always reports database reachability."""
    response = client.get("/health")
    data = response.json()
    assert data["database"] == "healthy"
    assert data["status"] == "healthy"


def test_root_lists_endpoints(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["endpoints"]["items"] == "/api/items"
