# tests/test_health.py
from fastapi import status
from fastapi.testclient import TestClient


def test_health(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "ok"}


def test_root_describes_api(client: TestClient) -> None:
    """The root endpoint points at the generated docs."""
    data = client.get("/").json()

    assert data["name"] == "Tingling API"
    assert data["docs"] == "/docs"
