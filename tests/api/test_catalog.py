"""
Integration tests for the catalogue API endpoints.

The Perenual client is replaced through FastAPI dependency overrides
with one backed by ``httpx.MockTransport``, and pacing is disabled.
"""

import httpx
import pytest
from fastapi.testclient import TestClient

from app.catalog.perenual_service import PerenualClient
from app.catalog.router import get_minimum_loading_ms, get_perenual_client
from app.main import app


client = TestClient(app)

SPECIES_PAGE = {
    "data": [
        {
            "id": i,
            "common_name": f"plant {i}",
            "scientific_name": [f"Planta {i}"],
            "default_image": {"thumbnail": f"https://img.test/{i}.jpg"} if i % 2 else None,
        }
        for i in range(1, 6)
    ],
    "last_page": 3,
    "to": 20,
    "total": 60,
}


@pytest.fixture
def requests_seen():
    return []


@pytest.fixture
def responder():
    """Mutable handler so each test can decide how upstream answers."""
    return {"handler": lambda request: httpx.Response(200, json=SPECIES_PAGE)}


@pytest.fixture(autouse=True)
def override_dependencies(requests_seen, responder):
    def handler(request):
        requests_seen.append(request)
        return responder["handler"](request)

    def fake_client():
        return PerenualClient(
            "test-key", "https://perenual.test/api", transport=httpx.MockTransport(handler)
        )

    app.dependency_overrides[get_perenual_client] = fake_client
    app.dependency_overrides[get_minimum_loading_ms] = lambda: 0
    yield
    app.dependency_overrides.clear()


def test_health_check():
    """Test the root liveness route."""
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_list_categories():
    """Test that the four categories are listed with their filters."""
    response = client.get("/api/catalog/categories")
    assert response.status_code == 200
    data = response.json()
    assert [c["slug"] for c in data] == ["indoor", "edible", "poisonous", "all"]
    assert data[1]["filter"] == "edible=1"
    assert data[3]["filter"] == ""


def test_category_first_page(requests_seen):
    """Test page 1 of the edible category."""
    response = client.get("/api/catalog/categories/edible/plants?page=1")
    assert response.status_code == 200
    data = response.json()
    assert data["title"] == "Edible plants"
    screen = data["screen"]
    assert screen["state"] == "ready"
    assert len(screen["data"]) == 5
    assert screen["page_state"] == {"current_page": 1, "total_pages": 3, "has_more": True}
    assert screen["data"][0]["thumbnail_url"] == "https://img.test/1.jpg"
    assert screen["data"][1]["thumbnail_url"] is None
    assert requests_seen[0].url.params["edible"] == "1"
    assert requests_seen[0].url.params["page"] == "1"


def test_unknown_category_lists_all_plants(requests_seen):
    """Test that an unknown slug uses no filter and the slug as title."""
    response = client.get("/api/catalog/categories/cacti/plants")
    assert response.status_code == 200
    assert response.json()["title"] == "cacti"
    assert set(requests_seen[0].url.params.keys()) == {"key", "page"}


def test_invalid_page_number():
    """Test that page numbers start at 1."""
    response = client.get("/api/catalog/categories/all/plants?page=0")
    assert response.status_code == 422


def test_category_upstream_failure(responder):
    """Test that upstream failures surface as the generic message."""
    responder["handler"] = lambda request: httpx.Response(500)
    response = client.get("/api/catalog/categories/indoor/plants")
    assert response.status_code == 502
    assert response.json()["detail"] == "Failed to load plants"


def test_plant_detail(responder):
    """Test a normalized plant detail with one toxicity warning."""
    responder["handler"] = lambda request: httpx.Response(
        200,
        json={
            "id": 7,
            "common_name": "oleander",
            "scientific_name": ["Nerium oleander"],
            "watering": "",
            "poisonous_to_humans": 1,
        },
    )
    response = client.get("/api/catalog/plants/7")
    assert response.status_code == 200
    screen = response.json()
    assert screen["state"] == "ready"
    plant = screen["data"]
    assert plant["scientific_name"] == "Nerium oleander"
    assert plant["watering"]["present"] is False
    assert plant["toxicity_warnings"] == ["humans"]
    assert plant["has_warnings"] is True


def test_plant_detail_not_found(responder):
    """Test that an empty record is reported as not found."""
    responder["handler"] = lambda request: httpx.Response(200, content=b"")
    response = client.get("/api/catalog/plants/123")
    assert response.status_code == 404
    assert response.json()["detail"] == "Plant not found"


def test_plant_detail_upstream_failure(responder):
    """Test that upstream 404 is not distinguished from other failures."""
    responder["handler"] = lambda request: httpx.Response(404)
    response = client.get("/api/catalog/plants/123")
    assert response.status_code == 502
    assert response.json()["detail"] == "Failed to load plant details"
