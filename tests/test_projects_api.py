"""HTTP tests for the project endpoints."""

from httpx import AsyncClient

from src.studio.models import InvoiceProject
from tests.factories import ProjectFactory
from tests.helpers import FakeSession

PROJECT = {
    "title": "Grand Opening Flyer",
    "brand": "Wami Live",
    "type": "Flyer",
    "description": "Neon theme",
    "deadline": "2026-11-01T18:00:00Z",
}


async def _create(client: AsyncClient, **overrides) -> dict:
    response = await client.post("/api/v1/projects", json={**PROJECT, **overrides})
    assert response.status_code == 201, response.text
    return response.json()


async def test_create_and_list_projects(client: AsyncClient):
    first = await _create(client, title="First")
    second = await _create(client, title="Second")

    assert first["priority"] == 1
    assert second["priority"] == 2
    assert first["status"] == "Pending"
    assert first["files"] == []

    response = await client.get("/api/v1/projects")
    assert response.status_code == 200
    assert [p["title"] for p in response.json()] == ["First", "Second"]


async def test_create_with_missing_fields_returns_422_with_request_id(client: AsyncClient):
    response = await client.post("/api/v1/projects", json={"title": "Only a title"})

    assert response.status_code == 422
    data = response.json()
    assert "Please fill in all fields" in data["detail"]
    assert data["request_id"]


async def test_create_with_unknown_brand_is_rejected(client: AsyncClient):
    response = await client.post("/api/v1/projects", json={**PROJECT, "brand": "Nope"})

    assert response.status_code == 422


async def test_get_update_and_delete_project(client: AsyncClient):
    created = await _create(client)
    url = f"/api/v1/projects/{created['id']}"

    response = await client.get(url)
    assert response.status_code == 200
    assert response.json()["title"] == PROJECT["title"]

    response = await client.put(url, json={**PROJECT, "title": "Renamed"})
    assert response.status_code == 200
    assert response.json()["title"] == "Renamed"

    response = await client.delete(url)
    assert response.status_code == 204

    response = await client.get(url)
    assert response.status_code == 404
    assert response.json()["request_id"]


async def test_status_change_to_completed_needs_price(client: AsyncClient):
    created = await _create(client)

    response = await client.patch(
        f"/api/v1/projects/{created['id']}/status", json={"status": "Completed"}
    )

    assert response.status_code == 422
    assert "price is required" in response.json()["detail"]


async def test_status_change_to_in_progress(client: AsyncClient):
    created = await _create(client)

    response = await client.patch(
        f"/api/v1/projects/{created['id']}/status", json={"status": "In Progress"}
    )

    assert response.status_code == 200
    assert response.json()["status"] == "In Progress"


async def test_complete_project(client: AsyncClient, fake_session: FakeSession):
    created = await _create(client)

    response = await client.post(
        f"/api/v1/projects/{created['id']}/complete", json={"price": "50"}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["project"]["status"] == "Completed"
    assert data["invoice_project"]["invoice_price"] == "50.00"
    assert data["invoice_project"]["brand"] == "Wami Live"
    assert len(fake_session.rows(InvoiceProject)) == 1

    # Completed projects leave the active list
    response = await client.get("/api/v1/projects")
    assert response.json() == []
    response = await client.get("/api/v1/projects", params={"include_completed": True})
    assert len(response.json()) == 1


async def test_complete_with_invalid_price(client: AsyncClient):
    created = await _create(client)

    response = await client.post(
        f"/api/v1/projects/{created['id']}/complete", json={"price": "abc"}
    )

    assert response.status_code == 422
    assert response.json()["detail"] == "Please enter a valid price"


async def test_reorder_projects(client: AsyncClient):
    ids = [(await _create(client, title=t))["id"] for t in ["A", "B", "C"]]

    response = await client.put(
        "/api/v1/projects/order", json={"project_ids": [ids[2], ids[0], ids[1]]}
    )

    assert response.status_code == 200
    assert [(p["title"], p["priority"]) for p in response.json()] == [
        ("C", 1),
        ("A", 2),
        ("B", 3),
    ]


async def test_reorder_failure_returns_503(client: AsyncClient, fake_session: FakeSession):
    ids = [(await _create(client, title=t))["id"] for t in ["A", "B"]]
    fake_session.fail_next_commit()

    response = await client.put("/api/v1/projects/order", json={"project_ids": ids[::-1]})

    assert response.status_code == 503
    assert response.json()["detail"] == "Failed to update project order"


async def test_reorder_with_wrong_ids(client: AsyncClient):
    await _create(client)

    response = await client.put("/api/v1/projects/order", json={"project_ids": []})

    assert response.status_code == 422


async def test_summary_and_clear_completed(client: AsyncClient, fake_session: FakeSession):
    fake_session.seed(
        ProjectFactory.build(),
        ProjectFactory.in_progress(priority=2),
        ProjectFactory.completed(),
    )

    response = await client.get("/api/v1/projects/summary")
    assert response.json() == {
        "pending": 1,
        "in_progress": 1,
        "completed": 1,
        "total": 3,
        "completion_percentage": 33,
    }

    response = await client.delete("/api/v1/projects/completed")
    assert response.status_code == 200
    assert response.json() == {"deleted": 1}


async def test_attach_and_remove_file(client: AsyncClient):
    created = await _create(client)
    url = f"/api/v1/projects/{created['id']}/files"

    response = await client.post(url, files={"file": ("ref.png", b"\x89PNG", "image/png")})

    assert response.status_code == 201
    [meta] = response.json()["files"]
    assert meta["name"] == "ref.png"
    assert meta["type"] == "image/png"
    assert meta["size"] == 4

    response = await client.delete(f"{url}/{meta['id']}")
    assert response.status_code == 200
    assert response.json()["files"] == []


async def test_attach_file_too_large(client: AsyncClient):
    created = await _create(client)

    # The test storage allows 1KB
    response = await client.post(
        f"/api/v1/projects/{created['id']}/files",
        files={"file": ("big.mov", b"0" * 4096, "video/quicktime")},
    )

    assert response.status_code == 422
    assert "too large" in response.json()["detail"]
