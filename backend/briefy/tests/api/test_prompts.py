from fastapi.testclient import TestClient

from briefy.agent.prompt_cache import prompt_cache
from briefy.models import Project


def test_global_prompt_changes_invalidate_the_cache(client: TestClient, auth_headers: dict[str, str]):
    prompt_cache.get(lambda: {"pr": "antigo"})
    assert prompt_cache.peek() == {"pr": "antigo"}

    response = client.post(
        "/api/v1/prompts/",
        json={"type": "pr", "title": "Saúde", "content": "Sistema hospitalar"},
        headers=auth_headers,
    )
    assert response.status_code == 200
    assert prompt_cache.peek() is None
    prompt_id = response.json()["id"]

    prompt_cache.get(lambda: {"pr": "Sistema hospitalar"})
    client.patch(f"/api/v1/prompts/{prompt_id}", json={"is_active": False}, headers=auth_headers)
    assert prompt_cache.peek() is None

    prompt_cache.get(lambda: {})
    assert client.delete(f"/api/v1/prompts/{prompt_id}", headers=auth_headers).status_code == 200
    assert prompt_cache.peek() is None
    assert client.get("/api/v1/prompts/", headers=auth_headers).json() == []


def test_global_prompt_type_is_validated(client: TestClient, auth_headers: dict[str, str]):
    response = client.post(
        "/api/v1/prompts/", json={"type": "diagram", "title": "x", "content": "y"}, headers=auth_headers
    )

    assert response.status_code == 422


def test_support_materials_are_project_scoped(client: TestClient, project: Project, auth_headers: dict[str, str]):
    response = client.post(
        "/api/v1/support-materials/",
        json={"name": "Guia", "type": "tasks", "content": "Tasks pequenas", "project_id": str(project.id)},
        headers=auth_headers,
    )
    assert response.status_code == 200
    material_id = response.json()["id"]

    listed = client.get(f"/api/v1/support-materials/?project_id={project.id}", headers=auth_headers).json()
    assert [m["name"] for m in listed] == ["Guia"]
    assert client.get("/api/v1/support-materials/", headers=auth_headers).json() == []

    response = client.patch(
        f"/api/v1/support-materials/{material_id}", json={"content": "Tasks de até 5 pontos"}, headers=auth_headers
    )
    assert response.json()["content"] == "Tasks de até 5 pontos"

    foreign = client.post(
        "/api/v1/support-materials/",
        json={"name": "X", "type": "pr", "content": "x", "project_id": str(project.id)},
        headers={"X-User-Id": "intruso"},
    )
    assert foreign.status_code == 404
