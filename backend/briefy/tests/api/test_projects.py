import uuid
from unittest.mock import patch

from fastapi.testclient import TestClient
from sqlmodel import Session, select

from briefy.models import Epic, Flowchart, Project, PullRequest, SupportMaterial, Task


def test_project_crud_is_owner_scoped(client: TestClient, auth_headers: dict[str, str]):
    response = client.post("/api/v1/projects/", json={"name": "Loja", "description": "E-commerce"}, headers=auth_headers)
    assert response.status_code == 200
    project_id = response.json()["id"]

    assert [p["id"] for p in client.get("/api/v1/projects/", headers=auth_headers).json()] == [project_id]
    assert client.get("/api/v1/projects/", headers={"X-User-Id": "other"}).json() == []
    assert client.get(f"/api/v1/projects/{project_id}", headers={"X-User-Id": "other"}).status_code == 404

    response = client.patch(f"/api/v1/projects/{project_id}", json={"name": "Loja 2"}, headers=auth_headers)
    assert response.json()["name"] == "Loja 2"
    assert response.json()["description"] == "E-commerce"


def test_missing_user_header_is_rejected(client: TestClient):
    assert client.get("/api/v1/projects/").status_code == 401


def test_system_projects_are_hidden(client: TestClient, session: Session, auth_headers: dict[str, str]):
    system = Project(name="Sistema", owner_id="user-1", is_system=True)
    session.add(system)
    session.commit()

    assert client.get("/api/v1/projects/", headers=auth_headers).json() == []
    assert client.get(f"/api/v1/projects/{system.id}", headers=auth_headers).status_code == 404


def test_delete_project_removes_dependent_rows(
    client: TestClient, session: Session, project: Project, auth_headers: dict[str, str]
):
    epic = Epic(title="E", project_id=project.id)
    session.add(epic)
    session.commit()
    session.add(Task(title="T", project_id=project.id, epic_id=epic.id))
    session.add(PullRequest(title="PR", project_id=project.id))
    session.add(Flowchart(title="F", project_id=project.id))
    session.add(SupportMaterial(name="S", type="pr", content="x", project_id=project.id))
    session.add(PullRequest(title="Outro", project_id=uuid.uuid4()))
    session.commit()

    response = client.delete(f"/api/v1/projects/{project.id}", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {"message": "Projeto excluído com sucesso"}
    assert session.get(Project, project.id) is None
    for model in (Epic, Task, Flowchart, SupportMaterial):
        assert session.exec(select(model)).all() == []
    assert [pr.title for pr in session.exec(select(PullRequest)).all()] == ["Outro"]


def test_failed_project_row_delete_is_reported(
    client: TestClient, session: Session, project: Project, auth_headers: dict[str, str]
):
    session.add(PullRequest(title="PR", project_id=project.id))
    session.commit()
    real_delete = session.delete

    def refuse_project(instance):
        if isinstance(instance, Project):
            raise RuntimeError("locked")
        return real_delete(instance)

    with patch.object(session, "delete", side_effect=refuse_project):
        response = client.delete(f"/api/v1/projects/{project.id}", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {"message": "Projeto excluído, mas falhou ao limpar: projects"}
    assert session.get(Project, project.id) is not None
    assert session.exec(select(PullRequest)).all() == []


def test_content_listing_and_update(client: TestClient, session: Session, project: Project, auth_headers: dict[str, str]):
    task = Task(title="Login", project_id=project.id)
    session.add(task)
    session.commit()

    tasks = client.get(f"/api/v1/projects/{project.id}/tasks", headers=auth_headers).json()
    assert [t["title"] for t in tasks] == ["Login"]

    response = client.patch(
        f"/api/v1/content/tasks/{task.id}", json={"status": "approved", "story_points": 8}, headers=auth_headers
    )
    assert response.status_code == 200
    assert response.json()["status"] == "approved"
    assert response.json()["story_points"] == 8

    invalid = client.patch(f"/api/v1/content/tasks/{task.id}", json={"story_points": 4}, headers=auth_headers)
    assert invalid.status_code == 422

    foreign = client.patch(f"/api/v1/content/tasks/{task.id}", json={"status": "rejected"}, headers={"X-User-Id": "x"})
    assert foreign.status_code == 404
