import json
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from briefy.agent.llm_client import LLMClient
from briefy.agent.prompts import TECHNICAL_PROMPTS
from briefy.api.routes.generate import GenerateRequest, _stream_events
from briefy.models import Project, VideoExtraction


def _answers(prompt, inline_media=None):
    if prompt.startswith(TECHNICAL_PROMPTS["pr"]):
        return "# PR"
    if prompt.startswith(TECHNICAL_PROMPTS["flowchart"]):
        return "não é json"
    return '{"epics": [], "tasks": [{"title": "Tela de login"}]}'


def test_generate_returns_the_aggregated_result(
    client: TestClient, project: Project, llm: LLMClient, auth_headers: dict[str, str]
):
    llm.invoke = AsyncMock(side_effect=_answers)

    response = client.post(
        f"/api/v1/generate/{project.id}",
        json={"documents": [{"name": "briefing.md", "content": "Loja"}], "notes": "Mobile first"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is False
    assert body["errors"] == ["Erro ao gerar fluxograma: Resposta da IA não contém JSON válido"]
    assert body["pr"]["content"] == "# PR"
    assert [task["title"] for task in body["tasks"]] == ["Tela de login"]
    assert body["tasks"][0]["epic_id"] is None

    pr_prompt = llm.invoke.call_args_list[0].args[0]
    assert "--- DOCUMENTO 1: briefing.md ---\nLoja" in pr_prompt
    assert pr_prompt.endswith("Mobile first")


def test_generate_includes_stored_videos_when_asked(
    client: TestClient, session: Session, project: Project, llm: LLMClient, auth_headers: dict[str, str]
):
    session.add(VideoExtraction(file_name="demo.mp4", extracted_text="Tela inicial", project_id=project.id))
    session.commit()
    llm.invoke = AsyncMock(side_effect=_answers)

    client.post(
        f"/api/v1/generate/{project.id}",
        json={"include_videos": True, "options": {"save_flowchart": False, "save_tasks": False}},
        headers=auth_headers,
    )

    prompt = llm.invoke.call_args.args[0]
    assert "--- DOCUMENTO 1: demo.mp4 (Contexto Extraído) ---" in prompt
    assert "Tela inicial" in prompt


def test_generate_for_a_foreign_project_is_not_found(client: TestClient, project: Project, llm: LLMClient):
    response = client.post(f"/api/v1/generate/{project.id}", json={}, headers={"X-User-Id": "intruso"})

    assert response.status_code == 404
    llm.invoke.assert_not_called()


@pytest.mark.asyncio
async def test_stream_events_are_json_strings(session: Session, project: Project, llm: LLMClient):
    llm.invoke = AsyncMock(side_effect=_answers)
    payload = GenerateRequest(options={"save_flowchart": False, "save_tasks": False})

    events = [json.loads(event) async for event in _stream_events(session, project.id, [], payload, llm)]

    assert events[0]["status"] == "starting"
    assert events[-1]["status"] == "completed"
    assert events[-1]["result"]["success"] is True
    assert events[-1]["result"]["pr"]["content"] == "# PR"
