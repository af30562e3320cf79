from unittest.mock import AsyncMock

from fastapi.testclient import TestClient

from briefy.agent.llm_client import LLMClient
from briefy.api.deps import get_llm_client
from briefy.main import app


def test_health_check(client: TestClient):
    response = client.get("/api/v1/utils/health-check/")

    assert response.status_code == 200
    assert response.json() is True


def test_ai_check_reports_a_working_connection(client: TestClient, llm: LLMClient):
    llm.invoke = AsyncMock(return_value="OK")

    response = client.get("/api/v1/utils/ai-check/")

    assert response.json() == {"message": "Conexão com test-model funcionando"}


def test_ai_check_reports_missing_key(client: TestClient):
    app.dependency_overrides[get_llm_client] = lambda: LLMClient(model_name="test-model", api_key="")

    response = client.get("/api/v1/utils/ai-check/")

    assert response.status_code == 200
    assert "GEMINI_API_KEY" in response.json()["message"]
