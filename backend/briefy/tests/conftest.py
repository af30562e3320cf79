import uuid
from collections.abc import Generator
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from briefy import models  # noqa: F401
from briefy.agent.llm_client import LLMClient
from briefy.agent.prompt_cache import prompt_cache
from briefy.api.deps import get_db, get_llm_client
from briefy.main import app
from briefy.models import Project

TEST_API_KEY = "AIzaTestKey"
OWNER_ID = "user-1"


@pytest.fixture
def session() -> Generator[Session, None, None]:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(autouse=True)
def clear_prompt_cache() -> Generator[None, None, None]:
    prompt_cache.invalidate()
    yield
    prompt_cache.invalidate()


@pytest.fixture
def project(session: Session) -> Project:
    db_project = Project(id=uuid.uuid4(), name="Loja Online", description="E-commerce", owner_id=OWNER_ID)
    session.add(db_project)
    session.commit()
    session.refresh(db_project)
    return db_project


@pytest.fixture
def llm() -> LLMClient:
    """A gateway with a valid-looking key whose invoke() is mocked."""
    client = LLMClient(model_name="test-model", api_key=TEST_API_KEY)
    client.invoke = AsyncMock(return_value="")  # type: ignore[method-assign]
    return client


@pytest.fixture
def client(session: Session, llm: LLMClient) -> Generator[TestClient, None, None]:
    app.dependency_overrides[get_db] = lambda: session
    app.dependency_overrides[get_llm_client] = lambda: llm
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"X-User-Id": OWNER_ID}
