import uuid
from collections.abc import Generator
from typing import Annotated

from fastapi import Depends, Header, HTTPException
from sqlmodel import Session

from briefy import crud
from briefy.agent.llm_client import LLMClient
from briefy.core.db import engine
from briefy.models import Project


def get_db() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


def get_current_user_id(x_user_id: Annotated[str | None, Header()] = None) -> str:
    """Authentication is handled upstream; the caller's identity arrives in X-User-Id."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Usuário não identificado")
    return x_user_id.strip()


def get_llm_client() -> LLMClient:
    return LLMClient()


SessionDep = Annotated[Session, Depends(get_db)]
CurrentUserId = Annotated[str, Depends(get_current_user_id)]
LLMDep = Annotated[LLMClient, Depends(get_llm_client)]


def get_owned_project(session: Session, project_id: uuid.UUID, owner_id: str) -> Project:
    """A project the caller owns; missing and foreign projects are both 404."""
    project = crud.get_project(session=session, project_id=project_id)
    if project is None or project.owner_id != owner_id:
        raise HTTPException(status_code=404, detail="Projeto não encontrado")
    return project
