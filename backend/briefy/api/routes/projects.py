import logging
import uuid
from typing import Any

from fastapi import APIRouter, Depends
from sqlmodel import Session

from briefy import crud
from briefy.api.deps import CurrentUserId, get_db, get_owned_project
from briefy.models import (
    Epic,
    EpicPublic,
    Flowchart,
    FlowchartPublic,
    Message,
    ProjectCreate,
    ProjectPublic,
    ProjectUpdate,
    PullRequest,
    PullRequestPublic,
    Task,
    TaskPublic,
)

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/", response_model=ProjectPublic)
def create_new_project(
    *,
    session: Session = Depends(get_db),
    current_user_id: CurrentUserId,
    project_in: ProjectCreate,
) -> Any:
    return crud.create_project(session=session, project_in=project_in, owner_id=current_user_id)


@router.get("/", response_model=list[ProjectPublic])
def read_projects(
    current_user_id: CurrentUserId,
    session: Session = Depends(get_db),
) -> Any:
    return crud.list_projects(session=session, owner_id=current_user_id)


@router.get("/{id}", response_model=ProjectPublic)
def read_project(
    id: uuid.UUID,
    current_user_id: CurrentUserId,
    session: Session = Depends(get_db),
) -> Any:
    return get_owned_project(session, id, current_user_id)


@router.patch("/{id}", response_model=ProjectPublic)
def update_project(
    id: uuid.UUID,
    project_in: ProjectUpdate,
    current_user_id: CurrentUserId,
    session: Session = Depends(get_db),
) -> Any:
    project = get_owned_project(session, id, current_user_id)
    return crud.apply_update(session=session, db_obj=project, update_in=project_in)


@router.delete("/{id}", response_model=Message)
def delete_project(
    id: uuid.UUID,
    current_user_id: CurrentUserId,
    session: Session = Depends(get_db),
) -> Any:
    """Delete a project and all of its generated content."""
    project = get_owned_project(session, id, current_user_id)
    failed_tables = crud.delete_project(session=session, project=project)
    if failed_tables:
        logger.warning("Project %s deleted with leftovers in: %s", id, ", ".join(failed_tables))
        return Message(message=f"Projeto excluído, mas falhou ao limpar: {', '.join(failed_tables)}")
    return Message(message="Projeto excluído com sucesso")


# Generated content of a project

def _project_rows(session: Session, model: type, project_id: uuid.UUID, owner_id: str) -> list[Any]:
    get_owned_project(session, project_id, owner_id)
    return crud.list_project_rows(session=session, model=model, project_id=project_id)


@router.get("/{id}/pull-requests", response_model=list[PullRequestPublic])
def read_project_pull_requests(
    id: uuid.UUID,
    current_user_id: CurrentUserId,
    session: Session = Depends(get_db),
) -> Any:
    return _project_rows(session, PullRequest, id, current_user_id)


@router.get("/{id}/flowcharts", response_model=list[FlowchartPublic])
def read_project_flowcharts(
    id: uuid.UUID,
    current_user_id: CurrentUserId,
    session: Session = Depends(get_db),
) -> Any:
    return _project_rows(session, Flowchart, id, current_user_id)


@router.get("/{id}/epics", response_model=list[EpicPublic])
def read_project_epics(
    id: uuid.UUID,
    current_user_id: CurrentUserId,
    session: Session = Depends(get_db),
) -> Any:
    return _project_rows(session, Epic, id, current_user_id)


@router.get("/{id}/tasks", response_model=list[TaskPublic])
def read_project_tasks(
    id: uuid.UUID,
    current_user_id: CurrentUserId,
    session: Session = Depends(get_db),
) -> Any:
    return _project_rows(session, Task, id, current_user_id)
