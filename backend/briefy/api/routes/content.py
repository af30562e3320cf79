import uuid
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, SQLModel

from briefy import crud
from briefy.api.deps import CurrentUserId, get_db, get_owned_project
from briefy.models import (
    Epic,
    EpicPublic,
    EpicUpdate,
    Flowchart,
    FlowchartPublic,
    FlowchartUpdate,
    PullRequest,
    PullRequestPublic,
    PullRequestUpdate,
    Task,
    TaskPublic,
    TaskUpdate,
)

router = APIRouter()


def _update_owned_row(
    session: Session,
    model: type[SQLModel],
    row_id: uuid.UUID,
    update_in: SQLModel,
    owner_id: str,
    not_found: str,
) -> Any:
    row = session.get(model, row_id)
    if row is None:
        raise HTTPException(status_code=404, detail=not_found)
    get_owned_project(session, row.project_id, owner_id)
    return crud.apply_update(session=session, db_obj=row, update_in=update_in)


@router.patch("/pull-requests/{id}", response_model=PullRequestPublic)
def update_pull_request(
    id: uuid.UUID,
    pr_in: PullRequestUpdate,
    current_user_id: CurrentUserId,
    session: Session = Depends(get_db),
) -> Any:
    return _update_owned_row(session, PullRequest, id, pr_in, current_user_id, "PR não encontrado")


@router.patch("/flowcharts/{id}", response_model=FlowchartPublic)
def update_flowchart(
    id: uuid.UUID,
    flowchart_in: FlowchartUpdate,
    current_user_id: CurrentUserId,
    session: Session = Depends(get_db),
) -> Any:
    return _update_owned_row(session, Flowchart, id, flowchart_in, current_user_id, "Fluxograma não encontrado")


@router.patch("/epics/{id}", response_model=EpicPublic)
def update_epic(
    id: uuid.UUID,
    epic_in: EpicUpdate,
    current_user_id: CurrentUserId,
    session: Session = Depends(get_db),
) -> Any:
    return _update_owned_row(session, Epic, id, epic_in, current_user_id, "Épico não encontrado")


@router.patch("/tasks/{id}", response_model=TaskPublic)
def update_task(
    id: uuid.UUID,
    task_in: TaskUpdate,
    current_user_id: CurrentUserId,
    session: Session = Depends(get_db),
) -> Any:
    return _update_owned_row(session, Task, id, task_in, current_user_id, "Task não encontrada")
