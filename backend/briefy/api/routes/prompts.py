import uuid
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from briefy import crud
from briefy.agent.prompt_cache import prompt_cache
from briefy.api.deps import CurrentUserId, get_db
from briefy.models import GlobalPrompt, GlobalPromptCreate, GlobalPromptPublic, GlobalPromptUpdate, Message

router = APIRouter()


def _get_prompt_or_404(session: Session, id: uuid.UUID) -> GlobalPrompt:
    prompt = session.get(GlobalPrompt, id)
    if prompt is None:
        raise HTTPException(status_code=404, detail="Prompt não encontrado")
    return prompt


@router.get("/", response_model=list[GlobalPromptPublic])
def read_global_prompts(
    current_user_id: CurrentUserId,
    session: Session = Depends(get_db),
) -> Any:
    return crud.list_global_prompts(session=session)


@router.post("/", response_model=GlobalPromptPublic)
def create_global_prompt(
    prompt_in: GlobalPromptCreate,
    current_user_id: CurrentUserId,
    session: Session = Depends(get_db),
) -> Any:
    prompt = crud.create_global_prompt(session=session, prompt_in=prompt_in)
    prompt_cache.invalidate()
    return prompt


@router.patch("/{id}", response_model=GlobalPromptPublic)
def update_global_prompt(
    id: uuid.UUID,
    prompt_in: GlobalPromptUpdate,
    current_user_id: CurrentUserId,
    session: Session = Depends(get_db),
) -> Any:
    prompt = crud.apply_update(session=session, db_obj=_get_prompt_or_404(session, id), update_in=prompt_in)
    prompt_cache.invalidate()
    return prompt


@router.delete("/{id}", response_model=Message)
def delete_global_prompt(
    id: uuid.UUID,
    current_user_id: CurrentUserId,
    session: Session = Depends(get_db),
) -> Any:
    session.delete(_get_prompt_or_404(session, id))
    session.commit()
    prompt_cache.invalidate()
    return Message(message="Prompt excluído com sucesso")
