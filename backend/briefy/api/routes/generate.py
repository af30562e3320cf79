import json
import logging
import uuid
from collections.abc import AsyncIterator

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlmodel import Session
from sse_starlette.sse import EventSourceResponse

from briefy.agent.artifacts import DocumentText, ProjectContentResult, SaveOptions
from briefy.agent.llm_client import LLMClient
from briefy.agent.orchestrator import generate_and_save_project_content, run_generation_pipeline
from briefy.agent.video import stored_video_contexts
from briefy.api.deps import CurrentUserId, LLMDep, get_db, get_owned_project

router = APIRouter()
logger = logging.getLogger(__name__)


class GenerateRequest(BaseModel):
    documents: list[DocumentText] = Field(default_factory=list)
    notes: str = ""
    options: SaveOptions = Field(default_factory=SaveOptions)
    include_videos: bool = False


def _request_documents(session: Session, project_id: uuid.UUID, payload: GenerateRequest) -> list[DocumentText]:
    """Uploaded documents, followed by the project's stored video extractions when asked for."""
    documents = list(payload.documents)
    if payload.include_videos:
        documents += [video.to_document() for video in stored_video_contexts(session, project_id)]
    return documents


@router.post("/{project_id}", response_model=ProjectContentResult)
async def generate_project_content(
    project_id: uuid.UUID,
    payload: GenerateRequest,
    current_user_id: CurrentUserId,
    llm: LLMDep,
    session: Session = Depends(get_db),
) -> ProjectContentResult:
    """Generate PR, flowchart and tasks for a project and save them."""
    get_owned_project(session, project_id, current_user_id)
    result = await generate_and_save_project_content(
        session,
        project_id,
        _request_documents(session, project_id, payload),
        payload.notes,
        payload.options,
        llm=llm,
    )
    if not result.success:
        logger.warning("Generation for project %s finished with errors: %s", project_id, result.errors)
    return result


async def _stream_events(
    session: Session,
    project_id: uuid.UUID,
    documents: list[DocumentText],
    payload: GenerateRequest,
    llm: LLMClient,
) -> AsyncIterator[str]:
    async for event in run_generation_pipeline(session, project_id, documents, payload.notes, payload.options, llm=llm):
        yield json.dumps(event, ensure_ascii=False)


@router.post("/{project_id}/stream")
async def generate_project_content_stream(
    project_id: uuid.UUID,
    payload: GenerateRequest,
    current_user_id: CurrentUserId,
    llm: LLMDep,
    session: Session = Depends(get_db),
):
    """Start generation and stream progress via SSE."""
    get_owned_project(session, project_id, current_user_id)
    documents = _request_documents(session, project_id, payload)
    return EventSourceResponse(_stream_events(session, project_id, documents, payload, llm))
