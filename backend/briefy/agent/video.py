import base64
import logging
import uuid
from collections.abc import Mapping
from typing import Any

from sqlmodel import Session

from briefy import crud
from briefy.agent.artifacts import InlineMedia, VideoAnalysis, VideoContext
from briefy.agent.errors import MalformedJsonError
from briefy.agent.interpreter import parse_json_payload
from briefy.agent.llm_client import LLMClient
from briefy.agent.prompts import VIDEO_EXTRACTION_PROMPT
from briefy.models import VideoExtraction

logger = logging.getLogger(__name__)

MISSING_DESCRIPTION = "Conteúdo do vídeo não pôde ser extraído"
MISSING_TRANSCRIPTION = "Transcrição não disponível"


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if isinstance(item, (str, int, float)) and str(item).strip()]


def _text(value: Any, default: str) -> str:
    return value if isinstance(value, str) and value.strip() else default


def video_context_from_payload(file_name: str, payload: Any) -> VideoContext:
    """Build a VideoContext from the interpreted answer, defaulting what the model left out."""
    if not isinstance(payload, Mapping):
        raise MalformedJsonError("JSON video inválido: era esperado um objeto")

    analysis = payload.get("analysis")
    if not isinstance(analysis, Mapping):
        analysis = {}

    return VideoContext(
        file_name=file_name,
        extracted_text=_text(payload.get("extractedText"), MISSING_DESCRIPTION),
        transcription=_text(payload.get("transcription"), MISSING_TRANSCRIPTION),
        analysis=VideoAnalysis(
            key_topics=_string_list(analysis.get("keyTopics")),
            requirements=_string_list(analysis.get("requirements")),
            technical_details=_string_list(analysis.get("technicalDetails")),
            business_context=_string_list(analysis.get("businessContext")),
        ),
    )


async def extract_video_context(gateway: LLMClient, file_name: str, mime_type: str, data: bytes) -> VideoContext:
    logger.info("Extracting context from video %s (%s, %s bytes)", file_name, mime_type, len(data))
    media = InlineMedia(mime_type=mime_type, base64_data=base64.b64encode(data).decode("ascii"))
    raw_text = await gateway.invoke(VIDEO_EXTRACTION_PROMPT, inline_media=media)
    context = video_context_from_payload(file_name, parse_json_payload("video", raw_text))
    logger.info(
        "Video %s: %s topics, %s requirements extracted",
        file_name,
        len(context.analysis.key_topics),
        len(context.analysis.requirements),
    )
    return context


def stored_video_contexts(session: Session, project_id: uuid.UUID) -> list[VideoContext]:
    """The project's saved video extractions, newest first."""
    rows = crud.list_project_rows(session=session, model=VideoExtraction, project_id=project_id)
    return [
        VideoContext(
            file_name=row.file_name,
            extracted_text=row.extracted_text,
            transcription=row.transcription,
            analysis=VideoAnalysis.model_validate(row.analysis_data or {}),
        )
        for row in rows
    ]
