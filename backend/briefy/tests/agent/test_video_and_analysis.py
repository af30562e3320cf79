import base64
import json
from unittest.mock import AsyncMock

import pytest
from sqlmodel import Session

from briefy import crud
from briefy.agent.analysis import analysis_title, analysis_type_for, analyze_project_material, build_analysis_prompt
from briefy.agent.artifacts import DocumentText, VideoContext
from briefy.agent.errors import MalformedJsonError, NoJsonFoundError
from briefy.agent.llm_client import LLMClient
from briefy.agent.prompts import ANALYSIS_PROMPT, VIDEO_EXTRACTION_PROMPT
from briefy.agent.video import (
    MISSING_TRANSCRIPTION,
    extract_video_context,
    stored_video_contexts,
    video_context_from_payload,
)
from briefy.models import Project, VideoExtractionCreate

VIDEO_ANSWER = json.dumps(
    {
        "extractedText": "Reunião sobre o app de entregas",
        "analysis": {
            "keyTopics": ["entregas", "rastreamento"],
            "requirements": ["Rastrear pedido em tempo real"],
            "technicalDetails": "não é lista",
        },
    }
)


@pytest.mark.asyncio
async def test_video_is_sent_inline_and_defaults_are_applied(llm: LLMClient):
    llm.invoke = AsyncMock(return_value=f"```json\n{VIDEO_ANSWER}\n```")

    context = await extract_video_context(llm, "reuniao.mp4", "video/mp4", b"\x00\x01video")

    prompt = llm.invoke.call_args.args[0]
    media = llm.invoke.call_args.kwargs["inline_media"]
    assert prompt == VIDEO_EXTRACTION_PROMPT
    assert media.mime_type == "video/mp4"
    assert base64.b64decode(media.base64_data) == b"\x00\x01video"

    assert context.extracted_text == "Reunião sobre o app de entregas"
    assert context.transcription == MISSING_TRANSCRIPTION
    assert context.analysis.key_topics == ["entregas", "rastreamento"]
    assert context.analysis.technical_details == []
    assert context.analysis.business_context == []


@pytest.mark.asyncio
async def test_video_answer_without_json(llm: LLMClient):
    llm.invoke = AsyncMock(return_value="Não foi possível processar o vídeo.")

    with pytest.raises(NoJsonFoundError):
        await extract_video_context(llm, "reuniao.mp4", "video/mp4", b"data")


def test_video_context_renders_as_a_document():
    context = VideoContext(file_name="demo.mp4", extracted_text="Tela de login", transcription="Olá")
    context.analysis.requirements.append("Login com e-mail")

    document = context.to_document()

    assert document.name == "demo.mp4 (Contexto Extraído)"
    assert "## REQUISITOS IDENTIFICADOS\n- Login com e-mail" in document.content
    assert "## TRANSCRIÇÃO\nOlá" in document.content


@pytest.mark.asyncio
async def test_analysis_combines_documents_and_videos(llm: LLMClient):
    llm.invoke = AsyncMock(return_value='{"executiveSummary": {"projectOverview": "App de entregas"}}')
    video = VideoContext(file_name="demo.mp4", extracted_text="Mapa", transcription="")

    analysis = await analyze_project_material(llm, [DocumentText(name="briefing.md", content="Entregas")], [video])

    prompt = llm.invoke.call_args.args[0]
    assert prompt.startswith(ANALYSIS_PROMPT)
    assert "--- DOCUMENTO 1: briefing.md ---" in prompt
    assert "--- DOCUMENTO 2: demo.mp4 (Contexto Extraído) ---" in prompt
    assert analysis_title(analysis) == "App de entregas"


@pytest.mark.asyncio
async def test_analysis_answer_extraction(llm: LLMClient):
    llm.invoke = AsyncMock(return_value="[1, 2]")

    # "[1, 2]" has no braces at all.
    with pytest.raises(NoJsonFoundError):
        await analyze_project_material(llm, [DocumentText(name="a", content="b")])

    llm.invoke = AsyncMock(return_value='```json\n{"a": 1}\n``` e depois {"b": ')
    analysis = await analyze_project_material(llm, [DocumentText(name="a", content="b")])
    assert analysis == {"a": 1}


def test_analysis_type_and_title_defaults():
    doc = DocumentText(name="a", content="b")
    video = VideoContext(file_name="v.mp4", extracted_text="", transcription="")

    assert analysis_type_for([doc], []) == "document"
    assert analysis_type_for([], [video]) == "video"
    assert analysis_type_for([doc], [video]) == "combined"
    assert analysis_title({}) == "Análise do Projeto"
    assert build_analysis_prompt([], []) == ANALYSIS_PROMPT


def test_video_payload_must_be_an_object():
    with pytest.raises(MalformedJsonError):
        video_context_from_payload("v.mp4", ["not", "an", "object"])


def test_stored_extractions_are_rebuilt_as_video_contexts(session: Session, project: Project):
    crud.create_video_extraction(
        session=session,
        extraction_in=VideoExtractionCreate(
            file_name="reuniao.mp4",
            extracted_text="Reunião sobre entregas",
            transcription="Olá",
            analysis_data={"requirements": ["Rastrear pedido"]},
            project_id=project.id,
        ),
    )
    crud.create_video_extraction(
        session=session,
        extraction_in=VideoExtractionCreate(file_name="vazio.mp4", project_id=project.id),
    )

    contexts = {video.file_name: video for video in stored_video_contexts(session, project.id)}

    assert contexts["reuniao.mp4"].analysis.requirements == ["Rastrear pedido"]
    assert contexts["reuniao.mp4"].transcription == "Olá"
    assert contexts["vazio.mp4"].analysis.key_topics == []
    assert "Rastrear pedido" in contexts["reuniao.mp4"].to_document().content
