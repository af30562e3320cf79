import io
import json
import logging
import uuid
from typing import Any

import pypdf
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from pydantic import BaseModel, Field
from sqlmodel import Session

from briefy import crud
from briefy.agent.analysis import analysis_title, analysis_type_for, analyze_project_material
from briefy.agent.artifacts import DocumentText
from briefy.agent.video import extract_video_context, stored_video_contexts
from briefy.api.deps import CurrentUserId, LLMDep, get_db, get_owned_project
from briefy.models import (
    AIAnalysisCreate,
    AIAnalysisPublic,
    VideoExtraction,
    VideoExtractionCreate,
    VideoExtractionPublic,
)

router = APIRouter()
logger = logging.getLogger(__name__)

TEXT_CONTENT_TYPES = ("text/plain", "text/markdown")
TEXT_EXTENSIONS = (".txt", ".md", ".markdown")


def extract_text_from_file(file: UploadFile, content: bytes) -> str:
    """Extracts text from a given file based on content type."""
    filename = (file.filename or "").lower()
    if file.content_type == "application/pdf" or filename.endswith(".pdf"):
        try:
            pdf_reader = pypdf.PdfReader(io.BytesIO(content))
            text = ""
            for page in pdf_reader.pages:
                page_text = page.extract_text()
                if page_text:
                    text += page_text + "\n"
            return text
        except Exception as e:
            raise HTTPException(status_code=400, detail=f"Falha ao ler PDF: {str(e)}")

    elif file.content_type in TEXT_CONTENT_TYPES or filename.endswith(TEXT_EXTENSIONS):
        try:
            return content.decode("utf-8")
        except UnicodeDecodeError:
            raise HTTPException(status_code=400, detail="Arquivo de texto não está em UTF-8")

    else:
        raise HTTPException(status_code=400, detail=f"Tipo de arquivo não suportado: {file.content_type}")


@router.post("/extract", response_model=DocumentText)
async def extract_document(
    current_user_id: CurrentUserId,
    file: UploadFile = File(...),
) -> Any:
    """
    Extract plain text from an uploaded document so it can be sent with a
    generation request.
    """
    content = await file.read()
    text = extract_text_from_file(file, content)
    if not text.strip():
        raise HTTPException(status_code=400, detail="Não foi possível extrair texto do documento.")
    logger.info("Extracted %s chars from %s", len(text), file.filename)
    return DocumentText(name=file.filename or "documento", content=text)


@router.post("/video/{project_id}", response_model=VideoExtractionPublic)
async def extract_video(
    project_id: uuid.UUID,
    current_user_id: CurrentUserId,
    llm: LLMDep,
    file: UploadFile = File(...),
    session: Session = Depends(get_db),
) -> Any:
    """
    Send a video to the model, store what it extracted and return it.
    """
    get_owned_project(session, project_id, current_user_id)
    if not (file.content_type or "").startswith("video/"):
        raise HTTPException(status_code=400, detail=f"Tipo de arquivo não suportado: {file.content_type}")

    data = await file.read()
    context = await extract_video_context(llm, file.filename or "video", file.content_type, data)
    return crud.create_video_extraction(
        session=session,
        extraction_in=VideoExtractionCreate(
            file_name=context.file_name,
            extracted_text=context.extracted_text,
            transcription=context.transcription,
            analysis_data=context.analysis.model_dump(),
            project_id=project_id,
        ),
    )


@router.get("/video/{project_id}", response_model=list[VideoExtractionPublic])
def read_video_extractions(
    project_id: uuid.UUID,
    current_user_id: CurrentUserId,
    session: Session = Depends(get_db),
) -> Any:
    get_owned_project(session, project_id, current_user_id)
    return crud.list_project_rows(session=session, model=VideoExtraction, project_id=project_id)


class AnalysisRequest(BaseModel):
    documents: list[DocumentText] = Field(default_factory=list)
    include_videos: bool = True
    title: str | None = None


@router.post("/analysis/{project_id}", response_model=AIAnalysisPublic)
async def analyze_project(
    project_id: uuid.UUID,
    payload: AnalysisRequest,
    current_user_id: CurrentUserId,
    llm: LLMDep,
    session: Session = Depends(get_db),
) -> Any:
    """
    Produce one consolidated analysis from the given documents and the
    project's stored video extractions.
    """
    get_owned_project(session, project_id, current_user_id)
    videos = stored_video_contexts(session, project_id) if payload.include_videos else []
    if not payload.documents and not videos:
        raise HTTPException(status_code=400, detail="Nenhum material para analisar")

    analysis = await analyze_project_material(llm, payload.documents, videos)
    return crud.create_ai_analysis(
        session=session,
        analysis_in=AIAnalysisCreate(
            title=payload.title or analysis_title(analysis),
            content=json.dumps(analysis, ensure_ascii=False),
            analysis_type=analysis_type_for(payload.documents, videos),
            project_id=project_id,
        ),
    )
