import logging
from collections.abc import Sequence
from typing import Any

from briefy.agent.artifacts import DocumentText, VideoContext
from briefy.agent.composer import DOCUMENTS_HEADING, format_documents
from briefy.agent.errors import MalformedJsonError
from briefy.agent.interpreter import parse_json_payload
from briefy.agent.llm_client import LLMClient
from briefy.agent.prompts import ANALYSIS_PROMPT
from briefy.models import AnalysisType

logger = logging.getLogger(__name__)


def analysis_type_for(documents: Sequence[DocumentText], videos: Sequence[VideoContext]) -> AnalysisType:
    if documents and videos:
        return "combined"
    return "video" if videos else "document"


def build_analysis_prompt(documents: Sequence[DocumentText], videos: Sequence[VideoContext]) -> str:
    material = [*documents, *(video.to_document() for video in videos)]
    if not material:
        return ANALYSIS_PROMPT
    return f"{ANALYSIS_PROMPT}\n\n{DOCUMENTS_HEADING}\n{format_documents(material)}"


def analysis_title(analysis: dict[str, Any], default: str = "Análise do Projeto") -> str:
    summary = analysis.get("executiveSummary")
    if isinstance(summary, dict):
        overview = summary.get("projectOverview")
        if isinstance(overview, str) and overview.strip():
            title = overview.strip().splitlines()[0]
            return title if len(title) <= 120 else title[:117] + "..."
    return default


async def analyze_project_material(
    gateway: LLMClient,
    documents: Sequence[DocumentText],
    videos: Sequence[VideoContext] = (),
) -> dict[str, Any]:
    """Ask for one consolidated analysis of every document and video context of a project."""
    logger.info("Analyzing %s documents and %s videos", len(documents), len(videos))
    raw_text = await gateway.invoke(build_analysis_prompt(documents, videos))
    analysis = parse_json_payload("analysis", raw_text)
    if not isinstance(analysis, dict):
        raise MalformedJsonError("JSON analysis inválido: era esperado um objeto", raw_text=raw_text)
    return analysis
