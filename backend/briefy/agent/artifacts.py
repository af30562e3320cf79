from typing import Any, Literal

from pydantic import BaseModel, Field

from briefy.models import EpicPublic, FlowchartPublic, PullRequestPublic, TaskPublic

NodeType = Literal["input", "process", "output", "decision"]
Category = Literal[
    "frontend",
    "backend",
    "design",
    "testing",
    "devops",
    "database",
    "security",
    "documentation",
    "infrastructure",
    "mobile",
    "api",
]


class DocumentText(BaseModel):
    name: str = Field(description="File name shown in the document header")
    content: str = Field(description="Extracted plain text")


class InlineMedia(BaseModel):
    mime_type: str
    base64_data: str

    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.base64_data}"


# Sanitized flowchart

class Position(BaseModel):
    x: int
    y: int


class FlowNode(BaseModel):
    id: str
    type: NodeType = "process"
    label: str
    position: Position


class FlowEdge(BaseModel):
    id: str
    source: str
    target: str
    label: str | None = None


class FlowchartGraph(BaseModel):
    """Flowchart whose edges only reference existing nodes. Never empty."""
    nodes: list[FlowNode]
    edges: list[FlowEdge] = Field(default_factory=list)


# Sanitized epics and tasks

class EpicDraft(BaseModel):
    title: str
    description: str
    priority: Literal["low", "medium", "high"] = "medium"


class TaskDraft(BaseModel):
    title: str
    description: str
    story_points: Literal[1, 2, 3, 5, 8, 13] = 3
    category: Category = "frontend"
    epic_index: int = 0
    acceptance_criteria: list[str] = Field(default_factory=list)
    priority: Literal["low", "medium", "high"] = "medium"


# Pipeline payloads

class GeneratedContent(BaseModel):
    """Interpreted model output, still untrusted until sanitized."""
    pr: str = ""
    flowchart: dict[str, Any] = Field(default_factory=lambda: {"nodes": [], "edges": []})
    epics: list[Any] = Field(default_factory=list)
    tasks: list[Any] = Field(default_factory=list)


class SaveOptions(BaseModel):
    save_pr: bool = True
    save_flowchart: bool = True
    save_tasks: bool = True
    pr_title: str | None = None
    flowchart_title: str | None = None


class SaveContentResult(BaseModel):
    success: bool = True
    pr: PullRequestPublic | None = None
    flowchart: FlowchartPublic | None = None
    epics: list[EpicPublic] | None = None
    tasks: list[TaskPublic] | None = None
    errors: list[str] = Field(default_factory=list)


class ProjectContentResult(SaveContentResult):
    generated: GeneratedContent | None = None


# Video and analysis

class VideoAnalysis(BaseModel):
    key_topics: list[str] = Field(default_factory=list)
    requirements: list[str] = Field(default_factory=list)
    technical_details: list[str] = Field(default_factory=list)
    business_context: list[str] = Field(default_factory=list)


class VideoContext(BaseModel):
    file_name: str
    extracted_text: str
    transcription: str
    analysis: VideoAnalysis = Field(default_factory=VideoAnalysis)

    def to_document(self) -> DocumentText:
        def bullets(items: list[str]) -> str:
            return "\n".join(f"- {item}" for item in items)

        content = (
            f"# CONTEXTO EXTRAÍDO DO VÍDEO: {self.file_name}\n\n"
            f"## DESCRIÇÃO GERAL\n{self.extracted_text}\n\n"
            f"## TRANSCRIÇÃO\n{self.transcription}\n\n"
            f"## TÓPICOS PRINCIPAIS\n{bullets(self.analysis.key_topics)}\n\n"
            f"## REQUISITOS IDENTIFICADOS\n{bullets(self.analysis.requirements)}\n\n"
            f"## DETALHES TÉCNICOS\n{bullets(self.analysis.technical_details)}\n\n"
            f"## CONTEXTO DE NEGÓCIO\n{bullets(self.analysis.business_context)}"
        )
        return DocumentText(name=f"{self.file_name} (Contexto Extraído)", content=content.strip())
