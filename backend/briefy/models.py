import uuid
from datetime import datetime, timezone
from typing import Any, Literal

from sqlalchemy import JSON, DateTime
from sqlmodel import Field, SQLModel


def get_datetime_utc() -> datetime:
    return datetime.now(timezone.utc)


ContentType = Literal["pr", "flowchart", "tasks"]
CONTENT_TYPES: tuple[str, ...] = ("pr", "flowchart", "tasks")

Priority = Literal["low", "medium", "high"]
PullRequestStatus = Literal["draft", "pending", "approved", "merged"]
EpicStatus = Literal["pending", "in_progress", "completed"]
TaskStatus = Literal["pending", "approved", "rejected"]
AnalysisType = Literal["document", "video", "combined"]


class TimestampMixin(SQLModel):
    created_at: datetime | None = Field(
        default_factory=get_datetime_utc,
        sa_type=DateTime(timezone=True),  # type: ignore
    )
    updated_at: datetime | None = Field(
        default_factory=get_datetime_utc,
        sa_type=DateTime(timezone=True),  # type: ignore
    )


# Generic message
class Message(SQLModel):
    message: str


# Projects

class ProjectBase(SQLModel):
    name: str = Field(min_length=1, max_length=255)
    description: str = Field(default="")


class ProjectCreate(ProjectBase):
    pass


class ProjectUpdate(SQLModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None


class Project(ProjectBase, TimestampMixin, table=True):
    __tablename__ = "projects"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    owner_id: str = Field(index=True, max_length=255)
    is_system: bool = False


class ProjectPublic(ProjectBase):
    id: uuid.UUID
    owner_id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


# Generated technical document ("PR")

class PullRequestBase(SQLModel):
    title: str = Field(max_length=255)
    description: str = ""
    content: str = ""
    status: str = Field(default="draft")  # draft, pending, approved, merged


class PullRequestCreate(PullRequestBase):
    project_id: uuid.UUID


class PullRequestUpdate(SQLModel):
    title: str | None = Field(default=None, max_length=255)
    description: str | None = None
    content: str | None = None
    status: PullRequestStatus | None = None


class PullRequest(PullRequestBase, TimestampMixin, table=True):
    __tablename__ = "pull_requests"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    project_id: uuid.UUID = Field(foreign_key="projects.id", index=True)


class PullRequestPublic(PullRequestBase):
    id: uuid.UUID
    project_id: uuid.UUID
    created_at: datetime | None = None
    updated_at: datetime | None = None


# Flowcharts

class FlowchartBase(SQLModel):
    title: str = Field(max_length=255)
    description: str = ""
    nodes: list[dict[str, Any]] = Field(default_factory=list, sa_type=JSON)
    edges: list[dict[str, Any]] = Field(default_factory=list, sa_type=JSON)


class FlowchartCreate(FlowchartBase):
    project_id: uuid.UUID


class FlowchartUpdate(SQLModel):
    title: str | None = Field(default=None, max_length=255)
    description: str | None = None
    nodes: list[dict[str, Any]] | None = None
    edges: list[dict[str, Any]] | None = None


class Flowchart(FlowchartBase, TimestampMixin, table=True):
    __tablename__ = "flowcharts"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    project_id: uuid.UUID = Field(foreign_key="projects.id", index=True)


class FlowchartPublic(FlowchartBase):
    id: uuid.UUID
    project_id: uuid.UUID
    created_at: datetime | None = None
    updated_at: datetime | None = None


# Epics and tasks

class EpicBase(SQLModel):
    title: str = Field(max_length=255)
    description: str = ""
    priority: str = Field(default="medium")  # low, medium, high
    status: str = Field(default="pending")  # pending, in_progress, completed


class EpicCreate(EpicBase):
    project_id: uuid.UUID


class EpicUpdate(SQLModel):
    title: str | None = Field(default=None, max_length=255)
    description: str | None = None
    priority: Priority | None = None
    status: EpicStatus | None = None


class Epic(EpicBase, TimestampMixin, table=True):
    __tablename__ = "epics"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    project_id: uuid.UUID = Field(foreign_key="projects.id", index=True)


class EpicPublic(EpicBase):
    id: uuid.UUID
    project_id: uuid.UUID
    created_at: datetime | None = None
    updated_at: datetime | None = None


class TaskBase(SQLModel):
    title: str = Field(max_length=255)
    description: str = ""
    story_points: int = 3
    category: str = Field(default="frontend")
    priority: str = Field(default="medium")  # low, medium, high
    status: str = Field(default="pending")  # pending, approved, rejected
    criteria: list[str] = Field(default_factory=list, sa_type=JSON)


class TaskCreate(TaskBase):
    project_id: uuid.UUID
    epic_id: uuid.UUID | None = None


class TaskUpdate(SQLModel):
    title: str | None = Field(default=None, max_length=255)
    description: str | None = None
    story_points: Literal[1, 2, 3, 5, 8, 13] | None = None
    category: str | None = None
    priority: Priority | None = None
    status: TaskStatus | None = None
    criteria: list[str] | None = None
    epic_id: uuid.UUID | None = None


class Task(TaskBase, TimestampMixin, table=True):
    __tablename__ = "tasks"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    project_id: uuid.UUID = Field(foreign_key="projects.id", index=True)
    epic_id: uuid.UUID | None = Field(default=None, foreign_key="epics.id")


class TaskPublic(TaskBase):
    id: uuid.UUID
    project_id: uuid.UUID
    epic_id: uuid.UUID | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


# Prompt configuration

class SupportMaterialBase(SQLModel):
    name: str = Field(max_length=255)
    type: str = Field(max_length=20)  # pr, flowchart, tasks
    content: str
    is_default: bool = False


class SupportMaterialCreate(SupportMaterialBase):
    type: ContentType  # type: ignore
    project_id: uuid.UUID | None = None


class SupportMaterialUpdate(SQLModel):
    name: str | None = Field(default=None, max_length=255)
    content: str | None = None
    is_default: bool | None = None


class SupportMaterial(SupportMaterialBase, TimestampMixin, table=True):
    __tablename__ = "support_materials"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    project_id: uuid.UUID | None = Field(default=None, foreign_key="projects.id", index=True)


class SupportMaterialPublic(SupportMaterialBase):
    id: uuid.UUID
    project_id: uuid.UUID | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class GlobalPromptBase(SQLModel):
    type: str = Field(max_length=20)  # pr, flowchart, tasks
    title: str = Field(max_length=255)
    content: str
    is_default: bool = False
    is_active: bool = True


class GlobalPromptCreate(GlobalPromptBase):
    type: ContentType  # type: ignore


class GlobalPromptUpdate(SQLModel):
    title: str | None = Field(default=None, max_length=255)
    content: str | None = None
    is_default: bool | None = None
    is_active: bool | None = None


class GlobalPrompt(GlobalPromptBase, TimestampMixin, table=True):
    __tablename__ = "global_prompts"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)


class GlobalPromptPublic(GlobalPromptBase):
    id: uuid.UUID
    created_at: datetime | None = None
    updated_at: datetime | None = None


# Video extractions and AI analyses

class VideoExtractionBase(SQLModel):
    file_name: str = Field(max_length=255)
    extracted_text: str = ""
    transcription: str = ""
    duration: float | None = None
    thumbnail_url: str | None = None
    analysis_data: dict[str, Any] = Field(default_factory=dict, sa_type=JSON)


class VideoExtractionCreate(VideoExtractionBase):
    project_id: uuid.UUID


class VideoExtraction(VideoExtractionBase, TimestampMixin, table=True):
    __tablename__ = "video_extractions"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    project_id: uuid.UUID = Field(foreign_key="projects.id", index=True)


class VideoExtractionPublic(VideoExtractionBase):
    id: uuid.UUID
    project_id: uuid.UUID
    created_at: datetime | None = None


class AIAnalysisBase(SQLModel):
    title: str = Field(max_length=255)
    content: str
    analysis_type: str = Field(default="document")  # document, video, combined


class AIAnalysisCreate(AIAnalysisBase):
    project_id: uuid.UUID


class AIAnalysis(AIAnalysisBase, TimestampMixin, table=True):
    __tablename__ = "ai_analyses"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    project_id: uuid.UUID = Field(foreign_key="projects.id", index=True)


class AIAnalysisPublic(AIAnalysisBase):
    id: uuid.UUID
    project_id: uuid.UUID
    created_at: datetime | None = None
