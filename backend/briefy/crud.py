import logging
import uuid
from typing import Any

from sqlmodel import Session, SQLModel, col, select

from briefy.models import (
    AIAnalysis,
    AIAnalysisCreate,
    Epic,
    EpicCreate,
    Flowchart,
    FlowchartCreate,
    GlobalPrompt,
    GlobalPromptCreate,
    Project,
    ProjectCreate,
    PullRequest,
    PullRequestCreate,
    SupportMaterial,
    SupportMaterialCreate,
    Task,
    TaskCreate,
    VideoExtraction,
    VideoExtractionCreate,
    get_datetime_utc,
)

logger = logging.getLogger(__name__)


def _save(session: Session, db_obj: SQLModel) -> Any:
    session.add(db_obj)
    session.commit()
    session.refresh(db_obj)
    return db_obj


def apply_update(*, session: Session, db_obj: SQLModel, update_in: SQLModel) -> Any:
    update_data = update_in.model_dump(exclude_unset=True)
    db_obj.sqlmodel_update(update_data, update={"updated_at": get_datetime_utc()})
    return _save(session, db_obj)


# Projects

def create_project(*, session: Session, project_in: ProjectCreate, owner_id: str) -> Project:
    db_project = Project.model_validate(project_in, update={"owner_id": owner_id})
    return _save(session, db_project)


def list_projects(*, session: Session, owner_id: str) -> list[Project]:
    statement = (
        select(Project)
        .where(Project.owner_id == owner_id)
        .where(col(Project.is_system).is_(False))
        .order_by(col(Project.created_at).desc())
    )
    return list(session.exec(statement).all())


def get_project(*, session: Session, project_id: uuid.UUID) -> Project | None:
    project = session.get(Project, project_id)
    if project is None or project.is_system:
        return None
    return project


# Dependent tables cleared before the project row itself, in this order.
PROJECT_DEPENDENT_TABLES: tuple[tuple[str, type[SQLModel]], ...] = (
    ("tasks", Task),
    ("flowcharts", Flowchart),
    ("pull_requests", PullRequest),
    ("support_materials", SupportMaterial),
    ("video_extractions", VideoExtraction),
    ("ai_analyses", AIAnalysis),
    ("epics", Epic),
)


def delete_project(*, session: Session, project: Project) -> list[str]:
    """
    Delete a project and everything it owns.

    Each dependent table is cleared in its own transaction. A failure is logged
    and reported but does not undo the tables already cleared; the project row
    is only removed after every table was attempted. Returns the names of the
    tables that could not be cleared, "projects" included when the project row
    itself could not be removed.
    """
    failed: list[str] = []
    for table_name, model in PROJECT_DEPENDENT_TABLES:
        try:
            rows = session.exec(select(model).where(model.project_id == project.id)).all()  # type: ignore[attr-defined]
            for row in rows:
                session.delete(row)
            session.commit()
        except Exception as exc:
            session.rollback()
            logger.error("Failed to delete %s of project %s: %s", table_name, project.id, exc)
            failed.append(table_name)

    try:
        session.delete(project)
        session.commit()
    except Exception as exc:
        session.rollback()
        logger.error("Failed to delete project %s: %s", project.id, exc)
        failed.append("projects")
    return failed


# Generated content

def create_pull_request(*, session: Session, pr_in: PullRequestCreate) -> PullRequest:
    return _save(session, PullRequest.model_validate(pr_in))


def create_flowchart(*, session: Session, flowchart_in: FlowchartCreate) -> Flowchart:
    return _save(session, Flowchart.model_validate(flowchart_in))


def create_epic(*, session: Session, epic_in: EpicCreate) -> Epic:
    return _save(session, Epic.model_validate(epic_in))


def create_task(*, session: Session, task_in: TaskCreate) -> Task:
    return _save(session, Task.model_validate(task_in))


def list_project_rows(*, session: Session, model: type[SQLModel], project_id: uuid.UUID) -> list[Any]:
    statement = (
        select(model)
        .where(model.project_id == project_id)  # type: ignore[attr-defined]
        .order_by(col(model.created_at).desc())  # type: ignore[attr-defined]
    )
    return list(session.exec(statement).all())


# Prompt configuration

def get_active_global_prompts(*, session: Session) -> list[GlobalPrompt]:
    statement = select(GlobalPrompt).where(col(GlobalPrompt.is_active).is_(True))
    return list(session.exec(statement).all())


def list_global_prompts(*, session: Session) -> list[GlobalPrompt]:
    return list(session.exec(select(GlobalPrompt).order_by(GlobalPrompt.type)).all())


def create_global_prompt(*, session: Session, prompt_in: GlobalPromptCreate) -> GlobalPrompt:
    return _save(session, GlobalPrompt.model_validate(prompt_in))


def create_support_material(*, session: Session, material_in: SupportMaterialCreate) -> SupportMaterial:
    return _save(session, SupportMaterial.model_validate(material_in))


def list_support_materials(*, session: Session, project_id: uuid.UUID | None = None) -> list[SupportMaterial]:
    statement = select(SupportMaterial)
    if project_id is None:
        statement = statement.where(col(SupportMaterial.is_default).is_(True))
    else:
        statement = statement.where(SupportMaterial.project_id == project_id)
    return list(session.exec(statement.order_by(col(SupportMaterial.created_at).desc())).all())


def get_project_support_materials(*, session: Session, project_id: uuid.UUID) -> list[SupportMaterial]:
    """Project materials, falling back to the default materials when the project has none."""
    statement = (
        select(SupportMaterial)
        .where(SupportMaterial.project_id == project_id)
        .order_by(col(SupportMaterial.created_at).desc())
    )
    materials = list(session.exec(statement).all())
    if materials:
        return materials

    logger.info("No support material for project %s, using default materials", project_id)
    statement = (
        select(SupportMaterial)
        .where(col(SupportMaterial.is_default).is_(True))
        .order_by(col(SupportMaterial.created_at).desc())
    )
    return list(session.exec(statement).all())


# Video extractions and analyses

def create_video_extraction(*, session: Session, extraction_in: VideoExtractionCreate) -> VideoExtraction:
    return _save(session, VideoExtraction.model_validate(extraction_in))


def create_ai_analysis(*, session: Session, analysis_in: AIAnalysisCreate) -> AIAnalysis:
    return _save(session, AIAnalysis.model_validate(analysis_in))
