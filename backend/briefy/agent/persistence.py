import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from sqlmodel import Session

from briefy import crud
from briefy.agent.artifacts import EpicDraft, GeneratedContent, SaveContentResult, SaveOptions, TaskDraft
from briefy.agent.sanitizers import sanitize_epics_and_tasks, sanitize_flowchart
from briefy.models import (
    Epic,
    EpicCreate,
    EpicPublic,
    Flowchart,
    FlowchartCreate,
    FlowchartPublic,
    PullRequest,
    PullRequestCreate,
    PullRequestPublic,
    Task,
    TaskCreate,
    TaskPublic,
)

logger = logging.getLogger(__name__)

PR_EXCERPT_CHARS = 200


class PersistStepError(Exception):
    """A step could not write its entity; the message ends up in the result errors."""


@dataclass
class PersistStep:
    kind: str
    label: str
    write: Callable[[], dict[str, Any]]


@dataclass
class StepOutcome:
    kind: str
    records: dict[str, Any] = field(default_factory=dict)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _rollback_session_safely(session: Session) -> None:
    try:
        session.rollback()
    except Exception as exc:
        logger.warning("Session rollback failed: %s", exc)


def _today() -> str:
    return date.today().strftime("%d/%m/%Y")


class ContentPersister:
    """
    Writes generated content for one project as an ordered list of steps.

    Steps run independently: a failing step is recorded and the next one is
    still attempted. Nothing is rolled back across steps.
    """

    def __init__(self, session: Session, project_id: uuid.UUID):
        self.session = session
        self.project_id = project_id

    def save_pr(self, content: str, title: str | None = None) -> PullRequest:
        return crud.create_pull_request(
            session=self.session,
            pr_in=PullRequestCreate(
                title=title or f"Documento Técnico - {_today()}",
                description=content[:PR_EXCERPT_CHARS] + "...",
                content=content,
                status="draft",
                project_id=self.project_id,
            ),
        )

    def save_flowchart(self, raw_flowchart: Any, title: str | None = None) -> Flowchart:
        graph = sanitize_flowchart(raw_flowchart)
        if graph is None:
            raise PersistStepError("Fluxograma inválido ou vazio")

        return crud.create_flowchart(
            session=self.session,
            flowchart_in=FlowchartCreate(
                title=title or f"Fluxograma - {_today()}",
                description=(
                    f"Fluxograma gerado automaticamente com {len(graph.nodes)} nós "
                    f"e {len(graph.edges)} conexões"
                ),
                nodes=[node.model_dump() for node in graph.nodes],
                edges=[edge.model_dump(exclude_none=True) for edge in graph.edges],
                project_id=self.project_id,
            ),
        )

    def _save_epic(self, epic: EpicDraft) -> Epic | None:
        try:
            return crud.create_epic(
                session=self.session,
                epic_in=EpicCreate(
                    title=epic.title,
                    description=epic.description,
                    priority=epic.priority,
                    status="pending",
                    project_id=self.project_id,
                ),
            )
        except Exception as exc:
            _rollback_session_safely(self.session)
            logger.error("Failed to save epic %r: %s", epic.title, exc)
            return None

    def _save_task(self, task: TaskDraft, epics_by_index: list[Epic | None]) -> Task | None:
        # One slot per generated epic, None where the epic failed to save, so a
        # task never inherits a neighbouring epic.
        epic = epics_by_index[task.epic_index] if task.epic_index < len(epics_by_index) else None
        try:
            return crud.create_task(
                session=self.session,
                task_in=TaskCreate(
                    title=task.title,
                    description=task.description,
                    story_points=task.story_points,
                    category=task.category,
                    priority=task.priority,
                    status="pending",
                    criteria=task.acceptance_criteria,
                    epic_id=epic.id if epic else None,
                    project_id=self.project_id,
                ),
            )
        except Exception as exc:
            _rollback_session_safely(self.session)
            logger.error("Failed to save task %r: %s", task.title, exc)
            return None

    def save_epics_and_tasks(self, raw_epics: Any, raw_tasks: Any) -> tuple[list[Epic], list[Task]]:
        epics, tasks = sanitize_epics_and_tasks(raw_epics, raw_tasks)
        logger.info("Saving %s epics and %s tasks for project %s", len(epics), len(tasks), self.project_id)

        epics_by_index = [self._save_epic(epic) for epic in epics]

        saved_tasks: list[Task] = []
        for task in tasks:
            saved = self._save_task(task, epics_by_index)
            if saved is not None:
                saved_tasks.append(saved)

        return [epic for epic in epics_by_index if epic is not None], saved_tasks

    def build_steps(self, content: GeneratedContent, options: SaveOptions) -> list[PersistStep]:
        steps: list[PersistStep] = []
        if options.save_pr:
            steps.append(
                PersistStep(
                    kind="pr",
                    label="PR",
                    write=lambda: {"pr": self.save_pr(content.pr, options.pr_title)},
                )
            )
        if options.save_flowchart:
            steps.append(
                PersistStep(
                    kind="flowchart",
                    label="fluxograma",
                    write=lambda: {"flowchart": self.save_flowchart(content.flowchart, options.flowchart_title)},
                )
            )
        if options.save_tasks and (content.epics or content.tasks):

            def write_tasks() -> dict[str, Any]:
                epics, tasks = self.save_epics_and_tasks(content.epics, content.tasks)
                return {"epics": epics, "tasks": tasks}

            steps.append(PersistStep(kind="tasks", label="tasks", write=write_tasks))
        return steps

    def run_step(self, step: PersistStep) -> StepOutcome:
        try:
            return StepOutcome(kind=step.kind, records=step.write())
        except Exception as exc:
            _rollback_session_safely(self.session)
            logger.error("Failed to save %s for project %s: %s", step.kind, self.project_id, exc)
            return StepOutcome(kind=step.kind, error=f"Erro ao salvar {step.label}: {exc}")

    def persist(self, content: GeneratedContent, options: SaveOptions | None = None) -> SaveContentResult:
        options = options or SaveOptions()
        result = SaveContentResult()

        for step in self.build_steps(content, options):
            outcome = self.run_step(step)
            if not outcome.ok:
                result.errors.append(outcome.error or step.kind)
                continue
            records = outcome.records
            if "pr" in records:
                result.pr = PullRequestPublic.model_validate(records["pr"])
            if "flowchart" in records:
                result.flowchart = FlowchartPublic.model_validate(records["flowchart"])
            if "epics" in records:
                result.epics = [EpicPublic.model_validate(epic) for epic in records["epics"]]
            if "tasks" in records:
                result.tasks = [TaskPublic.model_validate(task) for task in records["tasks"]]

        result.success = not result.errors
        return result


def persist_generated_content(
    session: Session,
    project_id: uuid.UUID,
    content: GeneratedContent,
    options: SaveOptions | None = None,
) -> SaveContentResult:
    return ContentPersister(session, project_id).persist(content, options)
