import logging
import uuid
from collections.abc import AsyncIterator, Sequence
from typing import Any

from sqlmodel import Session

from briefy import crud
from briefy.agent.artifacts import DocumentText, GeneratedContent, ProjectContentResult, SaveOptions
from briefy.agent.composer import PromptComposer
from briefy.agent.errors import ConfigurationError, MalformedJsonError
from briefy.agent.interpreter import interpret
from briefy.agent.llm_client import LLMClient
from briefy.agent.persistence import persist_generated_content

logger = logging.getLogger(__name__)

# (content type, label used in error messages, progress message), in generation order.
GENERATION_STAGES: tuple[tuple[str, str, str], ...] = (
    ("pr", "PR", "Gerando documento técnico (PR)..."),
    ("flowchart", "fluxograma", "Gerando fluxograma..."),
    ("tasks", "tasks", "Gerando tasks e épicos..."),
)

_SAVE_FLAGS = {"pr": "save_pr", "flowchart": "save_flowchart", "tasks": "save_tasks"}


def _event(status: str, **payload: Any) -> dict[str, Any]:
    return {"status": status, **payload}


def _apply_payload(content: GeneratedContent, content_type: str, payload: Any) -> str:
    """Store one interpreted answer on the generated content, returning a short summary."""
    if content_type == "pr":
        content.pr = payload
        return f"{len(payload)} caracteres"

    if not isinstance(payload, dict):
        raise MalformedJsonError(f"JSON {content_type} inválido: era esperado um objeto")

    if content_type == "flowchart":
        content.flowchart = payload
        nodes = payload.get("nodes")
        edges = payload.get("edges")
        return (
            f"{len(nodes) if isinstance(nodes, list) else 0} nós, "
            f"{len(edges) if isinstance(edges, list) else 0} conexões"
        )

    epics = payload.get("epics")
    tasks = payload.get("tasks")
    content.epics = epics if isinstance(epics, list) else []
    content.tasks = tasks if isinstance(tasks, list) else []
    return f"{len(content.tasks)} tasks, {len(content.epics)} épicos"


async def generate_content(
    *,
    composer: PromptComposer,
    llm: LLMClient,
    content_type: str,
    documents: Sequence[DocumentText],
    notes: str,
    project_id: uuid.UUID | None = None,
) -> Any:
    """compose -> invoke -> interpret for a single content type."""
    prompt = composer.compose(content_type, documents, notes, project_id)
    raw_text = await llm.invoke(prompt)
    return interpret(content_type, raw_text)


async def run_generation_pipeline(
    session: Session,
    project_id: uuid.UUID,
    documents: Sequence[DocumentText],
    notes: str = "",
    options: SaveOptions | None = None,
    *,
    llm: LLMClient | None = None,
) -> AsyncIterator[dict[str, Any]]:
    """
    Generate PR, flowchart and tasks one after another, then persist them.

    Yields progress events for the UI. A failed content type is reported and
    skipped; the others are still generated and saved. The last event is
    always ``completed`` or ``failed`` and carries the aggregated result.
    """
    options = options or SaveOptions()
    result = ProjectContentResult(success=True)
    yield _event("starting", message="Iniciando processamento...")

    if crud.get_project(session=session, project_id=project_id) is None:
        result.success = False
        result.errors.append("Projeto não encontrado")
        yield _event("failed", message="Projeto não encontrado", result=result.model_dump(mode="json"))
        return

    llm = llm or LLMClient()
    try:
        llm.validate_api_key()
    except ConfigurationError as e:
        result.success = False
        result.errors.append(str(e))
        yield _event("failed", message=str(e), result=result.model_dump(mode="json"))
        return

    composer = PromptComposer(session)
    generated = GeneratedContent()
    save_options = options.model_copy()
    generation_errors: list[str] = []

    for content_type, label, message in GENERATION_STAGES:
        if not getattr(options, _SAVE_FLAGS[content_type]):
            continue
        yield _event(content_type, message=message)
        try:
            payload = await generate_content(
                composer=composer,
                llm=llm,
                content_type=content_type,
                documents=documents,
                notes=notes,
                project_id=project_id,
            )
            summary = _apply_payload(generated, content_type, payload)
        except Exception as e:
            logger.error("Failed to generate %s for project %s: %s", content_type, project_id, e)
            generation_errors.append(f"Erro ao gerar {label}: {e}")
            # Nothing usable to persist for this content type.
            setattr(save_options, _SAVE_FLAGS[content_type], False)
            yield _event(f"{content_type}_failed", message=generation_errors[-1])
            continue
        logger.info("Generated %s for project %s: %s", content_type, project_id, summary)
        yield _event(f"{content_type}_done", message=summary)

    yield _event("saving", message="Salvando conteúdo no banco de dados...")
    saved = persist_generated_content(session, project_id, generated, save_options)

    result = ProjectContentResult(
        success=True,
        generated=generated,
        pr=saved.pr,
        flowchart=saved.flowchart,
        epics=saved.epics,
        tasks=saved.tasks,
        errors=generation_errors + saved.errors,
    )
    result.success = not result.errors
    if result.success:
        yield _event("completed", message="Processamento concluído com sucesso!", result=result.model_dump(mode="json"))
    else:
        yield _event("completed", message="; ".join(result.errors), result=result.model_dump(mode="json"))


async def generate_and_save_project_content(
    session: Session,
    project_id: uuid.UUID,
    documents: Sequence[DocumentText],
    notes: str = "",
    options: SaveOptions | None = None,
    *,
    llm: LLMClient | None = None,
) -> ProjectContentResult:
    final: dict[str, Any] | None = None
    async for event in run_generation_pipeline(session, project_id, documents, notes, options, llm=llm):
        logger.debug("Generation event for project %s: %s", project_id, event.get("status"))
        if "result" in event:
            final = event["result"]
    if final is None:
        return ProjectContentResult(success=False, errors=["Processamento interrompido"])
    return ProjectContentResult.model_validate(final)
