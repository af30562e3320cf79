import logging
import uuid
from collections.abc import Sequence

from sqlmodel import Session

from briefy import crud
from briefy.agent.artifacts import DocumentText
from briefy.agent.prompt_cache import GlobalPromptCache, Overrides, prompt_cache
from briefy.agent.prompts import TECHNICAL_PROMPTS, get_technical_prompt

logger = logging.getLogger(__name__)

DOMAIN_CONTEXT_HEADING = "--- CONTEXTO ESPECÍFICO DO DOMÍNIO ---"
DOCUMENTS_HEADING = "--- CONTEÚDO DOS DOCUMENTOS ---"
NOTES_HEADING = "--- INFORMAÇÕES ADICIONAIS ---"


def support_material_heading(content_type: str) -> str:
    return f"--- MATERIAL DE APOIO PERSONALIZADO ({content_type.upper()}) ---"


def format_documents(documents: Sequence[DocumentText]) -> str:
    block = ""
    for index, document in enumerate(documents, start=1):
        block += f"\n--- DOCUMENTO {index}: {document.name} ---\n"
        block += document.content
        block += "\n"
    return block


def render_prompt(
    content_type: str,
    *,
    documents: Sequence[DocumentText] = (),
    notes: str = "",
    domain_context: str | None = None,
    support_material: str | None = None,
) -> str:
    """Assemble the final prompt. Technical instructions always come first."""
    prompt = get_technical_prompt(content_type)
    if domain_context:
        prompt += f"\n\n{DOMAIN_CONTEXT_HEADING}\n{domain_context}"
    if support_material:
        prompt += f"\n\n{support_material_heading(content_type)}\n{support_material}"
    if documents:
        prompt += f"\n\n{DOCUMENTS_HEADING}\n{format_documents(documents)}"
    if notes and notes.strip():
        prompt += f"\n\n{NOTES_HEADING}\n{notes}"
    return prompt


def load_global_overrides(session: Session) -> Overrides:
    """Active global prompts that actually carry domain context, keyed by content type."""
    overrides: Overrides = {}
    for prompt in crud.get_active_global_prompts(session=session):
        default = TECHNICAL_PROMPTS.get(prompt.type)
        if default is None or not prompt.content:
            continue
        if prompt.is_default:
            continue
        # A row holding the technical text itself is not domain context.
        if prompt.content.strip() == default.strip():
            continue
        overrides[prompt.type] = prompt.content
    return overrides


class PromptComposer:
    """Builds the prompt sent to the AI gateway for one content type."""

    def __init__(self, session: Session, cache: GlobalPromptCache | None = None):
        self.session = session
        self.cache = cache or prompt_cache

    def _domain_context(self, content_type: str) -> str | None:
        try:
            overrides = self.cache.get(lambda: load_global_overrides(self.session))
        except Exception as exc:
            logger.error("Could not load global prompts, using technical instructions only: %s", exc)
            return None
        return overrides.get(content_type)

    def _support_material(self, content_type: str, project_id: uuid.UUID) -> str | None:
        try:
            materials = crud.get_project_support_materials(session=self.session, project_id=project_id)
        except Exception as exc:
            logger.error("Could not load support materials for project %s: %s", project_id, exc)
            return None

        for material in materials:
            if material.type == content_type and material.content:
                logger.info(
                    "Support material %r (%s chars) added to %s prompt",
                    material.name,
                    len(material.content),
                    content_type,
                )
                return material.content
        logger.info("No %s support material found for project %s", content_type, project_id)
        return None

    def compose(
        self,
        content_type: str,
        documents: Sequence[DocumentText],
        notes: str = "",
        project_id: uuid.UUID | None = None,
    ) -> str:
        domain_context = self._domain_context(content_type)
        support_material = self._support_material(content_type, project_id) if project_id else None
        return render_prompt(
            content_type,
            documents=documents,
            notes=notes,
            domain_context=domain_context,
            support_material=support_material,
        )
