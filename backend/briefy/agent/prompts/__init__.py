from briefy.agent.prompts.analysis import ANALYSIS_PROMPT
from briefy.agent.prompts.flowchart import FLOWCHART_TECHNICAL_PROMPT
from briefy.agent.prompts.pr import PR_TECHNICAL_PROMPT
from briefy.agent.prompts.tasks import TASKS_TECHNICAL_PROMPT
from briefy.agent.prompts.video import VIDEO_EXTRACTION_PROMPT

# Technical instructions per content type. They define the output contract
# and are never replaced by global prompts or support material.
TECHNICAL_PROMPTS: dict[str, str] = {
    "pr": PR_TECHNICAL_PROMPT,
    "flowchart": FLOWCHART_TECHNICAL_PROMPT,
    "tasks": TASKS_TECHNICAL_PROMPT,
}


def get_technical_prompt(content_type: str) -> str:
    try:
        return TECHNICAL_PROMPTS[content_type]
    except KeyError:
        raise ValueError(f"Tipo de conteúdo não suportado: {content_type}") from None
