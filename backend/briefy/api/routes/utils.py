from fastapi import APIRouter

from briefy.agent.errors import ConfigurationError
from briefy.api.deps import LLMDep
from briefy.models import Message

router = APIRouter(prefix="/utils", tags=["utils"])


@router.get("/health-check/")
async def health_check() -> bool:
    return True


@router.get("/ai-check/", response_model=Message)
async def ai_check(llm: LLMDep) -> Message:
    """Send a trivial prompt to the AI provider and report whether it answered."""
    try:
        llm.validate_api_key()
    except ConfigurationError as e:
        return Message(message=str(e))
    if await llm.check_connection():
        return Message(message=f"Conexão com {llm.model_name} funcionando")
    return Message(message=f"Falha na conexão com {llm.model_name}")
