import logging

import openai
from openai import AsyncOpenAI

from briefy.agent.artifacts import InlineMedia
from briefy.agent.errors import (
    ApiKeyError,
    BriefyError,
    ConfigurationError,
    GenerationError,
    ProviderError,
    ProviderNetworkError,
    QuotaExceededError,
)
from briefy.core.config import settings

logger = logging.getLogger(__name__)

CONNECTION_CHECK_PROMPT = 'Responda apenas com "OK" se você recebeu esta mensagem.'


def classify_provider_error(exc: Exception) -> ProviderError:
    """Map a provider/client failure onto the coarse categories shown to users."""
    if isinstance(exc, ProviderError):
        return exc
    message = str(exc) or exc.__class__.__name__
    lowered = message.lower()

    if isinstance(exc, (openai.AuthenticationError, openai.PermissionDeniedError)) or "api key" in lowered:
        return ApiKeyError("API key do Gemini inválida ou sem permissão. Verifique GEMINI_API_KEY no arquivo .env")
    if isinstance(exc, openai.RateLimitError) or "quota" in lowered or "limit" in lowered:
        return QuotaExceededError("Limite de uso da API do Gemini excedido. Tente novamente mais tarde")
    if isinstance(exc, openai.APIConnectionError) or "network" in lowered or "fetch" in lowered:
        return ProviderNetworkError("Erro de conexão. Verifique sua internet e tente novamente")
    return GenerationError(f"Falha ao gerar conteúdo: {message}")


class LLMClient:
    """Single-call gateway to the generative AI provider (OpenAI-compatible API)."""

    def __init__(
        self,
        model_name: str | None = None,
        base_url: str | None = None,
        api_key: str | None = None,
    ):
        self.model_name = model_name or settings.MODEL_DEFAULT
        self.base_url = base_url or settings.LLM_BASE_URL
        self.api_key = settings.ai_api_key if api_key is None else api_key
        self._client: AsyncOpenAI | None = None

    def validate_api_key(self) -> None:
        """Fail fast on a missing or malformed credential, before any request is made."""
        if not self.api_key:
            logger.error("Gemini API key is not configured (GEMINI_API_KEY)")
            raise ConfigurationError(
                "API key do Gemini não configurada. Configure GEMINI_API_KEY no arquivo .env"
            )
        if not self.api_key.startswith(settings.API_KEY_PREFIX):
            logger.error(
                "Gemini API key has an invalid format (expected prefix %r, got %r...)",
                settings.API_KEY_PREFIX,
                self.api_key[:4],
            )
            raise ConfigurationError(
                f"Formato da API key inválido. As chaves do Google AI começam com \"{settings.API_KEY_PREFIX}\""
            )

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            # One attempt per call; retries are left to the user.
            self._client = AsyncOpenAI(base_url=self.base_url, api_key=self.api_key, max_retries=0)
        return self._client

    @staticmethod
    def _build_user_content(prompt: str, inline_media: InlineMedia | None) -> str | list[dict]:
        if inline_media is None:
            return prompt
        return [
            {"type": "text", "text": prompt},
            {"type": "image_url", "image_url": {"url": inline_media.data_url()}},
        ]

    async def invoke(self, prompt: str, inline_media: InlineMedia | None = None) -> str:
        """Send one prompt (optionally with inline media) and return the raw text answer."""
        self.validate_api_key()
        try:
            logger.info(
                "Issuing request to model %s (%s chars%s)...",
                self.model_name,
                len(prompt),
                f", inline {inline_media.mime_type}" if inline_media else "",
            )
            response = await self.client.chat.completions.create(
                model=self.model_name,
                messages=[{"role": "user", "content": self._build_user_content(prompt, inline_media)}],
            )
            if not getattr(response, "choices", None):
                logger.error("Received no choices from %s: %s", self.model_name, response)
                raise GenerationError(
                    f"Falha ao gerar conteúdo: o modelo {self.model_name} não retornou nenhuma resposta"
                )
            text = response.choices[0].message.content or ""
            logger.info("Received %s chars from %s.", len(text), self.model_name)
            return text
        except BriefyError:
            raise
        except Exception as e:
            logger.error("Error calling AI provider %s: %s", self.model_name, e)
            raise classify_provider_error(e) from e

    async def check_connection(self) -> bool:
        try:
            text = await self.invoke(CONNECTION_CHECK_PROMPT)
        except BriefyError as e:
            logger.error("AI provider connection check failed: %s", e)
            return False
        logger.info("AI provider connection check answered: %s", text.strip())
        return True
