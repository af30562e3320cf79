import logging
from typing import Annotated, Any, Literal

from pydantic import AnyUrl, BeforeValidator, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


def parse_cors(v: Any) -> list[str] | str:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",") if i.strip()]
    elif isinstance(v, list | str):
        return v
    raise ValueError(v)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )
    PROJECT_NAME: str = "Briefy"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    LOG_LEVEL: str = "INFO"

    BACKEND_CORS_ORIGINS: Annotated[
        list[AnyUrl] | str, BeforeValidator(parse_cors)
    ] = []

    # Gemini through its OpenAI-compatible endpoint
    GEMINI_API_KEY: str = ""
    LLM_API_KEY: str = ""
    LLM_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta/openai/"
    MODEL_DEFAULT: str = "gemini-2.0-flash"
    API_KEY_PREFIX: str = "AIza"

    DATABASE_URL: str = ""
    PROMPT_CACHE_TTL_SECONDS: int = 300

    @computed_field  # type: ignore[prop-decorator]
    @property
    def all_cors_origins(self) -> list[str]:
        return [str(origin).rstrip("/") for origin in self.BACKEND_CORS_ORIGINS]

    @property
    def ai_api_key(self) -> str:
        return self.LLM_API_KEY or self.GEMINI_API_KEY

    @property
    def database_uri(self) -> str:
        return self.DATABASE_URL or "sqlite:///./briefy.db"

    def missing_configuration(self) -> list[str]:
        """Return human readable problems with the required secrets."""
        problems: list[str] = []
        if not self.ai_api_key:
            problems.append(
                "GEMINI_API_KEY is not configured; add it to .env to enable content generation"
            )
        elif not self.ai_api_key.startswith(self.API_KEY_PREFIX):
            problems.append(
                f"GEMINI_API_KEY has an invalid format; provider keys start with '{self.API_KEY_PREFIX}'"
            )
        if not self.DATABASE_URL:
            problems.append(
                "DATABASE_URL is not configured; falling back to a local SQLite file"
            )
        return problems

    def report_configuration(self) -> None:
        for problem in self.missing_configuration():
            logger.error("Configuration problem: %s", problem)


settings = Settings()  # type: ignore
