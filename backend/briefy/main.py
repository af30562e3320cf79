import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware

from briefy.agent.errors import (
    ApiKeyError,
    BriefyError,
    ConfigurationError,
    InterpretationError,
    ProviderError,
    QuotaExceededError,
)
from briefy.api.main import api_router
from briefy.core.config import settings
from briefy.core.db import init_db

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Most specific first.
ERROR_STATUS_CODES: tuple[tuple[type[BriefyError], int], ...] = (
    (ConfigurationError, 503),
    (ApiKeyError, 502),
    (QuotaExceededError, 429),
    (ProviderError, 502),
    (InterpretationError, 502),
)


def status_code_for(exc: BriefyError) -> int:
    for error_type, status_code in ERROR_STATUS_CODES:
        if isinstance(exc, error_type):
            return status_code
    return 500


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings.report_configuration()
    init_db()
    logger.info("%s started (%s)", settings.PROJECT_NAME, settings.ENVIRONMENT)
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan,
)

if settings.all_cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.all_cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(BriefyError)
async def briefy_error_handler(request: Request, exc: BriefyError) -> JSONResponse:
    logger.error("%s on %s %s: %s", exc.__class__.__name__, request.method, request.url.path, exc)
    return JSONResponse(status_code=status_code_for(exc), content={"detail": str(exc)})


app.include_router(api_router, prefix=settings.API_V1_STR)
