import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from facetfilter.api import health_router, sessions_router
from facetfilter.config import settings
from facetfilter.models.failure import KnownError
from facetfilter.services.catalog import catalog_available

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    # Index the catalog up front; /ready reports if this failed
    catalog_available()
    yield


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("facetfilter"),
    debug=settings.debug,
    lifespan=lifespan,
)

app.include_router(health_router)
app.include_router(sessions_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(KnownError)
async def known_error_handler(_request: Request, exc: KnownError) -> JSONResponse:
    """Render known failures through the ApiResponse envelope."""
    logger.info("known_failure", extra={"kind": exc.kind.value, "status": exc.status_code})
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(mode="json"),
    )
