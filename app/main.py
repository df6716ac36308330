"""FastAPI application for the makeup analysis service."""
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api import router as api_v1_router
from app.core.config import settings
from app.core.container import container
from app.core.exceptions import ServiceNotInitializedError
from app.core.logging import get_logger, setup_logging

setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[Any, None]:
    """Build the analysis pipeline on startup and release it on shutdown.

    Args:
        app: FastAPI application instance
    """
    logger.info(
        "Starting makeup analysis service",
        version=settings.VERSION,
        environment=settings.ENVIRONMENT,
    )

    await container.initialize()
    logger.info(
        "Analysis pipeline ready",
        detector_mode=detector_mode(),
        engines=[engine.value for engine in container.generation_orchestrator.available_engines()],
    )

    yield

    await container.cleanup()
    logger.info("Makeup analysis service stopped")


def detector_mode() -> str:
    """Which detection tier serves requests: "ml", "heuristic" or "uninitialized"."""
    if container.face_detector is None:
        return "uninitialized"
    return "heuristic" if container.face_detector.using_fallback_only else "ml"


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    docs_url="/docs" if settings.ENVIRONMENT == "development" else None,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_v1_router, prefix=settings.API_V1_STR)


@app.exception_handler(ServiceNotInitializedError)
async def service_not_initialized_handler(request: Request, exc: ServiceNotInitializedError) -> JSONResponse:
    logger.error("Service unavailable", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=503, content={"detail": "Service is starting up, try again shortly."})


@app.get("/health")
async def health_check() -> Dict[str, Any]:
    """Report liveness along with the active detector tier and generation engines."""
    engines = []
    if container.generation_orchestrator is not None:
        engines = [engine.value for engine in container.generation_orchestrator.available_engines()]
    return {
        "status": "healthy",
        "detector": detector_mode(),
        "engines": engines,
    }


if __name__ == "__main__":
    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)
