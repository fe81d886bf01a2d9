# gemini_backend/main.py
import contextlib
import logging
from typing import Optional

import httpx
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from gemini_backend import __version__
from gemini_backend.api.endpoints import debug, gemini
from gemini_backend.core.dependencies import app_state
from gemini_backend.core.errors import EmptyPromptError, GeminiBackendError
from gemini_backend.services.catalog import ModelCatalog
from gemini_backend.services.dispatcher import PromptDispatcher
from gemini_backend.services.generators import HttpTextGenerator, SdkTextGenerator
from gemini_backend.services.model_service import SelectedModelCache
from gemini_backend.shared import Settings, load_settings, redact

log = logging.getLogger(__name__)


def init_state(settings: Settings, client: httpx.AsyncClient) -> None:
    """Builds the shared services for one process into ``app_state``."""
    app_state["settings"] = settings

    catalog = ModelCatalog(
        client,
        settings.GEMINI_API_BASE_URL,
        settings.GEMINI_API_VERSION,
        settings.api_key,
    )
    app_state["model_catalog"] = catalog
    app_state["model_cache"] = SelectedModelCache(catalog, settings.PREFERRED_MODELS)

    generators = []
    try:
        generators.append(SdkTextGenerator(settings.api_key))
        log.info("Gemini SDK client initialized successfully.")
    except Exception as e:
        log.error(f"Failed to initialize Gemini SDK client, using HTTP only: {e}")
    generators.append(
        HttpTextGenerator(
            client,
            settings.GEMINI_API_BASE_URL,
            settings.GEMINI_API_VERSION,
            settings.api_key,
        )
    )
    app_state["prompt_dispatcher"] = PromptDispatcher(generators)


def build_http_client(settings: Settings) -> httpx.AsyncClient:
    """The one httpx client shared by the catalog and the HTTP generator."""
    return httpx.AsyncClient(timeout=settings.UPSTREAM_TIMEOUT_SECONDS)


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    """Handles application startup and shutdown events."""
    log.info("Application startup: Initializing clients...")
    settings = app_state.get("settings") or load_settings()

    client = build_http_client(settings)
    app_state["http_client"] = client
    init_state(settings, client)
    log.info("Client initialization process complete.")

    yield

    log.info("Application shutdown: Cleaning up resources...")
    await client.aclose()
    app_state.clear()


def _api_key() -> str:
    settings: Optional[Settings] = app_state.get("settings")
    return settings.api_key if settings else ""


async def handle_backend_error(request: Request, exc: GeminiBackendError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


async def handle_http_exception(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def handle_validation_error(request: Request, exc: RequestValidationError):
    if request.url.path == "/api/gemini":
        error = EmptyPromptError()
        return JSONResponse(status_code=error.status_code, content=error.to_payload())
    return JSONResponse(status_code=422, content={"error": "Invalid request"})


async def handle_unexpected_error(request: Request, exc: Exception):
    log.exception(f"Server error: {exc}")
    message = redact(str(exc), _api_key()) or "Unknown server error"
    return JSONResponse(status_code=500, content={"error": message})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    if settings is not None:
        app_state["settings"] = settings
    origins = settings.CORS_ORIGINS if settings else ["http://localhost:3000"]

    app = FastAPI(
        title="Gemini Prompt Proxy API",
        description="Forwards browser prompts to the Gemini API and returns the generated text",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type"],
    )
    log.info(f"CORS middleware configured for origins: {origins}")

    app.add_exception_handler(GeminiBackendError, handle_backend_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    app.include_router(gemini.router, prefix="/api")
    app.include_router(debug.router)

    # Static front end goes last so it never shadows the API routes
    static_dir = settings.STATIC_DIR if settings else None
    if static_dir is not None and static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
        log.info(f"Serving static files from {static_dir}")

    return app


def run() -> None:
    """Console entry point: fail fast on bad configuration, then serve."""
    settings = load_settings()
    app = create_app(settings)
    log.info(f"Server running on http://localhost:{settings.PORT}")
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
