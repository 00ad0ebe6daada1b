"""FastAPI application: chat API routed to one of several LLM providers."""
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Iterable, Optional

from fastapi import Depends, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request
from starlette.responses import JSONResponse

from aichat.api import chat
from aichat.config import Settings, get_settings
from aichat.deps import get_chat_router
from aichat.errors import ChatError, RequestConstraintError, UpstreamUnavailableError
from aichat.llm.base import LLMProvider
from aichat.llm.registry import build_registry
from aichat.schemas.chat import ErrorResponse
from aichat.services.chat_router import ChatRouter, build_chat_router

logger = logging.getLogger(__name__)


def _error_response(status: int, code: str, message: str) -> JSONResponse:
    body = ErrorResponse(
        status=status,
        errorCode=code,
        message=message,
        timestamp=datetime.now(timezone.utc),
    )
    return JSONResponse(status_code=status, content=body.model_dump(mode="json"))


async def chat_error_handler(request: Request, exc: ChatError) -> JSONResponse:
    # Upstream causes were already logged with traceback by ChatRouter; only the stable message goes out
    if isinstance(exc, UpstreamUnavailableError):
        logger.error("%s caught: %s (provider=%s)", type(exc).__name__, exc.message, exc.provider)
    else:
        logger.warning("%s caught: %s", type(exc).__name__, exc.message)
    return _error_response(exc.status_code, exc.error_code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Invalid POST body: report the first field error."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        loc = first.get("loc") or ()
        message = f"{loc[-1] if loc else 'body'}: {first.get('msg', 'Invalid input')}"
    else:
        message = "Invalid input"
    logger.warning("Request validation failed: %s", message)
    return _error_response(400, "VALIDATION_FAILED", message)


async def constraint_error_handler(request: Request, exc: RequestConstraintError) -> JSONResponse:
    logger.warning("Constraint violation detected: %s", exc)
    return _error_response(400, "CONSTRAINT_VIOLATION", str(exc))


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error_response(exc.status_code, "HTTP_ERROR", str(exc.detail))


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500 as JSON so CORS middleware adds headers."""
    logger.exception("Unhandled error: %s", exc)
    return _error_response(500, "INTERNAL_SERVER_ERROR", "An unexpected error occurred")


def create_app(
    settings: Optional[Settings] = None,
    providers: Optional[Iterable[LLMProvider]] = None,
) -> FastAPI:
    """Build the app. `providers` replaces the settings-derived clients (tests, embedding)."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logging.basicConfig(
            level=settings.log_level.upper(),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        # All provider clients are built once; the router is read-only from here on
        app.state.chat_router = build_chat_router(settings, build_registry(settings, providers))
        yield

    app = FastAPI(
        title="AI Chat API",
        description="Chat endpoint routed to OpenAI, Ollama, Gemini or Anthropic",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ChatError, chat_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(RequestConstraintError, constraint_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    app.include_router(chat.router)

    @app.get("/health")
    def health(chat_router: ChatRouter = Depends(get_chat_router)):
        return {
            "status": "ok",
            "defaultProvider": chat_router.default_provider.name,
            "providers": [pid.name for pid in chat_router.registry.ids()],
        }

    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run("aichat.main:app", host=settings.host, port=settings.port)
