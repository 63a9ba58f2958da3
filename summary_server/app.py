from __future__ import annotations

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings
from .errors import ServiceError, ValidationError
from .logging_config import configure_logging, logger
from .middleware import RequestBodyLimitMiddleware
from .routes import api_router
from .services import get_history_store
from .utils import error_response


# Register global exception handlers so every failure renders as {"message": ...}
def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ServiceError)
    async def _service_exception_handler(request: Request, exc: ServiceError):
        logger.warning(
            "request failed",
            extra={"error": str(exc), "status": exc.status_code, "path": str(request.url)},
        )
        return error_response(exc.message, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def _validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.debug("validation error", extra={"errors": exc.errors(), "path": str(request.url)})
        return error_response(ValidationError.default_message, status_code=status.HTTP_400_BAD_REQUEST)

    @app.exception_handler(HTTPException)
    async def _http_exception_handler(request: Request, exc: HTTPException):
        logger.debug(
            "http error",
            extra={"detail": exc.detail, "status": exc.status_code, "path": str(request.url)},
        )
        detail = exc.detail if isinstance(exc.detail, str) else "Request failed."
        return error_response(detail, status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error", extra={"path": str(request.url)})
        return error_response(
            "Internal server error.", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )


def register_body_limit(app: FastAPI, max_bytes: int) -> None:
    app.add_middleware(RequestBodyLimitMiddleware, max_bytes=max_bytes)


configure_logging()
_settings = get_settings()

app = FastAPI(
    title=_settings.app_name,
    version=_settings.app_version,
    docs_url=_settings.resolved_docs_url,
    redoc_url=None,
)

register_body_limit(app, _settings.max_request_bytes)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.cors_allow_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)
app.include_router(api_router)


@app.on_event("startup")
# Make sure the history file exists and parses before the first request
async def _prepare_history_store() -> None:
    settings = get_settings()
    if not settings.gemini_configured:
        logger.warning("GEMINI_API_KEY is not set; summarize requests will fail")
    store = get_history_store()
    try:
        store.ensure_valid()
    except ServiceError as exc:
        logger.error("history store unavailable at startup", extra={"error": str(exc)})


__all__ = ["app", "register_body_limit", "register_exception_handlers"]
