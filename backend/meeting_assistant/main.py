from __future__ import annotations

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine
import logging
from logging.handlers import RotatingFileHandler

from meeting_assistant.config import Settings
from meeting_assistant.errors import MeetingAssistantError, ValidationError
from meeting_assistant.models.base import init_db, make_engine
from meeting_assistant.api.rpc import router as rpc_router


logger = logging.getLogger("meeting_assistant.api")


def configure_logging(settings: Settings) -> None:
    settings.ensure_dirs()
    log_file = settings.logs_dir / "backend.log"
    handler = RotatingFileHandler(str(log_file), maxBytes=5_000_000, backupCount=2)
    formatter = logging.Formatter(
        fmt='%(asctime)s %(levelname)s %(name)s %(message)s'
    )
    handler.setFormatter(formatter)
    root = logging.getLogger()
    if not any(isinstance(h, RotatingFileHandler) for h in root.handlers):
        root.addHandler(handler)
    root.setLevel(settings.log_level.upper())


def _error_response(exc: MeetingAssistantError) -> JSONResponse:
    error = {"code": exc.code, "message": exc.message}
    if isinstance(exc, ValidationError) and exc.details:
        error["details"] = exc.details
    return JSONResponse(status_code=exc.status_code, content={"error": error})


def create_app(settings: Optional[Settings] = None, engine: Optional[Engine] = None) -> FastAPI:
    settings = settings or Settings()
    app = FastAPI(title="Meeting Assistant Backend", version="0.1.0")
    app.state.settings = settings
    app.state.engine = engine if engine is not None else make_engine(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.on_event("startup")
    def _startup() -> None:
        try:
            configure_logging(settings)
        except OSError:
            logger.warning("File logging disabled, cannot write to %s", settings.logs_dir)
        init_db(app.state.engine)
        logger.info("Meeting Assistant backend ready")

    @app.get("/healthz")
    def healthz() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(rpc_router)

    @app.exception_handler(MeetingAssistantError)
    async def _procedure_error_handler(request: Request, exc: MeetingAssistantError):  # type: ignore[override]
        if exc.status_code >= 500:
            logger.error("Procedure %s failed: %s", request.url.path, exc.message)
        return _error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def _request_validation_handler(request: Request, exc: RequestValidationError):  # type: ignore[override]
        return _error_response(ValidationError("Request body is not valid JSON"))

    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(request: Request, exc: Exception):  # type: ignore[override]
        logger.exception("Unhandled exception")
        return JSONResponse(
            status_code=500,
            content={"error": {"code": "INTERNAL_SERVER_ERROR", "message": str(exc)}},
        )

    return app


def run(host: Optional[str] = None, port: Optional[int] = None, reload: bool = False) -> None:
    import uvicorn

    settings = Settings()
    uvicorn.run(
        "meeting_assistant.main:create_app" if reload else create_app(settings),
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        factory=reload,
    )


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Meeting Assistant Backend Server")
    parser.add_argument("--host", default=None, help="Host to bind to")
    parser.add_argument("--port", type=int, default=None, help="Port to bind to")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload (dev only)")

    args = parser.parse_args()
    run(host=args.host, port=args.port, reload=args.reload)
