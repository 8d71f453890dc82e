# backend/sahay/interfaces/http/main.py
from __future__ import annotations

import logging
import os
import traceback
import uuid

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from sahay import __version__
from sahay.core.config import get_settings
from sahay.core.events import configure_logging, lifespan
from sahay.domain.chat.service import ConversationError
from sahay.domain.llm.errors import GatewayError
from sahay.schemas.common import ErrorResponse

logger = logging.getLogger("sahay")

# Routers are imported inside create_app() so importing this module stays cheap.

def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging()
    app = FastAPI(title=settings.APP_NAME, version=__version__, debug=settings.DEBUG, lifespan=lifespan)

    allowed_origins = [
        "http://localhost:5173",      # Vite dev server
        "http://localhost:3000",
    ]
    env_origins = os.getenv("ALLOWED_ORIGINS")
    if env_origins:
        allowed_origins.extend(o.strip() for o in env_origins.split(",") if o.strip())

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins if settings.ENV == "production" else ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # simple liveness
    @app.get("/_/ping")
    def _ping():
        return {"ok": True}

    # Every handler generates a request_id so client reports can be matched to logs.

    # starlette base class so router 404/405 get the same body as raised HTTPExceptions
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        req_id = str(uuid.uuid4())
        logger.warning("HTTPException %s %s %s", req_id, exc.status_code, exc.detail, extra={"request_id": req_id})
        return _error(exc.status_code, "http_error", str(exc.detail), req_id)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        req_id = str(uuid.uuid4())
        logger.warning("ValidationError %s %s", req_id, exc, extra={"request_id": req_id})
        return _error(422, "validation_error", "Invalid request payload", req_id, details=jsonable_errors(exc))

    @app.exception_handler(ConversationError)
    async def conversation_error_handler(request: Request, exc: ConversationError):
        req_id = str(uuid.uuid4())
        logger.info("ConversationError %s %s", req_id, exc, extra={"request_id": req_id})
        return _error(400, "conversation_error", str(exc), req_id)

    @app.exception_handler(GatewayError)
    async def gateway_error_handler(request: Request, exc: GatewayError):
        req_id = str(uuid.uuid4())
        logger.warning(
            "GatewayError %s %s upstream=%s %s",
            req_id, exc.code, exc.upstream_status, exc.detail,
            extra={"request_id": req_id, "status_code": exc.status_code},
        )
        # upstream detail stays in the logs; clients get the user-facing message
        return _error(exc.status_code, exc.code, exc.user_message, req_id)

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        req_id = str(uuid.uuid4())
        tb = traceback.format_exc()
        logger.error("Unhandled exception %s %s\n%s", req_id, exc, tb, extra={"request_id": req_id})
        return _error(500, "server_error", "Internal server error", req_id, type=exc.__class__.__name__)

    from sahay.interfaces.http.routers import api

    app.include_router(api)
    return app


def _error(status_code: int, error: str, message: str, request_id: str, **extra) -> JSONResponse:
    body = ErrorResponse(error=error, status_code=status_code, message=message, request_id=request_id, **extra)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def jsonable_errors(exc: RequestValidationError) -> list:
    """Validation errors minus the raw `ctx`/`input` objects, which may not be JSON-serializable."""
    return [
        {k: v for k, v in err.items() if k in ("loc", "msg", "type")}
        for err in exc.errors()
    ]


app = create_app()
