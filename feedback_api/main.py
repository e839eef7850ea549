# feedback_api/main.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.exceptions import HTTPException as StarletteHTTPException

from feedback_api.api.endpoints import auth, forms, health
from feedback_api.core.config import Settings, get_settings, mask_url
from feedback_api.core.errors import StorageError
from feedback_api.core.logging import configure_logging
from feedback_api.core.passwords import PasswordHasher
from feedback_api.core.security import TokenService
from feedback_api.db.base import Base
from feedback_api.db.session import build_engine, build_session_factory
from feedback_api.services.forms import FormGateway
from feedback_api.services.responses import ResponseGateway
from feedback_api.services.users import UserGateway

logger = logging.getLogger(__name__)

API_PREFIX = "/api"
CORS_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
CORS_HEADERS = ["Content-Type", "Authorization"]


class PreflightCORSMiddleware(CORSMiddleware):
    """Starlette's CORS middleware, answering every preflight with an empty 200."""

    def preflight_response(self, request_headers: Headers) -> Response:
        # the configured allow-origin/methods/headers, whatever was requested
        return Response(status_code=200, headers=dict(self.preflight_headers))


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    loc = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    msg = first.get("msg", "invalid value")
    return f"Invalid request: {loc}: {msg}" if loc else f"Invalid request: {msg}"


def register_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"message": _validation_message(exc)})

    @app.exception_handler(StorageError)
    async def storage_error(request: Request, exc: StorageError):
        # detail already logged by the gateway
        return JSONResponse(status_code=500, content={"message": "Internal server error"})

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"message": "Internal server error"})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.APP_NAME,
        description="API for creating feedback forms and collecting responses",
        version="1.0.0",
    )

    # Service objects live for the whole process and are injected per request
    engine = build_engine(settings.db_url)
    session_factory = build_session_factory(engine)
    app.state.settings = settings
    app.state.engine = engine
    app.state.tokens = TokenService.from_settings(settings)
    app.state.passwords = PasswordHasher(rounds=settings.BCRYPT_ROUNDS)
    app.state.users = UserGateway(session_factory)
    app.state.forms = FormGateway(session_factory)
    app.state.responses = ResponseGateway(session_factory)

    if settings.AUTO_CREATE_SCHEMA:
        Base.metadata.create_all(engine)

    # OPTIONS that is not a CORS preflight still gets a plain 200
    @app.middleware("http")
    async def plain_options(request: Request, call_next):
        if request.method == "OPTIONS":
            return Response(status_code=200)
        return await call_next(request)

    # added last so it wraps the middleware above and answers preflights first
    app.add_middleware(
        PreflightCORSMiddleware,
        allow_origins=["*"],
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
    )
    register_exception_handlers(app)

    app.include_router(health.router, prefix=API_PREFIX)
    app.include_router(auth.router, prefix=API_PREFIX)
    app.include_router(forms.router, prefix=API_PREFIX)

    logger.info("%s ready (env=%s, db=%s)", settings.APP_NAME, settings.ENV, mask_url(settings.db_url))
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("feedback_api.main:app", host="0.0.0.0", port=8080)
