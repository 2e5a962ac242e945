"""FastAPI application wiring for Strategos."""

from __future__ import annotations

from collections.abc import Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from strategos.api import routes
from strategos.api.runtime import ApiState, build_state
from strategos.config import get_settings
from strategos.domain import errors

_NOT_FOUND = (errors.RecordNotFoundError, errors.UnknownTechnologyError)
_BAD_REQUEST = (
    errors.InvalidModifierKeyError,
    errors.InvalidAttackerError,
    errors.InvalidRecordIdError,
)


async def _rules_error_handler(request: Request, exc: Exception) -> JSONResponse:
    if isinstance(exc, _NOT_FOUND):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, _BAD_REQUEST):
        code = status.HTTP_400_BAD_REQUEST
    else:
        code = status.HTTP_409_CONFLICT
    return JSONResponse(
        status_code=code,
        content={"detail": str(exc), "error": type(exc).__name__},
    )


def create_app(*, state_factory: Callable[[], ApiState] = build_state) -> FastAPI:
    """Instantiate the FastAPI application with routing and lifecycle hooks."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        state = state_factory()
        app.state.api_state = state
        try:
            yield
        finally:
            await state.shutdown()

    app = FastAPI(title="Strategos API", version="0.1.0", lifespan=lifespan)
    settings = get_settings()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(errors.RulesError, _rules_error_handler)
    app.include_router(routes.router)
    return app


app = create_app()
