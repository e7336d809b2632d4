# src/flow_planner/api/app.py

"""FastAPI application factory."""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response

from ..cli.bootstrap import create_initial_state
from ..core.state import AppState
from . import goals, health, planners, plans, tasks, versions
from .errors import register_error_handlers

logger = logging.getLogger(__name__)


def create_app(*, settings=None, state: AppState | None = None) -> FastAPI:
    """
    Build the app.

    With `state` given (tests), the app uses it as-is and leaves its database
    open on shutdown. Otherwise the lifespan opens the database from settings
    and closes it when the server stops.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        owned: AppState | None = None
        if state is None:
            owned = create_initial_state(settings=settings)
            app.state.flow = owned
        else:
            app.state.flow = state
        logger.info("Starting flow-planner API (db=%s)...", app.state.flow.db.path)
        try:
            yield
        finally:
            if owned is not None:
                owned.db.close()
            logger.info("Shutting down flow-planner API...")

    app = FastAPI(
        title="flow-planner",
        description="Planner / goal / plan / task management API",
        version="0.1.0",
        lifespan=lifespan,
    )
    if state is not None:
        app.state.flow = state

    @app.middleware("http")
    async def log_requests(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        t0 = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "%s %s -> %d (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - t0) * 1000.0,
        )
        return response

    register_error_handlers(app)

    app.include_router(health.router, tags=["health"])
    app.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
    app.include_router(goals.router, prefix="/goals", tags=["goals"])
    app.include_router(plans.router, prefix="/plans", tags=["plans"])
    app.include_router(planners.router, prefix="/planners", tags=["planners"])
    app.include_router(versions.router, prefix="/versions", tags=["versions"])

    return app
