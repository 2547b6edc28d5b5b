"""FastAPI application entrypoint for the per-client ping counter."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from pingcount.config import Settings, get_settings
from pingcount.counting import CounterStore, Reporter, router as counting_router
from pingcount.counting.reporter import ReportSink, resolve_sink
from pingcount.lib.logger import configure_logging


def create_app(
    settings: Settings | None = None,
    *,
    store: CounterStore | None = None,
    sink: ReportSink | None = None,
) -> FastAPI:
    """Build an application that owns one counter store and one reporter."""

    settings = settings or get_settings()
    configure_logging(settings.log_level)

    store = store if store is not None else CounterStore()
    reporter = Reporter(
        store,
        interval_seconds=settings.report_interval_seconds,
        sink=sink or resolve_sink(settings.report_sink),
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        reporter.start()
        try:
            yield
        finally:
            await reporter.stop()

    app = FastAPI(title="Ping Counter", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.counter_store = store
    app.state.reporter = reporter
    app.state.trust_forwarded_headers = settings.trust_forwarded_headers

    app.include_router(counting_router, tags=["counting"])

    @app.get("/health", tags=["system"], summary="Health check")
    async def health_check() -> JSONResponse:
        """Return liveness response for uptime monitoring."""
        payload = {"ok": True, "data": {"status": "healthy"}}
        return JSONResponse(content=payload)

    return app


app = create_app()
