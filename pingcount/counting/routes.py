"""Counted routes and the counts read-out."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from pingcount.counting.handler import get_counter_store, record_request
from pingcount.counting.reporter import Reporter
from pingcount.counting.schemas import CountsEnvelope, ReporterStatus
from pingcount.counting.store import CounterStore

router = APIRouter()


@router.get(
    "/ping",
    response_class=PlainTextResponse,
    summary="Counted ping",
    dependencies=[Depends(record_request)],
)
async def ping() -> PlainTextResponse:
    return PlainTextResponse("pong")


@router.get("/metrics", summary="Per-client request counts")
async def metrics_endpoint(request: Request, store: CounterStore = Depends(get_counter_store)) -> JSONResponse:
    reporter: Reporter | None = getattr(request.app.state, "reporter", None)
    status = reporter.status() if reporter is not None else ReporterStatus()
    envelope = CountsEnvelope.wrap(store.snapshot(), status)
    return JSONResponse(envelope.json_payload())
