"""Pydantic schemas for per-client counter entries."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CounterEntry(BaseModel):
    """One client identity and the number of requests seen from it."""

    model_config = ConfigDict(frozen=True)

    identity: str = Field(..., min_length=1)
    count: int = Field(..., ge=1)


class ReporterStatus(BaseModel):
    ticks: int = 0
    failures: int = 0
    running: bool = False
    interval_seconds: float | None = None


class CountsPayload(BaseModel):
    clients: list[CounterEntry]
    total: int
    reporter: ReporterStatus


class CountsEnvelope(BaseModel):
    """Envelope for the `/metrics` response."""

    ok: bool = True
    data: CountsPayload

    @classmethod
    def wrap(cls, entries: list[CounterEntry], reporter: ReporterStatus) -> "CountsEnvelope":
        payload = CountsPayload(
            clients=entries,
            total=sum(entry.count for entry in entries),
            reporter=reporter,
        )
        return cls(ok=True, data=payload)

    def json_payload(self) -> dict[str, object]:
        """Return JSON-serializable payload."""

        return self.model_dump(mode="json")
