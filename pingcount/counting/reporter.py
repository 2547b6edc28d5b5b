"""Periodic reporting of per-client request counts."""

from __future__ import annotations

import asyncio
from typing import Callable, Sequence

from pingcount.counting.schemas import CounterEntry, ReporterStatus
from pingcount.counting.store import CounterStore
from pingcount.lib.logger import get_logger

logger = get_logger(__name__)

ReportSink = Callable[[Sequence[CounterEntry]], None]

_DEFAULT_INTERVAL_SECONDS = 1.0


def format_report(entries: Sequence[CounterEntry]) -> str:
    """Render entries as the human-readable block printed on every tick."""

    lines = ["IPs:"]
    lines.extend(f"  {entry.identity}: {entry.count}" for entry in entries)
    return "\n".join(lines) + "\n"


def stdout_sink(entries: Sequence[CounterEntry]) -> None:
    print(format_report(entries), flush=True)


def log_sink(entries: Sequence[CounterEntry]) -> None:
    logger.info(
        "client_counts",
        extra={
            "clients": {entry.identity: entry.count for entry in entries},
            "client_count": len(entries),
        },
    )


_SINKS: dict[str, ReportSink] = {
    "stdout": stdout_sink,
    "log": log_sink,
}


def resolve_sink(name: str) -> ReportSink:
    try:
        return _SINKS[name]
    except KeyError:
        raise ValueError(f"Unknown report sink '{name}'") from None


class Reporter:
    """Emit a snapshot of the store to a sink once per interval.

    The loop runs as a single asyncio task started with :meth:`start` and torn
    down with :meth:`stop`. A failing sink is logged and retried on the next
    tick; it never touches the store or the request path.
    """

    def __init__(
        self,
        store: CounterStore,
        *,
        interval_seconds: float = _DEFAULT_INTERVAL_SECONDS,
        sink: ReportSink = stdout_sink,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._store = store
        self._interval = interval_seconds
        self._sink = sink
        self._task: asyncio.Task[None] | None = None
        self.ticks = 0
        self.failures = 0

    @property
    def interval_seconds(self) -> float:
        return self._interval

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def status(self) -> ReporterStatus:
        return ReporterStatus(
            ticks=self.ticks,
            failures=self.failures,
            running=self.running,
            interval_seconds=self.interval_seconds,
        )

    def tick(self) -> bool:
        """Snapshot the store and hand it to the sink. Returns False if emission failed."""

        self.ticks += 1
        try:
            entries = self._store.snapshot()
            self._sink(entries)
        except Exception:
            self.failures += 1
            logger.exception("report_emit_failed", extra={"tick": self.ticks})
            return False
        return True

    def start(self) -> None:
        """Schedule the reporting loop on the running event loop (no-op if already running)."""

        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name="pingcount-reporter")
        self._task.add_done_callback(self._on_done)
        logger.info("reporter_started", extra={"interval_seconds": self._interval})

    async def stop(self) -> None:
        task = self._task
        if task is None:
            return
        self._task = None
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("reporter_stopped", extra={"ticks": self.ticks, "failures": self.failures})

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()
        next_at = loop.time()
        while True:
            self.tick()
            next_at += self._interval
            delay = next_at - loop.time()
            if delay < 0:
                # Fell behind (slow sink or stalled loop): restart the schedule from now
                next_at = loop.time()
                delay = 0
            await asyncio.sleep(delay)

    def _on_done(self, task: asyncio.Task[None]) -> None:
        try:
            task.result()
        except asyncio.CancelledError:
            pass
        except Exception:  # pragma: no cover - tick() already contains sink errors
            logger.exception("reporter_task_failed")
