"""Per-client request counting: store, reporter and request glue."""

from pingcount.counting.reporter import Reporter
from pingcount.counting.routes import router
from pingcount.counting.store import CounterStore

__all__ = ["CounterStore", "Reporter", "router"]
