"""Per-request glue between the HTTP layer and the counter store."""

from __future__ import annotations

from fastapi import Request

from pingcount.counting.identity import UNKNOWN_CLIENT, first_forwarded_address, normalize_identity
from pingcount.counting.store import CounterStore


def get_counter_store(request: Request) -> CounterStore:
    store: CounterStore | None = getattr(request.app.state, "counter_store", None)
    if store is None:
        raise RuntimeError("Counter store not configured on application state")
    return store


def resolve_client_identity(request: Request, trust_forwarded: bool = False) -> str:
    """Work out which client a request should be counted against.

    Proxy headers are only consulted when ``trust_forwarded`` is set; a header
    value that is not an IP address falls through to the transport peer.
    """

    if trust_forwarded:
        for header in ("x-forwarded-for", "x-real-ip"):
            forwarded = normalize_identity(first_forwarded_address(request.headers.get(header)))
            if forwarded != UNKNOWN_CLIENT:
                return forwarded

    client = getattr(request, "client", None)
    return normalize_identity(getattr(client, "host", None))


def record_request(request: Request) -> str:
    """Count the request exactly once and return the identity it was counted under."""

    store = get_counter_store(request)
    trust_forwarded: bool = getattr(request.app.state, "trust_forwarded_headers", False)
    identity = resolve_client_identity(request, trust_forwarded)
    store.increment(identity)
    return identity
