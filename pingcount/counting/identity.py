"""Normalization of raw client addresses into counter keys."""

from __future__ import annotations

import ipaddress

UNKNOWN_CLIENT = "unknown"


def normalize_identity(raw: str | None) -> str:
    """Return the canonical text form of an IP address, or ``UNKNOWN_CLIENT``.

    Textual variants of one address (``::FFFF:10.0.0.1``, ``0:0::1``, surrounding
    whitespace, a bracketed IPv6 host) collapse to the same key. IPv4-mapped IPv6
    addresses are reported as plain IPv4. Anything that is not an IP address,
    including hostnames and empty values, maps to the sentinel.
    """

    if raw is None:
        return UNKNOWN_CLIENT
    candidate = raw.strip()
    if candidate.startswith("[") and candidate.endswith("]"):
        candidate = candidate[1:-1]
    # Zone ids (fe80::1%eth0) are scoped to the host and not part of the address
    candidate = candidate.split("%", 1)[0]
    if not candidate:
        return UNKNOWN_CLIENT

    try:
        address = ipaddress.ip_address(candidate)
    except ValueError:
        return UNKNOWN_CLIENT

    if isinstance(address, ipaddress.IPv6Address) and address.ipv4_mapped is not None:
        address = address.ipv4_mapped
    return str(address)


def first_forwarded_address(header_value: str | None) -> str | None:
    """Return the left-most entry of an ``X-Forwarded-For`` style list."""

    if not header_value:
        return None
    first = header_value.split(",")[0].strip()
    return first or None
