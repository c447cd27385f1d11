"""Request inspection helpers: caller address and response format."""
from __future__ import annotations

import ipaddress

from fastapi import Request


def is_ip(value: str) -> bool:
    try:
        ipaddress.ip_address(value)
    except ValueError:
        return False
    return True


def client_ip(request: Request) -> str:
    """
    Resolve the caller address.

    Precedence: ``?ip=`` query parameter, first valid ``X-Forwarded-For``
    entry, ``X-Real-IP``, then the socket peer. Invalid candidates are skipped.
    """
    candidate = request.query_params.get("ip", "").strip()
    if candidate and is_ip(candidate):
        return candidate

    forwarded = request.headers.get("x-forwarded-for", "")
    for part in forwarded.split(","):
        candidate = part.strip()
        if candidate and is_ip(candidate):
            return candidate

    candidate = request.headers.get("x-real-ip", "").strip()
    if candidate and is_ip(candidate):
        return candidate

    peer = request.client.host if request.client else ""
    return peer.strip()


def _host_without_port(host: str) -> str:
    if host.startswith("["):
        return host[1:].partition("]")[0]
    if host.count(":") == 1:
        return host.partition(":")[0]
    return host


def wants_json(request: Request) -> bool:
    """JSON for ``/api`` paths, ``api.`` / ``.api`` hosts, or a JSON Content-Type."""
    if request.url.path.startswith("/api"):
        return True

    labels = _host_without_port(request.headers.get("host", "")).split(".")
    if labels[0] == "api" or labels[-1] == "api":
        return True

    return "json" in request.headers.get("content-type", "").lower()
