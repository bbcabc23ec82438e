"""FastAPI application entrypoint and health reporting utilities.

Invariants:
- Catalog failures answer 500 without exposing store or signer details.
- Health detail is only exposed to allowlisted hosts.
"""

import asyncio
import ipaddress
import json
import logging
from typing import Any

from fastapi import Depends, FastAPI, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse
from redis.asyncio import Redis
from redis.exceptions import RedisError

from mediacat.api.deps import get_store
from mediacat.api.router import api_router
from mediacat.core.config import settings
from mediacat.services.clients import close_clients
from mediacat.services.errors import CatalogError

logger = logging.getLogger("mediacat.api")

app = FastAPI(title=settings.app_name)
app.include_router(api_router, prefix=settings.api_prefix)


@app.on_event("shutdown")
async def _close_clients() -> None:
    """Release Redis connections on shutdown."""
    await close_clients()


@app.middleware("http")
async def recover_unhandled_errors(request: Request, call_next):
    """Turn unexpected exceptions into a logged 500 instead of a dropped connection."""
    try:
        return await call_next(request)
    except Exception:  # noqa: BLE001
        logger.exception("Panic occurred handling %s %s", request.method, request.url.path)
        return PlainTextResponse("Internal Server Error", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


@app.exception_handler(CatalogError)
async def _catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    payload = {
        "event": "catalog_error",
        "error_type": type(exc).__name__,
        "operation": exc.operation,
        "index": exc.index,
        "error": str(exc),
        "path": request.url.path,
    }
    logger.error(json.dumps(payload))
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal Server Error"},
    )


def _may_see_health_detail(request: Request) -> bool:
    """True when the peer IP or Host header matches a HEALTH_ALLOWLIST entry.

    Entries are CIDRs/IPs or bare host names compared case-insensitively.
    """
    peers = {request.client.host} if request.client and request.client.host else set()
    if host := request.headers.get("host"):
        peers.add(host.rsplit(":", 1)[0])
    for entry in settings.health_allowlist:
        try:
            network = ipaddress.ip_network(entry, strict=False)
        except ValueError:
            if any(peer.casefold() == entry.casefold() for peer in peers):
                return True
            continue
        for peer in peers:
            try:
                if ipaddress.ip_address(peer) in network:
                    return True
            except ValueError:
                continue
    return False


async def _check_store(redis: Redis) -> dict[str, Any]:
    try:
        await asyncio.wait_for(redis.ping(), timeout=settings.healthcheck_timeout)
    except (RedisError, OSError, asyncio.TimeoutError) as exc:
        logger.warning("Redis health check failed: %r", exc)
        return {"state": "down", "error": type(exc).__name__}
    return {"state": "ok"}


@app.get("/health", tags=["internal"])
async def health(request: Request, redis: Redis = Depends(get_store)) -> dict[str, Any]:
    """Return liveness, plus store checks for allowlisted callers."""
    if not _may_see_health_detail(request):
        return {"status": "ok"}

    checks = {"redis": await _check_store(redis)}
    status_value = "ok" if all(check["state"] == "ok" for check in checks.values()) else "degraded"
    return {"status": status_value, "checks": checks}
