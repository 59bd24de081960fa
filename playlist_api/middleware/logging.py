"""
Playlist API: Request Logging Middleware
===========================================

What:  One access log line per HTTP request.
How:   Times the rest of the chain, then logs the matched route template
       (so `/songs/1` and `/songs/2` group as `/songs/{song_id}`), the
       status, duration and request id on the `playlist_api.access` logger.

Log line:
    2025-01-15T12:00:00 [INFO] playlist_api.access: POST /songs 201 3.4ms [a1b2c3d4] -> /songs/1

Extra fields on every record: request_id, method, path, route, resource,
status, duration_ms, client_ip, and `location` for created rows.
Request and response bodies are never logged.
"""

import logging
import time
from typing import Any, Dict

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from playlist_api.middleware.request_id import request_id_var

logger = logging.getLogger("playlist_api.access")

# Probed frequently; kept out of the access log
SKIP_PATHS = frozenset({"/health"})


def level_for_status(status: int) -> int:
    """5xx → ERROR, 4xx → WARNING, everything else → INFO."""
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


def route_template(request: Request) -> str:
    """
    The path pattern the router matched, e.g. `/playlists/{playlist_id}`.

    The router records the matched route on the shared ASGI scope. Requests
    that matched nothing (404 from routing, 405) fall back to the raw path.
    """
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


def resource_of(path: str) -> str:
    """First path segment: `songs`, `playlists`, `docs`... or `` for `/`."""
    return path.strip("/").split("/", 1)[0]


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs one line per song/playlist request, keyed by route template."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in SKIP_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - started) * 1000

        route = route_template(request)
        location = response.headers.get("location")
        fields: Dict[str, Any] = {
            "request_id": request_id_var.get(""),
            "method": request.method,
            "path": path,
            "route": route,
            "resource": resource_of(path),
            "status": response.status_code,
            "duration_ms": round(duration_ms, 2),
            "client_ip": request.client.host if request.client else "unknown",
        }

        message = "%s %s %d %.1fms [%s]"
        args = [fields["method"], route, fields["status"], duration_ms, fields["request_id"]]
        if location:
            fields["location"] = location
            message += " -> %s"
            args.append(location)

        logger.log(level_for_status(fields["status"]), message, *args, extra=fields)
        return response
