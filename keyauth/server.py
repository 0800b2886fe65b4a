"""aiohttp application: /auth and /healthz endpoints behind the ApiKey check."""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable

from aiohttp import web

from keyauth.auth import AuthHeaderError, get_api_key

log = logging.getLogger(__name__)

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


def header_map(request: web.Request) -> dict[str, list[str]]:
    """Build a case-preserving multi-value header map from the raw headers.

    request.headers folds name case, so the wire names are read from
    raw_headers instead.
    """
    headers: dict[str, list[str]] = {}
    for name, value in request.raw_headers:
        headers.setdefault(name.decode("latin-1"), []).append(value.decode("latin-1"))
    return headers


@web.middleware
async def api_key_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    public_paths = request.app["config"]["auth"]["public_paths"]
    if request.path in public_paths:
        return await handler(request)

    try:
        request["api_key"] = get_api_key(header_map(request))
    except AuthHeaderError as exc:
        log.debug("Rejected %s %s: %s", request.method, request.path, exc)
        return web.Response(status=401, text=str(exc))
    return await handler(request)


async def healthz(request: web.Request) -> web.Response:
    return web.Response(text="ok")


async def auth(request: web.Request) -> web.Response:
    return web.Response(status=200, text="ok")


def create_app(config: dict[str, Any]) -> web.Application:
    app = web.Application(middlewares=[api_key_middleware])
    app["config"] = config

    app.router.add_get("/auth", auth)
    app.router.add_get("/healthz", healthz)
    return app
