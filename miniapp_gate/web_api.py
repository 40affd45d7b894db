"""HTTP API for the Telegram Mini App page.

The page posts the initData it received from the Telegram WebApp SDK and
gets back the signature and recency verdicts to decide what to display.
Uses aiohttp.
"""

import time

from aiohttp import web

from .verifier import InitDataVerifier


AUTH_SCHEME = "tma "

PREFLIGHT_MAX_AGE = 600


def _extract_init_data(request: web.Request) -> str | None:
    """Return the initData from an `Authorization: tma <initData>` header."""
    auth = request.headers.get("Authorization", "")
    if not auth.startswith(AUTH_SCHEME):
        return None
    return auth[len(AUTH_SCHEME):]


async def handle_verify(request: web.Request) -> web.Response:
    """POST /api/verify — return {"valid": bool, "recent": bool}."""
    init_data = _extract_init_data(request)
    if init_data is None:
        return web.json_response(
            {"error": "missing or invalid Authorization header"}, status=401,
        )

    verifier: InitDataVerifier = request.app["verifier"]
    verdict = verifier.check(init_data, now=request.app["clock"]())
    status = 400 if verdict.error else 200
    return web.json_response(verdict.to_dict(), status=status)


async def handle_health(request: web.Request) -> web.Response:
    """GET /api/health — simple health check, no auth required."""
    return web.json_response({"status": "ok", "time": int(request.app["clock"]())})


@web.middleware
async def cors_middleware(request: web.Request, handler) -> web.Response:
    """Answer preflights and tag responses so the Mini App page may read them."""
    if request.method == "OPTIONS":
        response = web.Response()
        response.headers["Access-Control-Allow-Methods"] = "GET, POST"
        # Only the initData header is sent cross-origin
        response.headers["Access-Control-Allow-Headers"] = "Authorization"
        response.headers["Access-Control-Max-Age"] = str(PREFLIGHT_MAX_AGE)
    else:
        response = await handler(request)

    response.headers["Access-Control-Allow-Origin"] = request.app["cors_origin"]
    response.headers["Vary"] = "Origin"
    return response


@web.middleware
async def logging_middleware(request: web.Request, handler) -> web.Response:
    """Log method, path and status; headers carry initData and are never logged."""
    start = time.monotonic()
    try:
        response = await handler(request)
    except web.HTTPException as e:
        print(f"[API] {request.method} {request.path} → {e.status}")
        raise
    except Exception as e:
        print(f"[API] {request.method} {request.path} → ERROR: {type(e).__name__}")
        raise
    elapsed = (time.monotonic() - start) * 1000
    print(f"[API] {request.method} {request.path} → {response.status} ({elapsed:.1f}ms)")
    return response


def create_web_app(
    verifier: InitDataVerifier, cors_origin: str = "*", clock=time.time,
) -> web.Application:
    """Create and configure the aiohttp web application."""
    app = web.Application(middlewares=[logging_middleware, cors_middleware])
    app["verifier"] = verifier
    app["cors_origin"] = cors_origin
    app["clock"] = clock

    app.router.add_get("/api/health", handle_health)
    app.router.add_post("/api/verify", handle_verify)

    return app
