"""
CORS headers for the stitch endpoint.

The browser uploader calls the proxy cross-origin and sends x-internal-key, so
every response carries the same fixed set of headers whether or not the
request had an Origin header. Preflight requests are answered by the stitch
route itself.
"""

from typing import Awaitable, Callable

from fastapi import Request, Response


CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, x-internal-key",
}


def apply_cors_headers(response: Response) -> Response:
    for name, value in CORS_HEADERS.items():
        response.headers[name] = value
    return response


async def cors_headers_middleware(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    response = await call_next(request)
    return apply_cors_headers(response)
