"""
HTTP response helpers shared by every endpoint.

JSON:API bodies are served as ``application/vnd.api+json`` with an
explicit UTF-8 charset (Starlette only appends the charset for ``text/``
types).  Mutations that succeed without a body answer ``204 No Content``
with no content type at all.

``cors_headers`` is an HTTP middleware: GET and OPTIONS responses,
including their error responses, advertise that any origin may read the
resource.
"""

from typing import Awaitable, Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse


JSONAPI_MEDIA_TYPE = "application/vnd.api+json"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Request-Method": "GET",
    "Access-Control-Request-Headers": "Origin, X-Requested-With, Content-Type, Accept",
}


class JSONApiResponse(JSONResponse):
    media_type = f"{JSONAPI_MEDIA_TYPE}; charset=utf-8"


def no_content() -> Response:
    return Response(status_code=204)


async def cors_headers(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
    response = await call_next(request)
    if request.method in ("GET", "OPTIONS"):
        response.headers.update(CORS_HEADERS)
    return response
