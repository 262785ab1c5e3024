"""
Request ID middleware for correlation tracking.

Every request gets a correlation ID that follows it through the logs and
into the model call:
- A client-supplied X-Request-ID is reused when it looks sane
- Otherwise a UUID4 is generated
- The ID is stored on request.state and echoed in the response headers
"""

import uuid
from typing import Callable, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware


REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_LENGTH = 128


def _clean_request_id(raw: Optional[str]) -> Optional[str]:
    """Return the client's ID if usable, None if a new one should be made."""
    if not raw:
        return None
    value = raw.strip()
    if not value or len(value) > MAX_REQUEST_ID_LENGTH:
        return None
    if not value.isprintable():
        return None
    return value


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Attach a correlation ID to each request.

    Usage in routes:
        @router.post("/analyze")
        async def analyze(request: Request):
            request_id = request.state.request_id
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        request_id = _clean_request_id(request.headers.get(REQUEST_ID_HEADER))
        if request_id is None:
            request_id = str(uuid.uuid4())

        request.state.request_id = request_id

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id

        return response
