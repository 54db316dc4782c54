"""
CampusHub Backend — Upload Size Cap
=====================================

What:  Rejects oversized POST /clublisting bodies from their Content-Length
       header, before FastAPI parses the multipart form.
Why:   Form and File parameters are parsed (and spooled to disk) before any
       dependency runs, so without this an anonymous client could push an
       arbitrarily large body through the parser before being told 401.

Limit: max_upload_size for the poster plus FORM_OVERHEAD_BYTES for the text
fields and multipart boundaries. The exact poster size is still checked by
ClubService once the form is parsed.

A body sent without Content-Length (chunked transfer) gets 411, since its
size cannot be known up front.
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from campushub.config import settings
from campushub.exceptions import PayloadTooLargeError
from campushub.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)

FORM_OVERHEAD_BYTES = 64 * 1024


def _error(status_code: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "status": "error",
            "error": error,
            "message": message,
            "request_id": request_id_var.get(""),
        },
    )


class UploadLimitMiddleware(BaseHTTPMiddleware):

    UPLOAD_PATHS = {"/clublisting"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.method != "POST" or request.url.path not in self.UPLOAD_PATHS:
            return await call_next(request)

        limit = settings.max_upload_size + FORM_OVERHEAD_BYTES
        declared = request.headers.get("content-length")

        if declared is None:
            if "transfer-encoding" in request.headers:
                return _error(411, "length_required", "Content-Length is required for uploads.")
            return await call_next(request)

        try:
            size = int(declared)
        except ValueError:
            return _error(411, "length_required", "Content-Length is required for uploads.")

        if size > limit:
            exc = PayloadTooLargeError(limit=limit)
            logger.warning(
                "Upload rejected on %s: %d bytes declared, limit %d",
                request.url.path,
                size,
                limit,
            )
            return _error(413, "payload_too_large", exc.message)

        return await call_next(request)
