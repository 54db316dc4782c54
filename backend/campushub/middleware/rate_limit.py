"""
CampusHub Backend — Credential Endpoint Rate Limiting
=======================================================

What:  Per-IP sliding window limit on POST /login, /clublogin and /signup.
Why:   Slows down password guessing and signup spam. Every other route is
       left alone.
How:   Each IP keeps a list of attempt timestamps; timestamps older than the
       window are dropped on every attempt, and once `auth_rate_limit_requests`
       remain the request is answered with 429 and a Retry-After header.

The counters live in process memory. With several workers each worker
counts separately, so the effective limit is per worker.
"""

import logging
import time
from collections import defaultdict
from typing import Dict, List

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from campushub.config import settings
from campushub.exceptions import RateLimitExceededError
from campushub.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)


class RateLimitMiddleware(BaseHTTPMiddleware):

    LIMITED_PATHS = {"/login", "/clublogin", "/signup"}

    def __init__(self, app, **kwargs):
        super().__init__(app, **kwargs)
        self._attempts: Dict[str, List[float]] = defaultdict(list)
        self._seen = 0

    def _is_limited(self, request: Request) -> bool:
        return request.method == "POST" and request.url.path in self.LIMITED_PATHS

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if not self._is_limited(request):
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        now = time.time()
        window = settings.auth_rate_limit_window
        window_start = now - window

        attempts = [ts for ts in self._attempts[client_ip] if ts > window_start]
        self._attempts[client_ip] = attempts

        if len(attempts) >= settings.auth_rate_limit_requests:
            retry_after = int(attempts[0] + window - now) + 1
            exc = RateLimitExceededError(retry_after=retry_after)
            logger.warning(
                "Rate limit exceeded for IP %s on %s: %d attempts in %ds window",
                client_ip,
                request.url.path,
                len(attempts),
                window,
            )
            return JSONResponse(
                status_code=429,
                content={
                    "status": "error",
                    "error": "rate_limit_exceeded",
                    "message": exc.message,
                    "request_id": request_id_var.get(""),
                },
                headers={"Retry-After": str(retry_after)},
            )

        attempts.append(now)

        self._seen += 1
        if self._seen % 1000 == 0:
            self._cleanup_inactive_ips(window_start)

        return await call_next(request)

    def _cleanup_inactive_ips(self, window_start: float) -> None:
        """Drop IPs with no attempt inside the current window."""
        inactive_ips = [
            ip for ip, timestamps in self._attempts.items()
            if not timestamps or timestamps[-1] <= window_start
        ]
        for ip in inactive_ips:
            del self._attempts[ip]

        if inactive_ips:
            logger.debug("Cleaned up %d inactive IP entries", len(inactive_ips))
