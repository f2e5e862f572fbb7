# pharma_core/common/middleware.py
from __future__ import annotations

import logging
import time

from django.conf import settings
from django.utils.deprecation import MiddlewareMixin

from pharma_core.common.api.exceptions import ensure_request_id

logger = logging.getLogger(__name__)


class RequestContextMiddleware(MiddlewareMixin):
    """
    Adds request correlation metadata for observability.
      - Reads incoming X-Request-ID (if present) or generates one
      - Exposes request_id on the request for handlers and the error envelope
      - Adds timing header and logs one line per API request
    """

    HEADER = "HTTP_X_REQUEST_ID"
    LOGGED_PREFIXES = ("/api/",)

    def process_request(self, request):
        incoming = request.META.get(self.HEADER)
        if incoming:
            request.request_id = incoming
        ensure_request_id(request)
        request._started_at = time.perf_counter()
        return None

    def process_response(self, request, response):
        request_id = ensure_request_id(request)
        started = getattr(request, "_started_at", None)
        duration_ms = (time.perf_counter() - started) * 1000 if started is not None else 0.0

        response["X-Request-ID"] = request_id
        response["X-Response-Time-Ms"] = f"{duration_ms:.2f}"

        policy = getattr(settings, "PHARMA_INVENTORY", {})
        path = getattr(request, "path", "") or ""
        if policy.get("ENABLE_REQUEST_LOGGING", True) and path.startswith(self.LOGGED_PREFIXES):
            logger.info(
                "request_completed method=%s path=%s status=%s duration_ms=%.2f request_id=%s",
                request.method,
                path,
                response.status_code,
                duration_ms,
                request_id,
            )
        return response
