import logging
import uuid

from django.conf import settings

from tenancy.context import reset_current_correlation_id, set_current_correlation_id


class RequestContextMiddleware:
    """Bind a correlation id to the request and to the logging context."""

    def __init__(self, get_response):
        self.get_response = get_response
        self.logger = logging.getLogger(__name__)
        self.correlation_id_header = getattr(
            settings, "CORRELATION_ID_HEADER", "X-Correlation-ID"
        )

    def __call__(self, request):
        request.correlation_id = self._resolve_correlation_id(request)
        token = set_current_correlation_id(request.correlation_id)
        try:
            response = self.get_response(request)
            response[self.correlation_id_header] = request.correlation_id
            if response.status_code >= 500:
                self.logger.error(
                    "request failed",
                    extra={
                        "method": request.method,
                        "path": request.path,
                        "status_code": response.status_code,
                    },
                )
            return response
        finally:
            reset_current_correlation_id(token)

    def _resolve_correlation_id(self, request) -> str:
        header_value = (request.headers.get(self.correlation_id_header, "") or "").strip()
        return header_value[:128] or str(uuid.uuid4())
