import time

from django.utils.deprecation import MiddlewareMixin

from apps.common import get_logger

logger = get_logger(__name__).bind(component='api', layer='middleware')


class RequestLoggingMiddleware(MiddlewareMixin):
    """
    Logs one line per request with method, path, response status and
    latency. 5xx responses are logged at error level, 4xx at warning.
    """

    def process_request(self, request):
        request._started_at = time.monotonic()
        return None

    def process_response(self, request, response):
        started = getattr(request, '_started_at', None)
        latency = round((time.monotonic() - started) * 1000, 2) if started is not None else None
        status = getattr(response, 'status_code', None)
        if status is not None and status >= 500:
            log = logger.error
        elif status is not None and status >= 400:
            log = logger.warning
        else:
            log = logger.info
        log(
            'Request completed',
            method=getattr(request, 'method', None),
            path=getattr(request, 'path', None),
            status=status,
            latency_ms=latency,
        )
        return response
