from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from .request import request_object


class RequestMiddleware(BaseHTTPMiddleware):
    """Menyimpan request aktif agar bisa dibaca di luar route (mis. Paginator)."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        token = request_object.set(request)
        try:
            return await call_next(request)
        finally:
            request_object.reset(token)
