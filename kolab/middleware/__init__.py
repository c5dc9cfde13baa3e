from starlette.middleware import Middleware
from starlette_context import plugins

from .context_middleware import (
    INVALID_CONTEXT_RESPONSE,
    USER_INFO_CACHE_KEY,
    CustomContextMiddleware,
)
from .request_middleware import RequestMiddleware

__all__ = (
    "USER_INFO_CACHE_KEY",
    "CustomContextMiddleware",
    "RequestMiddleware",
    "middleware",
)

middleware = [
    Middleware(RequestMiddleware),
    Middleware(
        CustomContextMiddleware,
        plugins=(plugins.RequestIdPlugin(), plugins.CorrelationIdPlugin()),
        # UUID tidak valid dibalas dengan format error yang sama seperti API
        default_error_response=INVALID_CONTEXT_RESPONSE,
    ),
]
