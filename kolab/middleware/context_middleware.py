from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette_context.middleware import ContextMiddleware

from kolab.utils.common import ErrorCode

USER_INFO_CACHE_KEY = "user_info_cache"
"""Key cache profil pengguna dari direktori di starlette_context."""

INVALID_CONTEXT_RESPONSE = JSONResponse(
    status_code=status.HTTP_400_BAD_REQUEST,
    content={
        "error_code": str(ErrorCode.VALIDATION_ERROR),
        "message": "Header X-Request-ID atau X-Correlation-ID tidak valid",
    },
)


class CustomContextMiddleware(ContextMiddleware):
    async def set_context(self, request: Request) -> dict:
        context = await super().set_context(request)
        # profil dari direktori hanya di-cache selama satu request
        context[USER_INFO_CACHE_KEY] = {}
        return context
