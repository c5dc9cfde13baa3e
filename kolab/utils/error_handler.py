import logging
from collections import defaultdict
from typing import Any

import httpx
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from kolab.utils.common import ErrorCode
from kolab.utils.exceptions import (
    AppException,
    DirectoryUnavailableError,
    TransientStoreError,
)

logger = logging.getLogger(__name__)

# kode untuk HTTPException bawaan Starlette (route tidak ada, method salah)
_HTTP_ERROR_CODES = {
    status.HTTP_401_UNAUTHORIZED: ErrorCode.UNAUTHORIZED,
    status.HTTP_403_FORBIDDEN: ErrorCode.FORBIDDEN,
    status.HTTP_404_NOT_FOUND: ErrorCode.GENERIC_NOT_FOUND,
}


def _response(
    *,
    status_code: int,
    error_code: ErrorCode | str,
    message: str,
    headers: dict[str, str] | None = None,
    **extra: Any,
) -> JSONResponse:
    """Semua error API memakai amplop `{error_code, message, ...}`."""
    payload = {"error_code": str(error_code), "message": message, **extra}
    return JSONResponse(
        status_code=status_code, content=jsonable_encoder(payload), headers=headers
    )


def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_code=ErrorCode.INTERNAL_SERVER_ERROR,
        message="Terjadi kesalahan pada server. Silakan coba beberapa saat lagi.",
    )


def app_exception_handler(_: Request, exc: AppException):
    """Menangani kesalahan aplikasi."""
    return _response(
        status_code=exc.status_code or status.HTTP_400_BAD_REQUEST,
        error_code=exc.error_code,
        message=exc.message,
        headers=exc.headers,
        **exc.extra,
    )


def database_exception_handler(request: Request, exc: SQLAlchemyError):
    """Kegagalan penyimpanan dikembalikan sebagai 503 yang boleh dicoba ulang."""
    logger.error("Store failure on %s %s: %s", request.method, request.url.path, exc)
    return app_exception_handler(request, TransientStoreError())


def directory_exception_handler(request: Request, exc: httpx.HTTPError):
    """Direktori pengguna tidak dapat dihubungi, 503 yang boleh dicoba ulang."""
    logger.error(
        "User directory failure on %s %s: %r", request.method, request.url.path, exc
    )
    return app_exception_handler(request, DirectoryUnavailableError())


def validation_exception_handler(_: Request, exc: RequestValidationError):
    """
    Kelompokkan pesan validasi per field. Lokasi `body`/`query`/`path`
    dibuang sehingga field bersarang ditulis seperti `data.link`.
    """
    errors: dict[str, list[str]] = defaultdict(list)
    for error in exc.errors():
        loc = [str(part) for part in error["loc"]]
        if loc and loc[0] in ("body", "query", "path", "header"):
            loc = loc[1:]
        errors[".".join(loc) or "unknown"].append(error["msg"])

    return _response(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        error_code=ErrorCode.VALIDATION_ERROR,
        message="Permintaan tidak valid",
        errors=errors,
    )


def http_exception_handler(_: Request, exc: StarletteHTTPException):
    """Menangani kesalahan HTTP bawaan Starlette."""
    return _response(
        status_code=exc.status_code,
        error_code=_HTTP_ERROR_CODES.get(exc.status_code, ErrorCode.APP_ERROR),
        message=str(exc.detail),
        headers=getattr(exc, "headers", None),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(Exception, global_exception_handler)
    app.add_exception_handler(AppException, app_exception_handler)  # type: ignore
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)  # type: ignore
    app.add_exception_handler(httpx.HTTPError, directory_exception_handler)  # type: ignore
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore
