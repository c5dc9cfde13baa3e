from typing import Any

from fastapi import status
from pydantic import BaseModel, Field

from .common import ErrorCode


class AppErrorResponse(BaseModel):
    error_code: str = Field(
        description="Kode kesalahan yang menunjukkan jenis kesalahan aplikasi."
    )
    message: str = Field(
        description="Pesan kesalahan yang memberikan rincian lebih lanjut tentang kesalahan aplikasi."  # noqa: E501
    )


class ValidationErrorResponse(BaseModel):
    error_code: str = Field(
        description="Kode kesalahan yang menunjukkan jenis kesalahan validasi."
    )
    message: str = Field(
        description=(
            "Pesan kesalahan yang memberikan rincian lebih lanjut "
            "tentang kesalahan validasi."
        )
    )
    errors: dict[str, list[str]] = Field(
        description="Sebuah kamus yang berisi kesalahan validasi untuk setiap field."
    )


class AppException(Exception):  # noqa: N818
    def __init__(
        self,
        message: str,
        /,
        error_code: ErrorCode | None = None,
        *,
        status_code: int | None = None,
        headers: dict[str, str] | None = None,
        **extra: Any,
    ):
        if error_code is None:
            error_code = ErrorCode.APP_ERROR

        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.headers = headers
        self.extra = extra

    def __str__(self):
        return (
            f"[{self.error_code}] {self.message}"
            if self.message
            else f"[{self.error_code}]"
        )

    def dump(self) -> dict[str, Any]:
        return {
            "error_code": str(self.error_code),
            "message": self.message,
            **self.extra,
        }


class UnauthorizedError(AppException):
    def __init__(
        self,
        message: str = "Autentikasi diperlukan",
        /,
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
        **extra: Any,
    ):
        super().__init__(
            message, error_code, status_code=status.HTTP_401_UNAUTHORIZED, **extra
        )


class ForbiddenError(AppException):
    def __init__(
        self,
        message: str = "Akses ditolak",
        /,
        error_code: ErrorCode = ErrorCode.FORBIDDEN,
        **extra: Any,
    ):
        super().__init__(
            message, error_code, status_code=status.HTTP_403_FORBIDDEN, **extra
        )


class InvalidArgumentError(AppException):
    def __init__(
        self,
        message: str = "Argumen tidak valid",
        /,
        error_code: ErrorCode = ErrorCode.INVALID_ARGUMENT,
        **extra: Any,
    ):
        super().__init__(
            message,
            error_code,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            **extra,
        )


class NotificationNotFoundError(AppException):
    def __init__(
        self,
        message: str = "Notifikasi tidak ditemukan",
        /,
        error_code: ErrorCode = ErrorCode.NOTIFICATION_NOT_FOUND,
        **extra: Any,
    ):
        super().__init__(
            message, error_code, status_code=status.HTTP_404_NOT_FOUND, **extra
        )


class MessageNotFoundError(AppException):
    def __init__(
        self,
        message: str = "Pesan tidak ditemukan",
        /,
        error_code: ErrorCode = ErrorCode.MESSAGE_NOT_FOUND,
        **extra: Any,
    ):
        super().__init__(
            message, error_code, status_code=status.HTTP_404_NOT_FOUND, **extra
        )


class RecipientNotFoundError(AppException):
    def __init__(
        self,
        message: str = "Penerima pesan tidak ditemukan",
        /,
        error_code: ErrorCode = ErrorCode.RECIPIENT_NOT_FOUND,
        **extra: Any,
    ):
        super().__init__(
            message, error_code, status_code=status.HTTP_404_NOT_FOUND, **extra
        )


class TransientStoreError(AppException):
    def __init__(
        self,
        message: str = "Penyimpanan sedang tidak tersedia. Silakan coba lagi.",
        /,
        error_code: ErrorCode = ErrorCode.TRANSIENT_STORE_FAILURE,
        **extra: Any,
    ):
        super().__init__(
            message,
            error_code,
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            retryable=True,
            **extra,
        )


class DirectoryUnavailableError(AppException):
    def __init__(
        self,
        message: str = "Direktori pengguna sedang tidak tersedia. Silakan coba lagi.",
        /,
        error_code: ErrorCode = ErrorCode.DIRECTORY_UNAVAILABLE,
        **extra: Any,
    ):
        super().__init__(
            message,
            error_code,
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            retryable=True,
            **extra,
        )
