from enum import StrEnum, auto


class ErrorCode(StrEnum):
    @staticmethod
    def _generate_next_value_(name, start, count, last_values) -> str:
        return name.upper()

    APP_ERROR = auto()
    INTERNAL_SERVER_ERROR = auto()
    VALIDATION_ERROR = auto()
    GENERIC_NOT_FOUND = auto()
    FORBIDDEN = auto()
    INVALID_ARGUMENT = auto()
    TRANSIENT_STORE_FAILURE = auto()
    DIRECTORY_UNAVAILABLE = auto()

    # Auth
    UNAUTHORIZED = auto()

    # Notifikasi
    NOTIFICATION_NOT_FOUND = auto()

    # Pesan
    MESSAGE_NOT_FOUND = auto()
    RECIPIENT_NOT_FOUND = auto()
    EMPTY_MESSAGE = auto()
    MESSAGE_TOO_LONG = auto()
    CANNOT_MESSAGE_SELF = auto()
    MESSAGE_NOT_OWNED = auto()
