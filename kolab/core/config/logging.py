# kolab/core/config/logging.py

import logging

from rich.logging import RichHandler

logger = logging.getLogger(__name__)

# logger pihak ketiga yang dialihkan ke root agar tampil lewat RichHandler
_THIRD_PARTY_LOGGERS = (
    "uvicorn",
    "uvicorn.access",
    "uvicorn.error",
    "fastapi",
    "asyncio",
    "starlette",
    "httpx",
)


def configure_logging(level: int | str = logging.INFO) -> None:
    """
    Mengatur logging untuk menggunakan RichHandler di seluruh aplikasi.

    Args:
        level (int | str, optional): Level root logger. Defaults to INFO.
    """
    rich_handler = RichHandler(
        rich_tracebacks=True,
        markup=True,
    )

    # force=True akan menghapus semua handler yang sudah ada
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[rich_handler],
        force=True,
    )

    for logger_name in _THIRD_PARTY_LOGGERS:
        logging_logger = logging.getLogger(logger_name)
        logging_logger.handlers = []
        logging_logger.propagate = True

    # query SQL hanya ditampilkan jika level DEBUG diminta secara eksplisit
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    logging.root.setLevel(level)
    logger.info("Logging telah dikonfigurasi dengan RichHandler.")
