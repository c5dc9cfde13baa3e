import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from httpx import AsyncClient

from kolab.api import api
from kolab.core.config import settings
from kolab.core.config.logging import configure_logging
from kolab.core.domain.bus import drain_background
from kolab.core.domain.subscribers import register_event_handlers
from kolab.db.base import create_db_and_tables
from kolab.db.models import load_all_models
from kolab.middleware import middleware
from kolab.utils.error_handler import register_exception_handlers
from kolab.utils.exceptions import ValidationErrorResponse

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI application."""

    # muat semua model database agar terdaftar di metadata
    load_all_models()

    # buat semua tabel database yang diperlukan
    await create_db_and_tables()

    # register event handlers untuk domain events
    register_event_handlers()

    # inisialisasi httpx.AsyncClient untuk direktori pengguna
    async with AsyncClient(timeout=10.0) as client:
        yield {"client": client}

    # tunggu dispatch notifikasi yang masih berjalan
    await drain_background()


def get_app() -> FastAPI:
    """Create and return a FastAPI application instance."""

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=f"v{settings.VERSION_API}",
        lifespan=lifespan,
        redoc_url=None,
        middleware=middleware,
        responses={
            422: {
                "model": ValidationErrorResponse,
                "description": "Kesalahan validasi.",
            }
        },
    )

    # Routers
    app.include_router(api.router)

    # Middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # register exception handlers
    register_exception_handlers(app)
    return app


app = get_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "kolab.main:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
        log_level=logging.INFO,
    )
