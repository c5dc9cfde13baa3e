from pydantic_settings import BaseSettings, SettingsConfigDict


class SyncSettings(BaseSettings):
    """Konfigurasi client sync (polling) dari environment `KOLAB_SYNC_*`."""

    model_config = SettingsConfigDict(
        env_prefix="KOLAB_SYNC_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    BASE_URL: str = "http://localhost:8000/v1"
    REQUEST_TIMEOUT: float = 10.0

    NOTIFICATION_POLL_INTERVAL: float = 30.0
    NOTIFICATION_PAGE_SIZE: int = 20
    THREAD_POLL_INTERVAL: float = 5.0

    # inbox hanya mengambil data saat dibuka; isi untuk mengaktifkan polling
    INBOX_POLL_INTERVAL: float | None = None
