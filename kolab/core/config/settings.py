from pydantic import computed_field
from pydantic_core import MultiHostUrl
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "Kolab Notification & Messaging"
    VERSION_API: int = 1

    # layanan direktori pengguna eksternal (autentikasi & profil)
    BASE_API_USER_DIRECTORY: str = "http://localhost:8001"

    DB_DRIVER: str = "postgresql+asyncpg"
    DB_SERVER: str = "localhost"
    DB_PORT: int = 5432
    DB_DATABASE: str = "kolab"
    DB_USERNAME: str = "postgres"
    DB_PASSWORD: str = ""

    # jika diisi, menimpa DB_* di atas (mis. sqlite+aiosqlite:// untuk pengujian)
    DB_URL: str | None = None

    @computed_field
    @property
    def db_url(self) -> str:
        if self.DB_URL:
            return self.DB_URL
        return str(
            MultiHostUrl.build(
                scheme=self.DB_DRIVER,
                username=self.DB_USERNAME,
                password=self.DB_PASSWORD,
                host=self.DB_SERVER,
                port=self.DB_PORT,
                path=self.DB_DATABASE,
            )
        )

    @computed_field
    @property
    def version_url(self) -> str:
        return f"/v{self.VERSION_API}"

    # MESSAGING
    MESSAGE_MAX_LENGTH: int = 1000

    # NOTIFICATION
    NOTIFICATION_PAGE_SIZE: int = 20
    NOTIFICATION_MAX_PAGE_SIZE: int = 100


def _singleton(cls):
    _instances = {}

    def warp():
        if cls not in _instances:
            _instances[cls] = cls()
        return _instances[cls]

    return warp


Settings = _singleton(Settings)  # type: ignore


def get_settings() -> "Settings":
    """Mendapatkan setting

    Returns
    -------
        Settings: instance settings

    """
    return Settings()  # type: ignore


settings = get_settings()

if __name__ == "__main__":
    print(settings)
