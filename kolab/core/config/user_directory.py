from urllib.parse import urljoin

from kolab.core.config.settings import get_settings


class UserDirectoryUrls:
    BASE = get_settings().BASE_API_USER_DIRECTORY.rstrip("/") + "/"
    """
    Base URL untuk layanan direktori pengguna.
    """

    ME = urljoin(BASE, "api/users/me")
    """
    URL endpoint untuk mendapatkan pengguna pemilik token. Gunakan
    metode GET dengan header Authorization.
    """

    BULK = urljoin(BASE, "api/users/bulk")
    """
    URL endpoint untuk mengambil banyak pengguna sekaligus. Gunakan metode
    POST dengan payload JSON {"ids": [...]}.
    """

    @staticmethod
    def user_detail(user_id: int) -> str:
        """Bangun URL detail pengguna.

        Args:
            user_id: ID pengguna.

        Returns:
            URL absolut endpoint detail pengguna.
        """
        return urljoin(UserDirectoryUrls.BASE, f"api/users/{user_id}")
