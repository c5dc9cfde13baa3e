from fastapi import Depends

from kolab.api.dependencies.authentication import require_token
from kolab.schemas.user import UserBase
from kolab.services.user_directory_service import (
    UserDirectoryService,
    get_user_directory,
)
from kolab.utils import exceptions


async def get_current_user(
    token: str = Depends(require_token),
    directory: UserDirectoryService = Depends(get_user_directory),
) -> UserBase:
    """Mendapatkan pengguna saat ini berdasarkan token yang diberikan.

    Identitas ini diteruskan secara eksplisit ke setiap service sebagai
    `user_id`; tidak ada state pengguna global.

    Raises:
        UnauthorizedError: Jika token tidak dikenali direktori pengguna.

    Returns:
        UserBase: Pengguna yang saat ini terautentikasi.
    """
    user = await directory.get_user_info_by_token(token)
    if user is None:
        raise exceptions.UnauthorizedError(
            "Pengguna tidak ditemukan atau token tidak valid.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user
