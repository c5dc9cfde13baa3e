from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer

from kolab.utils import exceptions

# token diterbitkan layanan autentikasi eksternal, bukan oleh inti ini
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/v1/auth/login", auto_error=False)


async def require_token(token: str | None = Depends(oauth2_scheme)) -> str:
    """Pastikan request membawa token Bearer.

    Raises:
        UnauthorizedError: Jika header Authorization tidak ada.

    Returns:
        str: Token Bearer mentah.
    """
    if not token:
        raise exceptions.UnauthorizedError(
            "Token tidak ditemukan", headers={"WWW-Authenticate": "Bearer"}
        )
    return token
