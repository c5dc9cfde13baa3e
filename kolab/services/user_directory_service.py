import logging
import urllib.parse
from typing import Any

from starlette_context import context

from kolab.client.user_directory_client import UserDirectoryClient
from kolab.middleware.context_middleware import USER_INFO_CACHE_KEY
from kolab.schemas.user import UserBase

logger = logging.getLogger(__name__)


class UserDirectoryService:
    """
    Akses baca ke direktori pengguna eksternal dengan cache per-request.
    Hasil negatif (pengguna tidak ada) juga di-cache selama request yang sama.
    """

    def __init__(self, client: Any = UserDirectoryClient) -> None:
        self.client = client

    def _get_ctx_cache(self) -> dict:
        """
        Ambil cache user per-request dari starlette_context. Di luar request
        (mis. background task setelah response) dikembalikan dict baru.
        """
        if not context.exists():
            return {}
        cache = context.get(USER_INFO_CACHE_KEY)
        if not isinstance(cache, dict):
            cache = {}
            context[USER_INFO_CACHE_KEY] = cache
        return cache

    @staticmethod
    def map_to_user(data: dict) -> UserBase:
        """Map respons direktori ke UserBase."""
        name = (
            data.get("name")
            or " ".join(
                part
                for part in (data.get("first_name"), data.get("last_name"))
                if part
            )
            or data.get("email")
            or f"User {data.get('id')}"
        )

        avatar_url = data.get("avatar_url") or data.get("avatar")
        if not avatar_url:
            encoded_name = urllib.parse.quote_plus(name.strip())
            avatar_url = f"https://ui-avatars.com/api/?name={encoded_name}&background=random&bold=true&size=256"

        return UserBase(
            id=data.get("id"),
            name=name,
            email=data.get("email"),
            avatar_url=avatar_url,
        )

    async def get_user_info_by_token(self, token: str) -> UserBase | None:
        """Ambil info pengguna pemilik token, None jika token tidak dikenali."""
        cache = self._get_ctx_cache()
        tkey = f"token:{token}"
        if tkey in cache:
            return cache[tkey]

        raw = await self.client.get_me(token=token)
        if not raw:
            cache[tkey] = None
            return None

        mapped = self.map_to_user(dict(raw))
        cache[tkey] = mapped
        cache[f"id:{mapped.id}"] = mapped
        return mapped

    async def get_user_info(self, user_id: int) -> UserBase | None:
        """Ambil info pengguna berdasarkan user_id.

        Args:
            user_id (int): ID pengguna.

        Returns:
            UserBase | None: informasi pengguna jika ditemukan, None jika tidak.
        """
        cache = self._get_ctx_cache()
        ckey = f"id:{user_id}"
        if ckey in cache:
            logger.debug("Cache hit for user_id %s", user_id)
            return cache[ckey]

        raw = await self.client.get_user(user_id=user_id)
        mapped = self.map_to_user(dict(raw)) if raw else None
        cache[ckey] = mapped
        return mapped

    async def exists(self, user_id: int) -> bool:
        return await self.get_user_info(user_id) is not None

    async def list_user_by_ids(self, ids: list[int]) -> dict[int, UserBase]:
        """Ambil banyak pengguna sekaligus.

        Returns:
            dict[int, UserBase]: pemetaan id ke pengguna; id yang tidak
                ditemukan tidak muncul di hasil.
        """
        if not ids:
            return {}

        cache = self._get_ctx_cache()
        found: dict[int, UserBase] = {}
        missing: list[int] = []
        for uid in dict.fromkeys(ids):
            ckey = f"id:{uid}"
            if ckey in cache:
                if cache[ckey] is not None:
                    found[uid] = cache[ckey]
            else:
                missing.append(uid)

        if missing:
            logger.debug("Cache miss for user_id %s (need fetch)", missing)
            for raw in await self.client.get_bulk(ids=missing):
                if not raw:
                    continue
                mapped = self.map_to_user(dict(raw))
                cache[f"id:{mapped.id}"] = mapped
                found[mapped.id] = mapped
        return found


def _singleton(cls):
    _instances = {}

    def warp():
        if cls not in _instances:
            _instances[cls] = cls()
        return _instances[cls]

    return warp


get_user_directory = _singleton(UserDirectoryService)
