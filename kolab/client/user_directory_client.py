import logging
from time import perf_counter
from typing import Any

import httpx
from fastapi import Request
from httpx import AsyncClient

from kolab.core.config.user_directory import UserDirectoryUrls
from kolab.middleware.request import request_object

logger = logging.getLogger(__name__)


def _get_bearer_from_ctx(req: Request | None) -> dict:
    """Ambil header Authorization Bearer dari request aktif.

    Jika header tidak diawali 'Bearer ', ia akan ditambahkan secara otomatis.

    Args:
        req: Objek request aktif, atau None di luar request HTTP.

    Returns:
        Dict header Authorization jika tersedia, atau dict kosong jika tidak ada.
    """
    if req is None:
        return {}
    auth = req.headers.get("authorization")
    if not auth:
        return {}

    if not str(auth).lower().startswith("bearer "):
        auth = f"Bearer {auth}"

    return {"Authorization": auth}


def _auth_headers(token: str | None) -> dict[str, str]:
    """Bangun header untuk permintaan HTTP dengan Accept JSON.

    Token eksplisit diprioritaskan; tanpa token, header Authorization request
    aktif diteruskan.
    """
    if token:
        return {"Authorization": f"Bearer {token}", "Accept": "application/json"}
    return {**_get_bearer_from_ctx(request_object.get(None)), "Accept": "application/json"}


class UserDirectoryClient:
    """Client httpx untuk layanan direktori pengguna (eksternal)."""

    @staticmethod
    async def _request(
        method: str,
        url: str,
        *,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ):
        """Wrapper generik untuk mengirim request HTTP.

        Client bersama diambil dari `request.state.client` (dibuat di lifespan
        aplikasi). Bila tidak tersedia, dipakai AsyncClient sementara.

        Raises:
            httpx.HTTPError: Jika permintaan HTTP gagal (dilempar ulang setelah
                logging).
        """
        request = request_object.get(None)
        httpx_client: AsyncClient | None = (
            getattr(request.state, "client", None) if request is not None else None
        )

        start = perf_counter()
        try:
            if httpx_client is not None:
                resp = await httpx_client.request(
                    method, url, json=json, headers=headers
                )
            else:
                async with AsyncClient() as tmp_client:
                    resp = await tmp_client.request(
                        method, url, json=json, headers=headers
                    )
                    # Pastikan body sudah dibaca sebelum client ditutup
                    await resp.aread()

            logger.debug(
                "%s %s -> %s in %.2f ms",
                method.upper(),
                url,
                resp.status_code,
                (perf_counter() - start) * 1000,
            )
            return resp
        except httpx.HTTPError:
            logger.exception("HTTP %s %s failed", method.upper(), url)
            raise

    @staticmethod
    async def get_me(*, token: str | None = None) -> dict | None:
        """Ambil profil pengguna pemilik token.

        Returns:
            dict data pengguna jika sukses, None jika token ditolak (401/403).

        Raises:
            httpx.HTTPError: direktori tidak dapat dihubungi atau membalas
                error lain.
        """
        resp = await UserDirectoryClient._request(
            "GET", UserDirectoryUrls.ME, headers=_auth_headers(token)
        )
        if resp.status_code in (401, 403):
            return None
        resp.raise_for_status()
        return resp.json()

    @staticmethod
    async def get_user(*, user_id: int, token: str | None = None) -> dict | None:
        """Ambil detail pengguna berdasarkan user_id.

        Returns:
            dict data pengguna jika ditemukan, None jika 404.

        Raises:
            httpx.HTTPError: direktori tidak dapat dihubungi atau membalas
                error lain.
        """
        resp = await UserDirectoryClient._request(
            "GET",
            UserDirectoryUrls.user_detail(user_id),
            headers=_auth_headers(token),
        )
        if resp.status_code == 404:
            return None
        resp.raise_for_status()
        return resp.json()

    @staticmethod
    async def get_bulk(*, ids: list[int], token: str | None = None) -> list[dict]:
        """Ambil data beberapa pengguna sekaligus.

        Dipakai hanya untuk data tampilan, sehingga kegagalan direktori
        dicatat dan menghasilkan list kosong.

        Returns:
            List data pengguna yang ditemukan (bisa lebih sedikit dari `ids`).
        """
        headers = {**_auth_headers(token), "Content-Type": "application/json"}
        try:
            resp = await UserDirectoryClient._request(
                "POST", UserDirectoryUrls.BULK, json={"ids": ids}, headers=headers
            )
        except httpx.HTTPError:
            return []
        if resp.status_code != 200:
            logger.warning("get_bulk -> %s", resp.status_code)
            return []
        data = resp.json()
        if isinstance(data, dict):
            data = data.get("data", [])
        return list(data or [])
