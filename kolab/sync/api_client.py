import logging
from time import perf_counter
from typing import Any

import httpx

from kolab.schemas.message import ConversationRead, MessageRead
from kolab.schemas.notification import (
    NotificationOpenResult,
    NotificationPage,
    NotificationRead,
)
from kolab.sync.config import SyncSettings

logger = logging.getLogger(__name__)


class ApiError(Exception):  # noqa: N818
    """Respons error dari API (`{error_code, message, ...}`)."""

    def __init__(
        self,
        status_code: int,
        error_code: str,
        message: str,
        *,
        retryable: bool = False,
    ) -> None:
        super().__init__(f"[{error_code}] {message}")
        self.status_code = status_code
        self.error_code = error_code
        self.message = message
        self.retryable = retryable

    @classmethod
    def from_response(cls, resp: httpx.Response) -> "ApiError":
        try:
            body = resp.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        return cls(
            resp.status_code,
            str(body.get("error_code") or "HTTP_ERROR"),
            str(body.get("message") or resp.reason_phrase or "Request gagal"),
            retryable=bool(body.get("retryable", resp.status_code >= 500)),
        )


class KolabApiClient:
    """
    Client async untuk API notifikasi dan pesan. Bisa memakai AsyncClient
    milik pemanggil; bila tidak diberikan, client dibuat dan ditutup sendiri.
    """

    def __init__(
        self,
        token: str,
        *,
        settings: SyncSettings | None = None,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings or SyncSettings()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=self.settings.BASE_URL,
            timeout=self.settings.REQUEST_TIMEOUT,
            transport=transport,
        )
        self._headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
        }

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "KolabApiClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def _request(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        """Kirim request dan kembalikan body JSON.

        Raises:
            ApiError: status >= 400.
            httpx.HTTPError: kegagalan transport.
        """
        start = perf_counter()
        resp = await self._client.request(
            method, url, params=params, json=json, headers=self._headers
        )
        logger.debug(
            "%s %s -> %s in %.2f ms",
            method.upper(),
            url,
            resp.status_code,
            (perf_counter() - start) * 1000,
        )
        if resp.status_code >= 400:
            raise ApiError.from_response(resp)
        if resp.status_code == 204 or not resp.content:
            return None
        return resp.json()

    # Notifikasi

    async def list_notifications(
        self, *, page: int = 1, limit: int | None = None, read: bool | None = None
    ) -> NotificationPage:
        params: dict[str, Any] = {
            "page": page,
            "limit": limit or self.settings.NOTIFICATION_PAGE_SIZE,
        }
        if read is not None:
            params["read"] = str(read).lower()
        data = await self._request("GET", "/notifications", params=params)
        return NotificationPage.model_validate(data)

    async def unread_count(self) -> int:
        data = await self._request("GET", "/notifications/unread-count")
        return int(data["count"])

    async def mark_read(self, notification_id: int) -> NotificationRead:
        data = await self._request("PUT", f"/notifications/{notification_id}/read")
        return NotificationRead.model_validate(data)

    async def mark_all_read(self) -> int:
        data = await self._request("PUT", "/notifications/read-all")
        return int(data["count"])

    async def open_notification(self, notification_id: int) -> NotificationOpenResult:
        data = await self._request("POST", f"/notifications/{notification_id}/open")
        return NotificationOpenResult.model_validate(data)

    async def delete_notification(self, notification_id: int) -> None:
        await self._request("DELETE", f"/notifications/{notification_id}")

    # Pesan

    async def list_messages(self) -> list[MessageRead]:
        data = await self._request("GET", "/messages")
        return [MessageRead.model_validate(item) for item in data]

    async def list_conversations(self) -> list[ConversationRead]:
        data = await self._request("GET", "/messages/conversations")
        return [ConversationRead.model_validate(item) for item in data]

    async def fetch_thread(self, other_user_id: int) -> list[MessageRead]:
        data = await self._request("GET", f"/messages/{other_user_id}")
        return [MessageRead.model_validate(item) for item in data]

    async def send_message(self, other_user_id: int, content: str) -> MessageRead:
        data = await self._request(
            "POST", f"/messages/{other_user_id}", json={"content": content}
        )
        return MessageRead.model_validate(data)

    async def delete_message(self, message_id: int) -> None:
        await self._request("DELETE", f"/messages/{message_id}")
