import asyncio
import json

import httpx
import pytest

from kolab.sync.api_client import ApiError, KolabApiClient
from kolab.sync.config import SyncSettings
from kolab.sync.views import InboxView, MessageThreadView, NotificationFeedView

NOW = "2026-01-05T08:00:00Z"


def _notification(id_: int, *, is_read: bool = False, **data) -> dict:
    return {
        "id": id_,
        "recipient_id": 1,
        "actor_id": 2,
        "type": "PROJECT_INVITE",
        "title": "Project Invitation",
        "message": 'Budi has invited you to join "Robotics"',
        "data": {"projectId": 10, **data},
        "is_read": is_read,
        "read_at": None,
        "created_at": NOW,
    }


def _page(items: list[dict], unread: int) -> dict:
    return {
        "count": len(items),
        "items": items,
        "curr_page": 1,
        "total_page": 1,
        "next_page": None,
        "previous_page": None,
        "per_page": 20,
        "total_items": len(items),
        "has_next": False,
        "has_prev": False,
        "unread_count": unread,
    }


def _message(id_: int, sender: int, recipient: int, content: str) -> dict:
    return {
        "id": id_,
        "sender_id": sender,
        "recipient_id": recipient,
        "content": content,
        "created_at": NOW,
    }


class FakeServer:
    """Handler MockTransport yang mencatat request dan bisa ditahan."""

    def __init__(self) -> None:
        self.requests: list[tuple[str, str]] = []
        self.routes: dict[tuple[str, str], object] = {}
        self.gates: dict[tuple[str, str], asyncio.Event] = {}

    def on(self, method: str, path: str, response) -> None:
        self.routes[(method, path)] = response

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        key = (request.method, request.url.path.removeprefix("/v1"))
        self.requests.append(key)
        gate = self.gates.pop(key, None)
        if gate is not None:
            await gate.wait()
        response = self.routes.get(key)
        if callable(response):
            response = response(request)
        if response is None:
            return httpx.Response(404, json={"error_code": "GENERIC_NOT_FOUND"})
        if isinstance(response, httpx.Response):
            return response
        return httpx.Response(200, json=response)


@pytest.fixture
def server() -> FakeServer:
    return FakeServer()


@pytest.fixture
async def api(server: FakeServer):
    settings = SyncSettings(BASE_URL="http://kolab.test/v1")
    async with KolabApiClient(
        "token-1", settings=settings, transport=httpx.MockTransport(server)
    ) as client:
        yield client


async def test_api_error_carries_error_code(server: FakeServer, api: KolabApiClient):
    server.on(
        "POST",
        "/messages/1",
        httpx.Response(
            422, json={"error_code": "CANNOT_MESSAGE_SELF", "message": "no"}
        ),
    )

    with pytest.raises(ApiError) as exc_info:
        await api.send_message(1, "hi")

    assert exc_info.value.status_code == 422
    assert exc_info.value.error_code == "CANNOT_MESSAGE_SELF"
    assert exc_info.value.retryable is False


async def test_feed_discards_stale_response(server: FakeServer, api: KolabApiClient):
    responses = iter(
        [_page([_notification(1)], unread=1), _page([_notification(1), _notification(2)], unread=2)]
    )
    server.on("GET", "/notifications", lambda _: httpx.Response(200, json=next(responses)))
    feed = NotificationFeedView(api, poll_interval=60)

    slow_gate = asyncio.Event()
    server.gates[("GET", "/notifications")] = slow_gate
    slow = asyncio.create_task(feed.refresh(silent=True))
    while not server.requests:
        await asyncio.sleep(0)
    fast_applied = await feed.refresh()
    slow_gate.set()
    slow_applied = await slow

    # request pertama ditahan dan selesai terakhir; tiketnya lebih tua
    assert fast_applied is True
    assert slow_applied is False
    assert [item.id for item in feed.items] == [1]
    assert feed.loading is False


async def test_feed_open_polls_and_close_cancels(server: FakeServer, api: KolabApiClient):
    server.on("GET", "/notifications", _page([_notification(1)], unread=1))
    feed = NotificationFeedView(api, poll_interval=0.01)

    async with feed:
        assert feed.polling is True
        assert feed.unread_count == 1
        await asyncio.sleep(0.05)

    assert feed.polling is False
    assert server.requests.count(("GET", "/notifications")) >= 2


async def test_feed_visible_refresh_shows_error(server: FakeServer, api: KolabApiClient):
    server.on(
        "GET",
        "/notifications",
        httpx.Response(503, json={"error_code": "TRANSIENT_STORE_FAILURE", "message": "coba lagi"}),
    )
    feed = NotificationFeedView(api)

    assert await feed.refresh() is False
    assert feed.error == "coba lagi"
    assert feed.loading is False


async def test_open_notification_marks_read_and_navigates(
    server: FakeServer, api: KolabApiClient
):
    server.on("GET", "/notifications", _page([_notification(7)], unread=1))
    server.on("PUT", "/notifications/7/read", _notification(7, is_read=True))
    feed = NotificationFeedView(api)
    await feed.refresh()

    target = await feed.open_notification(7)

    assert target == "/projects/10"
    assert feed.items[0].is_read is True
    assert feed.items[0].read_at is not None
    assert feed.unread_count == 0
    assert ("PUT", "/notifications/7/read") in server.requests


async def test_open_notification_tolerates_mark_read_failure(
    server: FakeServer, api: KolabApiClient
):
    server.on("GET", "/notifications", _page([_notification(7)], unread=1))
    server.on("PUT", "/notifications/7/read", httpx.Response(503, json={}))
    feed = NotificationFeedView(api)
    await feed.refresh()

    target = await feed.open_notification(7)

    assert target == "/projects/10"
    assert feed.error is None
    assert feed.items[0].is_read is False
    assert feed.unread_count == 1

    server.on("PUT", "/notifications/7/read", _notification(7, is_read=True))
    await feed.open_notification(7)

    assert server.requests.count(("PUT", "/notifications/7/read")) == 2
    assert feed.items[0].is_read is True
    assert feed.unread_count == 0


async def test_open_read_notification_skips_server(server: FakeServer, api: KolabApiClient):
    server.on("GET", "/notifications", _page([_notification(7, is_read=True)], unread=0))
    feed = NotificationFeedView(api)
    await feed.refresh()

    target = await feed.open_notification(7)

    assert target == "/projects/10"
    assert ("PUT", "/notifications/7/read") not in server.requests


async def test_mark_all_read(server: FakeServer, api: KolabApiClient):
    server.on(
        "GET", "/notifications", _page([_notification(1), _notification(2)], unread=2)
    )
    server.on("PUT", "/notifications/read-all", {"count": 2})
    feed = NotificationFeedView(api)
    await feed.refresh()

    count = await feed.mark_all_read()

    assert count == 2
    assert feed.unread_count == 0
    assert all(item.is_read for item in feed.items)


async def test_thread_send_success(server: FakeServer, api: KolabApiClient):
    thread = [_message(1, 2, 1, "halo")]
    server.on("GET", "/messages/2", lambda _: httpx.Response(200, json=thread))

    def send(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        created = _message(2, 1, 2, body["content"])
        thread.append(created)
        return httpx.Response(201, json=created)

    server.on("POST", "/messages/2", send)
    scrolls: list[int] = []
    view = MessageThreadView(
        api, user_id=1, partner_id=2, on_scroll_to_latest=lambda: scrolls.append(1)
    )
    await view.refresh()
    view.draft = "  hai juga "

    message = await view.send()

    assert message is not None and message.content == "hai juga"
    assert view.draft == ""
    assert view.pending == []
    assert [m.content for m in view.entries] == ["halo", "hai juga"]
    assert view.scroll_requests >= 2
    assert len(scrolls) == view.scroll_requests


async def test_thread_send_failure_restores_draft(server: FakeServer, api: KolabApiClient):
    server.on("GET", "/messages/2", [_message(1, 2, 1, "halo")])
    server.on(
        "POST",
        "/messages/2",
        httpx.Response(503, json={"error_code": "TRANSIENT_STORE_FAILURE", "message": "gagal"}),
    )
    view = MessageThreadView(api, user_id=1, partner_id=2)
    await view.refresh()
    view.draft = "penting"

    assert await view.send() is None
    assert view.draft == "penting"
    assert view.error == "gagal"
    assert [m.content for m in view.entries] == ["halo"]


async def test_thread_send_empty_draft_is_local_error(
    server: FakeServer, api: KolabApiClient
):
    view = MessageThreadView(api, user_id=1, partner_id=2)
    view.draft = "   "

    assert await view.send() is None
    assert view.error is not None
    assert ("POST", "/messages/2") not in server.requests


async def test_thread_set_partner_resets(server: FakeServer, api: KolabApiClient):
    server.on("GET", "/messages/2", [_message(1, 2, 1, "dari budi")])
    server.on("GET", "/messages/3", [_message(5, 3, 1, "dari citra")])
    view = MessageThreadView(api, user_id=1, partner_id=2)
    await view.refresh()

    await view.set_partner(3)

    assert [m.content for m in view.messages] == ["dari citra"]


async def test_inbox_does_not_poll_by_default(server: FakeServer, api: KolabApiClient):
    server.on(
        "GET",
        "/messages/conversations",
        [
            {
                "counterpart_id": 2,
                "counterpart": {"id": 2, "name": "Budi"},
                "last_message": _message(1, 2, 1, "halo"),
                "last_message_at": NOW,
                "direction": "received",
            }
        ],
    )
    inbox = InboxView(api)

    async with inbox:
        assert inbox.polling is False
        assert inbox.conversations[0].direction == "received"

    assert server.requests == [("GET", "/messages/conversations")]


@pytest.mark.parametrize("status_code", [201, 503])
async def test_thread_switch_partner_during_send(
    server: FakeServer, api: KolabApiClient, status_code: int
):
    server.on("GET", "/messages/2", [_message(1, 2, 1, "dari budi")])
    server.on("GET", "/messages/3", [_message(5, 3, 1, "dari citra")])
    server.on(
        "POST",
        "/messages/2",
        httpx.Response(
            status_code,
            json=_message(9, 1, 2, "untuk budi")
            if status_code == 201
            else {"error_code": "TRANSIENT_STORE_FAILURE", "message": "gagal"},
        ),
    )
    view = MessageThreadView(api, user_id=1, partner_id=2)
    await view.refresh()
    gate = asyncio.Event()
    server.gates[("POST", "/messages/2")] = gate
    view.draft = "untuk budi"

    sending = asyncio.create_task(view.send())
    while ("POST", "/messages/2") not in server.requests:
        await asyncio.sleep(0)
    await view.set_partner(3)
    gate.set()
    await sending

    assert view.partner_id == 3
    assert [m.content for m in view.entries] == ["dari citra"]
    assert view.draft == ""
    assert view.error is None
