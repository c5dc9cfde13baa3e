"""Skenario ujung-ke-ujung: event domain sampai navigasi di client."""

from httpx import AsyncClient

from kolab.core.domain.bus import drain_background, publish
from kolab.core.domain.events.moderation import ContentReportedEvent
from kolab.core.domain.events.project import JoinRequestCreatedEvent

from .conftest import auth


async def test_join_request_notifies_owner_and_opens_project(client: AsyncClient):
    # Alice (1) memiliki proyek 10, Budi (2) mengajukan permintaan bergabung
    await publish(
        JoinRequestCreatedEvent(
            actor_id=2,
            project_id=10,
            project_title="Campus Robotics",
            owner_id=1,
            request_id=501,
            requester_name="Budi Santoso",
        )
    )
    await drain_background()

    feed = (await client.get("/notifications", headers=auth(1))).json()
    [notif] = feed["items"]
    assert notif["recipient_id"] == 1
    assert notif["type"] == "JOIN_REQUEST"
    assert notif["data"]["projectId"] == 10
    assert notif["message"] == 'Budi Santoso wants to join your project "Campus Robotics"'
    assert (await client.get("/notifications", headers=auth(2))).json()["count"] == 0

    opened = await client.post(f"/notifications/{notif['id']}/open", headers=auth(1))

    assert opened.json()["target"] == "/projects/10"
    assert opened.json()["notification"]["is_read"] is True


async def test_hello_hi_conversation(client: AsyncClient):
    await client.post("/messages/2", json={"content": "hello"}, headers=auth(1))
    await client.post("/messages/1", json={"content": "hi"}, headers=auth(2))

    as_a = (await client.get("/messages/2", headers=auth(1))).json()
    as_b = (await client.get("/messages/1", headers=auth(2))).json()
    conversations = (
        await client.get("/messages/conversations", headers=auth(1))
    ).json()

    assert [m["content"] for m in as_a] == ["hello", "hi"]
    assert [m["content"] for m in as_b] == ["hello", "hi"]
    [conversation] = conversations
    assert conversation["counterpart_id"] == 2
    assert conversation["last_message"]["content"] == "hi"
    assert conversation["direction"] == "received"


async def test_content_report_reaches_moderator(client: AsyncClient):
    await publish(
        ContentReportedEvent(
            actor_id=1,
            report_id=9,
            reporter_name="Alice Putri",
            target_type="POST",
            target_id=42,
            content_title="a post",
            content_url="/posts/42",
            moderator_ids=[4, 1],
        )
    )
    await drain_background()

    [notif] = (await client.get("/notifications", headers=auth(4))).json()["items"]
    assert notif["type"] == "CONTENT_REPORTED"
    assert notif["title"] == "Content Reported"
    # pelapor yang juga moderator tidak menerima laporannya sendiri
    assert (await client.get("/notifications", headers=auth(1))).json()["count"] == 0

    opened = await client.post(f"/notifications/{notif['id']}/open", headers=auth(4))

    assert opened.json()["target"] == "/posts/42"
    count = await client.get("/notifications/unread-count", headers=auth(4))
    assert count.json() == {"count": 0}
