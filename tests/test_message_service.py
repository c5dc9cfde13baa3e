import datetime

import pytest
from sqlalchemy import func, select

from kolab.db.base import async_session_maker
from kolab.db.models.message_model import Message
from kolab.db.models.notification_model import Notification
from kolab.services.message_service import MessageService
from kolab.utils import exceptions
from kolab.utils.common import ErrorCode


@pytest.fixture
def service(uow, directory) -> MessageService:
    return MessageService(uow, directory)


async def _count(model) -> int:
    async with async_session_maker() as session:
        return await session.scalar(select(func.count()).select_from(model))


async def test_send_trims_and_stores(service, uow):
    message = await service.send(sender_id=1, recipient_id=2, content="  hello  ")
    await uow.commit()

    assert message.content == "hello"
    assert message.created_at is not None
    assert await _count(Message) == 1


@pytest.mark.parametrize("content", ["", "   ", "\n\t"])
async def test_empty_content_is_rejected_without_row(service, content):
    with pytest.raises(exceptions.InvalidArgumentError) as exc_info:
        await service.send(sender_id=1, recipient_id=2, content=content)

    assert exc_info.value.error_code == ErrorCode.EMPTY_MESSAGE
    assert await _count(Message) == 0


async def test_too_long_content_is_rejected(service):
    with pytest.raises(exceptions.InvalidArgumentError) as exc_info:
        await service.send(sender_id=1, recipient_id=2, content="x" * 1001)

    assert exc_info.value.error_code == ErrorCode.MESSAGE_TOO_LONG


async def test_exactly_max_length_is_accepted(service):
    message = await service.send(sender_id=1, recipient_id=2, content="x" * 1000)
    assert len(message.content) == 1000


async def test_self_message_is_rejected(service):
    with pytest.raises(exceptions.InvalidArgumentError) as exc_info:
        await service.send(sender_id=1, recipient_id=1, content="me")

    assert exc_info.value.error_code == ErrorCode.CANNOT_MESSAGE_SELF


async def test_unknown_recipient_is_not_found(service):
    with pytest.raises(exceptions.RecipientNotFoundError):
        await service.send(sender_id=1, recipient_id=999, content="halo")

    assert await _count(Message) == 0


async def test_thread_order_is_identical_for_both_sides(service, uow):
    for sender, recipient, text in [
        (1, 2, "m1"),
        (2, 1, "m2"),
        (1, 2, "m3"),
        (2, 1, "m4"),
    ]:
        await service.send(sender_id=sender, recipient_id=recipient, content=text)
    await service.send(sender_id=1, recipient_id=3, content="elsewhere")
    await uow.commit()

    as_a = await service.fetch_between(user_id=1, other_user_id=2)
    as_b = await service.fetch_between(user_id=2, other_user_id=1)

    assert [m.content for m in as_a] == ["m1", "m2", "m3", "m4"]
    assert [m.id for m in as_a] == [m.id for m in as_b]


async def test_thread_uses_id_to_break_timestamp_ties(service, uow):
    first = await service.send(sender_id=1, recipient_id=2, content="first")
    second = await service.send(sender_id=2, recipient_id=1, content="second")
    tie = datetime.datetime(2025, 5, 5, tzinfo=datetime.timezone.utc)
    for sent in (first, second):
        row = await uow.message_repo.get_by_id(message_id=sent.id)
        row.created_at = tie
    await uow.commit()

    thread = await service.fetch_between(user_id=1, other_user_id=2)

    assert [m.content for m in thread] == ["first", "second"]


async def test_conversations_one_entry_per_counterpart(service, uow):
    await service.send(sender_id=1, recipient_id=2, content="to budi 1")
    await service.send(sender_id=3, recipient_id=1, content="from citra")
    await service.send(sender_id=2, recipient_id=1, content="from budi")
    await service.send(sender_id=2, recipient_id=3, content="not involving alice")
    await uow.commit()

    conversations = await service.fetch_conversations_for(user_id=1)

    assert [c.counterpart_id for c in conversations] == [2, 3]
    budi, citra = conversations
    assert budi.last_message.content == "from budi"
    assert budi.direction == "received"
    assert budi.counterpart is not None
    assert budi.counterpart.name == "Budi Santoso"
    assert citra.last_message.content == "from citra"


async def test_conversation_direction_sent(service, uow):
    await service.send(sender_id=2, recipient_id=1, content="hi alice")
    await service.send(sender_id=1, recipient_id=2, content="hi budi")
    await uow.commit()

    [conversation] = await service.fetch_conversations_for(user_id=1)

    assert conversation.direction == "sent"
    assert conversation.last_message.content == "hi budi"


async def test_list_for_user_is_newest_first(service, uow):
    await service.send(sender_id=1, recipient_id=2, content="old")
    await service.send(sender_id=3, recipient_id=1, content="new")
    await service.send(sender_id=2, recipient_id=3, content="unrelated")
    await uow.commit()

    messages = await service.list_for_user(user_id=1)

    assert [m.content for m in messages] == ["new", "old"]


async def test_delete_only_by_sender(service, uow):
    message = await service.send(sender_id=1, recipient_id=2, content="oops")
    await uow.commit()

    with pytest.raises(exceptions.ForbiddenError):
        await service.delete(message_id=message.id, user_id=2)
    with pytest.raises(exceptions.MessageNotFoundError):
        await service.delete(message_id=message.id, user_id=3)

    await service.delete(message_id=message.id, user_id=1)
    await uow.commit()
    assert await _count(Message) == 0


async def test_send_publishes_message_notification(service, uow):
    from kolab.core.domain.bus import drain_background

    message = await service.send(
        sender_id=1, recipient_id=2, content="ping", sender_name="Alice Putri"
    )
    await uow.commit()
    await drain_background()

    async with async_session_maker() as session:
        [notif] = (await session.execute(select(Notification))).scalars().all()
    assert notif.recipient_id == 2
    assert notif.type == "MESSAGE"
    assert notif.data["link"] == "/messages/1"
    assert notif.data["messageId"] == message.id


async def test_messages_carry_sender_and_recipient_snapshots(service, uow):
    sent = await service.send(sender_id=1, recipient_id=2, content="halo")
    await service.send(sender_id=2, recipient_id=1, content="hai")
    await uow.commit()

    thread = await service.fetch_between(user_id=1, other_user_id=2)
    listed = await service.list_for_user(user_id=2)

    assert sent.sender.name == "Alice Putri"
    assert sent.recipient.name == "Budi Santoso"
    assert [(m.sender.id, m.recipient.id) for m in thread] == [(1, 2), (2, 1)]
    assert thread[1].sender.name == "Budi Santoso"
    assert thread[0].sender.avatar_url is not None
    assert {m.recipient.name for m in listed} == {"Alice Putri", "Budi Santoso"}


async def test_snapshot_is_none_for_user_missing_from_directory(
    service, uow, directory_client
):
    await service.send(sender_id=1, recipient_id=2, content="halo")
    await uow.commit()
    directory_client.users = {1: directory_client.users[1]}

    [message] = await service.fetch_between(user_id=1, other_user_id=2)

    assert message.sender.name == "Alice Putri"
    assert message.recipient is None
