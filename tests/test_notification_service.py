import pytest

from kolab.services.notification_service import NotificationService
from kolab.utils import exceptions


@pytest.fixture
def service(uow) -> NotificationService:
    return NotificationService(uow)


async def _seed(service: NotificationService, recipient_id: int, n: int = 1, **kw):
    created = []
    for i in range(n):
        created.append(
            await service.create(
                recipient_id=recipient_id,
                type_=kw.get("type_", "JOIN_REQUEST"),
                title=f"title {i}",
                message=f"message {i}",
                data=kw.get("data", {"projectId": 10}),
                actor_id=kw.get("actor_id", 2),
            )
        )
    return created


async def test_mark_read_is_idempotent_for_owner(service, uow):
    [notif] = await _seed(service, 1)

    first = await service.mark_read(notif_id=notif.id, user_id=1)
    second = await service.mark_read(notif_id=notif.id, user_id=1)

    assert first.is_read is True
    assert second.is_read is True
    assert second.read_at == first.read_at


async def test_mark_read_by_non_owner_is_not_found(service):
    [notif] = await _seed(service, 1)

    with pytest.raises(exceptions.NotificationNotFoundError):
        await service.mark_read(notif_id=notif.id, user_id=2)


async def test_mark_read_missing_is_not_found(service):
    with pytest.raises(exceptions.NotificationNotFoundError):
        await service.mark_read(notif_id=999, user_id=1)


async def test_mark_all_read_then_unread_count_is_zero(service, uow):
    await _seed(service, 1, n=4)
    await _seed(service, 2, n=1)

    assert await service.unread_count(user_id=1) == 4
    assert await service.mark_all_read(user_id=1) == 4
    await uow.commit()

    assert await service.unread_count(user_id=1) == 0
    assert await service.unread_count(user_id=2) == 1


async def test_list_for_user_includes_unread_count(service):
    created = await _seed(service, 1, n=3)
    await service.mark_read(notif_id=created[0].id, user_id=1)

    page = await service.list_for_user(user_id=1, page=1, per_page=2)

    assert page.count == 3
    assert page.unread_count == 2
    assert len(page.items) == 2
    assert page.items[0].category == "project"
    assert page.items[0].icon == "user-plus"


async def test_list_for_user_read_filter(service):
    created = await _seed(service, 1, n=3)
    await service.mark_read(notif_id=created[1].id, user_id=1)

    unread = await service.list_for_user(user_id=1, is_read=False)
    read = await service.list_for_user(user_id=1, is_read=True)

    assert unread.count == 2
    assert [n.id for n in read.items] == [created[1].id]


@pytest.mark.parametrize(("page", "per_page"), [(0, 10), (1, 0), (1, 1000)])
async def test_list_for_user_rejects_bad_pagination(service, page, per_page):
    with pytest.raises(exceptions.InvalidArgumentError):
        await service.list_for_user(user_id=1, page=page, per_page=per_page)


async def test_open_notification_marks_read_and_returns_target(service):
    [notif] = await _seed(service, 1, data={"projectId": 77})

    result = await service.open_notification(notif_id=notif.id, user_id=1)

    assert result.target == "/projects/77"
    assert result.notification.is_read is True
    assert await service.unread_count(user_id=1) == 0


async def test_delete_is_owner_only(service):
    [notif] = await _seed(service, 1)

    with pytest.raises(exceptions.NotificationNotFoundError):
        await service.delete(notif_id=notif.id, user_id=2)

    await service.delete(notif_id=notif.id, user_id=1)
    assert await service.unread_count(user_id=1) == 0
