import datetime
from dataclasses import dataclass, field

import pytest

from kolab.core.domain.navigation import open_notification, resolve_target
from kolab.core.domain.notification_types import (
    GenericPayload,
    NotificationCategory,
    ProfilePayload,
    ProjectPayload,
    category_of,
    icon_of,
    parse_payload,
)


@dataclass
class LocalNotification:
    type: str
    data: dict = field(default_factory=dict)
    is_read: bool = False
    read_at: datetime.datetime | None = None


@pytest.mark.parametrize(
    ("type_", "data", "expected"),
    [
        ("COMMENT", {"link": "/community/7", "postId": 7}, "/community/7"),
        ("PROJECT_INVITE", {"link": "/custom", "projectId": 3}, "/custom"),
        ("JOIN_REQUEST", {"projectId": 12}, "/projects/12"),
        ("PROJECT_UPDATE", {"project_id": "5"}, "/projects/5"),
        ("RESOURCE_RATING", {"resourceId": 9}, "/resources/9"),
        ("CONTENT_REPORTED", {"contentUrl": "/posts/42"}, "/posts/42"),
        ("SKILL_ENDORSEMENT", {"userId": 4}, "/profile/4"),
        ("FOLLOW", {"user_id": 8}, "/profile/8"),
        ("BADGE_EARNED", {"badgeId": 1}, None),
        ("LIKE", {}, None),
    ],
)
def test_resolve_target_rules(type_, data, expected):
    assert resolve_target(type_, data) == expected


def test_ids_only_navigate_within_their_category():
    # projectId pada notifikasi profil tidak membuka halaman proyek
    assert resolve_target("SKILL_ENDORSEMENT", {"projectId": 3}) is None
    assert resolve_target("RESOURCE_RATING", {"projectId": 3}) is None
    assert resolve_target("JOIN_REQUEST", {"resourceId": 3}) is None


def test_unknown_type_is_generic_and_never_navigates_without_link():
    assert category_of("SOMETHING_NEW") is NotificationCategory.GENERIC
    assert icon_of("SOMETHING_NEW") == "bell"
    assert resolve_target("SOMETHING_NEW", {"projectId": 1}) is None
    assert resolve_target("SOMETHING_NEW", {"link": "/x"}) == "/x"


@pytest.mark.parametrize(
    "data",
    [
        None,
        [],
        "oops",
        {"projectId": "a/b"},
        {"projectId": "  "},
        {"projectId": "0"},
        {"projectId": -1},
        {"projectId": True},
        {"projectId": None},
        {"link": "   "},
    ],
)
def test_malformed_payload_degrades_to_absent(data):
    assert resolve_target("PROJECT_INVITE", data) is None


def test_parse_payload_variants():
    assert parse_payload("JOIN_REQUEST", {"projectId": 2}) == ProjectPayload(
        project_id=2
    )
    assert parse_payload("FOLLOW", {"userId": 3, "link": "/p"}) == ProfilePayload(
        link="/p", user_id=3
    )
    assert parse_payload("MESSAGE", {"link": "/messages/1"}) == GenericPayload(
        link="/messages/1"
    )


def test_open_marks_read_and_resolves_target():
    notif = LocalNotification(type="JOIN_REQUEST", data={"projectId": 12})
    now = datetime.datetime(2025, 1, 1, tzinfo=datetime.timezone.utc)

    result = open_notification(notif, now=now)

    assert result.changed is True
    assert result.target == "/projects/12"
    assert notif.is_read is True
    assert notif.read_at == now


def test_open_is_noop_for_already_read():
    read_at = datetime.datetime(2024, 6, 1, tzinfo=datetime.timezone.utc)
    notif = LocalNotification(
        type="CONTENT_REPORTED",
        data={"contentUrl": "/posts/42"},
        is_read=True,
        read_at=read_at,
    )

    result = open_notification(notif)

    assert result.changed is False
    assert result.target == "/posts/42"
    assert notif.read_at == read_at


@pytest.mark.parametrize(
    ("type_", "data", "target"),
    [
        (
            "PROJECT_INVITE",
            {"projectId": "3f2b9c1e-8a4d-4f6b-9e1a-2c7d5b8e0f13"},
            "/projects/3f2b9c1e-8a4d-4f6b-9e1a-2c7d5b8e0f13",
        ),
        ("RESOURCE_RATING", {"resource_id": " res_42 "}, "/resources/res_42"),
        ("FOLLOW", {"userId": "007"}, "/profile/7"),
    ],
)
def test_opaque_and_numeric_string_ids_navigate(type_, data, target):
    assert resolve_target(type_, data) == target
