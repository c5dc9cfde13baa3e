from __future__ import annotations

import logging

from kolab.core.config import settings
from kolab.core.domain.events.message import MessageSentEvent
from kolab.db.models.message_model import Message
from kolab.db.uow.sqlalchemy import UnitOfWork
from kolab.schemas.message import ConversationRead, MessageRead
from kolab.schemas.user import UserBase, UserSnapshot
from kolab.services.user_directory_service import UserDirectoryService
from kolab.utils import exceptions
from kolab.utils.common import ErrorCode

logger = logging.getLogger(__name__)


class MessageService:
    def __init__(self, uow: UnitOfWork, directory: UserDirectoryService) -> None:
        self.uow = uow
        self.directory = directory

    def _validate_content(self, content: str | None) -> str:
        text = (content or "").strip()
        if not text:
            raise exceptions.InvalidArgumentError(
                "Isi pesan tidak boleh kosong", ErrorCode.EMPTY_MESSAGE
            )
        if len(text) > settings.MESSAGE_MAX_LENGTH:
            raise exceptions.InvalidArgumentError(
                f"Isi pesan maksimal {settings.MESSAGE_MAX_LENGTH} karakter",
                ErrorCode.MESSAGE_TOO_LONG,
            )
        return text

    @staticmethod
    def _snapshot(user: UserBase | None) -> UserSnapshot | None:
        if user is None:
            return None
        return UserSnapshot(id=user.id, name=user.name, avatar_url=user.avatar_url)

    async def _hydrate(self, messages: list[Message]) -> list[MessageRead]:
        """Gabungkan data tampilan pengirim dan penerima saat dibaca."""
        if not messages:
            return []
        ids = [uid for m in messages for uid in (m.sender_id, m.recipient_id)]
        users = await self.directory.list_user_by_ids(ids)
        return [
            MessageRead.model_validate(message).model_copy(
                update={
                    "sender": self._snapshot(users.get(message.sender_id)),
                    "recipient": self._snapshot(users.get(message.recipient_id)),
                }
            )
            for message in messages
        ]

    async def send(
        self,
        *,
        sender_id: int,
        recipient_id: int,
        content: str,
        sender_name: str | None = None,
    ) -> MessageRead:
        """
        Kirim pesan langsung. Validasi dilakukan sebelum menyentuh database
        sehingga pesan yang ditolak tidak pernah tersimpan.

        Raises:
            InvalidArgumentError: isi kosong, terlalu panjang, atau mengirim ke
                diri sendiri.
            RecipientNotFoundError: penerima tidak dikenal direktori pengguna.
            httpx.HTTPError: direktori pengguna tidak dapat dihubungi.
        """
        text = self._validate_content(content)
        if sender_id == recipient_id:
            raise exceptions.InvalidArgumentError(
                "Tidak dapat mengirim pesan ke diri sendiri",
                ErrorCode.CANNOT_MESSAGE_SELF,
            )
        if not await self.directory.exists(recipient_id):
            raise exceptions.RecipientNotFoundError

        message = await self.uow.message_repo.create(
            sender_id=sender_id, recipient_id=recipient_id, content=text
        )
        self.uow.add_event(
            MessageSentEvent(
                actor_id=sender_id,
                message_id=message.id,
                sender_id=sender_id,
                recipient_id=recipient_id,
                sender_name=sender_name,
            )
        )
        logger.info("User %s sent message %s to %s", sender_id, message.id, recipient_id)
        [hydrated] = await self._hydrate([message])
        return hydrated

    async def fetch_between(
        self, *, user_id: int, other_user_id: int
    ) -> list[MessageRead]:
        messages = await self.uow.message_repo.list_between(
            user_a=user_id, user_b=other_user_id
        )
        return await self._hydrate(messages)

    async def list_for_user(self, *, user_id: int) -> list[MessageRead]:
        messages = await self.uow.message_repo.list_for_user(user_id=user_id)
        return await self._hydrate(messages)

    async def fetch_conversations_for(self, *, user_id: int) -> list[ConversationRead]:
        """
        Satu entri per lawan bicara berisi pesan terakhir, diurutkan dari
        percakapan paling baru. Data tampilan lawan bicara diambil dari
        direktori bila tersedia.
        """
        latest = await self.uow.message_repo.list_latest_per_counterpart(
            user_id=user_id
        )
        conversations: list[ConversationRead] = []
        for message in await self._hydrate(latest):
            sent = message.sender_id == user_id
            conversations.append(
                ConversationRead(
                    counterpart_id=message.recipient_id if sent else message.sender_id,
                    counterpart=message.recipient if sent else message.sender,
                    last_message=message,
                    last_message_at=message.created_at,
                    direction="sent" if sent else "received",
                )
            )
        return conversations

    async def delete(self, *, message_id: int, user_id: int) -> None:
        message = await self.uow.message_repo.get_by_id(message_id=message_id)
        if message is None or user_id not in (message.sender_id, message.recipient_id):
            raise exceptions.MessageNotFoundError
        if message.sender_id != user_id:
            raise exceptions.ForbiddenError(
                "Hanya pengirim yang dapat menghapus pesan", ErrorCode.MESSAGE_NOT_OWNED
            )
        await self.uow.message_repo.delete(message=message)
