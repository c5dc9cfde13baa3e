from fastapi import APIRouter, Depends, Response, status
from fastapi_utils.cbv import cbv

from kolab.api.dependencies.services import get_message_service
from kolab.api.dependencies.sessions import get_uow
from kolab.api.dependencies.user import get_current_user
from kolab.db.uow.sqlalchemy import UnitOfWork
from kolab.schemas.message import ConversationRead, MessageCreate, MessageRead
from kolab.schemas.user import UserBase
from kolab.services.message_service import MessageService
from kolab.utils.exceptions import AppErrorResponse

r = router = APIRouter(tags=["Message"])


@cbv(r)
class _Message:
    user: UserBase = Depends(get_current_user)
    service: MessageService = Depends(get_message_service)
    uow: UnitOfWork = Depends(get_uow)

    @r.get(
        "/messages",
        response_model=list[MessageRead],
        status_code=status.HTTP_200_OK,
    )
    async def list_messages(self):
        """Semua pesan yang melibatkan pengguna, terbaru dulu."""
        return await self.service.list_for_user(user_id=self.user.id)

    @r.get(
        "/messages/conversations",
        response_model=list[ConversationRead],
        status_code=status.HTTP_200_OK,
    )
    async def list_conversations(self):
        """Satu entri per lawan bicara dengan pesan terakhirnya."""
        return await self.service.fetch_conversations_for(user_id=self.user.id)

    @r.get(
        "/messages/{other_user_id}",
        response_model=list[MessageRead],
        status_code=status.HTTP_200_OK,
    )
    async def get_thread(self, other_user_id: int):
        """Riwayat pesan dengan pengguna lain, lama ke baru."""
        return await self.service.fetch_between(
            user_id=self.user.id, other_user_id=other_user_id
        )

    @r.post(
        "/messages/{other_user_id}",
        response_model=MessageRead,
        status_code=status.HTTP_201_CREATED,
        responses={
            status.HTTP_404_NOT_FOUND: {
                "model": AppErrorResponse,
                "description": "Penerima tidak ditemukan. error_code : "
                "RECIPIENT_NOT_FOUND",
            },
            status.HTTP_422_UNPROCESSABLE_ENTITY: {
                "model": AppErrorResponse,
                "description": "Isi pesan tidak valid. error_code : EMPTY_MESSAGE, "
                "MESSAGE_TOO_LONG, CANNOT_MESSAGE_SELF",
            },
        },
    )
    async def send_message(self, other_user_id: int, payload: MessageCreate):
        async with self.uow:
            message = await self.service.send(
                sender_id=self.user.id,
                recipient_id=other_user_id,
                content=payload.content,
                sender_name=self.user.name,
            )
            await self.uow.commit()
        return message

    @r.delete(
        "/messages/{message_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        responses={
            status.HTTP_403_FORBIDDEN: {
                "model": AppErrorResponse,
                "description": "Hanya pengirim yang dapat menghapus pesan. "
                "error_code : MESSAGE_NOT_OWNED",
            },
            status.HTTP_404_NOT_FOUND: {
                "model": AppErrorResponse,
                "description": "Pesan tidak ditemukan. error_code : MESSAGE_NOT_FOUND",
            },
        },
    )
    async def delete_message(self, message_id: int):
        async with self.uow:
            await self.service.delete(message_id=message_id, user_id=self.user.id)
            await self.uow.commit()
        return Response(status_code=status.HTTP_204_NO_CONTENT)
