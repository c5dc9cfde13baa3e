from datetime import datetime
from typing import Literal

from pydantic import Field

from kolab.schemas.base import BaseSchema
from kolab.schemas.user import UserSnapshot


class MessageCreate(BaseSchema):
    # panjang maksimum dan isi kosong divalidasi di MessageService agar
    # kode kesalahannya konsisten (EMPTY_MESSAGE, MESSAGE_TOO_LONG)
    content: str = Field(..., description="Isi pesan")


class MessageRead(BaseSchema):
    id: int
    sender_id: int
    recipient_id: int
    content: str
    created_at: datetime

    sender: UserSnapshot | None = Field(
        None, description="Data tampilan pengirim dari direktori pengguna"
    )
    recipient: UserSnapshot | None = Field(
        None, description="Data tampilan penerima dari direktori pengguna"
    )


class ConversationRead(BaseSchema):
    counterpart_id: int = Field(..., description="ID lawan bicara")
    counterpart: UserSnapshot | None = Field(
        None, description="Data tampilan lawan bicara dari direktori pengguna"
    )
    last_message: MessageRead
    last_message_at: datetime
    direction: Literal["sent", "received"]
