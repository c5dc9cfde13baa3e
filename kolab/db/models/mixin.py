import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, func
from sqlalchemy.orm import Mapped, declared_attr, mapped_column


def utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.UTC)


class CreateStampMixin:
    if TYPE_CHECKING:
        created_at: Mapped[datetime.datetime]
    else:

        @declared_attr
        def created_at(cls) -> Mapped[datetime.datetime]:  # noqa: N805
            # default dievaluasi per baris (callable), bukan sekali saat import
            return mapped_column(
                DateTime(True),
                nullable=False,
                default=utc_now,
                server_default=func.now(),
                index=True,
            )


class UpdateStampMixin:
    if TYPE_CHECKING:
        updated_at: Mapped[datetime.datetime]
    else:

        @declared_attr
        def updated_at(cls) -> Mapped[datetime.datetime]:  # noqa: N805
            return mapped_column(
                DateTime(True),
                nullable=False,
                default=utc_now,
                onupdate=utc_now,
            )


class TimeStampMixin(CreateStampMixin, UpdateStampMixin):
    pass
