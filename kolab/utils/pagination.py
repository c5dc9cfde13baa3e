import math
from typing import Any

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from kolab.middleware.request import request_object


class Paginator:
    """
    Pagination offset untuk query `Select`. URL halaman sebelum/sesudah
    dibangun dari request aktif; di luar request HTTP keduanya None.
    """

    def __init__(
        self, session: AsyncSession, query: Select, page: int, per_page: int
    ):
        self.session = session
        self.query = query
        self.page = page
        self.per_page = per_page
        self.request = request_object.get(None)
        self.total_page = 0

    def _page_url(self, page: int) -> str | None:
        if self.request is None:
            return None
        return str(self.request.url.include_query_params(page=page))

    async def _count(self) -> int:
        # ORDER BY tidak berpengaruh pada jumlah, buang dari subquery
        subquery = self.query.order_by(None).subquery()
        count = await self.session.scalar(select(func.count()).select_from(subquery))
        return count or 0

    async def get_response(self) -> dict[str, Any]:
        count = await self._count()
        self.total_page = math.ceil(count / self.per_page)
        items = await self.session.scalars(
            self.query.limit(self.per_page).offset((self.page - 1) * self.per_page)
        )
        has_next = self.page < self.total_page
        # halaman sebelumnya hanya ditautkan jika masih dalam jangkauan
        has_prev = 1 < self.page <= self.total_page + 1
        return {
            "count": count,
            "items": list(items),
            "curr_page": self.page,
            "total_page": self.total_page,
            "next_page": self._page_url(self.page + 1) if has_next else None,
            "previous_page": self._page_url(self.page - 1) if has_prev else None,
            "per_page": self.per_page,
            "total_items": count,
            "has_next": has_next,
            "has_prev": has_prev,
        }


async def paginate(session: AsyncSession, query: Select, page: int, per_page: int):
    paginator = Paginator(session, query, page, per_page)
    return await paginator.get_response()
