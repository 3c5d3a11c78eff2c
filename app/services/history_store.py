"""
@description 路径历史存储
@responsibility 提供旧路径 -> 页面 ID 映射的写入、去重、查询与清理
"""

from datetime import datetime
from typing import Optional

from loguru import logger
from sqlalchemy import DateTime, bindparam, delete, func, select, text
from sqlalchemy.orm import sessionmaker

from app.core.database import get_session
from app.models.page_path_history import PagePathHistory
from app.utils.paths import normalize_path


class HistoryStore:
    """路径历史存储（只追加/删除，不修改已有记录）"""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    async def put(
        self, path: str, page_id: int, created_at: Optional[datetime] = None
    ) -> bool:
        """
        写入一条历史路径（INSERT ... ON CONFLICT DO NOTHING，并发安全）

        同一路径已存在时视为无操作，以最早的记录为准

        Returns:
            True 表示写入了新记录，False 表示路径已存在
        """
        normalized_path = normalize_path(path)

        async with get_session(self._session_factory) as session:
            result = await session.execute(
                text("""
                INSERT INTO page_path_history (path, page_id, created_at)
                VALUES (:path, :page_id, :created_at)
                ON CONFLICT(path) DO NOTHING
            """).bindparams(bindparam("created_at", type_=DateTime)),
                {
                    "path": normalized_path,
                    "page_id": page_id,
                    "created_at": created_at or datetime.now(),
                },
            )
            await session.commit()
            inserted = (result.rowcount or 0) > 0

        if not inserted:
            logger.debug(f"历史路径已存在，忽略: {normalized_path}")
        return inserted

    async def delete_by_path(self, path: str) -> int:
        """删除指定路径的历史记录，返回删除数量"""
        async with get_session(self._session_factory) as session:
            result = await session.execute(
                delete(PagePathHistory).where(
                    PagePathHistory.path == normalize_path(path)
                )
            )
            await session.commit()
            return result.rowcount or 0

    async def delete_by_page(self, page_id: int) -> int:
        """删除某页面的全部历史记录，返回删除数量"""
        async with get_session(self._session_factory) as session:
            result = await session.execute(
                delete(PagePathHistory).where(PagePathHistory.page_id == page_id)
            )
            await session.commit()
            return result.rowcount or 0

    async def find_by_path(self, path: str) -> Optional[int]:
        """精确匹配查询旧路径对应的页面 ID"""
        async with get_session(self._session_factory) as session:
            result = await session.execute(
                select(PagePathHistory.page_id).where(
                    PagePathHistory.path == normalize_path(path)
                )
            )
            return result.scalar_one_or_none()

    async def get_history(self, page_id: int) -> list[PagePathHistory]:
        """按记录时间升序返回某页面的全部历史路径"""
        async with get_session(self._session_factory) as session:
            result = await session.execute(
                select(PagePathHistory)
                .where(PagePathHistory.page_id == page_id)
                .order_by(PagePathHistory.created_at, PagePathHistory.path)
            )
            return list(result.scalars().all())

    async def count(self) -> int:
        async with get_session(self._session_factory) as session:
            result = await session.execute(
                select(func.count()).select_from(PagePathHistory)
            )
            return result.scalar() or 0
