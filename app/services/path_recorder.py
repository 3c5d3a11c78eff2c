"""
@description 路径历史记录服务
@responsibility 在页面移动/重命名时决定是否记录旧路径，在页面删除时清理其历史
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Iterable, Optional

from loguru import logger

from app.services.history_store import HistoryStore
from app.services.page_directory import Page, PageDirectory
from app.services.page_events import PageMoved
from app.utils.paths import join_path, normalize_path

if TYPE_CHECKING:
    from app.services.page_events import PageEvents

# 新建页面在此时间（秒）内的移动不记录
MINIMUM_AGE = 120


def _as_utc(value: datetime) -> datetime:
    """统一换算为 UTC（无时区的时间按本地时间处理）"""
    return value.astimezone(timezone.utc)


class PathRecorder:
    """路径历史记录器"""

    def __init__(
        self,
        store: HistoryStore,
        directory: Optional[PageDirectory] = None,
        min_age_seconds: int = MINIMUM_AGE,
        excluded_templates: Iterable[str] = ("admin",),
    ):
        self._store = store
        self._directory = directory
        self._min_age_seconds = min_age_seconds
        self._excluded_templates = set(excluded_templates)

    def register(self, events: "PageEvents") -> None:
        """订阅页面生命周期事件"""
        events.on_moved(self.record_move)
        events.on_deleted(self.record_delete)

    async def record_move(self, event: PageMoved) -> bool:
        """
        页面移动/重命名后记录旧路径

        Args:
            event: 页面移动事件

        Returns:
            True 表示写入了新的历史记录
        """
        page = event.page

        if page.template in self._excluded_templates:
            logger.debug(f"页面 {page.id} 模板 {page.template} 不记录历史")
            return False

        age = (_as_utc(event.moved_at) - _as_utc(event.created_at)).total_seconds()
        if age < self._min_age_seconds:
            logger.debug(f"页面 {page.id} 创建仅 {age:.0f} 秒，跳过历史记录")
            return False

        parent_changed = event.previous_parent_path is not None and normalize_path(
            event.previous_parent_path
        ) != normalize_path(event.parent_path)

        if not event.previous_name and not parent_changed:
            logger.debug(f"页面 {page.id} 路径未变化，跳过历史记录")
            return False

        if parent_changed:
            # 只移动未改名时沿用当前名称
            old_path = join_path(
                event.previous_parent_path, event.previous_name or event.name
            )
        else:
            old_path = join_path(event.parent_path, event.previous_name)

        inserted = await self._store.put(old_path, page.id)
        if inserted:
            logger.info(f"记录历史路径: {old_path} -> 页面 {page.id}")

        # 新路径若曾是某条历史记录，立即删除，避免通过历史解析到当前路径
        removed = await self._store.delete_by_path(page.path)
        if removed:
            logger.debug(f"删除与当前路径重叠的历史记录: {normalize_path(page.path)}")

        return inserted

    async def record_delete(self, page: Page) -> int:
        """页面删除后清理其全部历史路径"""
        removed = await self._store.delete_by_page(page.id)
        if removed:
            logger.info(f"页面 {page.id} 已删除，清理历史路径 {removed} 条")
        return removed

    async def add_path(self, page: Page, path: str) -> bool:
        """
        手动为页面添加一条历史路径（后台"添加旧地址"）

        非绝对路径、与页面当前路径相同，或当前已有其他页面位于该路径时拒绝
        """
        normalized_path = normalize_path(path)
        if not normalized_path.startswith("/"):
            logger.warning(f"历史路径必须以 / 开头，忽略: {path}")
            return False

        if normalized_path == normalize_path(page.path):
            logger.warning(f"历史路径与页面 {page.id} 当前路径相同，忽略: {path}")
            return False

        if self._directory is not None:
            existing = await self._directory.get_by_path(normalized_path)
            if existing is not None:
                logger.warning(
                    f"路径 {normalized_path} 当前属于页面 {existing.id}，不能作为历史路径"
                )
                return False

        inserted = await self._store.put(normalized_path, page.id)
        if inserted:
            logger.info(f"手动添加历史路径: {normalized_path} -> 页面 {page.id}")
        return inserted
