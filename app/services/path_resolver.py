"""
@description 旧路径解析服务
@responsibility 将历史路径解析为当前负责该路径的页面，支持任意祖先层级的移动/重命名
"""

from typing import Optional

from loguru import logger

from app.services.history_store import HistoryStore
from app.services.page_directory import Page, PageDirectory
from app.utils.paths import normalize_path, split_last_segment

# 最多剥离的路径段数，同时也是递归深度上限
MAX_SEGMENTS = 10


class PathResolver:
    """历史路径解析器"""

    def __init__(
        self,
        store: HistoryStore,
        directory: PageDirectory,
        max_segments: int = MAX_SEGMENTS,
    ):
        self._store = store
        self._directory = directory
        self._max_segments = max_segments

    @property
    def max_segments(self) -> int:
        return self._max_segments

    async def resolve(self, path: str, level: int = 0) -> Optional[Page]:
        """
        解析历史路径

        先精确匹配整个路径；未命中时逐段剥离末尾，查找祖先的历史路径。
        祖先命中后用祖先当前路径拼接剥离部分，若该位置没有页面（更深层的
        祖先也被改过名），则对拼接结果递归解析。

        Args:
            path: 请求的路径
            level: 当前递归深度

        Returns:
            当前对应的页面，解析失败返回 None
        """
        candidate = normalize_path(path)
        remainder = ""
        segments = 0
        page: Optional[Page] = None

        while candidate and page is None and segments < self._max_segments:
            page_id = await self._store.find_by_path(candidate)
            if page_id is not None:
                page = await self._directory.get_by_id(page_id)
                if page is None:
                    logger.debug(f"历史路径 {candidate} 指向的页面 {page_id} 已不存在")
                    return None
            else:
                candidate, segment = split_last_segment(candidate)
                remainder = segment + remainder
            segments += 1

        if page is None:
            logger.debug(f"未找到历史路径: {path} (剥离 {segments} 段)")
            return None

        if segments <= 1:
            return page

        # 祖先命中：祖先当前路径 + 剥离部分
        rebuilt_path = normalize_path(page.path) + remainder
        target = await self._directory.get_by_path(rebuilt_path)
        if target is not None:
            logger.debug(f"通过祖先历史解析: {path} -> {rebuilt_path}")
            return target

        if level >= self._max_segments:
            logger.debug(f"递归深度达到上限 {self._max_segments}，放弃解析: {path}")
            return None

        return await self.resolve(rebuilt_path, level + 1)
