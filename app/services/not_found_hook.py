"""
@description 404 拦截
@responsibility 请求路径不存在时尝试通过路径历史找到页面的新地址
"""

from typing import Any, Optional

from loguru import logger

from app.services.page_directory import Page
from app.services.path_resolver import PathResolver


class NotFoundHook:
    def __init__(self, resolver: PathResolver):
        self._resolver = resolver

    async def find_target(
        self, page: Optional[Page], requested_path: str, viewer: Any = None
    ) -> Optional[Page]:
        """
        处理一次 404，查找应重定向到的页面

        Args:
            page: 宿主已定位到的页面（因权限或模板原因仍返回 404 时存在）
            requested_path: 请求的路径
            viewer: 当前访问者，用于可见性判断

        Returns:
            重定向目标页面，不重定向返回 None
        """
        # 页面存在说明 404 是有意为之，不做重定向
        if page is not None and page.id:
            return None

        target = await self._resolver.resolve(requested_path)
        if target is None:
            return None

        if not target.is_viewable(viewer):
            logger.debug(f"页面 {target.id} 对当前访问者不可见，不重定向")
            return None

        logger.info(f"路径历史重定向: {requested_path} -> {target.path}")
        return target

    async def handle(
        self, page: Optional[Page], requested_path: str, viewer: Any = None
    ) -> Optional[str]:
        """返回需要永久重定向到的路径，不重定向返回 None"""
        target = await self.find_target(page, requested_path, viewer)
        return target.path if target is not None else None
