"""
@description 页面目录接口定义
@responsibility 描述宿主内容树需要提供给路径历史模块的查询能力
"""

from typing import Any, Optional, Protocol


class Page(Protocol):
    """内容树中的页面"""

    id: int
    # 当前规范路径，由宿主内容树生成
    path: str
    template: str

    def is_viewable(self, viewer: Any = None) -> bool: ...


class PageDirectory(Protocol):
    """页面目录（由宿主内容树实现，本模块只消费）"""

    async def get_by_id(self, page_id: int) -> Optional[Page]:
        """按 ID 获取页面，不存在返回 None"""
        ...

    async def get_by_path(self, path: str) -> Optional[Page]:
        """获取当前恰好位于该路径的页面，不存在返回 None"""
        ...
