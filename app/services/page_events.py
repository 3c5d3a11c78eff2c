"""
@description 页面生命周期事件分发
@responsibility 宿主内容树通过显式注册的观察者列表通知页面移动/重命名与删除
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Awaitable, Callable, Optional

from loguru import logger

from app.services.page_directory import Page


@dataclass
class PageMoved:
    """页面移动/重命名事件"""

    page: Page
    # 移动前的父路径，父页面未变化时为 None
    previous_parent_path: Optional[str]
    # 重命名前的名称，名称未变化时为 None
    previous_name: Optional[str]
    parent_path: str
    name: str
    created_at: datetime
    moved_at: datetime = field(default_factory=datetime.now)


MovedHandler = Callable[[PageMoved], Awaitable[object]]
DeletedHandler = Callable[[Page], Awaitable[object]]


class PageEvents:
    """页面事件观察者列表，处理器按注册顺序依次 await"""

    def __init__(self):
        self._moved_handlers: list[MovedHandler] = []
        self._deleted_handlers: list[DeletedHandler] = []

    def on_moved(self, handler: MovedHandler) -> None:
        self._moved_handlers.append(handler)

    def on_deleted(self, handler: DeletedHandler) -> None:
        self._deleted_handlers.append(handler)

    async def emit_moved(self, event: PageMoved) -> None:
        logger.debug(
            f"页面移动事件: id={event.page.id}, 处理器数量={len(self._moved_handlers)}"
        )
        for handler in self._moved_handlers:
            await handler(event)

    async def emit_deleted(self, page: Page) -> None:
        logger.debug(
            f"页面删除事件: id={page.id}, 处理器数量={len(self._deleted_handlers)}"
        )
        for handler in self._deleted_handlers:
            await handler(page)
