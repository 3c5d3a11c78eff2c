"""
@description 页面生命周期事件接口
@responsibility 接收宿主内容树推送的页面移动/重命名与删除事件
"""

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from fastapi import APIRouter, HTTPException
from loguru import logger

from app.schemas.api import (
    ApiResponse,
    EventResponse,
    PageDeletedRequest,
    PageMovedRequest,
    success_response,
)
from app.services.page_events import PageMoved
from app.utils.paths import normalize_path, split_last_segment

if TYPE_CHECKING:
    from app.services.page_directory import PageDirectory
    from app.services.page_events import PageEvents

router = APIRouter()

_events: Optional["PageEvents"] = None
_directory: Optional["PageDirectory"] = None


def init_events_router(events: "PageEvents", directory: "PageDirectory"):
    global _events, _directory
    _events = events
    _directory = directory


async def _get_page_or_404(page_id: int):
    page = await _directory.get_by_id(page_id)
    if page is None:
        raise HTTPException(status_code=404, detail=f"页面 '{page_id}' 不存在")
    return page


@router.post("/events/moved", response_model=ApiResponse[EventResponse])
async def page_moved(request: PageMovedRequest):
    page = await _get_page_or_404(request.page_id)

    # 当前父路径与名称从页面当前路径拆出
    parent_path, segment = split_last_segment(normalize_path(page.path))
    event = PageMoved(
        page=page,
        previous_parent_path=request.previous_parent_path,
        previous_name=request.previous_name,
        parent_path=parent_path,
        name=segment.lstrip("/"),
        created_at=request.created_at,
        moved_at=request.moved_at or datetime.now(),
    )
    logger.debug(
        f"[page_moved] 页面 {page.id}: parent={request.previous_parent_path}, name={request.previous_name}"
    )
    await _events.emit_moved(event)

    return success_response(
        data=EventResponse(message="移动事件已处理"), message="移动事件已处理"
    )


@router.post("/events/deleted", response_model=ApiResponse[EventResponse])
async def page_deleted(request: PageDeletedRequest):
    page = await _directory.get_by_id(request.page_id)
    if page is None:
        # 宿主可能先删页面再推送事件，此时按 ID 构造最小页面对象
        page = _DeletedPage(request.page_id)
    await _events.emit_deleted(page)

    return success_response(
        data=EventResponse(message="删除事件已处理"), message="删除事件已处理"
    )


class _DeletedPage:
    """已从目录中移除的页面"""

    template = ""
    path = ""

    def __init__(self, page_id: int):
        self.id = page_id

    def is_viewable(self, viewer=None) -> bool:
        return False
