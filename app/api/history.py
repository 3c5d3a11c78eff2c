"""
@description 路径历史管理接口
@responsibility 查询、手动添加和删除页面的历史路径
"""

from typing import TYPE_CHECKING, Optional

from fastapi import APIRouter, HTTPException, Query

from app.schemas.api import (
    AddHistoryRequest,
    ApiResponse,
    DeleteHistoryResponse,
    HistoryItem,
    HistoryListResponse,
    success_response,
)

if TYPE_CHECKING:
    from app.services.history_store import HistoryStore
    from app.services.page_directory import PageDirectory
    from app.services.path_recorder import PathRecorder

router = APIRouter()

_store: Optional["HistoryStore"] = None
_recorder: Optional["PathRecorder"] = None
_directory: Optional["PageDirectory"] = None


def init_history_router(
    store: "HistoryStore", recorder: "PathRecorder", directory: "PageDirectory"
):
    global _store, _recorder, _directory
    _store = store
    _recorder = recorder
    _directory = directory


@router.get("/history/{page_id}", response_model=ApiResponse[HistoryListResponse])
async def get_page_history(page_id: int):
    entries = await _store.get_history(page_id)
    items = [
        HistoryItem(path=entry.path, page_id=entry.page_id, created_at=entry.created_at)
        for entry in entries
    ]

    return success_response(
        data=HistoryListResponse(page_id=page_id, total=len(items), items=items),
        message="获取历史路径成功",
    )


@router.post("/history", response_model=ApiResponse[HistoryListResponse])
async def add_page_history(request: AddHistoryRequest):
    page = await _directory.get_by_id(request.page_id)
    if page is None:
        raise HTTPException(status_code=404, detail=f"页面 '{request.page_id}' 不存在")

    added = await _recorder.add_path(page, request.path)
    if not added:
        raise HTTPException(
            status_code=409, detail=f"路径 '{request.path}' 不能作为历史路径"
        )

    return await get_page_history(page.id)


@router.delete("/history", response_model=ApiResponse[DeleteHistoryResponse])
async def delete_history(path: str = Query(..., min_length=1, description="历史路径")):
    deleted = await _store.delete_by_path(path)
    if not deleted:
        raise HTTPException(status_code=404, detail=f"历史路径 '{path}' 不存在")

    return success_response(
        data=DeleteHistoryResponse(deleted=deleted), message="删除历史路径成功"
    )
