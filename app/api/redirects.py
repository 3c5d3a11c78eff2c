"""
@description 路径历史重定向接口
@responsibility 供宿主 404 处理调用，查询旧路径的新地址或直接返回永久重定向
"""

from typing import TYPE_CHECKING, Optional

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import RedirectResponse

from app.schemas.api import ApiResponse, ResolveResponse, success_response

if TYPE_CHECKING:
    from app.services.not_found_hook import NotFoundHook
    from app.services.page_directory import PageDirectory

router = APIRouter()
# 挂载在根路径下的兜底路由
fallback_router = APIRouter()

_hook: Optional["NotFoundHook"] = None
_directory: Optional["PageDirectory"] = None


def init_redirects_router(hook: "NotFoundHook", directory: "PageDirectory"):
    global _hook, _directory
    _hook = hook
    _directory = directory


@router.get("/redirects/resolve", response_model=ApiResponse[ResolveResponse])
async def resolve_redirect(
    path: str = Query(..., min_length=1, description="请求的路径"),
    page_id: Optional[int] = Query(None, description="宿主已定位到的页面 ID"),
    viewer: Optional[str] = Query(None, description="访问者标识"),
):
    page = await _directory.get_by_id(page_id) if page_id else None
    target = await _hook.find_target(page, path, viewer)
    if target is None:
        raise HTTPException(status_code=404, detail=f"路径 '{path}' 没有可用的重定向")

    return success_response(
        data=ResolveResponse(location=target.path, page_id=target.id),
        message="找到重定向地址",
    )


@fallback_router.get("/go/{path:path}")
async def redirect_permanently(path: str, viewer: Optional[str] = None):
    location = await _hook.handle(None, "/" + path, viewer)
    if location is None:
        raise HTTPException(status_code=404, detail=f"路径 '/{path}' 不存在")
    return RedirectResponse(url=location, status_code=301)
