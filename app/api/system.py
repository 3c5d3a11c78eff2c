"""
@description 系统状态接口
@responsibility 查询路径历史存储状态及当前生效的配置
"""

from typing import TYPE_CHECKING, Optional

from fastapi import APIRouter

from app.schemas.api import ApiResponse, StatusResponse, success_response

if TYPE_CHECKING:
    from app.core.config import Config
    from app.services.history_store import HistoryStore

router = APIRouter()

_store: Optional["HistoryStore"] = None
_config: Optional["Config"] = None


def init_system_router(store: "HistoryStore", config: "Config"):
    global _store, _config
    _store = store
    _config = config


@router.get("/status", response_model=ApiResponse[StatusResponse])
async def get_status():
    entries = await _store.count()

    return success_response(
        data=StatusResponse(
            entries=entries,
            max_segments=_config.redirects.max_segments,
            min_age_seconds=_config.redirects.min_age_seconds,
        ),
        message="获取系统状态成功",
    )
