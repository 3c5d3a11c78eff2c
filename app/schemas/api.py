"""
@description API 请求/响应模型
@responsibility 定义所有 API 接口的数据结构
"""

from datetime import datetime
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, Field


class ResolveResponse(BaseModel):
    location: str = Field(..., description="页面当前路径（重定向目标）")
    page_id: int = Field(..., description="页面 ID")


class PageMovedRequest(BaseModel):
    page_id: int = Field(..., description="页面 ID")
    previous_parent_path: Optional[str] = Field(
        None, description="移动前的父路径（父页面未变化时为空）"
    )
    previous_name: Optional[str] = Field(
        None, description="重命名前的名称（名称未变化时为空）"
    )
    created_at: datetime = Field(..., description="页面创建时间")
    moved_at: Optional[datetime] = Field(None, description="事件时间，默认当前时间")


class PageDeletedRequest(BaseModel):
    page_id: int = Field(..., description="页面 ID")


class EventResponse(BaseModel):
    message: str = Field(..., description="操作消息")


class HistoryItem(BaseModel):
    path: str = Field(..., description="历史路径")
    page_id: int = Field(..., description="页面 ID")
    created_at: datetime = Field(..., description="记录时间")


class HistoryListResponse(BaseModel):
    page_id: int = Field(..., description="页面 ID")
    total: int = Field(..., description="历史路径数量")
    items: list[HistoryItem] = Field(..., description="历史路径列表")


class AddHistoryRequest(BaseModel):
    page_id: int = Field(..., description="页面 ID")
    path: str = Field(..., min_length=1, description="要添加的历史路径")


class DeleteHistoryResponse(BaseModel):
    deleted: int = Field(..., description="删除数量")


class StatusResponse(BaseModel):
    entries: int = Field(..., description="历史路径总数")
    max_segments: int = Field(..., description="最大解析段数")
    min_age_seconds: int = Field(..., description="记录历史的最小页面年龄（秒）")


T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """统一 API 响应格式"""

    code: int = Field(..., description="响应码（0=成功，非0=错误）")
    message: str = Field(..., description="响应消息")
    data: Optional[T] = Field(None, description="响应数据")


def success_response(data: T, message: str = "操作成功") -> ApiResponse[T]:
    """创建成功响应"""
    return ApiResponse(code=0, message=message, data=data)

