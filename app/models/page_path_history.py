"""
@description 页面路径历史模型
@responsibility 记录页面曾经使用过的路径，用于移动/重命名后的永久重定向
"""

from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String

from app.core.database import Base


class PagePathHistory(Base):
    __tablename__ = "page_path_history"

    # 规范化后的旧路径（无末尾斜杠），同一路径只保留最早的一条
    path = Column(String(1024), primary_key=True)
    # 不设外键：页面删除时由应用层清理
    page_id = Column(Integer, nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=datetime.now, index=True)
