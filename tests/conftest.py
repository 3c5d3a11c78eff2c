"""
@description 测试公共夹具
@responsibility 提供内存数据库、历史存储和内存页面目录
"""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.database import Base, create_session_factory
from app.models.page_path_history import PagePathHistory  # noqa: F401
from app.services.history_store import HistoryStore
from tests.fakes import FakeDirectory


@pytest_asyncio.fixture
async def async_engine():
    """创建测试数据库引擎（使用内存 SQLite）"""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def async_session(async_engine):
    """创建异步会话工厂"""
    return create_session_factory(async_engine)


@pytest.fixture
def store(async_session):
    return HistoryStore(async_session)


@pytest.fixture
def directory():
    return FakeDirectory()
