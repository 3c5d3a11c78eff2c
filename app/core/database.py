"""
@description 异步数据库连接管理
@responsibility 提供 SQLAlchemy 异步引擎、会话工厂和数据库初始化
"""

from contextlib import asynccontextmanager
from pathlib import Path

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import declarative_base, sessionmaker

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./db/data.db"

Base = declarative_base()


def create_db_engine(database_url: str = DEFAULT_DATABASE_URL) -> AsyncEngine:
    """
    创建异步引擎

    SQLite 文件库会预先创建所在目录
    """
    url = make_url(database_url)
    connect_args = {}
    if url.get_backend_name() == "sqlite":
        connect_args["check_same_thread"] = False
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    return create_async_engine(database_url, echo=False, connect_args=connect_args)


def create_session_factory(engine: AsyncEngine) -> sessionmaker:
    """创建异步会话工厂"""
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_db(engine: AsyncEngine):
    """
    初始化数据库，创建所有表
    """
    # 导入所有模型，确保在 Base.metadata 中注册
    from app.models.page_path_history import PagePathHistory

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


@asynccontextmanager
async def get_session(session_factory: sessionmaker):
    """
    异步会话上下文管理器
    """
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.close()
