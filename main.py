"""
@description FastAPI 应用入口
@responsibility 组装路径历史服务：初始化数据库、注册事件处理器、集成路由
"""

import sys
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api import events, history, redirects, system
from app.api.events import init_events_router
from app.api.history import init_history_router
from app.api.redirects import init_redirects_router
from app.api.system import init_system_router
from app.core.config import Config, load_config
from app.core.database import create_db_engine, create_session_factory, init_db
from app.schemas.api import ApiResponse, success_response
from app.services.history_store import HistoryStore
from app.services.not_found_hook import NotFoundHook
from app.services.page_directory import PageDirectory
from app.services.page_events import PageEvents
from app.services.path_recorder import PathRecorder
from app.services.path_resolver import PathResolver


def setup_logging(level: str) -> None:
    """重新配置 loguru 输出级别"""
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


def create_app(
    directory: PageDirectory,
    config: Optional[Config] = None,
    page_events: Optional[PageEvents] = None,
) -> FastAPI:
    """
    创建应用

    Args:
        directory: 宿主内容树提供的页面目录
        config: 配置，默认从 config.yaml 加载
        page_events: 宿主内容树使用的事件分发器，默认新建
    """
    config = config or load_config()
    setup_logging(config.logging.level)

    engine = create_db_engine(config.database.url)
    store = HistoryStore(create_session_factory(engine))
    recorder = PathRecorder(
        store,
        directory,
        min_age_seconds=config.redirects.min_age_seconds,
        excluded_templates=config.redirects.excluded_templates,
    )
    resolver = PathResolver(store, directory, max_segments=config.redirects.max_segments)
    hook = NotFoundHook(resolver)

    page_events = page_events or PageEvents()
    recorder.register(page_events)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("应用启动中...")

        await init_db(engine)
        logger.info("数据库初始化完成")

        yield

        await engine.dispose()
        logger.info("应用已关闭")

    app = FastAPI(
        title="页面路径历史",
        description="记录页面移动/重命名前的路径，旧地址永久重定向到新地址",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.engine = engine
    app.state.history_store = store
    app.state.page_events = page_events
    app.state.not_found_hook = hook

    init_redirects_router(hook, directory)
    init_events_router(page_events, directory)
    init_history_router(store, recorder, directory)
    init_system_router(store, config)

    # 全局异常处理器
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """处理 HTTP 异常"""
        logger.info(f"HTTP 异常处理器被调用: {exc.status_code} - {exc.detail}")
        return JSONResponse(
            status_code=exc.status_code,
            content=ApiResponse(
                code=exc.status_code, message=exc.detail, data=None
            ).model_dump(),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ):
        """处理请求参数验证错误"""
        logger.info(f"验证错误处理器被调用: {len(exc.errors())} 个错误")
        errors = [
            {"loc": list(error["loc"]), "msg": error["msg"], "type": error["type"]}
            for error in exc.errors()
        ]
        return JSONResponse(
            status_code=422,
            content=ApiResponse(
                code=422, message="请求参数验证失败", data={"errors": errors}
            ).model_dump(),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """处理通用异常"""
        logger.info(f"通用异常处理器被调用: {type(exc).__name__}")
        logger.exception(f"服务器内部错误: {str(exc)}")
        return JSONResponse(
            status_code=500,
            content=ApiResponse(
                code=500, message="服务器内部错误", data=None
            ).model_dump(),
        )

    app.include_router(redirects.router, prefix="/api", tags=["redirects"])
    app.include_router(events.router, prefix="/api", tags=["events"])
    app.include_router(history.router, prefix="/api", tags=["history"])
    app.include_router(system.router, prefix="/api", tags=["system"])
    app.include_router(redirects.fallback_router, tags=["redirects"])

    @app.get("/health")
    async def health_check():
        return success_response(data={"status": "healthy"}, message="健康检查通过")

    return app
