"""
@description 配置管理模块
@responsibility 加载和验证 config.yaml，支持环境变量覆盖
"""

import os
import sys
from pathlib import Path

import yaml
from pydantic import BaseModel, Field


class DatabaseConfig(BaseModel):
    """数据库配置"""

    url: str = Field(
        default="sqlite+aiosqlite:///./db/data.db", description="SQLAlchemy 异步连接串"
    )


class RedirectsConfig(BaseModel):
    """路径历史与重定向配置"""

    min_age_seconds: int = Field(
        default=120, ge=0, description="页面创建后多少秒内的移动不记录历史"
    )
    max_segments: int = Field(
        default=10, ge=1, description="解析时最多剥离的路径段数（同时限制递归深度）"
    )
    excluded_templates: list[str] = Field(
        default_factory=lambda: ["admin"], description="不记录历史的页面模板"
    )


class LoggingConfig(BaseModel):
    """日志配置"""

    level: str = Field(default="INFO", description="日志级别")


class Config(BaseModel):
    """全局配置"""

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    redirects: RedirectsConfig = Field(default_factory=RedirectsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_config_path() -> Path:
    """获取配置文件路径"""
    # 优先使用 CONFIG_PATH 环境变量，否则使用项目根目录的 config.yaml
    if config_path_str := os.environ.get("CONFIG_PATH"):
        return Path(config_path_str)
    return Path(__file__).parent.parent.parent / "config.yaml"


def load_config() -> Config:
    """加载配置文件并应用环境变量覆盖"""
    config_path = get_config_path()

    # 配置文件不存在时生成模板并退出
    if not config_path.exists():
        _generate_config_template(config_path)
        print(f"错误: 配置文件不存在: {config_path}")
        print(f"已生成配置模板: {config_path.parent / 'config.example.yaml'}")
        sys.exit(1)

    with open(config_path) as f:
        config_data = yaml.safe_load(f) or {}

    config = Config(**config_data)

    if database_url := os.environ.get("DATABASE_URL"):
        config.database.url = database_url
    if log_level := os.environ.get("LOG_LEVEL"):
        config.logging.level = log_level

    return config


def _generate_config_template(config_path: Path) -> None:
    """生成配置模板文件"""
    template_path = config_path.parent / "config.example.yaml"

    if template_path.exists():
        return

    template_content = """# 数据库配置
database:
  # SQLAlchemy 异步连接串，可被 DATABASE_URL 环境变量覆盖
  url: "sqlite+aiosqlite:///./db/data.db"

# 路径历史与重定向配置
redirects:
  # 页面创建后多少秒内发生的移动/重命名不记录历史（新页面频繁调整，没必要记住）
  min_age_seconds: 120
  # 解析旧路径时最多剥离的路径段数，同时也是祖先递归解析的最大深度
  max_segments: 10
  # 这些模板的页面永远不记录历史（后台管理页面等）
  excluded_templates: ["admin"]

# 日志配置
logging:
  # 可被 LOG_LEVEL 环境变量覆盖
  level: "INFO"
"""

    with open(template_path, "w") as f:
        f.write(template_content)
