"""
@description 页面路径工具函数
@responsibility 路径规范化、拼接及末段拆分
"""

from typing import Optional


def normalize_path(path: Optional[str]) -> str:
    """
    规范化路径：去除末尾斜杠

    Examples:
        >>> normalize_path("/about/contact/")
        '/about/contact'

        >>> normalize_path("/")
        ''
    """
    if not path:
        return ""
    return path.rstrip("/")


def join_path(parent_path: Optional[str], name: str) -> str:
    """拼接父路径和页面名称"""
    return f"{normalize_path(parent_path)}/{name}"


def split_last_segment(path: str) -> tuple[str, str]:
    """
    在最后一个斜杠处拆分路径

    Returns:
        (剩余前缀, 被剥离的末段)，末段保留开头的斜杠，
        例如 "/a/b/c" -> ("/a/b", "/c")；没有斜杠时前缀为空
    """
    pos = path.rfind("/")
    if pos < 0:
        return "", f"/{path}"
    return path[:pos], path[pos:]
