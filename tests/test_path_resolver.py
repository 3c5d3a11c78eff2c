"""
@description 历史路径解析测试
@responsibility 验证精确匹配、祖先匹配、多级祖先链解析及段数/递归上限
"""

from datetime import datetime, timedelta

import pytest

from app.services.page_events import PageMoved
from app.services.path_recorder import PathRecorder
from app.services.path_resolver import PathResolver
from tests.fakes import FakeDirectory, FakePage


def deep_path(root: str, count: int) -> str:
    return root + "".join(f"/s{i}" for i in range(1, count + 1))


class TestExactResolution:
    @pytest.mark.asyncio
    async def test_exact_match(self, store):
        directory = FakeDirectory([FakePage(id=5, path="/new/page/")])
        await store.put("/old/page", 5)
        resolver = PathResolver(store, directory)

        page = await resolver.resolve("/old/page")

        assert page is not None
        assert page.id == 5
        # 精确命中无需拼接路径
        assert directory.path_lookups == []

    @pytest.mark.asyncio
    async def test_trailing_slash_is_ignored(self, store):
        directory = FakeDirectory([FakePage(id=5, path="/new/page/")])
        await store.put("/old/page", 5)

        page = await PathResolver(store, directory).resolve("/old/page/")

        assert page.id == 5

    @pytest.mark.asyncio
    async def test_unknown_path(self, store):
        directory = FakeDirectory([FakePage(id=5, path="/new/page/")])
        await store.put("/old/page", 5)

        assert await PathResolver(store, directory).resolve("/nothing/here") is None

    @pytest.mark.asyncio
    async def test_root_path(self, store, directory):
        assert await PathResolver(store, directory).resolve("/") is None

    @pytest.mark.asyncio
    async def test_history_of_missing_page(self, store, directory):
        """历史记录指向的页面已不存在时解析失败"""
        await store.put("/gone", 99)
        resolver = PathResolver(store, directory)

        assert await resolver.resolve("/gone") is None
        assert await resolver.resolve("/gone/child") is None


class TestAncestorResolution:
    @pytest.mark.asyncio
    async def test_parent_renamed(self, store):
        directory = FakeDirectory(
            [
                FakePage(id=2, path="/new-parent/"),
                FakePage(id=9, path="/new-parent/child/grandchild/"),
            ]
        )
        await store.put("/old-parent", 2)

        page = await PathResolver(store, directory).resolve(
            "/old-parent/child/grandchild"
        )

        assert page.id == 9
        assert directory.path_lookups == ["/new-parent/child/grandchild"]

    @pytest.mark.asyncio
    async def test_ancestor_match_without_descendant(self, store):
        directory = FakeDirectory([FakePage(id=2, path="/new-parent/")])
        await store.put("/old-parent", 2)

        resolver = PathResolver(store, directory)

        assert await resolver.resolve("/old-parent/missing") is None

    @pytest.mark.asyncio
    async def test_grandparent_then_parent_renamed(self, store):
        """祖父页面 /a -> /b，随后父页面 /b/p -> /b/q，请求 /a/p/c"""
        directory = FakeDirectory(
            [
                FakePage(id=2, path="/b/"),
                FakePage(id=3, path="/b/q/"),
                FakePage(id=4, path="/b/q/c/"),
            ]
        )
        await store.put("/a", 2)
        await store.put("/b/p", 3)

        page = await PathResolver(store, directory).resolve("/a/p/c")

        assert page.id == 4
        assert directory.path_lookups == ["/b/p/c", "/b/q/c"]

    @pytest.mark.asyncio
    async def test_three_level_chain(self, store):
        directory = FakeDirectory(
            [
                FakePage(id=2, path="/b/"),
                FakePage(id=3, path="/b/q/"),
                FakePage(id=4, path="/b/q/y/"),
                FakePage(id=5, path="/b/q/y/leaf/"),
            ]
        )
        await store.put("/a", 2)
        await store.put("/b/p", 3)
        await store.put("/b/q/x", 4)

        page = await PathResolver(store, directory).resolve("/a/p/x/leaf")

        assert page.id == 5

    @pytest.mark.asyncio
    async def test_exact_match_of_moved_descendant(self, store):
        """页面自身的历史路径优先于祖先的历史路径"""
        directory = FakeDirectory(
            [
                FakePage(id=2, path="/new-parent/"),
                FakePage(id=7, path="/elsewhere/child/"),
            ]
        )
        await store.put("/old-parent", 2)
        await store.put("/old-parent/child", 7)

        page = await PathResolver(store, directory).resolve("/old-parent/child")

        assert page.id == 7


class TestResolutionBounds:
    @pytest.mark.asyncio
    async def test_ten_segments_resolve(self, store):
        directory = FakeDirectory(
            [
                FakePage(id=2, path="/new/"),
                FakePage(id=9, path=deep_path("/new", 9) + "/"),
            ]
        )
        await store.put("/old", 2)

        page = await PathResolver(store, directory).resolve(deep_path("/old", 9))

        assert page.id == 9

    @pytest.mark.asyncio
    async def test_eleven_segments_exceed_bound(self, store):
        directory = FakeDirectory(
            [
                FakePage(id=2, path="/new/"),
                FakePage(id=9, path=deep_path("/new", 10) + "/"),
            ]
        )
        await store.put("/old", 2)

        resolver = PathResolver(store, directory)

        assert await resolver.resolve(deep_path("/old", 10)) is None
        assert directory.path_lookups == []

    @pytest.mark.asyncio
    async def test_custom_segment_limit(self, store):
        directory = FakeDirectory(
            [FakePage(id=2, path="/new/"), FakePage(id=9, path="/new/s1/s2/")]
        )
        await store.put("/old", 2)

        short = PathResolver(store, directory, max_segments=2)
        assert await short.resolve("/old/s1/s2") is None

        longer = PathResolver(store, directory, max_segments=3)
        assert (await longer.resolve("/old/s1/s2")).id == 9

    @pytest.mark.asyncio
    async def test_recursion_depth_is_bounded(self, store):
        """互相指向的历史记录在递归上限处终止"""
        directory = FakeDirectory(
            [FakePage(id=2, path="/y/"), FakePage(id=3, path="/x/")]
        )
        await store.put("/x", 2)
        await store.put("/y", 3)

        assert await PathResolver(store, directory).resolve("/x/z") is None
        # 深度 0 到 10 各做一次精确查找
        assert len(directory.path_lookups) == 11


class TestRecordAndResolve:
    @pytest.mark.asyncio
    async def test_deleted_page_no_longer_resolves(self, store):
        page = FakePage(id=5, path="/products/new-name/")
        directory = FakeDirectory([page])
        recorder = PathRecorder(store, directory)
        resolver = PathResolver(store, directory)

        await recorder.record_move(
            PageMoved(
                page=page,
                previous_parent_path=None,
                previous_name="old-name",
                parent_path="/products/",
                name="new-name",
                created_at=datetime.now() - timedelta(days=1),
            )
        )
        assert (await resolver.resolve("/products/old-name")).id == 5

        await recorder.record_delete(page)
        del directory.pages[page.id]

        assert await resolver.resolve("/products/old-name") is None
        assert await store.count() == 0
