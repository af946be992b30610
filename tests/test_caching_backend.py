"""
Test suite for CachingFileSystemBackend with focus on concurrent access patterns.

Tests the caching layer's ability to:
1. Prevent duplicate concurrent listings
2. Share results between waiting tasks
3. Propagate listing failures to every waiter
4. Hand a cancelled listing over to its waiters
5. Keep metadata lookups uncached
"""

import asyncio

import pytest

from walkerlib.aio import Walker, EventKind, CachingFileSystemBackend
from walkerlib.testing import FakeFileSystemBackend, EventRecorder


@pytest.fixture
def base_fs():
    fs = FakeFileSystemBackend()
    fs.add_dir('/c')
    fs.add_file('/c/one')
    fs.add_file('/c/two')
    fs.add_file('/c/sub/three')
    return fs


class TestCachingBackend:

    @pytest.mark.asyncio
    async def test_second_listing_is_cached(self, base_fs):
        cached = CachingFileSystemBackend(base_fs)

        first = await cached.listdir('/c')
        second = await cached.listdir('/c')

        assert first == second == ['one', 'two', 'sub']
        assert base_fs.listdir_calls == ['/c']
        stats = cached.get_cache_stats()
        assert stats['cache_hits'] == 1
        assert stats['cache_misses'] == 1
        assert stats['hit_rate'] == 0.5

    @pytest.mark.asyncio
    async def test_returned_lists_are_copies(self, base_fs):
        cached = CachingFileSystemBackend(base_fs)

        names = await cached.listdir('/c')
        names.append('mutated')

        assert 'mutated' not in await cached.listdir('/c')

    @pytest.mark.asyncio
    async def test_concurrent_listings_share_one_call(self, base_fs):
        base_fs.set_delay('/c', 0.05)
        cached = CachingFileSystemBackend(base_fs)

        results = await asyncio.gather(*(cached.listdir('/c') for _ in range(5)))

        assert all(r == ['one', 'two', 'sub'] for r in results)
        assert base_fs.listdir_calls == ['/c']
        assert cached.concurrent_waits == 4

    @pytest.mark.asyncio
    async def test_failure_reaches_every_waiter(self, base_fs):
        base_fs.set_delay('/c', 0.05)
        base_fs.fail_listdir('/c', PermissionError(13, 'Permission denied'))
        cached = CachingFileSystemBackend(base_fs)

        results = await asyncio.gather(
            cached.listdir('/c'), cached.listdir('/c'), return_exceptions=True
        )

        assert all(isinstance(r, PermissionError) for r in results)
        assert cached.get_cache_stats()['cache_size'] == 0

    @pytest.mark.asyncio
    async def test_cancelled_owner_hands_listing_to_waiter(self, base_fs):
        base_fs.set_delay('/c', 0.05)
        cached = CachingFileSystemBackend(base_fs)

        owner = asyncio.create_task(cached.listdir('/c'))
        await asyncio.sleep(0.01)
        waiter = asyncio.create_task(cached.listdir('/c'))
        await asyncio.sleep(0.01)
        owner.cancel()

        assert await asyncio.wait_for(waiter, timeout=1) == ['one', 'two', 'sub']
        with pytest.raises(asyncio.CancelledError):
            await owner
        assert base_fs.listdir_calls == ['/c', '/c']
        assert cached._scans_in_progress == {}

    @pytest.mark.asyncio
    async def test_cancelled_waiter_leaves_owner_running(self, base_fs):
        base_fs.set_delay('/c', 0.05)
        cached = CachingFileSystemBackend(base_fs)

        owner = asyncio.create_task(cached.listdir('/c'))
        await asyncio.sleep(0.01)
        waiter = asyncio.create_task(cached.listdir('/c'))
        await asyncio.sleep(0.01)
        waiter.cancel()

        with pytest.raises(asyncio.CancelledError):
            await waiter
        assert await owner == ['one', 'two', 'sub']
        assert base_fs.listdir_calls == ['/c']

    @pytest.mark.asyncio
    async def test_lstat_not_cached(self, base_fs):
        cached = CachingFileSystemBackend(base_fs)

        await cached.lstat('/c/one')
        await cached.lstat('/c/one')

        assert base_fs.lstat_calls == ['/c/one', '/c/one']

    @pytest.mark.asyncio
    async def test_invalidate_and_clear(self, base_fs):
        cached = CachingFileSystemBackend(base_fs)
        await cached.listdir('/c')

        cached.invalidate('/c')
        await cached.listdir('/c')
        assert base_fs.listdir_calls == ['/c', '/c']

        cached.clear_cache()
        assert cached.get_cache_stats()['cache_size'] == 0
        assert cached.cache_misses == 0

    @pytest.mark.asyncio
    async def test_repeated_walks_reuse_listings(self, base_fs):
        cached = CachingFileSystemBackend(base_fs)

        for _ in range(2):
            w = Walker('/c', backend=cached)
            recorder = EventRecorder().attach(w)
            await w.join()
            assert recorder.count(EventKind.ENTRY) == 5

        assert sorted(base_fs.listdir_calls) == ['/c', '/c/sub']
        stats = await cached.get_stats()
        assert stats['cache_hits'] == 2
        assert stats['lstat_calls'] == 10

    @pytest.mark.asyncio
    async def test_ttl_expiry(self, base_fs):
        cached = CachingFileSystemBackend(base_fs, ttl=0.01)
        await cached.listdir('/c')
        await asyncio.sleep(0.05)
        await cached.listdir('/c')

        assert base_fs.listdir_calls == ['/c', '/c']
