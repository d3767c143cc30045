#!/usr/bin/env python3
"""
Tests for services/cover_cache.py and the background-task helpers in
services/tasks.py.

Run with:
    python -m pytest tests/test_cover_cache.py
"""
import asyncio
import os
import sys
import unittest
from unittest.mock import AsyncMock

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from services.cover_cache import CoverCache
from services.tasks import log_task_failure, spawn

COVER = "https://images.igdb.com/igdb/image/upload/t_cover_big/co1.jpg"


# ===========================================================================
# CoverCache
# ===========================================================================

class TestCoverCache(unittest.IsolatedAsyncioTestCase):

    async def test_each_url_downloaded_once(self):
        fetch = AsyncMock(return_value=b"img")
        covers = CoverCache(fetch)
        self.assertEqual(await covers.get(COVER), b"img")
        self.assertEqual(await covers.get(COVER), b"img")
        fetch.assert_awaited_once_with(COVER)

    async def test_concurrent_requests_share_one_download(self):
        gate = asyncio.get_running_loop().create_future()
        calls = []

        async def _fetch(url):
            calls.append(url)
            return await gate

        covers = CoverCache(_fetch)
        first = asyncio.ensure_future(covers.get(COVER))
        second = asyncio.ensure_future(covers.get(COVER))
        await asyncio.sleep(0)
        gate.set_result(b"img")
        self.assertEqual(await asyncio.gather(first, second), [b"img", b"img"])
        self.assertEqual(calls, [COVER])

    async def test_failed_download_is_remembered(self):
        fetch = AsyncMock(return_value=None)
        covers = CoverCache(fetch)
        self.assertIsNone(await covers.get(COVER))
        self.assertIsNone(await covers.get(COVER))
        fetch.assert_awaited_once()

    async def test_oldest_cover_evicted(self):
        fetch = AsyncMock(side_effect=lambda url: url.encode())
        covers = CoverCache(fetch, max_entries=2)
        for url in ("a", "b", "c"):
            await covers.get(url)
        await covers.get("a")
        self.assertEqual(fetch.await_count, 4)

    async def test_cancelled_caller_does_not_cancel_download(self):
        gate = asyncio.get_running_loop().create_future()

        async def _fetch(url):
            return await gate

        covers = CoverCache(_fetch)

        doomed = asyncio.ensure_future(covers.get(COVER))
        await asyncio.sleep(0)
        survivor = asyncio.ensure_future(covers.get(COVER))
        await asyncio.sleep(0)
        doomed.cancel()
        gate.set_result(b"img")
        self.assertEqual(await survivor, b"img")


# ===========================================================================
# Background tasks
# ===========================================================================

class TestSpawn(unittest.IsolatedAsyncioTestCase):

    async def test_failure_is_logged(self):
        async def _boom():
            raise RuntimeError("controller start failed")

        with self.assertLogs("services.tasks", level="ERROR") as logs:
            task = spawn(_boom())
            await asyncio.wait([task])
            await asyncio.sleep(0)
        self.assertIn("controller start failed", "\n".join(logs.output))

    async def test_success_and_cancellation_are_quiet(self):
        async def _ok():
            return 1

        with self.assertNoLogs("services.tasks", level="ERROR"):
            task = spawn(_ok())
            self.assertEqual(await task, 1)
            cancelled = spawn(asyncio.sleep(10))
            await asyncio.sleep(0)
            cancelled.cancel()
            await asyncio.wait([cancelled])
            log_task_failure(cancelled)


if __name__ == "__main__":
    unittest.main()
