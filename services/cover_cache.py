"""
services/cover_cache.py – Session cache of downloaded cover images.

Cards are rebuilt on every render, so the same cover URL is asked for again
and again. Each URL is downloaded once; concurrent requests for it share the
one download, and the result (including a failed download, stored as None)
is kept for the rest of the session.
"""

import asyncio
import logging
from collections import OrderedDict
from typing import Awaitable, Callable, Dict, Optional

logger = logging.getLogger(__name__)

# Oldest entries are evicted beyond this many covers.
COVER_CACHE_SIZE: int = 256

ImageFetcher = Callable[[str], Awaitable[Optional[bytes]]]


class CoverCache:
    """
    Parameters
    ----------
    fetch       : Coroutine function returning the image bytes for a URL, or
                  None when it cannot be downloaded (``ApiGateway.fetch_image``).
    max_entries : Number of covers kept in memory.
    """

    def __init__(self, fetch: ImageFetcher, max_entries: int = COVER_CACHE_SIZE) -> None:
        self._fetch = fetch
        self._max_entries = max_entries
        self._images: "OrderedDict[str, Optional[bytes]]" = OrderedDict()
        self._pending: Dict[str, asyncio.Future] = {}

    async def get(self, url: str) -> Optional[bytes]:
        if url in self._images:
            self._images.move_to_end(url)
            return self._images[url]

        task = self._pending.get(url)
        if task is None:
            task = asyncio.ensure_future(self._download(url))
            self._pending[url] = task
        # One caller going away must not cancel the download for the others.
        return await asyncio.shield(task)

    async def _download(self, url: str) -> Optional[bytes]:
        try:
            data = await self._fetch(url)
        finally:
            self._pending.pop(url, None)

        self._images[url] = data
        while len(self._images) > self._max_entries:
            evicted, _ = self._images.popitem(last=False)
            logger.debug("Evicted cover %s", evicted)
        return data
