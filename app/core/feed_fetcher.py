import asyncio
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

import aiohttp
from google.transit import gtfs_realtime_pb2

logger = logging.getLogger("announcer.feed_fetcher")


@dataclass(frozen=True)
class FeedSource:
    tag: str
    url: str


@dataclass(frozen=True)
class FetchFailure:
    """Marker returned instead of a feed when retrieval or decoding fails."""
    source: FeedSource
    reason: str


FetchResult = Union[gtfs_realtime_pb2.FeedMessage, FetchFailure]


def parse_feed_sources(text: str) -> List[FeedSource]:
    """Parse `TAG=URL,TAG=URL` into feed sources, keeping the given order."""
    sources = []
    for item in text.split(","):
        item = item.strip()
        if not item:
            continue
        tag, sep, url = item.partition("=")
        if not sep or not tag.strip() or not url.strip():
            raise ValueError(f"Invalid feed source entry: {item!r}")
        sources.append(FeedSource(tag=tag.strip(), url=url.strip()))
    return sources


class FeedFetcher:
    """Retrieves GTFS-RT snapshots. Failures come back as `FetchFailure`, never raised."""

    def __init__(self, session: aiohttp.ClientSession, timeout: Optional[float] = None, api_key: Optional[str] = None):
        self._session = session
        self._timeout = aiohttp.ClientTimeout(total=timeout) if timeout else None
        self._headers = {"x-api-key": api_key} if api_key else {}

    async def fetch(self, source: FeedSource) -> FetchResult:
        try:
            async with self._session.get(source.url, headers=self._headers, timeout=self._timeout) as resp:
                if resp.status != 200:
                    logger.warning(f"Feed {source.tag} returned status {resp.status}")
                    return FetchFailure(source, f"HTTP {resp.status}")
                data = await resp.read()
        except Exception as e:
            logger.error(f"Error fetching feed from {source.url}: {e!r}")
            return FetchFailure(source, str(e) or e.__class__.__name__)

        feed = gtfs_realtime_pb2.FeedMessage()
        try:
            feed.ParseFromString(data)
        except Exception as e:
            logger.error(f"Failed to decode GTFS-RT feed {source.tag}: {e}")
            return FetchFailure(source, f"decode error: {e}")
        logger.debug(f"Fetched {len(feed.entity)} entities from {source.tag}")
        return feed

    async def fetch_all(self, sources: Sequence[FeedSource]) -> List[FetchResult]:
        """Fetch every source concurrently; results keep the order of `sources`."""
        return list(await asyncio.gather(*(self.fetch(s) for s in sources)))
