import asyncio

import aiohttp
import pytest
from google.transit import gtfs_realtime_pb2

from app.core.feed_fetcher import FeedFetcher, FeedSource, FetchFailure, parse_feed_sources

ACE = FeedSource("ACE", "https://feeds.test/ace")
BDFM = FeedSource("BDFM", "https://feeds.test/bdfm")


class FakeResponse:
    def __init__(self, status=200, body=b""):
        self.status = status
        self.body = body

    async def read(self):
        return self.body

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False


class FakeSession:
    def __init__(self, responses):
        self.responses = responses
        self.calls = []

    def get(self, url, headers=None, timeout=None):
        self.calls.append((url, headers, timeout))
        r = self.responses[url]
        if isinstance(r, Exception):
            raise r
        return r


def _feed_bytes(make_feed):
    return make_feed([("A", [("A17N", 2_000_000_000, None)])]).SerializeToString()


def test_fetch_decodes_feed(make_feed):
    session = FakeSession({ACE.url: FakeResponse(body=_feed_bytes(make_feed))})
    feed = asyncio.run(FeedFetcher(session).fetch(ACE))
    assert isinstance(feed, gtfs_realtime_pb2.FeedMessage)
    assert feed.entity[0].trip_update.trip.route_id == "A"


def test_fetch_non_200_is_failure():
    session = FakeSession({ACE.url: FakeResponse(status=503)})
    result = asyncio.run(FeedFetcher(session).fetch(ACE))
    assert isinstance(result, FetchFailure)
    assert result.source == ACE
    assert "503" in result.reason


def test_fetch_transport_error_is_failure(caplog):
    session = FakeSession({ACE.url: aiohttp.ClientConnectionError("connection refused")})
    result = asyncio.run(FeedFetcher(session).fetch(ACE))
    assert isinstance(result, FetchFailure)
    assert "connection refused" in result.reason
    assert any("Error fetching feed" in r.message for r in caplog.records)


def test_fetch_timeout_is_failure():
    session = FakeSession({ACE.url: asyncio.TimeoutError()})
    result = asyncio.run(FeedFetcher(session, timeout=1).fetch(ACE))
    assert isinstance(result, FetchFailure)
    assert result.reason == "TimeoutError"


def test_fetch_decode_error_is_failure():
    # field 1, length 5, only two bytes of payload
    session = FakeSession({ACE.url: FakeResponse(body=b"\x0a\x05ab")})
    result = asyncio.run(FeedFetcher(session).fetch(ACE))
    assert isinstance(result, FetchFailure)
    assert result.reason.startswith("decode error")


def test_fetch_sends_api_key(make_feed):
    session = FakeSession({ACE.url: FakeResponse(body=_feed_bytes(make_feed))})
    asyncio.run(FeedFetcher(session, api_key="secret").fetch(ACE))
    _, headers, _ = session.calls[0]
    assert headers == {"x-api-key": "secret"}


def test_fetch_all_keeps_source_order(make_feed):
    session = FakeSession({
        ACE.url: FakeResponse(status=500),
        BDFM.url: FakeResponse(body=_feed_bytes(make_feed)),
    })
    results = asyncio.run(FeedFetcher(session).fetch_all([ACE, BDFM]))
    assert isinstance(results[0], FetchFailure)
    assert isinstance(results[1], gtfs_realtime_pb2.FeedMessage)


def test_parse_feed_sources():
    sources = parse_feed_sources("ACE=https://a.test/x?y=1, BDFM=https://b.test/z")
    assert sources == [FeedSource("ACE", "https://a.test/x?y=1"), FeedSource("BDFM", "https://b.test/z")]
    assert parse_feed_sources("") == []


def test_parse_feed_sources_rejects_bad_entries():
    with pytest.raises(ValueError):
        parse_feed_sources("ACE")
    with pytest.raises(ValueError):
        parse_feed_sources("=https://a.test")
