import asyncio

import aiohttp
import pytest

from app.core.devices import OFF, ON, DeviceRegistry, parse_power_state
from app.schemas.arrival import Direction


class FakeResponse:
    def __init__(self, status=200):
        self.status = status

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False


class FakeSession:
    def __init__(self, status=200, error=None):
        self.status = status
        self.error = error
        self.posts = []

    def post(self, url, json=None, headers=None, timeout=None):
        self.posts.append((url, json, headers))
        if self.error:
            raise self.error
        return FakeResponse(self.status)


@pytest.mark.parametrize(
    "value, expected",
    [(True, True), (False, False), ("On", True), ("off", False), (" ON ", True), ("OFF", False)],
)
def test_parse_power_state(value, expected):
    assert parse_power_state(value) is expected


def test_parse_power_state_rejects_unknown():
    with pytest.raises(ValueError):
        parse_power_state("toggle")


def test_register_and_lookup():
    registry = DeviceRegistry()
    registry.register("switch-up", Direction.UPTOWN)
    registry.register("switch-down", Direction.DOWNTOWN)
    assert registry.direction_for("switch-up") == Direction.UPTOWN
    assert registry.direction_for("switch-down") == Direction.DOWNTOWN
    assert registry.direction_for("lamp") is None
    assert registry.state_of("switch-up") == OFF


def test_reset_after_reports_off_locally():
    registry = DeviceRegistry(reset_delay=0)
    registry.register("switch-up", Direction.UPTOWN)
    registry.record_state("switch-up", ON)
    asyncio.run(registry.reset_after("switch-up"))
    assert registry.state_of("switch-up") == OFF


def test_report_state_posts_event():
    session = FakeSession()
    registry = DeviceRegistry(session=session, events_url="https://home.test/events", api_key="k")
    registry.register("switch-up", Direction.UPTOWN)
    asyncio.run(registry.report_state("switch-up", OFF))
    url, payload, headers = session.posts[0]
    assert url == "https://home.test/events"
    assert payload == {"deviceId": "switch-up", "action": "setPowerState", "value": {"state": "Off"}}
    assert headers == {"Authorization": "Bearer k"}


def test_report_state_failure_is_logged(caplog):
    session = FakeSession(error=aiohttp.ClientConnectionError("refused"))
    registry = DeviceRegistry(session=session, events_url="https://home.test/events")
    registry.register("switch-up", Direction.UPTOWN)
    asyncio.run(registry.report_state("switch-up", ON))
    assert registry.state_of("switch-up") == ON
    assert any("Failed to report state" in r.message for r in caplog.records)
