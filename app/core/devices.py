import asyncio
import logging
from typing import Dict, Optional, Union

import aiohttp

from app.schemas.arrival import Direction

logger = logging.getLogger("announcer.devices")

ON = "On"
OFF = "Off"


def parse_power_state(value: Union[bool, str]) -> bool:
    """Accept True/False or "On"/"Off" (any case) and return True for On."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        v = value.strip().lower()
        if v == "on":
            return True
        if v == "off":
            return False
    raise ValueError(f"Unsupported power state: {value!r}")


class DeviceRegistry:
    """Direction-bound push-button switches and their last reported state.

    When `events_url` is configured, state changes are also reported back to
    the smart-home platform so the switch flips in its app.
    """

    def __init__(
        self,
        session: Optional[aiohttp.ClientSession] = None,
        events_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: float = 10.0,
        reset_delay: float = 2.0,
    ):
        self._session = session
        self._events_url = events_url
        self._api_key = api_key
        self._timeout = timeout
        self.reset_delay = reset_delay
        self._directions: Dict[str, Direction] = {}
        self._states: Dict[str, str] = {}

    def register(self, device_id: str, direction: Direction) -> None:
        self._directions[device_id] = direction
        self._states.setdefault(device_id, OFF)
        logger.info(f"Registered {direction.value} switch {device_id}")

    def direction_for(self, device_id: str) -> Optional[Direction]:
        return self._directions.get(device_id)

    def state_of(self, device_id: str) -> Optional[str]:
        return self._states.get(device_id)

    def record_state(self, device_id: str, state: str) -> None:
        self._states[device_id] = state

    async def report_state(self, device_id: str, state: str) -> None:
        self.record_state(device_id, state)
        if not (self._events_url and self._session):
            logger.debug(f"Switch {device_id} state -> {state} (local only)")
            return
        payload = {"deviceId": device_id, "action": "setPowerState", "value": {"state": state}}
        headers = {"Authorization": f"Bearer {self._api_key}"} if self._api_key else {}
        try:
            async with self._session.post(
                self._events_url, json=payload, headers=headers, timeout=aiohttp.ClientTimeout(total=self._timeout)
            ) as resp:
                if resp.status >= 400:
                    logger.warning(f"Reporting state of {device_id} returned status {resp.status}")
                else:
                    logger.info(f"Reported switch {device_id} state {state}")
        except Exception as e:
            logger.error(f"Failed to report state of {device_id}: {e!r}")

    async def reset_after(self, device_id: str, delay: Optional[float] = None) -> None:
        """Flip the switch back to Off after `delay` seconds, like a momentary button."""
        await asyncio.sleep(self.reset_delay if delay is None else delay)
        await self.report_state(device_id, OFF)
