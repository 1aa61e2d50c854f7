import asyncio
import logging
import time
from typing import List, Optional, Protocol

import pychromecast

from app.core.errors import DeliveryError
from app.core.tts import get_all_audio_urls

logger = logging.getLogger("announcer.delivery")

# player states while a clip is still going
ACTIVE_STATES = ("BUFFERING", "PLAYING")


class DeliverySink(Protocol):
    async def deliver(self, text: str) -> None:
        ...


class CastDeliverySink:
    """Speaks text on a Google Cast speaker through the default media receiver."""

    def __init__(
        self,
        host: Optional[str],
        port: int = 8009,
        lang: str = "en",
        slow: bool = False,
        tts_host: str = "https://translate.google.com",
        timeout: float = 10.0,
        max_clip_seconds: float = 30.0,
        poll_interval: float = 0.5,
    ):
        self.host = host
        self.port = port
        self.lang = lang
        self.slow = slow
        self.tts_host = tts_host
        self.timeout = timeout
        self.max_clip_seconds = max_clip_seconds
        self.poll_interval = poll_interval

    async def deliver(self, text: str) -> None:
        if not self.host:
            logger.error("CAST_HOST not set; skipping announcement")
            return
        try:
            urls = get_all_audio_urls(text, lang=self.lang, slow=self.slow, host=self.tts_host)
        except ValueError as e:
            raise DeliveryError(f"Cannot build audio URL: {e}") from e
        await asyncio.to_thread(self._play, urls)

    def _play(self, urls: List[str]) -> None:
        logger.info(f"Connecting to cast device at {self.host}...")
        try:
            cast = pychromecast.get_chromecast_from_host(
                (self.host, self.port, None, None, None), tries=1, timeout=self.timeout
            )
        except Exception as e:
            raise DeliveryError(f"Could not reach cast device {self.host}: {e}") from e
        try:
            cast.wait(timeout=self.timeout)
            mc = cast.media_controller
            for i, url in enumerate(urls):
                if i:
                    self._wait_until_finished(mc)
                mc.play_media(url, "audio/mp3", stream_type="BUFFERED", autoplay=True)
                mc.block_until_active(timeout=self.timeout)
            logger.info(f"Media loaded, playing announcement ({len(urls)} clip(s)).")
        except Exception as e:
            raise DeliveryError(f"Error loading media on {self.host}: {e}") from e
        finally:
            cast.disconnect(timeout=self.timeout)

    def _wait_until_finished(self, mc) -> None:
        deadline = time.monotonic() + self.max_clip_seconds
        while mc.status.player_state in ACTIVE_STATES and time.monotonic() < deadline:
            time.sleep(self.poll_interval)
