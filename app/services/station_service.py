import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from app.core.delivery import DeliverySink
from app.core.errors import PipelineError
from app.core.feed_fetcher import FeedFetcher, FeedSource
from app.core.tasks import BackgroundRunner
from app.schemas.arrival import ArrivalRecord, Direction
from app.services.announcement import DEFAULT_PER_SOURCE, compose_announcement
from app.services.arrivals import aggregate_arrivals, extract_arrivals

logger = logging.getLogger("announcer.station")


@dataclass
class Announcement:
    message: str
    arrivals: List[ArrivalRecord]

    @property
    def empty(self) -> bool:
        return not self.arrivals


class StationService:
    """Fetch -> extract -> aggregate pipeline for one station, plus announcements."""

    def __init__(
        self,
        fetcher: FeedFetcher,
        sources: Sequence[FeedSource],
        station_id: str,
        station_name: str,
        sink: DeliverySink,
        runner: BackgroundRunner,
        spoken_name: Optional[str] = None,
        per_source: int = DEFAULT_PER_SOURCE,
    ):
        self.fetcher = fetcher
        self.sources = list(sources)
        self.station_id = station_id
        self.station_name = station_name
        self.spoken_name = spoken_name or station_name
        self.sink = sink
        self.runner = runner
        self.per_source = per_source if per_source >= 1 else DEFAULT_PER_SOURCE

    async def get_arrivals(self) -> List[ArrivalRecord]:
        feeds = await self.fetcher.fetch_all(self.sources)
        try:
            batches = [
                extract_arrivals(feed, self.station_id, source.tag)
                for source, feed in zip(self.sources, feeds)
            ]
            return aggregate_arrivals(batches)
        except Exception as e:
            raise PipelineError(f"Failed to build arrivals for {self.station_id}: {e}") from e

    async def announce(self, direction: Optional[Direction] = None) -> Announcement:
        """Compose the summary and start speaking it in the background.

        Returns as soon as the message is composed; playback failures are
        only logged by the runner.
        """
        arrivals = await self.get_arrivals()
        if direction is not None:
            arrivals = [a for a in arrivals if a.direction == direction]
        try:
            message = compose_announcement(
                arrivals,
                self.spoken_name,
                direction=direction,
                per_source=self.per_source,
                source_order=[s.tag for s in self.sources],
            )
        except Exception as e:
            raise PipelineError(f"Failed to compose announcement: {e}") from e

        logger.info(f"Broadcasting: {message}")
        self.runner.spawn(self.sink.deliver(message), name="announce")
        return Announcement(message=message, arrivals=arrivals)
