import logging
import math
import time
from datetime import datetime
from typing import Iterable, List, Optional

from google.transit import gtfs_realtime_pb2

from app.core.feed_fetcher import FetchFailure, FetchResult
from app.schemas.arrival import ArrivalRecord, Direction

logger = logging.getLogger("announcer.arrivals")


def classify_direction(stop_id: str) -> Direction:
    """NYCT stop ids end in N or S; any 'N' in the id means uptown."""
    return Direction.UPTOWN if "N" in stop_id else Direction.DOWNTOWN


def _stop_time(update: gtfs_realtime_pb2.TripUpdate.StopTimeUpdate) -> Optional[int]:
    if update.HasField("arrival") and update.arrival.time:
        return int(update.arrival.time)
    if update.HasField("departure") and update.departure.time:
        return int(update.departure.time)
    return None


def extract_arrivals(
    feed: FetchResult,
    station_id: str,
    source: str,
    now: Optional[float] = None,
) -> List[ArrivalRecord]:
    """Walk a feed and return the future arrivals at `station_id`.

    `now` is epoch seconds and defaults to the current time. A `FetchFailure`
    contributes no arrivals. Output order follows the feed.
    """
    if feed is None or isinstance(feed, FetchFailure):
        return []
    now = time.time() if now is None else now
    out: List[ArrivalRecord] = []

    for ent in feed.entity:
        if not ent.HasField("trip_update"):
            continue
        tu = ent.trip_update
        if not tu.stop_time_update:
            continue
        route_id = tu.trip.route_id

        for stu in tu.stop_time_update:
            if not stu.stop_id.startswith(station_id):
                continue
            eta = _stop_time(stu)
            if eta is None or eta <= now:
                continue
            out.append(
                ArrivalRecord(
                    route_id=route_id,
                    source_line=source,
                    direction=classify_direction(stu.stop_id),
                    arrival_time=datetime.fromtimestamp(eta).astimezone(),
                    # half-up, not banker's rounding
                    minutes_until_arrival=math.floor((eta - now) / 60.0 + 0.5),
                    stop_id=stu.stop_id,
                )
            )

    logger.debug(f"Extracted {len(out)} arrivals at {station_id} from {source}")
    return out


def aggregate_arrivals(batches: Iterable[List[ArrivalRecord]]) -> List[ArrivalRecord]:
    """Concatenate per-source arrivals and sort by minutes until arrival.

    `sorted` is stable, so ties keep source order and then feed order.
    """
    merged: List[ArrivalRecord] = []
    for batch in batches:
        merged.extend(batch)
    return sorted(merged, key=lambda a: a.minutes_until_arrival)
