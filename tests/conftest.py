import time
from typing import Iterable, Optional, Sequence, Tuple

import pytest
from google.transit import gtfs_realtime_pb2

# (stop_id, arrival_time, departure_time)
StopRow = Tuple[str, Optional[int], Optional[int]]


def build_feed(trips: Iterable[Tuple[str, Sequence[StopRow]]]) -> gtfs_realtime_pb2.FeedMessage:
    feed = gtfs_realtime_pb2.FeedMessage()
    feed.header.gtfs_realtime_version = "1.0"
    feed.header.timestamp = int(time.time())
    for i, (route_id, stops) in enumerate(trips):
        e = feed.entity.add()
        e.id = f"e{i}"
        tu = e.trip_update
        tu.trip.trip_id = f"trip-{i}"
        tu.trip.route_id = route_id
        for stop_id, arrival, departure in stops:
            stu = tu.stop_time_update.add()
            stu.stop_id = stop_id
            if arrival is not None:
                stu.arrival.time = arrival
            if departure is not None:
                stu.departure.time = departure
    return feed


@pytest.fixture
def make_feed():
    return build_feed


