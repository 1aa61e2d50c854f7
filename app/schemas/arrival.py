"""Schemas for station arrivals."""
from datetime import datetime
from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict


class Direction(str, Enum):
    UPTOWN = "Uptown"
    DOWNTOWN = "Downtown"


class ArrivalRecord(BaseModel):
    """One predicted train arrival at the target station."""
    model_config = ConfigDict(frozen=True)

    route_id: str
    source_line: str  # tag of the feed the record came from, e.g. "ACE"
    direction: Direction
    arrival_time: datetime
    minutes_until_arrival: int  # computed once at extraction time
    stop_id: str


class StationArrivals(BaseModel):
    station: str
    timestamp: str
    trains: List[ArrivalRecord] = []
