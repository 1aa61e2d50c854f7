from typing import Dict, List, Optional, Sequence

from app.schemas.arrival import ArrivalRecord, Direction

DEFAULT_PER_SOURCE = 2


def empty_announcement(station_name: str, direction: Optional[Direction] = None) -> str:
    if direction is None:
        return f"No upcoming trains found for {station_name}."
    return f"No upcoming {direction.value.lower()} trains found for {station_name}."


def render_arrival(arrival: ArrivalRecord) -> str:
    return f"{arrival.direction.value} {arrival.route_id} train in {arrival.minutes_until_arrival} mins"


def compose_announcement(
    arrivals: Sequence[ArrivalRecord],
    station_name: str,
    direction: Optional[Direction] = None,
    per_source: int = DEFAULT_PER_SOURCE,
    source_order: Optional[Sequence[str]] = None,
) -> str:
    """Build the spoken summary for an already sorted list of arrivals.

    Arrivals are filtered by `direction` (all when None), grouped by source
    feed and capped at `per_source` entries per group. Groups follow
    `source_order` first, then the order they first appear in.
    """
    if per_source < 1:
        per_source = DEFAULT_PER_SOURCE
    matching = [a for a in arrivals if direction is None or a.direction == direction]

    groups: Dict[str, List[ArrivalRecord]] = {tag: [] for tag in (source_order or [])}
    for a in matching:
        groups.setdefault(a.source_line, []).append(a)

    parts = []
    for records in groups.values():
        picked = records[:per_source]
        if picked:
            parts.append(", ".join(render_arrival(a) for a in picked))

    if not parts:
        return empty_announcement(station_name, direction)

    if direction is None:
        prefix = f"Next trains at {station_name}: "
    else:
        prefix = f"Next {direction.value.lower()} trains at {station_name}: "
    return prefix + " and ".join(parts)
