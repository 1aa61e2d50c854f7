import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from app.core.deps import get_station_service
from app.schemas.arrival import Direction
from app.services.station_service import StationService

logger = logging.getLogger("announcer.routers.announce")

router = APIRouter(tags=["Announcements"])

NO_TRAINS = "No trains found."


async def _broadcast(service: StationService, direction: Optional[Direction]) -> PlainTextResponse:
    try:
        announcement = await service.announce(direction)
    except Exception:
        logger.exception("Error triggering broadcast")
        return PlainTextResponse("Error triggering broadcast", status_code=500)
    if announcement.empty:
        return PlainTextResponse(NO_TRAINS)
    return PlainTextResponse("Broadcast triggered: " + announcement.message)


@router.post(
    "/broadcast-trains",
    summary="Announce the next trains in both directions",
    response_class=PlainTextResponse,
)
async def broadcast_trains(service: StationService = Depends(get_station_service)):
    return await _broadcast(service, None)


@router.post(
    "/uptown",
    summary="Announce the next uptown trains",
    response_class=PlainTextResponse,
)
async def broadcast_uptown(service: StationService = Depends(get_station_service)):
    return await _broadcast(service, Direction.UPTOWN)


@router.post(
    "/downtown",
    summary="Announce the next downtown trains",
    response_class=PlainTextResponse,
)
async def broadcast_downtown(service: StationService = Depends(get_station_service)):
    return await _broadcast(service, Direction.DOWNTOWN)
