import logging
from datetime import datetime

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.core.deps import get_station_service
from app.schemas.arrival import StationArrivals
from app.services.station_service import StationService
from app.utils.response import error_response

logger = logging.getLogger("announcer.routers.station")

router = APIRouter(tags=["Station"])


@router.get(
    "/cathedral-parkway",
    summary="Upcoming trains at the station",
    response_model=StationArrivals,
    description=(
        "Fetches every configured realtime feed, keeps the arrivals at the target "
        "station that are still in the future and returns them sorted by minutes "
        "until arrival.\n\n"
        "A feed that cannot be fetched contributes no trains; it is not an error.\n\n"
        "Errors:\n- `500`: unexpected failure while building the list."
    ),
    responses={500: {"description": "Failed to fetch MTA data"}},
)
async def station_arrivals(service: StationService = Depends(get_station_service)):
    try:
        trains = await service.get_arrivals()
    except Exception:
        logger.exception("Error fetching MTA data")
        return JSONResponse(status_code=500, content=error_response("Failed to fetch MTA data", 500))
    return StationArrivals(
        station=service.station_name,
        timestamp=datetime.now().astimezone().isoformat(timespec="seconds"),
        trains=trains,
    )
