import logging

from fastapi import APIRouter, Depends, HTTPException

from app.core.deps import get_device_registry, get_runner, get_station_service
from app.core.devices import OFF, ON, DeviceRegistry, parse_power_state
from app.core.tasks import BackgroundRunner
from app.schemas.response import Envelope
from app.schemas.webhook import PowerStateEvent, WebhookResult
from app.services.station_service import StationService
from app.utils.response import success_response

logger = logging.getLogger("announcer.routers.webhook")

router = APIRouter(prefix="/webhooks", tags=["Webhooks"])


@router.post(
    "/power-state",
    summary="Smart-home switch power state changed",
    response_model=Envelope[WebhookResult],
    description=(
        "Called by the smart-home platform when a registered switch is toggled. "
        "Turning a direction-bound switch `On` announces the next trains in that "
        "direction and flips the switch back to `Off` shortly after, so it behaves "
        "like a push button.\n\n"
        "`state` accepts a boolean or the strings `On`/`Off`."
    ),
    responses={404: {"description": "Unknown device"}, 422: {"description": "Unsupported state"}},
)
async def power_state_changed(
    event: PowerStateEvent,
    service: StationService = Depends(get_station_service),
    registry: DeviceRegistry = Depends(get_device_registry),
    runner: BackgroundRunner = Depends(get_runner),
):
    direction = registry.direction_for(event.device_id)
    if direction is None:
        raise HTTPException(status_code=404, detail="Unknown device")
    try:
        turned_on = parse_power_state(event.state)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    if not turned_on:
        registry.record_state(event.device_id, OFF)
        return success_response(WebhookResult(device_id=event.device_id, state=OFF).model_dump())

    registry.record_state(event.device_id, ON)
    logger.info(f"{direction.value} switch {event.device_id} turned on")
    try:
        announcement = await service.announce(direction)
    finally:
        runner.spawn(
            registry.reset_after(event.device_id),
            name=f"reset-{event.device_id}",
        )
    return success_response(
        WebhookResult(device_id=event.device_id, state=ON, message=announcement.message).model_dump()
    )
