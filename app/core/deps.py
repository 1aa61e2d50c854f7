from fastapi import Request

from app.core.devices import DeviceRegistry
from app.core.tasks import BackgroundRunner
from app.services.station_service import StationService


def get_station_service(request: Request) -> StationService:
    return request.app.state.station_service


def get_device_registry(request: Request) -> DeviceRegistry:
    return request.app.state.device_registry


def get_runner(request: Request) -> BackgroundRunner:
    return request.app.state.runner
