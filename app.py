from fastapi import FastAPI, Request, Depends
from fastapi.responses import JSONResponse
from fastapi.exceptions import HTTPException as FastAPIHTTPException
from app.utils.response import error_response
from app.routers import station, announce, webhook
from app.core.security import api_key_required
from app.core.logging_config import setup_logging
import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import aiohttp

from app.config.settings import settings
from app.core.delivery import CastDeliverySink
from app.core.devices import DeviceRegistry
from app.core.feed_fetcher import FeedFetcher, parse_feed_sources
from app.core.tasks import BackgroundRunner
from app.schemas.arrival import Direction
from app.services.station_service import StationService


# inicializar logging lo antes posible
setup_logging()
logger = logging.getLogger("announcer")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Lifespan handler: construye los colaboradores de larga vida y los libera al cerrar."""
    session = aiohttp.ClientSession()
    runner = BackgroundRunner()

    registry = DeviceRegistry(
        session=session,
        events_url=settings.SMART_HOME_EVENTS_URL,
        api_key=settings.SMART_HOME_API_KEY,
        reset_delay=settings.SWITCH_RESET_DELAY,
    )
    if settings.UPTOWN_DEVICE_ID:
        registry.register(settings.UPTOWN_DEVICE_ID, Direction.UPTOWN)
    if settings.DOWNTOWN_DEVICE_ID:
        registry.register(settings.DOWNTOWN_DEVICE_ID, Direction.DOWNTOWN)

    sink = CastDeliverySink(
        host=settings.CAST_HOST,
        port=settings.CAST_PORT,
        lang=settings.TTS_LANG,
        slow=settings.TTS_SLOW,
        tts_host=settings.TTS_HOST,
    )
    sources = parse_feed_sources(settings.FEED_SOURCES)
    app.state.runner = runner
    app.state.device_registry = registry
    app.state.station_service = StationService(
        fetcher=FeedFetcher(session, timeout=settings.FEED_TIMEOUT, api_key=settings.MTA_API_KEY),
        sources=sources,
        station_id=settings.STATION_ID,
        station_name=settings.STATION_NAME,
        spoken_name=settings.SPOKEN_STATION_NAME,
        sink=sink,
        runner=runner,
        per_source=settings.ANNOUNCE_PER_SOURCE,
    )
    logger.info(
        "Serving %s (%s) from feeds %s",
        settings.STATION_NAME,
        settings.STATION_ID,
        ", ".join(s.tag for s in sources),
    )
    try:
        yield
    finally:
        # lets a pending switch reset report Off before the session closes
        await runner.shutdown(grace=settings.SWITCH_RESET_DELAY + 1.0)
        await session.close()
        logger.info("Shutdown complete")


app = FastAPI(
    title="Cathedral Parkway Announcer",
    description="Realtime subway arrivals for one station, as JSON or spoken on a cast speaker",
    version="1.0.0",
    lifespan=lifespan,
)

# aplicar dependencia de API key a todos los routers al registrarlos
app.include_router(station.router, dependencies=[Depends(api_key_required)])
app.include_router(announce.router, dependencies=[Depends(api_key_required)])
app.include_router(webhook.router, dependencies=[Depends(api_key_required)])


@app.get("/health", tags=["Health"], summary="Liveness probe")
def health():
    return {"status": "ok"}


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Middleware simple para registrar peticiones entrantes y respuestas.

    Registra: method, path, status_code, elapsed_ms
    """
    start = time.time()
    response = await call_next(request)
    elapsed = (time.time() - start) * 1000
    logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed:.1f}ms)")
    return response


@app.exception_handler(FastAPIHTTPException)
async def http_exception_handler(request: Request, exc: FastAPIHTTPException):
    payload = error_response(title=str(exc.detail), status=exc.status_code)
    return JSONResponse(status_code=exc.status_code, content=payload)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    payload = error_response(title="Internal Server Error", status=500, detail=str(exc))
    return JSONResponse(status_code=500, content=payload)
