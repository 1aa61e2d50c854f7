import os
from typing import Optional


DEFAULT_FEED_SOURCES = (
    "ACE=https://api-endpoint.mta.info/Dataservice/mtagtfsfeeds/nyct%2Fgtfs-ace,"
    "BDFM=https://api-endpoint.mta.info/Dataservice/mtagtfsfeeds/nyct%2Fgtfs-bdfm"
)


def _bool_env(name: str, default: bool) -> bool:
    v = os.getenv(name)
    if v is None:
        return default
    return str(v).lower() in ("1", "true", "yes", "on")


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


def _float_env(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default


class Settings:
    """Simple settings loader that reads from environment with sensible defaults.

    Only the application lifespan reads these values; the arrival pipeline
    receives them as constructor arguments.
    """

    def __init__(self) -> None:
        # Realtime feeds, "TAG=URL" pairs in fetch order
        self.FEED_SOURCES: str = os.getenv("FEED_SOURCES", DEFAULT_FEED_SOURCES)
        self.MTA_API_KEY: Optional[str] = os.getenv("MTA_API_KEY")
        self.FEED_TIMEOUT: float = _float_env("FEED_TIMEOUT", 10.0)

        # Target station
        self.STATION_ID: str = os.getenv("STATION_ID", "A17")
        self.STATION_NAME: str = os.getenv("STATION_NAME", "Cathedral Parkway (110 St)")
        self.SPOKEN_STATION_NAME: str = os.getenv("SPOKEN_STATION_NAME", "Cathedral Parkway")
        self.ANNOUNCE_PER_SOURCE: int = _int_env("ANNOUNCE_PER_SOURCE", 2)
        if self.ANNOUNCE_PER_SOURCE < 1:
            self.ANNOUNCE_PER_SOURCE = 2

        # Cast device and text-to-speech
        self.CAST_HOST: Optional[str] = os.getenv("CAST_HOST") or os.getenv("GOOGLE_HOME_IP")
        self.CAST_PORT: int = _int_env("CAST_PORT", 8009)
        self.TTS_LANG: str = os.getenv("TTS_LANG", "en")
        self.TTS_SLOW: bool = _bool_env("TTS_SLOW", False)
        self.TTS_HOST: str = os.getenv("TTS_HOST", "https://translate.google.com")

        # Smart-home switches
        self.UPTOWN_DEVICE_ID: Optional[str] = os.getenv("UPTOWN_DEVICE_ID")
        self.DOWNTOWN_DEVICE_ID: Optional[str] = os.getenv("DOWNTOWN_DEVICE_ID")
        self.SMART_HOME_EVENTS_URL: Optional[str] = os.getenv("SMART_HOME_EVENTS_URL")
        self.SMART_HOME_API_KEY: Optional[str] = os.getenv("SMART_HOME_API_KEY")
        self.SWITCH_RESET_DELAY: float = _float_env("SWITCH_RESET_DELAY", 2.0)

        self.API_KEY: Optional[str] = os.getenv("API_KEY")

        # Logging
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
        self.LOG_TO_CONSOLE: bool = _bool_env("LOG_TO_CONSOLE", True)
        self.LOG_FILE: Optional[str] = os.getenv("LOG_FILE")
        self.LOG_FORMAT: str = os.getenv("LOG_FORMAT", "%(asctime)s | %(levelname)s | %(name)s | %(message)s")


settings = Settings()
