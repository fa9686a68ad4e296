import os
from loguru import logger
from app.core.config import settings

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {extra[channel]} | {message}"

# Channels bound by the proxy layer; their records also go to proxy.log
PROXY_CHANNELS = ("cache", "upstream")

LOG_DIR = settings.LOG_DIR
os.makedirs(LOG_DIR, exist_ok=True)

logger.configure(extra={"channel": "app"})

# Everything at the configured level
logger.add(
    os.path.join(LOG_DIR, "app.log"),
    rotation="10 MB",
    level=settings.LOG_LEVEL,
    enqueue=True,
    backtrace=True,
    diagnose=False,
    format=LOG_FORMAT,
)

# Cache hits/misses/evictions and upstream fetches, for hit-rate inspection
logger.add(
    os.path.join(LOG_DIR, "proxy.log"),
    rotation="10 MB",
    retention=5,
    level="INFO",
    enqueue=True,
    filter=lambda record: record["extra"].get("channel") in PROXY_CHANNELS,
    format=LOG_FORMAT,
)

# Upstream failures, corrupt cache entries and unhandled errors
logger.add(
    os.path.join(LOG_DIR, "errors.log"),
    rotation="10 MB",
    level="WARNING",
    enqueue=True,
    backtrace=True,
    diagnose=False,
    format=LOG_FORMAT,
)


def get_logger(channel: str | None = None):
    """Return the global logger, bound to ``channel`` when one is given."""
    if channel:
        return logger.bind(channel=channel)
    return logger
