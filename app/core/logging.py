import logging
import os

from app.core.config import settings

STARTUP_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def setup_early_logging():
    """Capture startup and port binding failures before loguru sinks exist."""
    os.makedirs(settings.LOG_DIR, exist_ok=True)
    fh = logging.FileHandler(os.path.join(settings.LOG_DIR, "startup.log"))
    fh.setFormatter(logging.Formatter(STARTUP_FORMAT))
    fh.setLevel(logging.ERROR)

    early_logger = logging.getLogger("startup")
    early_logger.setLevel(logging.ERROR)
    early_logger.addHandler(fh)
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(STARTUP_FORMAT))
    early_logger.addHandler(console_handler)

    # uvicorn reports bind errors ("address already in use") here
    logging.getLogger("uvicorn.error").addHandler(fh)
