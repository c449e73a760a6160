"""Logging configuration for the sensor health service."""

import logging
from datetime import datetime
from pathlib import Path

from sensorhealth.config import LOG_DIR, LOG_LEVEL

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Libraries whose INFO output drowns the ingest log
QUIET_LOGGERS = ("httpx", "httpcore", "uvicorn.access", "sqlalchemy.engine", "aiosqlite")

_configured = False


def setup_logging(log_dir: str | Path = LOG_DIR, level: str = LOG_LEVEL) -> Path:
    """Send service logs to a dated file under ``log_dir`` and to the console.

    Safe to call more than once; only the first call installs handlers.
    Returns the path of the log file.
    """
    global _configured

    logs_dir = Path(log_dir)
    log_file = logs_dir / f"sensorhealth-{datetime.now().strftime('%Y-%m-%d')}.log"
    if _configured:
        return log_file

    logs_dir.mkdir(parents=True, exist_ok=True)
    formatter = logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S")

    file_handler = logging.FileHandler(log_file)
    console_handler = logging.StreamHandler()
    root_logger = logging.getLogger()
    for handler in (file_handler, console_handler):
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _configured = True
    logging.getLogger("sensorhealth").info(f"Logging initialized - file: {log_file}")
    return log_file
