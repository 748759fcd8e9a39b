"""HealthJournal session bootstrap.

The command front-end calls ``create_store()`` once at startup and passes the
returned store to every command handler::

    from healthjournal.main import create_store

    store = create_store()
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from healthjournal.config import Settings, get_settings
from healthjournal.tracking.config_loader import get_tracking_config, reload_tracking_config
from healthjournal.tracking.store import HealthStore

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s — %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger("healthjournal")


# ---------- Logging ----------

def configure_logging(settings: Settings | None = None) -> None:
    """Route ``healthjournal.*`` loggers to stdout and the journal log file.

    The file handler opens in append mode so one log accumulates across
    sessions.  Calling this again replaces the previously installed handlers.
    """
    settings = settings or get_settings()

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    stream = logging.StreamHandler(sys.stdout)
    stream.setFormatter(formatter)
    logger.addHandler(stream)

    if settings.log_file:
        path = Path(settings.log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, mode="a", encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.setLevel(settings.log_level.upper())


# ---------- Store factory ----------

def create_store(settings: Settings | None = None) -> HealthStore:
    """Configure logging and build the session's ``HealthStore``.

    A ``tracking_config_path`` override replaces the global tracking config,
    so the validators and the store see the same limits.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    if settings.tracking_config_path:
        config = reload_tracking_config(Path(settings.tracking_config_path))
    else:
        config = get_tracking_config()

    logger.info(
        "Starting %s v%s [%s]",
        settings.app_name,
        settings.app_version,
        settings.environment,
    )
    return HealthStore(config)
