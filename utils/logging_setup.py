"""
Logging Setup

Applies ``LoggingSettings`` to the standard logging module. Library modules
only create named loggers; applications call ``configure_logging`` once at
start-up.
"""

import logging
from typing import Optional

from config.settings import ClickHouseSettings, LoggingSettings


def configure_logging(settings: Optional[ClickHouseSettings] = None) -> None:
    """
    Configure the root logger from settings.

    Args:
        settings: Full settings object. If None, logging settings are read
                  from the environment (``CLICKHOUSE_LOG_*``) and defaults.
    """
    logging_settings = settings.logging if settings is not None else LoggingSettings()
    level = getattr(logging, logging_settings.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=logging_settings.log_format)
    # clickhouse-connect logs every request at DEBUG
    logging.getLogger("clickhouse_connect").setLevel(max(level, logging.INFO))
