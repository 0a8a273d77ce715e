"""
Configuration Module

This module provides centralized configuration management for ClickHouse
vector operations:
- Connection configuration for the clickhouse-connect client
- Vector table layout (database, table, column names)
- Distance function and request timeout
- Logging configuration

Settings are loaded from environment variables and optional YAML files
with validation performed by Pydantic.
"""

from .settings import (
    ClickHouseSettings,
    ConnectionSettings,
    VectorStoreSettings,
    LoggingSettings,
    DistanceType,
    load_settings,
)

__all__ = [
    'ClickHouseSettings',
    'ConnectionSettings',
    'VectorStoreSettings',
    'LoggingSettings',
    'DistanceType',
    'load_settings',
]
