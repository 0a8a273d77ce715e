"""
Connection Management Module

This module provides the query-execution client used by the vector store:
- ``QueryClient`` protocol (insert, query, execute, close)
- ``ClickHouseConnectClient`` adapter over clickhouse-connect
- ``create_client`` factory driven by ``ConnectionSettings``

Every call is a single synchronous round trip bounded by the timeout passed
with it. Retries, if wanted, belong to the caller.
"""

from .client import (
    QueryClient,
    ClickHouseConnectClient,
    create_client,
    timeout_settings,
    is_timeout_error,
    INSERT_FORMAT,
)
from .connection_exceptions import (
    ConnectionError,
    ClientInitializationError,
)

__all__ = [
    'QueryClient',
    'ClickHouseConnectClient',
    'create_client',
    'timeout_settings',
    'is_timeout_error',
    'INSERT_FORMAT',
    'ConnectionError',
    'ClientInitializationError',
]
