"""
Connection Management Exceptions

This module defines exceptions raised while setting up the query-execution
client. Failures of individual statements are reported by the vector store as
``ExecutionError`` instead.
"""

from clickhouse_ops_exceptions import ClickHouseOpsError


class ConnectionError(ClickHouseOpsError):
    """
    Base exception for all connection-related errors.

    Allows applications to catch every connection error uniformly while
    still providing access to specific error details.
    """
    pass


class ClientInitializationError(ConnectionError):
    """
    Raised when the ClickHouse client cannot be created.

    This indicates unreachable servers, bad credentials or invalid connection
    settings, detected at start-up rather than on the first request.
    """
    pass
