"""
ClickHouse Vector Operations Exceptions

This module defines the root exceptions for the clickhouse_vector_ops package
to provide clear error handling and reporting. Package-specific exceptions
(filters, data operations, search) subclass these.
"""

from typing import Optional


class ClickHouseOpsError(Exception):
    """Base exception for all clickhouse_vector_ops errors"""
    pass


class ConfigurationError(ClickHouseOpsError):
    """Raised when configuration is invalid or missing"""
    pass


class InvalidArgumentError(ClickHouseOpsError):
    """Raised when an operation receives a malformed argument"""
    pass


class ExecutionError(ClickHouseOpsError):
    """
    Raised when the query-execution client reports a failure.

    The original client exception is kept unchanged as ``cause`` (and as
    ``__cause__`` when raised with ``from``); ``operation`` names the logical
    store operation that produced it.

    Attributes:
        operation: Logical operation name ("add", "delete", "search", ...)
        cause: Exception reported by the client
    """

    def __init__(self, operation: str, cause: Optional[BaseException] = None, message: Optional[str] = None):
        self.operation = operation
        self.cause = cause
        if message is None:
            message = f"'{operation}' operation failed"
            if cause is not None:
                message = f"{message}: {cause}"
        super().__init__(message)


class OperationTimeoutError(ExecutionError):
    """Raised when the client reports that an operation timed out"""
    pass
