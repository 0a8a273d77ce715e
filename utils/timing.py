"""
Performance Timing Utilities

Provides a context manager for measuring and logging the duration of store
operations.
"""

import time
import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, Iterator

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class TimingResult(BaseModel):
    """
    Result of a timed operation.

    Attributes:
        operation_name: Name of the operation that was timed
        execution_time: Time taken to execute the operation in seconds
        timestamp: When the operation was started
        success: Whether the operation completed successfully
        metadata: Additional metadata about the operation
    """
    operation_name: str
    execution_time: float = Field(0.0, description="Execution time in seconds")
    timestamp: datetime = Field(default_factory=datetime.now)
    success: bool = True
    metadata: Dict[str, Any] = Field(default_factory=dict)


@contextmanager
def time_operation(operation_name: str, **metadata: Any) -> Iterator[TimingResult]:
    """
    Context manager for timing an operation.

    Args:
        operation_name: Name of the operation being timed
        **metadata: Additional metadata to store with the timing result

    Yields:
        TimingResult that is populated when the block exits
    """
    start_time = time.perf_counter()
    result = TimingResult(operation_name=operation_name, metadata=metadata)
    try:
        yield result
        result.success = True
    except Exception:
        result.success = False
        raise
    finally:
        result.execution_time = time.perf_counter() - start_time
        status = "succeeded" if result.success else "failed"
        logger.debug(
            f"Operation '{operation_name}' {status} in {result.execution_time*1000:.2f}ms"
        )
