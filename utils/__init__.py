"""
Utilities Module

This module provides common helpers shared across the package:
- Logging configuration from settings
- Operation timing
"""

from .logging_setup import configure_logging
from .timing import TimingResult, time_operation

__all__ = [
    'configure_logging',
    'TimingResult',
    'time_operation',
]
