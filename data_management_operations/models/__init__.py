"""
Data Models

Contains the Pydantic document model.
"""

from .entities import Document

__all__ = [
    'Document',
]
