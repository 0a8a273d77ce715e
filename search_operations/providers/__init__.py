"""
Providers Module

This module provides the interface for external embedding providers.
"""

from .embedding import EmbeddingProvider

__all__ = [
    "EmbeddingProvider",
]
