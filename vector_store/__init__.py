"""
Vector Store Module

The public entry point of the package: a ClickHouse-backed vector store that
adds documents with embeddings, deletes them by id or by metadata filter and
runs filtered similarity searches.
"""

from .store import ClickHouseVectorStore, create_vector_store
from .store_config import VectorStoreConfig

__all__ = [
    'ClickHouseVectorStore',
    'VectorStoreConfig',
    'create_vector_store',
]
