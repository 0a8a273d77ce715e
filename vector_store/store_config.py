"""
Vector Store Configuration

Immutable configuration of a ClickHouseVectorStore. Defaults match
``VectorStoreSettings`` so a store can be configured either directly or from
the environment/YAML settings.
"""

from dataclasses import dataclass
from typing import Optional

from clickhouse_ops_exceptions import ConfigurationError
from config.settings import DistanceType, VectorStoreSettings
from table_operations.schema import TableSchema

DEFAULT_DATABASE_NAME = "ai"
DEFAULT_TABLE_NAME = "vector_store"
DEFAULT_ID_COLUMN_NAME = "id"
DEFAULT_EMBEDDING_COLUMN_NAME = "embedding"
DEFAULT_CONTENT_COLUMN_NAME = "content"
DEFAULT_METADATA_COLUMN_NAME = "metadata"
DEFAULT_DISTANCE_TYPE = DistanceType.COSINE
DEFAULT_INITIALIZE_SCHEMA = False
DEFAULT_TIMEOUT = 10.0  # seconds


@dataclass(frozen=True)
class VectorStoreConfig:
    """
    Configuration for the vector store.

    Attributes:
        database_name: Database holding the table; empty uses the session default
        table_name: Name of the vector table
        id_column_name: Column storing the document identifier
        embedding_column_name: Column storing the embedding array
        content_column_name: Column storing the document text
        metadata_column_name: JSON column storing document metadata
        distance_type: Distance function for search and for the vector index
        initialize_schema: Create the database and table when the store is created
        timeout: Timeout in seconds for each insert, delete or search
        dimensions: Embedding dimension for the table DDL; defaults to the
                    embedding provider's dimension
    """
    database_name: str = DEFAULT_DATABASE_NAME
    table_name: str = DEFAULT_TABLE_NAME
    id_column_name: str = DEFAULT_ID_COLUMN_NAME
    embedding_column_name: str = DEFAULT_EMBEDDING_COLUMN_NAME
    content_column_name: str = DEFAULT_CONTENT_COLUMN_NAME
    metadata_column_name: str = DEFAULT_METADATA_COLUMN_NAME
    distance_type: DistanceType = DEFAULT_DISTANCE_TYPE
    initialize_schema: bool = DEFAULT_INITIALIZE_SCHEMA
    timeout: float = DEFAULT_TIMEOUT
    dimensions: Optional[int] = None

    def __post_init__(self):
        """Validate configuration after initialization"""
        for field_name in ("table_name", "id_column_name", "embedding_column_name",
                           "content_column_name", "metadata_column_name"):
            value = getattr(self, field_name)
            if not value or not value.strip():
                raise ConfigurationError(f"{field_name} must not be empty")
        if self.database_name is None:
            raise ConfigurationError("database_name must be a string; use '' for the session default")
        try:
            object.__setattr__(self, "distance_type", DistanceType(self.distance_type))
        except ValueError as e:
            raise ConfigurationError(f"Unsupported distance type: {self.distance_type}") from e
        if self.timeout is None or self.timeout <= 0:
            raise ConfigurationError("timeout must be positive")
        if self.dimensions is not None and self.dimensions <= 0:
            raise ConfigurationError("dimensions must be positive")

    @classmethod
    def from_settings(cls, settings: VectorStoreSettings) -> "VectorStoreConfig":
        """Build a configuration from ``VectorStoreSettings``."""
        return cls(
            database_name=settings.database_name,
            table_name=settings.table_name,
            id_column_name=settings.id_column_name,
            embedding_column_name=settings.embedding_column_name,
            content_column_name=settings.content_column_name,
            metadata_column_name=settings.metadata_column_name,
            distance_type=settings.distance_type,
            initialize_schema=settings.initialize_schema,
            timeout=settings.request_timeout,
            dimensions=settings.dimensions,
        )

    @property
    def table_schema(self) -> TableSchema:
        return TableSchema(
            database_name=self.database_name,
            table_name=self.table_name,
            id_column=self.id_column_name,
            content_column=self.content_column_name,
            embedding_column=self.embedding_column_name,
            metadata_column=self.metadata_column_name,
        )

    @property
    def full_table_name(self) -> str:
        return self.table_schema.full_table_name
