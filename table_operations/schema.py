"""
Vector table layout and DDL.

This module describes where documents live (database, table and the four
column names) and renders the statements that create the database and the
vector table. The table is keyed by the id column and carries a vector
similarity index over the embedding column that matches the configured
distance type and dimension.
"""

from typing import Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from config.settings import DistanceType
from search_operations.config.distance import function_name


CREATE_TABLE_TEMPLATE = """\
CREATE TABLE IF NOT EXISTS {table}
(
    {id_column} String,
    {content_column} String,
    {embedding_column} Array(Float64),
    {metadata_column} JSON,
    CONSTRAINT embedding_dimension CHECK length({embedding_column}) = {dimensions},
    INDEX vector_embedding_idx {embedding_column} TYPE vector_similarity('hnsw', '{function}', {dimensions})
)
ENGINE = MergeTree
ORDER BY {id_column}"""


class TableSchema(BaseModel):
    """
    Location and column names of a vector table.

    Attributes:
        database_name: Database holding the table; empty means the session default
        table_name: Table name
        id_column: Column storing the document identifier
        content_column: Column storing the document text
        embedding_column: Column storing the embedding array
        metadata_column: JSON column storing document metadata
    """
    model_config = ConfigDict(frozen=True)

    database_name: str = ""
    table_name: str = Field(..., description="Name of the vector table")
    id_column: str = "id"
    content_column: str = "content"
    embedding_column: str = "embedding"
    metadata_column: str = "metadata"

    @field_validator('table_name', 'id_column', 'content_column', 'embedding_column', 'metadata_column')
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Table and column names must be non-empty"""
        if not v or not v.strip():
            raise ValueError("Table and column names must not be empty")
        return v

    @property
    def full_table_name(self) -> str:
        """``database.table``, or just the table when no database is set."""
        if self.database_name:
            return f"{self.database_name}.{self.table_name}"
        return self.table_name


class SchemaBuilder:
    """Renders the DDL statements for a vector table."""

    def __init__(self, table: TableSchema):
        self.table = table

    def build_create_database(self) -> str:
        if not self.table.database_name:
            raise ValueError("No database name configured")
        return f"CREATE DATABASE IF NOT EXISTS {self.table.database_name}"

    def build_create_table(self, distance_type: Union[DistanceType, str], dimensions: int) -> str:
        """
        Render the CREATE TABLE statement.

        Args:
            distance_type: Distance type the vector index is built for
            dimensions: Fixed embedding length enforced by a CHECK constraint

        Returns:
            CREATE TABLE IF NOT EXISTS statement
        """
        if dimensions is None or dimensions <= 0:
            raise ValueError(f"Embedding dimensions must be positive, got {dimensions}")
        table = self.table
        return CREATE_TABLE_TEMPLATE.format(
            table=table.full_table_name,
            id_column=table.id_column,
            content_column=table.content_column,
            embedding_column=table.embedding_column,
            metadata_column=table.metadata_column,
            dimensions=dimensions,
            function=function_name(distance_type),
        )
