"""
Pydantic Settings for ClickHouse Vector Operations

This module provides strongly-typed configuration settings using Pydantic,
with support for environment variables and YAML configuration files.
"""

from typing import Dict, Optional, Union
from enum import Enum
from pathlib import Path
import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_yaml import to_yaml_str


class DistanceType(str, Enum):
    """
    Vector distance functions supported by the store.

    The distance type drives both the nearest-neighbour ordering at query time
    and the vector similarity index created for the embedding column:
    - COSINE: angle between vectors, the usual choice for semantic embeddings
    - L2: Euclidean (straight-line) distance
    """
    COSINE = "COSINE"
    L2 = "L2"


class ConnectionSettings(BaseSettings):
    """
    Connection settings for the clickhouse-connect HTTP client.

    These settings control how the client reaches the ClickHouse server:
    - Server location and authentication
    - TLS behaviour (CA bundle, client certificate)
    - Client-side timeouts
    - Server settings sent with every request
    """
    model_config = SettingsConfigDict(env_prefix="CLICKHOUSE_", case_sensitive=False)

    host: str = Field("localhost", description="Hostname or IP address of the ClickHouse server")
    port: int = Field(8123, description="HTTP(S) port of the ClickHouse server")
    username: str = Field("default", description="Username for authentication")
    password: str = Field("", description="Password for authentication")
    secure: bool = Field(False, description="Whether to use HTTPS")
    verify: bool = Field(True, description="Whether to verify the server TLS certificate")
    ca_cert: Optional[str] = Field(None, description="Path to a CA certificate (or 'certifi') used to verify the server")
    client_cert: Optional[str] = Field(None, description="Path to a client TLS certificate for mutual TLS")
    client_cert_key: Optional[str] = Field(None, description="Path to the private key of the client certificate")
    access_token: Optional[str] = Field(None, description="Bearer token used instead of username and password")
    database: Optional[str] = Field(None, description="Default database of the client session")
    connect_timeout: int = Field(10, description="Connection timeout in seconds")
    send_receive_timeout: int = Field(300, description="Socket read timeout in seconds")
    server_settings: Dict[str, str] = Field(
        default_factory=lambda: {
            "allow_experimental_vector_similarity_index": "1",
            "enable_json_type": "1",
        },
        description="ClickHouse settings applied to every request",
    )


class VectorStoreSettings(BaseSettings):
    """
    Settings describing the vector table and how it is searched.

    These settings determine:
    - Which database and table hold the documents
    - The names of the id, content, embedding and metadata columns
    - The distance function used for search and for the vector index
    - Whether the table is created on start-up
    - The per-request timeout handed to the client
    """
    model_config = SettingsConfigDict(
        env_prefix="CLICKHOUSE_VECTOR_STORE_", case_sensitive=False, use_enum_values=False
    )

    database_name: str = Field("ai", description="Database holding the vector table ('' for the session default)")
    table_name: str = Field("vector_store", description="Name of the vector table")
    id_column_name: str = Field("id", description="Column storing the document identifier")
    embedding_column_name: str = Field("embedding", description="Column storing the embedding array")
    content_column_name: str = Field("content", description="Column storing the document text")
    metadata_column_name: str = Field("metadata", description="JSON column storing document metadata")
    distance_type: DistanceType = Field(DistanceType.COSINE, description="Distance function for search and index")
    initialize_schema: bool = Field(False, description="Create the database and table if they do not exist")
    request_timeout: float = Field(10.0, description="Timeout in seconds for each insert, delete or search")
    dimensions: Optional[int] = Field(None, description="Embedding dimension used for the table DDL")


class LoggingSettings(BaseSettings):
    """
    Logging settings for the package loggers.
    """
    model_config = SettingsConfigDict(env_prefix="CLICKHOUSE_LOG_", case_sensitive=False)

    log_level: str = Field("INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)")
    log_format: str = Field(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Format string passed to logging.basicConfig",
    )


class ClickHouseSettings(BaseSettings):
    """
    Main settings class that consolidates all configuration categories.

    Usage:
        # Load from environment variables and defaults
        settings = ClickHouseSettings()

        # Load from YAML file
        settings = ClickHouseSettings.from_yaml('config.yaml')

        # Access nested settings
        host = settings.connection.host
        table = settings.vector_store.table_name
    """
    model_config = SettingsConfigDict(env_prefix="", case_sensitive=False, env_nested_delimiter="__")

    connection: ConnectionSettings = Field(default_factory=ConnectionSettings,
                                           description="Connection settings for the ClickHouse server")
    vector_store: VectorStoreSettings = Field(default_factory=VectorStoreSettings,
                                              description="Vector table layout and search settings")
    logging: LoggingSettings = Field(default_factory=LoggingSettings,
                                     description="Logging configuration")

    @classmethod
    def from_yaml(cls, yaml_file: Union[str, Path]) -> "ClickHouseSettings":
        """Load settings from YAML file"""
        import yaml
        with open(yaml_file, 'r') as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)

    def to_yaml(self) -> str:
        """Serialize the settings to a YAML document"""
        return to_yaml_str(self)


def load_settings(config_path: Optional[str] = None) -> ClickHouseSettings:
    """
    Load settings from file and/or environment variables.

    Args:
        config_path: Path to YAML configuration file. If None or the file doesn't
                    exist, falls back to environment variables and default values.

    Returns:
        ClickHouseSettings object with loaded configuration
    """
    if config_path and os.path.exists(config_path):
        return ClickHouseSettings.from_yaml(config_path)
    return ClickHouseSettings()
