"""
ClickHouse Query Client

This module defines the small client surface the vector store depends on and
its implementation over clickhouse-connect. The store issues exactly three
kinds of calls, each a single synchronous round trip bounded by a timeout:
- ``insert``: one bulk insert of a JSONEachRow payload
- ``query``: one parameterized statement returning rows as dicts
- ``execute``: one complete statement without result rows (deletes, DDL)

The client does not retry. Errors raised by clickhouse-connect propagate
unchanged so the store can annotate them with the failing operation.
"""

import logging
import math
import re
import socket
from typing import Any, Dict, Iterator, List, Mapping, Optional, Protocol

import clickhouse_connect
from clickhouse_connect.driver.exceptions import DatabaseError, OperationalError

from config.settings import ConnectionSettings
from connection_management.connection_exceptions import ClientInitializationError

logger = logging.getLogger(__name__)

INSERT_FORMAT = "JSONEachRow"

# TIMEOUT_EXCEEDED, SOCKET_TIMEOUT
SERVER_TIMEOUT_CODES = (159, 209)
TIMEOUT_MARKERS = ("TIMEOUT_EXCEEDED", "timed out", "timeout exceeded")

_ERROR_CODE_PATTERN = re.compile(r"(?:error code|Code:)\s*(\d+)")


class QueryClient(Protocol):
    """Query-execution client used by the vector store."""

    def insert(self, table: str, payload: bytes, timeout: float) -> None:
        ...

    def query(self, sql: str, parameters: Mapping[str, Any], timeout: float) -> List[Dict[str, Any]]:
        ...

    def execute(self, sql: str, timeout: float) -> None:
        ...

    def close(self) -> None:
        ...


def timeout_settings(timeout: Optional[float]) -> Dict[str, Any]:
    """
    Server settings bounding a single request.

    ClickHouse takes ``max_execution_time`` in whole seconds, so the timeout
    is rounded up.
    """
    if timeout is None:
        return {}
    return {"max_execution_time": max(1, math.ceil(timeout))}


class ClickHouseConnectClient:
    """
    QueryClient backed by a clickhouse-connect HTTP client.

    The wrapped client is safe to share between threads for the sequential
    request/response calls made here.
    """

    def __init__(self, client: Any):
        """
        Args:
            client: Client returned by ``clickhouse_connect.get_client``
        """
        self._client = client

    @property
    def raw_client(self) -> Any:
        return self._client

    def insert(self, table: str, payload: bytes, timeout: float) -> None:
        logger.debug(f"Inserting {len(payload)} bytes into {table}")
        self._client.raw_insert(
            table,
            insert_block=payload,
            settings=timeout_settings(timeout),
            fmt=INSERT_FORMAT,
        )

    def query(self, sql: str, parameters: Mapping[str, Any], timeout: float) -> List[Dict[str, Any]]:
        result = self._client.query(sql, parameters=dict(parameters), settings=timeout_settings(timeout))
        return list(result.named_results())

    def execute(self, sql: str, timeout: float) -> None:
        self._client.command(sql, settings=timeout_settings(timeout))

    def close(self) -> None:
        self._client.close()


def create_client(settings: Optional[ConnectionSettings] = None) -> ClickHouseConnectClient:
    """
    Create a ClickHouse client from connection settings.

    Args:
        settings: Connection settings. If None, settings are read from the
                  environment (``CLICKHOUSE_*``) and defaults.

    Returns:
        Connected ClickHouseConnectClient

    Raises:
        ClientInitializationError: If the client cannot be created
    """
    settings = settings if settings is not None else ConnectionSettings()
    kwargs: Dict[str, Any] = dict(
        host=settings.host,
        port=settings.port,
        username=settings.username,
        password=settings.password,
        secure=settings.secure,
        verify=settings.verify,
        connect_timeout=settings.connect_timeout,
        send_receive_timeout=settings.send_receive_timeout,
        settings=dict(settings.server_settings),
    )
    for name in ("database", "ca_cert", "client_cert", "client_cert_key", "access_token"):
        value = getattr(settings, name)
        if value:
            kwargs[name] = value

    try:
        client = clickhouse_connect.get_client(**kwargs)
    except Exception as e:
        raise ClientInitializationError(
            f"Failed to connect to ClickHouse at {settings.host}:{settings.port}: {e}"
        ) from e

    logger.info(f"Connected to ClickHouse at {settings.host}:{settings.port}")
    return ClickHouseConnectClient(client)


def _exception_chain(error: BaseException) -> Iterator[BaseException]:
    seen = set()
    current: Optional[BaseException] = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


def is_timeout_error(error: BaseException) -> bool:
    """
    Whether a client failure is a timeout.

    Checks the whole exception chain for socket timeouts and for
    clickhouse-connect errors carrying a server timeout code, then falls back
    to timeout wording in the messages.
    """
    chain = list(_exception_chain(error))
    for current in chain:
        if isinstance(current, (TimeoutError, socket.timeout)):
            return True
        if isinstance(current, (DatabaseError, OperationalError)):
            codes = {int(code) for code in _ERROR_CODE_PATTERN.findall(str(current))}
            if codes.intersection(SERVER_TIMEOUT_CODES):
                return True
    messages = " ".join(str(current) for current in chain).lower()
    return any(marker.lower() in messages for marker in TIMEOUT_MARKERS)
