"""Tests for the clickhouse-connect adapter."""

import socket
from unittest import mock

import pytest
from clickhouse_connect.driver.exceptions import DatabaseError, OperationalError

from config import ConnectionSettings
from connection_management import (
    ClickHouseConnectClient,
    ClientInitializationError,
    create_client,
    is_timeout_error,
    timeout_settings,
)


class TestTimeoutSettings:

    @pytest.mark.parametrize("timeout, seconds", [(10.0, 10), (2.5, 3), (0.2, 1)])
    def test_rounds_up_to_whole_seconds(self, timeout, seconds):
        assert timeout_settings(timeout) == {"max_execution_time": seconds}

    def test_no_timeout(self):
        assert timeout_settings(None) == {}


class TestClickHouseConnectClient:

    @pytest.fixture
    def raw(self):
        return mock.MagicMock()

    @pytest.fixture
    def client(self, raw):
        return ClickHouseConnectClient(raw)

    def test_insert_uses_json_each_row(self, client, raw):
        client.insert("ai.vector_store", b'{"id": "1"}\n', 10.0)
        raw.raw_insert.assert_called_once_with(
            "ai.vector_store",
            insert_block=b'{"id": "1"}\n',
            settings={"max_execution_time": 10},
            fmt="JSONEachRow",
        )

    def test_query_returns_named_rows(self, client, raw):
        raw.query.return_value.named_results.return_value = iter([{"id": "1", "distance": 0.0}])
        rows = client.query("SELECT 1", {"top_k": 4}, 5.0)
        assert rows == [{"id": "1", "distance": 0.0}]
        raw.query.assert_called_once_with("SELECT 1", parameters={"top_k": 4}, settings={"max_execution_time": 5})

    def test_execute_uses_command(self, client, raw):
        client.execute("DELETE FROM t WHERE id IN ('1')", 1.5)
        raw.command.assert_called_once_with("DELETE FROM t WHERE id IN ('1')", settings={"max_execution_time": 2})

    def test_errors_propagate_unchanged(self, client, raw):
        failure = RuntimeError("server error")
        raw.command.side_effect = failure
        with pytest.raises(RuntimeError) as exc_info:
            client.execute("DROP TABLE t", 1.0)
        assert exc_info.value is failure

    def test_close(self, client, raw):
        client.close()
        raw.close.assert_called_once_with()
        assert client.raw_client is raw


class TestCreateClient:

    def test_passes_connection_settings(self):
        settings = ConnectionSettings(host="ch.example", port=8443, username="u", password="p",
                                      secure=True, database="ai")
        with mock.patch("connection_management.client.clickhouse_connect.get_client") as get_client:
            client = create_client(settings)
        kwargs = get_client.call_args.kwargs
        assert kwargs["host"] == "ch.example"
        assert kwargs["port"] == 8443
        assert kwargs["username"] == "u"
        assert kwargs["password"] == "p"
        assert kwargs["secure"] is True
        assert kwargs["database"] == "ai"
        assert kwargs["settings"]["allow_experimental_vector_similarity_index"] == "1"
        assert client.raw_client is get_client.return_value

    def test_database_omitted_when_unset(self):
        with mock.patch("connection_management.client.clickhouse_connect.get_client") as get_client:
            create_client(ConnectionSettings(database=None))
        assert "database" not in get_client.call_args.kwargs

    def test_initialization_failure(self):
        with mock.patch("connection_management.client.clickhouse_connect.get_client",
                        side_effect=OSError("connection refused")):
            with pytest.raises(ClientInitializationError) as exc_info:
                create_client(ConnectionSettings())
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_passes_tls_and_token_settings(self):
        settings = ConnectionSettings(secure=True, ca_cert="/etc/ssl/ca.pem", client_cert="/etc/ssl/client.pem",
                                      client_cert_key="/etc/ssl/client.key", access_token="tok")
        with mock.patch("connection_management.client.clickhouse_connect.get_client") as get_client:
            create_client(settings)
        kwargs = get_client.call_args.kwargs
        assert kwargs["ca_cert"] == "/etc/ssl/ca.pem"
        assert kwargs["client_cert"] == "/etc/ssl/client.pem"
        assert kwargs["client_cert_key"] == "/etc/ssl/client.key"
        assert kwargs["access_token"] == "tok"

    def test_tls_and_token_omitted_when_unset(self):
        with mock.patch("connection_management.client.clickhouse_connect.get_client") as get_client:
            create_client(ConnectionSettings())
        kwargs = get_client.call_args.kwargs
        for name in ("ca_cert", "client_cert", "client_cert_key", "access_token"):
            assert name not in kwargs


class TestIsTimeoutError:
    """Timeouts are recognised from exception types and server error codes."""

    def test_builtin_timeout(self):
        assert is_timeout_error(TimeoutError())
        assert is_timeout_error(socket.timeout())

    @pytest.mark.parametrize("message", [
        "HTTPDriver for http://localhost:8123 received ClickHouse error code 159",
        "Code: 209. DB::Exception: Poco::Exception. Code: 1000",
    ])
    def test_server_timeout_codes(self, message):
        assert is_timeout_error(DatabaseError(message))

    def test_other_server_code(self):
        assert not is_timeout_error(DatabaseError("Code: 60. DB::Exception: Table ai.vector_store does not exist"))

    def test_operational_error_caused_by_socket_timeout(self):
        try:
            try:
                raise socket.timeout()
            except socket.timeout as e:
                raise OperationalError("Error executing HTTP request attempt 1") from e
        except OperationalError as e:
            error = e
        assert is_timeout_error(error)

    def test_operational_error_without_timeout(self):
        try:
            try:
                raise ConnectionRefusedError("connection refused")
            except ConnectionRefusedError as e:
                raise OperationalError("Error executing HTTP request attempt 1") from e
        except OperationalError as e:
            error = e
        assert not is_timeout_error(error)

    def test_message_fallback(self):
        assert is_timeout_error(RuntimeError("Timeout exceeded: elapsed 10.2 seconds"))
        assert not is_timeout_error(RuntimeError("boom"))
