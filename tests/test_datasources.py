"""Tests for the PostgreSQL data source."""

import asyncio
from unittest.mock import MagicMock, patch

import psycopg2
import pytest
from psycopg2.extras import RealDictCursor

from pg_introspect.datasources.postgresql import PostgreSQLDataSource
from pg_introspect.introspection.query_builder import CatalogQueryBuilder

PG_CONFIG = {
    "host": "localhost",
    "port": 5433,
    "database": "app",
    "user": "app",
    "password": "secret",
    "max_connections": 3,
}


@pytest.fixture
def mock_pool():
    with patch("pg_introspect.datasources.postgresql.pool.ThreadedConnectionPool") as pool_cls:
        yield pool_cls


@pytest.fixture
def connected_datasource(mock_pool):
    ds = PostgreSQLDataSource("app_db", PG_CONFIG)
    ds.connect()
    yield ds
    ds.disconnect()


def _cursor(mock_pool):
    conn = mock_pool.return_value.getconn.return_value
    return conn.cursor.return_value.__enter__.return_value


def test_connect_creates_pool(mock_pool):
    ds = PostgreSQLDataSource("app_db", PG_CONFIG)

    ds.connect()

    mock_pool.assert_called_once_with(
        1,
        3,
        host="localhost",
        port=5433,
        database="app",
        user="app",
        password="secret",
    )
    assert ds.is_connected()
    pool_instance = mock_pool.return_value
    pool_instance.putconn.assert_called_once_with(pool_instance.getconn.return_value)


def test_connect_failure_raises_connection_error(mock_pool):
    mock_pool.side_effect = psycopg2.OperationalError("could not connect to server")
    ds = PostgreSQLDataSource("app_db", PG_CONFIG)

    with pytest.raises(ConnectionError, match="could not connect"):
        ds.connect()
    assert not ds.is_connected()


def test_disconnect_closes_pool(connected_datasource, mock_pool):
    connected_datasource.disconnect()

    mock_pool.return_value.closeall.assert_called_once()
    assert not connected_datasource.is_connected()


def test_execute_returns_dict_rows(connected_datasource, mock_pool):
    cursor = _cursor(mock_pool)
    cursor.fetchall.return_value = [{"nspname": "public"}, {"nspname": "pg_catalog"}]
    query = CatalogQueryBuilder().build_schemas_query()

    rows = asyncio.run(connected_datasource.execute(query))

    assert rows == [{"nspname": "public"}, {"nspname": "pg_catalog"}]
    conn = mock_pool.return_value.getconn.return_value
    conn.cursor.assert_called_with(cursor_factory=RealDictCursor)
    cursor.execute.assert_called_once_with("SELECT nspname FROM pg_catalog.pg_namespace")
    mock_pool.return_value.putconn.assert_called_with(conn)


def test_execute_error_propagates_and_returns_connection(connected_datasource, mock_pool):
    cursor = _cursor(mock_pool)
    cursor.execute.side_effect = psycopg2.ProgrammingError("relation does not exist")
    mock_pool.return_value.putconn.reset_mock()

    with pytest.raises(psycopg2.ProgrammingError):
        asyncio.run(connected_datasource.execute(CatalogQueryBuilder().build_tables_query()))

    conn = mock_pool.return_value.getconn.return_value
    mock_pool.return_value.putconn.assert_called_once_with(conn)


def test_execute_without_connection():
    ds = PostgreSQLDataSource("app_db", PG_CONFIG)

    with pytest.raises(RuntimeError, match="Not connected"):
        asyncio.run(ds.execute(CatalogQueryBuilder().build_schemas_query()))


def test_context_manager_connects_and_disconnects(mock_pool):
    with PostgreSQLDataSource("app_db", PG_CONFIG) as ds:
        assert ds.is_connected()

    assert not ds.is_connected()
    mock_pool.return_value.closeall.assert_called_once()


def test_repr():
    assert repr(PostgreSQLDataSource("app_db", PG_CONFIG)) == "PostgreSQLDataSource(name=app_db)"
