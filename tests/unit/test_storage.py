"""Tests for the key-value store backends."""
import pytest
from unittest.mock import MagicMock, Mock, patch

import psycopg2
from redis.exceptions import ConnectionError as RedisConnectionError

from reading_tracker.config import Settings
from reading_tracker.storage import (
    InMemoryKeyValueStore,
    PostgresKeyValueStore,
    RedisKeyValueStore,
    create_store,
)
from reading_tracker.utils.exceptions import StorageError


@pytest.fixture
def mock_pool():
    """Mock connection pool handing out a connection whose cursor is a context manager."""
    mock_cursor = MagicMock()
    mock_conn = MagicMock()
    mock_conn.cursor.return_value.__enter__ = MagicMock(return_value=mock_cursor)
    mock_conn.cursor.return_value.__exit__ = MagicMock(return_value=False)
    connection_pool = Mock()
    connection_pool.getconn.return_value = mock_conn
    return connection_pool, mock_conn, mock_cursor


class TestInMemoryKeyValueStore:

    def test_get_set_delete(self):
        store = InMemoryKeyValueStore()

        assert store.get("k") is None
        store.set("k", "v")
        assert store.get("k") == "v"
        store.delete("k")
        assert store.get("k") is None

    def test_delete_missing_key(self):
        InMemoryKeyValueStore().delete("absent")

    def test_initial_data_is_copied(self):
        initial = {"k": "v"}
        store = InMemoryKeyValueStore(initial)
        store.set("k", "changed")

        assert initial["k"] == "v"


class TestRedisKeyValueStore:

    def test_get_and_set(self):
        client = Mock()
        client.get.return_value = '{"a": 1}'
        store = RedisKeyValueStore(client)

        assert store.get("k") == '{"a": 1}'
        store.set("k", "v")

        client.get.assert_called_once_with("k")
        client.set.assert_called_once_with("k", "v")

    @pytest.mark.parametrize("method, args", [("get", ("k",)), ("set", ("k", "v")), ("delete", ("k",))])
    def test_redis_errors_become_storage_errors(self, method, args):
        client = Mock()
        getattr(client, method).side_effect = RedisConnectionError("refused")
        store = RedisKeyValueStore(client)

        with pytest.raises(StorageError):
            getattr(store, method)(*args)

    @patch("reading_tracker.storage.redis.from_url")
    def test_from_url(self, mock_from_url):
        store = RedisKeyValueStore.from_url("redis://cache:6379/1")

        assert isinstance(store, RedisKeyValueStore)
        assert mock_from_url.call_args.args[0] == "redis://cache:6379/1"
        assert mock_from_url.call_args.kwargs["decode_responses"] is True


class TestPostgresKeyValueStore:

    def test_get_returns_value(self, mock_pool):
        connection_pool, conn, cur = mock_pool
        cur.fetchone.return_value = {"value": "stored"}

        assert PostgresKeyValueStore(connection_pool).get("k") == "stored"
        cur.execute.assert_called_once()
        assert cur.execute.call_args.args[1] == ("k",)
        connection_pool.putconn.assert_called_once_with(conn)

    def test_get_missing_row(self, mock_pool):
        connection_pool, _, cur = mock_pool
        cur.fetchone.return_value = None

        assert PostgresKeyValueStore(connection_pool).get("k") is None

    def test_set_upserts_and_commits(self, mock_pool):
        connection_pool, conn, cur = mock_pool

        PostgresKeyValueStore(connection_pool).set("k", "v")

        assert cur.execute.call_args.args[1] == ("k", "v")
        conn.commit.assert_called_once()

    def test_delete_commits(self, mock_pool):
        connection_pool, conn, cur = mock_pool

        PostgresKeyValueStore(connection_pool).delete("k")

        assert cur.execute.call_args.args[1] == ("k",)
        conn.commit.assert_called_once()

    def test_database_error_rolls_back(self, mock_pool):
        connection_pool, conn, cur = mock_pool
        cur.execute.side_effect = psycopg2.OperationalError("connection lost")

        with pytest.raises(StorageError):
            PostgresKeyValueStore(connection_pool).set("k", "v")

        conn.rollback.assert_called_once()
        connection_pool.putconn.assert_called_once_with(conn)

    @patch("reading_tracker.storage.pool.ThreadedConnectionPool")
    def test_from_settings_pool_failure(self, mock_pool_class):
        mock_pool_class.side_effect = psycopg2.OperationalError("no server")

        with pytest.raises(StorageError):
            PostgresKeyValueStore.from_settings(Settings(database_url=""))

    def test_close(self, mock_pool):
        connection_pool, _, _ = mock_pool

        PostgresKeyValueStore(connection_pool).close()

        connection_pool.closeall.assert_called_once()


class TestCreateStore:

    def test_memory_backend(self):
        assert isinstance(create_store(Settings(storage_backend="memory")), InMemoryKeyValueStore)

    @patch("reading_tracker.storage.redis.from_url")
    def test_redis_backend(self, mock_from_url):
        assert isinstance(create_store(Settings(storage_backend=" Redis ")), RedisKeyValueStore)

    @patch("reading_tracker.storage.pool.ThreadedConnectionPool")
    def test_postgres_backend(self, mock_pool_class):
        store = create_store(Settings(storage_backend="postgres", database_url=""))

        assert isinstance(store, PostgresKeyValueStore)
        assert mock_pool_class.call_args.kwargs["dbname"] == "reading_tracker"

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            create_store(Settings(storage_backend="sqlite"))
