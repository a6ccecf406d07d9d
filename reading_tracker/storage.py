"""Key-value storage backends.

Every logical store (progress, notes, study focus, ...) lives under a single
key as one JSON document. Backends expose the same synchronous contract:
``get(key) -> str | None``, ``set(key, value)`` and ``delete(key)``, and raise
``StorageError`` when the underlying service fails. Callers construct one store
at startup and pass it to the repositories that need it.
"""
import logging
from contextlib import contextmanager
from typing import Dict, Optional, Protocol

import psycopg2
import redis
from psycopg2 import pool, sql
from psycopg2.extras import RealDictCursor
from redis.exceptions import RedisError

from reading_tracker.config import Settings
from reading_tracker.utils.exceptions import StorageError

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Synchronous string key-value contract shared by all backends."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def delete(self, key: str) -> None:
        ...

    def close(self) -> None:
        ...


class InMemoryKeyValueStore:
    """Process-local store, used for development and tests."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def close(self) -> None:
        self._data.clear()


class RedisKeyValueStore:
    """Store backed by a Redis server."""

    def __init__(self, client: redis.Redis):
        self._client = client

    @classmethod
    def from_url(cls, url: str) -> "RedisKeyValueStore":
        client = redis.from_url(
            url,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
            retry_on_timeout=True,
            health_check_interval=30
        )
        logger.info(f"Redis key-value store initialized: {url}")
        return cls(client)

    def get(self, key: str) -> Optional[str]:
        try:
            return self._client.get(key)
        except RedisError as e:
            logger.error(f"Redis get error for key {key}: {e}")
            raise StorageError(f"Redis get failed for {key}") from e

    def set(self, key: str, value: str) -> None:
        try:
            self._client.set(key, value)
        except RedisError as e:
            logger.error(f"Redis set error for key {key}: {e}")
            raise StorageError(f"Redis set failed for {key}") from e

    def delete(self, key: str) -> None:
        try:
            self._client.delete(key)
        except RedisError as e:
            logger.error(f"Redis delete error for key {key}: {e}")
            raise StorageError(f"Redis delete failed for {key}") from e

    def close(self) -> None:
        try:
            self._client.close()
            logger.info("Redis client closed")
        except RedisError as e:
            logger.error(f"Error closing Redis client: {e}")


class PostgresKeyValueStore:
    """Store backed by a single PostgreSQL table (see alembic 0001)."""

    def __init__(self, connection_pool: pool.ThreadedConnectionPool, table_name: str = "key_value_store"):
        self._pool = connection_pool
        self._table = sql.Identifier(table_name)

    @classmethod
    def from_settings(cls, settings: Settings, minconn: int = 1, maxconn: int = 5) -> "PostgresKeyValueStore":
        try:
            connection_pool = pool.ThreadedConnectionPool(
                minconn,
                maxconn,
                cursor_factory=RealDictCursor,
                **settings.db_config
            )
        except psycopg2.Error as e:
            logger.error(f"Failed to initialize connection pool: {e}")
            raise StorageError("PostgreSQL connection pool unavailable") from e
        logger.info(f"Database connection pool initialized (min={minconn}, max={maxconn})")
        return cls(connection_pool, settings.kv_table_name)

    @contextmanager
    def _connection(self):
        conn = None
        try:
            conn = self._pool.getconn()
            yield conn
        except psycopg2.Error as e:
            logger.error(f"Database error: {e}")
            if conn:
                conn.rollback()
            raise StorageError("PostgreSQL operation failed") from e
        finally:
            if conn:
                self._pool.putconn(conn)

    def get(self, key: str) -> Optional[str]:
        with self._connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    sql.SQL("SELECT value FROM {} WHERE key = %s").format(self._table),
                    (key,),
                )
                row = cur.fetchone()
        return row["value"] if row else None

    def set(self, key: str, value: str) -> None:
        with self._connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    sql.SQL(
                        """
                        INSERT INTO {} (key, value, updated_at)
                        VALUES (%s, %s, CURRENT_TIMESTAMP)
                        ON CONFLICT (key)
                        DO UPDATE SET value = EXCLUDED.value, updated_at = EXCLUDED.updated_at
                        """
                    ).format(self._table),
                    (key, value),
                )
                conn.commit()

    def delete(self, key: str) -> None:
        with self._connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    sql.SQL("DELETE FROM {} WHERE key = %s").format(self._table),
                    (key,),
                )
                conn.commit()

    def close(self) -> None:
        self._pool.closeall()
        logger.info("Database connection pool closed")


def create_store(settings: Settings) -> KeyValueStore:
    """Build the backend named by ``settings.storage_backend``."""
    backend = settings.storage_backend.strip().lower()
    if backend == "memory":
        logger.info("Using in-memory key-value store")
        return InMemoryKeyValueStore()
    if backend == "redis":
        return RedisKeyValueStore.from_url(settings.redis_url)
    if backend == "postgres":
        return PostgresKeyValueStore.from_settings(settings)
    raise ValueError(f"Unknown storage backend: {settings.storage_backend}")
