"""Tests for PostgresClient against a mocked connection pool."""

from unittest.mock import MagicMock, patch
from uuid import uuid4

import pytest

from clients.postgres_client import PostgresClient

DSN = "postgresql://todo@localhost/todo_test"


@pytest.fixture
def conn():
    return MagicMock()


@pytest.fixture
def cursor(conn):
    cur = MagicMock()
    conn.cursor.return_value.__enter__.return_value = cur
    return cur


@pytest.fixture
def pool(conn):
    pool = MagicMock()
    pool.getconn.return_value = conn
    with patch("clients.postgres_client.psycopg2.pool.ThreadedConnectionPool", return_value=pool):
        yield pool
    PostgresClient.close_all_pools()


@pytest.fixture
def db(pool):
    return PostgresClient(DSN)


class TestPool:
    def test_pool_shared_per_url(self, pool, db):
        other = PostgresClient(DSN)
        assert other._pools[DSN] is pool

    def test_connection_returned_to_pool(self, db, pool, conn, cursor):
        cursor.description = None
        db.execute("UPDATE tasks SET title = %s", ("x",))

        pool.putconn.assert_called_once_with(conn)

    def test_rollback_on_error(self, db, pool, conn, cursor):
        cursor.execute.side_effect = RuntimeError("boom")

        with pytest.raises(RuntimeError):
            db.execute("SELECT 1")

        conn.rollback.assert_called_once()
        pool.putconn.assert_called_once_with(conn)

    def test_close_removes_pool(self, db, pool):
        db.close()

        pool.closeall.assert_called_once()
        assert DSN not in PostgresClient._pools


class TestExecute:
    def test_rows_as_dicts(self, db, cursor):
        cursor.description = [("id",)]
        cursor.fetchall.return_value = [{"id": 1}, {"id": 2}]

        assert db.execute("SELECT id FROM tasks") == [{"id": 1}, {"id": 2}]

    def test_uuid_params_converted(self, db, cursor):
        cursor.description = None
        task_id = uuid4()

        db.execute("DELETE FROM tasks WHERE id = %s", (task_id,))

        cursor.execute.assert_called_once_with("DELETE FROM tasks WHERE id = %s", (str(task_id),))

    def test_single_none_when_empty(self, db, cursor):
        cursor.description = [("id",)]
        cursor.fetchall.return_value = []

        assert db.execute_single("SELECT id FROM tasks") is None

    def test_scalar(self, db, cursor):
        cursor.fetchone.return_value = (3,)
        assert db.execute_scalar("SELECT count(*) FROM tasks") == 3

    def test_returning_commits(self, db, conn, cursor):
        cursor.fetchall.return_value = [{"id": 1}]

        assert db.execute_returning("DELETE FROM tasks RETURNING id") == [{"id": 1}]
        conn.commit.assert_called_once()
