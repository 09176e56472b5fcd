"""
Integration tests for PostgresEstimateRepository.

The psycopg2 pool is replaced with mocks; SQL shape and error handling are
checked without a live database.
"""

import json
from unittest.mock import MagicMock, patch

import pytest

from estimator.domain.exceptions import ConnectionFailure, PersistenceFailure
from estimator.domain.models import Category, CabinetLineItem, EstimateRecord
from estimator.domain.models.config import DatabaseConfig
from estimator.infrastructure.database import PostgresEstimateRepository
from estimator.infrastructure.database.postgres_repository import ALL_COLUMNS


@pytest.fixture
def cursor():
    return MagicMock()


@pytest.fixture
def connection(cursor):
    conn = MagicMock()
    conn.cursor.return_value.__enter__.return_value = cursor
    return conn


@pytest.fixture
def pool(connection):
    pool = MagicMock()
    pool.getconn.return_value = connection
    return pool


@pytest.fixture
def repository(pool):
    return PostgresEstimateRepository(DatabaseConfig(), pool=pool)


@pytest.fixture
def record():
    return EstimateRecord(
        items={Category.CABINETS: [CabinetLineItem(type="B12 Base", quantity=2, unit_price=189.0)]},
        category_totals={Category.CABINETS: 378.0},
        grand_total=548.1,
        installation_requested=False,
        installation_cost=0.0,
        subtotal=378.0,
        markup_amount=170.1,
        markup_label="Small Order Markup (45%)",
    )


class TestPoolCreation:
    """Connection pool setup"""

    def test_pool_failure(self):
        with patch(
            "estimator.infrastructure.database.postgres_repository.SimpleConnectionPool",
            side_effect=Exception("connection refused"),
        ):
            with pytest.raises(ConnectionFailure):
                PostgresEstimateRepository(DatabaseConfig())

    def test_getconn_failure(self, pool, repository, record):
        pool.getconn.side_effect = Exception("pool exhausted")

        with pytest.raises(ConnectionFailure):
            repository.save(record)


class TestSave:
    """Insert and update"""

    def test_insert_returns_id(self, repository, cursor, connection, pool, record):
        cursor.fetchone.return_value = (17,)

        assert repository.save(record) == "17"

        sql, values = cursor.execute.call_args[0]
        assert sql.startswith("INSERT INTO estimates")
        assert "RETURNING id" in sql
        assert len(values) == len(ALL_COLUMNS)
        assert json.loads(values[0]) == [{"type": "B12 Base", "quantity": 2, "unit_price": 189.0}]
        connection.commit.assert_called_once()
        pool.putconn.assert_called_once_with(connection)

    def test_update(self, repository, cursor, record):
        cursor.rowcount = 1

        assert repository.save(record, estimate_id="17") == "17"

        sql, values = cursor.execute.call_args[0]
        assert sql.startswith("UPDATE estimates SET")
        assert values[-1] == 17

    def test_update_missing_row(self, repository, cursor, connection, record):
        cursor.rowcount = 0

        with pytest.raises(PersistenceFailure) as exc_info:
            repository.save(record, estimate_id="99")

        assert exc_info.value.estimate_id == "99"
        connection.rollback.assert_called_once()

    def test_driver_error_wrapped(self, repository, cursor, connection, pool, record):
        cursor.execute.side_effect = Exception("disk full")

        with pytest.raises(PersistenceFailure) as exc_info:
            repository.save(record)

        assert exc_info.value.operation == "save"
        connection.rollback.assert_called_once()
        pool.putconn.assert_called_once_with(connection)


class TestGet:
    """Loading rows"""

    def test_get_rebuilds_record(self, repository, cursor):
        cursor.fetchone.return_value = {
            "id": 17,
            "cabinet_items": [{"type": "B12 Base", "quantity": 2, "unit_price": 189.0}],
            "flooring_items": json.dumps([{"type": "Oak Laminate", "square_feet": 50.0, "unit_price_per_sqft": 3.25}]),
            "cabinet_total": 378.0,
            "flooring_total": 162.5,
            "grand_total": 783.13,
            "installation_requested": False,
            "installation_cost": 0,
        }

        record = repository.get("17")

        assert record.estimate_id == "17"
        assert record.items[Category.CABINETS][0].type == "B12 Base"
        assert record.items[Category.FLOORING][0].square_feet == 50.0
        assert record.items[Category.REPLACEMENT_DOORS] == ()

    def test_get_missing(self, repository, cursor):
        cursor.fetchone.return_value = None
        assert repository.get("5") is None


class TestDeleteAndSchema:
    """Delete and schema setup"""

    def test_delete(self, repository, cursor):
        cursor.rowcount = 1
        assert repository.delete("3") is True

        cursor.rowcount = 0
        assert repository.delete("3") is False

    def test_init_schema(self, repository, cursor):
        assert repository.init_schema() is True

        create_sql = cursor.execute.call_args_list[0][0][0]
        assert "CREATE TABLE IF NOT EXISTS estimates" in create_sql
        assert "replacement_door_items JSONB" in create_sql
