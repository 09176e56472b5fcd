"""
Kiosk Estimator - PostgreSQL Estimate Repository

Implementation of EstimateRepository protocol using psycopg2.
"""
import json
import logging
from contextlib import contextmanager
from typing import Any, Generator

from psycopg2.extras import RealDictCursor
from psycopg2.pool import SimpleConnectionPool

from estimator.domain.exceptions import ConnectionFailure, PersistenceFailure
from estimator.domain.models import CATEGORY_ORDER, EstimateRecord
from estimator.domain.models.config import DatabaseConfig

logger = logging.getLogger(__name__)

ITEM_COLUMNS = [c.spec.record_key for c in CATEGORY_ORDER]
TOTAL_COLUMNS = [c.spec.total_key for c in CATEGORY_ORDER]
SUMMARY_COLUMNS = ["subtotal", "markup_amount", "markup_label", "grand_total", "installation_requested", "installation_cost"]
ALL_COLUMNS = ITEM_COLUMNS + TOTAL_COLUMNS + SUMMARY_COLUMNS


class PostgresEstimateRepository:
    """
    PostgreSQL estimate storage.

    One row per estimate; each category's items are a JSONB array.
    """

    def __init__(self, config: DatabaseConfig, pool: Any = None):
        """
        Initialize PostgreSQL repository.

        Args:
            config: Database configuration
            pool: Existing connection pool (default: new SimpleConnectionPool)

        Raises:
            ConnectionFailure: If connection pool creation fails
        """
        self.config = config
        self.table = config.table_name
        if pool is not None:
            self.pool = pool
            return
        try:
            self.pool = SimpleConnectionPool(
                config.pool_min_size,
                config.pool_max_size,
                host=config.host,
                port=config.port,
                database=config.database,
                user=config.user,
                password=config.password,
            )
            logger.info(f"PostgreSQL connection pool created (min={config.pool_min_size}, max={config.pool_max_size})")
        except Exception as e:
            logger.error(f"Failed to create connection pool: {e}", exc_info=True)
            raise ConnectionFailure(f"Failed to connect to database: {e}", operation="connect")

    @contextmanager
    def get_connection(self) -> Generator[Any, None, None]:
        """
        Get database connection from pool (context manager).

        Rolls back on error and always returns the connection to the pool.

        Raises:
            ConnectionFailure: If no connection can be obtained
        """
        try:
            conn = self.pool.getconn()
        except Exception as e:
            logger.error(f"Connection error: {e}", exc_info=True)
            raise ConnectionFailure(f"Database connection error: {e}", operation="connect")
        try:
            yield conn
        except Exception:
            conn.rollback()
            raise
        finally:
            self.pool.putconn(conn)

    def init_schema(self) -> bool:
        """
        Create the estimates table if missing.

        Raises:
            PersistenceFailure: If initialization fails
        """
        item_cols = ",\n".join(f"{c} JSONB NOT NULL DEFAULT '[]'::jsonb" for c in ITEM_COLUMNS)
        total_cols = ",\n".join(f"{c} NUMERIC(12,2) NOT NULL DEFAULT 0" for c in TOTAL_COLUMNS)
        try:
            with self.get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(f"""
                        CREATE TABLE IF NOT EXISTS {self.table} (
                            id SERIAL PRIMARY KEY,
                            {item_cols},
                            {total_cols},
                            subtotal NUMERIC(12,2) NOT NULL DEFAULT 0,
                            markup_amount NUMERIC(12,2) NOT NULL DEFAULT 0,
                            markup_label VARCHAR(100),
                            grand_total NUMERIC(12,2) NOT NULL DEFAULT 0,
                            installation_requested BOOLEAN NOT NULL DEFAULT FALSE,
                            installation_cost NUMERIC(12,2) NOT NULL DEFAULT 0,
                            created_at TIMESTAMP DEFAULT NOW(),
                            updated_at TIMESTAMP DEFAULT NOW()
                        )
                    """)
                    cur.execute(f"CREATE INDEX IF NOT EXISTS idx_{self.table}_created_at ON {self.table}(created_at DESC)")
                conn.commit()
            logger.info(f"✅ Schema ready ({self.table})")
            return True
        except PersistenceFailure:
            raise
        except Exception as e:
            logger.error(f"Failed to initialize schema: {e}", exc_info=True)
            raise PersistenceFailure(f"Failed to initialize schema: {e}", operation="init_schema")

    def save(self, record: EstimateRecord, estimate_id: str | None = None) -> str:
        """Save estimate (insert, or update when estimate_id is given)."""
        values = self._row_values(record)
        try:
            with self.get_connection() as conn:
                with conn.cursor() as cur:
                    if estimate_id is None:
                        placeholders = ", ".join(["%s"] * len(ALL_COLUMNS))
                        cur.execute(
                            f"INSERT INTO {self.table} ({', '.join(ALL_COLUMNS)}) VALUES ({placeholders}) RETURNING id",
                            values,
                        )
                        saved_id = str(cur.fetchone()[0])
                    else:
                        assignments = ", ".join(f"{c} = %s" for c in ALL_COLUMNS)
                        cur.execute(
                            f"UPDATE {self.table} SET {assignments}, updated_at = NOW() WHERE id = %s",
                            values + [int(estimate_id)],
                        )
                        if cur.rowcount == 0:
                            raise PersistenceFailure("Estimate not found", operation="update", estimate_id=estimate_id)
                        saved_id = str(estimate_id)
                conn.commit()
            logger.info(f"✅ Saved estimate ID {saved_id}")
            return saved_id
        except PersistenceFailure:
            raise
        except Exception as e:
            logger.error(f"Failed to save estimate: {e}", exc_info=True)
            raise PersistenceFailure(f"Failed to save estimate: {e}", operation="save", estimate_id=estimate_id)

    def get(self, estimate_id: str) -> EstimateRecord | None:
        """Get estimate by ID."""
        try:
            with self.get_connection() as conn:
                with conn.cursor(cursor_factory=RealDictCursor) as cur:
                    cur.execute(
                        f"SELECT id, {', '.join(ALL_COLUMNS)} FROM {self.table} WHERE id = %s",
                        (int(estimate_id),),
                    )
                    row = cur.fetchone()
            return self._record_from_row(row) if row else None
        except PersistenceFailure:
            raise
        except Exception as e:
            logger.error(f"Failed to get estimate {estimate_id}: {e}", exc_info=True)
            raise PersistenceFailure(f"Failed to get estimate: {e}", operation="get", estimate_id=estimate_id)

    def delete(self, estimate_id: str) -> bool:
        """Delete estimate by ID."""
        try:
            with self.get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(f"DELETE FROM {self.table} WHERE id = %s", (int(estimate_id),))
                    deleted = cur.rowcount > 0
                conn.commit()
            if deleted:
                logger.info(f"✅ Deleted estimate ID {estimate_id}")
            return deleted
        except PersistenceFailure:
            raise
        except Exception as e:
            logger.error(f"Failed to delete estimate {estimate_id}: {e}", exc_info=True)
            raise PersistenceFailure(f"Failed to delete estimate: {e}", operation="delete", estimate_id=estimate_id)

    def close(self) -> None:
        self.pool.closeall()

    # Helpers

    def _row_values(self, record: EstimateRecord) -> list[Any]:
        data = record.to_dict()
        items = [json.dumps(data[c], ensure_ascii=False) for c in ITEM_COLUMNS]
        totals = [round(float(data[c]), 2) for c in TOTAL_COLUMNS]
        summary = [
            round(record.subtotal, 2),
            round(record.markup_amount, 2),
            record.markup_label,
            round(record.grand_total, 2),
            record.installation_requested,
            round(record.installation_cost, 2),
        ]
        return items + totals + summary

    def _record_from_row(self, row: dict) -> EstimateRecord:
        data: dict[str, Any] = {}
        for key, value in row.items():
            if key in ITEM_COLUMNS and isinstance(value, str):
                value = json.loads(value)
            elif key in TOTAL_COLUMNS or key in ("subtotal", "markup_amount", "grand_total", "installation_cost"):
                value = float(value) if value is not None else 0.0
            data[key] = value
        return EstimateRecord.from_dict(data)
