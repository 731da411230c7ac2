"""Batched PostgreSQL writer for log records."""

import json
import sys

import psycopg2
import psycopg2.extras
from psycopg2.extensions import connection as Connection

from pgconfig.logger.types import LogEntry

INSERT_LOGS = """
    INSERT INTO logs (
        timestamp, service_name, instance_id, environment,
        level, category, function_name, file_path, line_number,
        message, error_message, stack_trace, context, ingestion_time
    ) VALUES %s
"""


class PostgresWriter:
    """PostgresWriter buffers log records and inserts them in batches."""

    def __init__(self, dsn: str, batch_size: int = 100) -> None:
        """
        Initialize PostgresWriter.

        Args:
            dsn: PostgreSQL connection string
            batch_size: Buffered records that trigger a flush
        """
        self.dsn = dsn
        self.batch_size = batch_size
        self.buffer: list[LogEntry] = []
        self._conn: Connection | None = None
        self._closed = False

    def connect(self) -> None:
        """Connect to PostgreSQL."""
        try:
            self._conn = psycopg2.connect(self.dsn)
            self._conn.set_session(autocommit=False)
        except Exception as e:
            print(
                f"[LOGGER ERROR] Failed to connect to PostgreSQL: {e}",
                file=sys.stderr,
            )
            raise

    def write(self, entry: LogEntry) -> None:
        """Add a record to the buffer."""
        if self._closed:
            return
        self.buffer.append(entry)
        if len(self.buffer) >= self.batch_size:
            self.flush()

    def flush(self) -> None:
        """Insert buffered records; on failure dump them to stderr instead."""
        if not self.buffer:
            return
        if not self._conn:
            self._fallback_to_stderr()
            self.buffer.clear()
            return

        values = [
            (
                entry.timestamp,
                entry.service_name,
                entry.instance_id,
                entry.environment,
                entry.level.value,
                entry.category.value if entry.category else None,
                entry.function_name,
                entry.file_path,
                entry.line_number,
                entry.message,
                entry.error_message,
                entry.stack_trace,
                json.dumps(entry.context, default=str) if entry.context is not None else None,
                entry.ingestion_time,
            )
            for entry in self.buffer
        ]

        try:
            with self._conn.cursor() as cursor:
                psycopg2.extras.execute_values(
                    cursor,
                    INSERT_LOGS,
                    values,
                    page_size=self.batch_size,
                )
            self._conn.commit()
        except psycopg2.Error as e:
            print(
                f"[LOGGER ERROR] Failed to insert logs into PostgreSQL: {e}",
                file=sys.stderr,
            )
            self._conn.rollback()
            self._fallback_to_stderr()
        self.buffer.clear()

    def _fallback_to_stderr(self) -> None:
        for entry in self.buffer:
            print(json.dumps(entry.to_dict(), default=str), file=sys.stderr)

    def close(self) -> None:
        """Flush what is left and close the connection."""
        self.flush()
        self._closed = True
        if self._conn:
            self._conn.close()
            self._conn = None
