"""Structured logger for the config reporter."""

import inspect
import json
import os
import sys
import traceback
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any, TextIO

from pgconfig.logger.postgres_writer import PostgresWriter
from pgconfig.logger.types import Category, Field, Level, LogEntry


class Logger:
    """Logger that writes structured records to PostgreSQL or stderr."""

    def __init__(
        self,
        service_name: str,
        environment: str,
        writer: PostgresWriter | None = None,
        level: Level = Level.INFO,
        stream: TextIO | None = None,
    ) -> None:
        """
        Initialize Logger.

        Args:
            service_name: Service name recorded on every entry
            environment: Environment (dev, stage, prod)
            writer: PostgresWriter for the logs table; stderr is used without one
            level: Minimum level that is recorded
            stream: Stream used when no writer is set (defaults to sys.stderr)
        """
        self.service_name = service_name
        self.environment = environment
        self.writer = writer
        self.level = level
        self.stream = stream
        self.instance_id = self._get_instance_id()

        self._fields: dict[str, Any] = {}
        self._category: Category | None = None

    def trace(self, msg: str, *fields: Field) -> None:
        """Log trace level message."""
        self._log(Level.TRACE, msg, None, *fields)

    def debug(self, msg: str, *fields: Field) -> None:
        """Log debug level message."""
        self._log(Level.DEBUG, msg, None, *fields)

    def info(self, msg: str, *fields: Field) -> None:
        """Log info level message."""
        self._log(Level.INFO, msg, None, *fields)

    def warn(self, msg: str, *fields: Field) -> None:
        """Log warn level message."""
        self._log(Level.WARN, msg, None, *fields)

    def error(self, msg: str, err: Exception | None = None, *fields: Field) -> None:
        """Log error level message."""
        self._log(Level.ERROR, msg, err, *fields)

    def fatal(self, msg: str, err: Exception | None = None, *fields: Field) -> None:
        """Log fatal level message and exit."""
        self._log(Level.FATAL, msg, err, *fields)
        raise SystemExit(1)

    def enabled(self, level: Level) -> bool:
        """Check if records at this level are recorded."""
        return level.severity >= self.level.severity

    def _log(
        self,
        level: Level,
        msg: str,
        err: Exception | None,
        *fields: Field,
    ) -> None:
        """Build the record and hand it to the writer or stream."""
        if not self.enabled(level):
            return

        frame = inspect.currentframe()
        caller_frame = frame.f_back.f_back if frame and frame.f_back else None

        function_name = None
        file_path = None
        line_number = None

        if caller_frame:
            function_name = caller_frame.f_code.co_name
            file_path = self._clean_file_path(caller_frame.f_code.co_filename)
            line_number = caller_frame.f_lineno

        context: dict[str, Any] = dict(self._fields)
        category = self._category

        for field in fields:
            if field.key == "_category":
                if isinstance(field.value, Category):
                    category = field.value
                continue
            context[field.key] = field.value

        entry = LogEntry(
            timestamp=datetime.utcnow(),
            service_name=self.service_name,
            instance_id=self.instance_id,
            environment=self.environment,
            level=level,
            category=category,
            function_name=function_name,
            file_path=file_path,
            line_number=line_number,
            message=msg,
            context=context if context else None,
        )

        if err:
            entry.error_message = str(err)
            # Stack trace only for real failures
            if level in (Level.ERROR, Level.FATAL):
                entry.stack_trace = "".join(
                    traceback.format_exception(type(err), err, err.__traceback__)
                )

        if self.writer:
            self.writer.write(entry)
        else:
            stream = self.stream or sys.stderr
            print(json.dumps(entry.to_dict(), default=str), file=stream)

    def with_category(self, category: Category) -> "Logger":
        """Return a copy of the logger bound to a category."""
        new_logger = self._copy()
        new_logger._category = category
        return new_logger

    def with_fields(self, *fields: Field) -> "Logger":
        """Return a copy of the logger with extra context fields."""
        new_logger = self._copy()
        for field in fields:
            new_logger._fields[field.key] = field.value
        return new_logger

    def _copy(self) -> "Logger":
        """Create a copy of the logger."""
        new_logger = Logger(
            self.service_name,
            self.environment,
            self.writer,
            self.level,
            self.stream,
        )
        new_logger.instance_id = self.instance_id
        new_logger._fields = dict(self._fields)
        new_logger._category = self._category
        return new_logger

    @staticmethod
    def _get_instance_id() -> str:
        """Get instance ID from env or generate one."""
        if hostname := os.getenv("HOSTNAME"):
            return hostname
        return str(uuid.uuid4())

    @staticmethod
    def _clean_file_path(file_path: str) -> str:
        """Trim an absolute source path down to the package-relative part."""
        path = Path(file_path)

        parts = path.parts
        if "pgconfig" in parts:
            idx = parts.index("pgconfig")
            return str(Path(*parts[idx:]))

        return path.name


_global_logger: Logger | None = None


def get_logger() -> Logger:
    """
    Return the global logger.

    Library code may run before the entry point configured logging (for
    example when the host calls pg_config directly), so an unconfigured
    process gets a default stderr logger instead of an error.
    """
    global _global_logger
    if _global_logger is None:
        _global_logger = Logger("pgconfig", os.getenv("ENVIRONMENT", "dev"))
    return _global_logger


def init_logger(
    service_name: str,
    environment: str,
    writer: PostgresWriter | None = None,
    level: Level = Level.INFO,
) -> Logger:
    """
    Initialize the global logger.

    Args:
        service_name: Service name
        environment: Environment (dev, stage, prod)
        writer: PostgresWriter for the logs table
        level: Minimum recorded level

    Returns:
        Logger instance
    """
    global _global_logger
    _global_logger = Logger(service_name, environment, writer, level)
    return _global_logger
