"""Logger module for the config reporter."""

from pgconfig.logger.logger import Logger, get_logger, init_logger
from pgconfig.logger.postgres_writer import PostgresWriter
from pgconfig.logger.types import Category, Field, Level, LogEntry

__all__ = [
    "Logger",
    "get_logger",
    "init_logger",
    "PostgresWriter",
    "Category",
    "Level",
    "LogEntry",
    "Field",
]
