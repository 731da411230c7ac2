"""Types and helpers for structured logging."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class Level(str, Enum):
    """Log level, ordered from most to least verbose."""

    TRACE = "trace"
    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    FATAL = "fatal"

    @property
    def severity(self) -> int:
        """Numeric rank used for level filtering."""
        return _SEVERITY[self]

    @classmethod
    def parse(cls, value: str | None, default: "Level") -> "Level":
        """Parse a level name (case-insensitive), falling back to default."""
        if not value:
            return default
        value = value.strip().lower()
        if value == "warning":
            value = "warn"
        try:
            return cls(value)
        except ValueError:
            return default


_SEVERITY = {
    Level.TRACE: 0,
    Level.DEBUG: 1,
    Level.INFO: 2,
    Level.WARN: 3,
    Level.ERROR: 4,
    Level.FATAL: 5,
}


class Category(str, Enum):
    """Category groups log events by the part of the reporter that emitted them."""

    REPORT = "report"  # building and emitting the config table
    PATHS = "paths"  # install layout and path normalization
    BUILD = "build"  # build-time constants


@dataclass
class LogEntry:
    """One log record."""

    timestamp: datetime
    service_name: str
    instance_id: str
    environment: str
    level: Level
    message: str
    ingestion_time: datetime = field(default_factory=datetime.utcnow)
    category: Category | None = None
    function_name: str | None = None
    file_path: str | None = None
    line_number: int | None = None
    error_message: str | None = None
    stack_trace: str | None = None
    context: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "timestamp": self.timestamp.isoformat(),
            "level": self.level.value,
            "category": self.category.value if self.category else None,
            "message": self.message,
            "service_name": self.service_name,
            "environment": self.environment,
        }
        if self.function_name:
            data["caller"] = f"{self.file_path}:{self.line_number} {self.function_name}"
        if self.error_message:
            data["error"] = self.error_message
        if self.context:
            data["context"] = self.context
        return data


@dataclass
class Field:
    """Key/value pair attached to a log record."""

    key: str
    value: Any


def category(cat: Category) -> Field:
    """Field that sets the record's category."""
    return Field(key="_category", value=cat)


def param(key: str, value: Any) -> Field:
    return Field(key=key, value=value)
