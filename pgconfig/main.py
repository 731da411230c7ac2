"""
pgconfig - report install paths and build flags of a PostgreSQL server.

Prints the report as NAME = value lines.
"""

import sys
from typing import TextIO

from pgconfig.config.settings import Settings
from pgconfig.domain.config import ConfigTable
from pgconfig.funcapi.pg_config import build_reporter
from pgconfig.logger.logger import get_logger, init_logger
from pgconfig.logger.postgres_writer import PostgresWriter
from pgconfig.logger.types import Category, Level, category, param


def print_report(table: ConfigTable, out: TextIO) -> None:
    """Print the table in NAME = value form."""
    for entry in table:
        print(f"{entry.name} = {entry.value}", file=out)


def main(settings: Settings | None = None, out: TextIO | None = None) -> int:
    """Main entry point."""
    settings = settings or Settings()
    out = out or sys.stdout

    log_writer: PostgresWriter | None = None
    if settings.log_to_postgres:
        log_writer = PostgresWriter(dsn=settings.postgres.dsn, batch_size=100)
        log_writer.connect()

    init_logger(
        service_name=settings.service_name,
        environment=settings.environment,
        writer=log_writer,
        level=Level.parse(settings.log_level, Level.INFO),
    )
    logger = get_logger()

    try:
        logger.debug(
            "Building config report",
            category(Category.REPORT),
            param("exec_path", settings.exec_path),
            param("prefix", settings.layout.prefix),
        )
        table = build_reporter(settings).report(settings.exec_path)
        print_report(table, out)
    except Exception as e:
        logger.error("pgconfig failed", e, param("error", str(e)))
        return 1
    finally:
        if log_writer:
            log_writer.close()

    return 0


def run() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    run()
