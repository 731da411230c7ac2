"""The pg_config() set-returning function exposed to the host."""

from pgconfig.config.settings import Settings, get_settings
from pgconfig.funcapi.resultset import ReturnSetInfo, TupleStore
from pgconfig.services.reporter import ConfigReporter


def build_reporter(settings: Settings | None = None) -> ConfigReporter:
    """Reporter wired from process settings."""
    settings = settings or get_settings()
    return ConfigReporter(settings.layout.layout(), settings.build)


def pg_config(
    rsinfo: ReturnSetInfo | None,
    exec_path: str | None = None,
    reporter: ConfigReporter | None = None,
) -> TupleStore:
    """
    SQL-callable pg_config(): returns rows of (name, setting).

    The rows go into a tuple store attached to `rsinfo.set_result`; the store
    is also returned for direct callers.
    """
    if reporter is None or exec_path is None:
        settings = get_settings()
        reporter = reporter or build_reporter(settings)
        exec_path = exec_path or settings.exec_path
    return reporter.materialize(rsinfo, exec_path)
