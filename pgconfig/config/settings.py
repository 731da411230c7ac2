"""Settings module for the config reporter."""

import json
import os
import sys
from functools import lru_cache

from pgconfig.database.postgres import PostgresConfig
from pgconfig.domain.config import BUILD_FLAG_NAMES, NOT_RECORDED
from pgconfig.logger.logger import get_logger
from pgconfig.logger.types import Category, param
from pgconfig.paths.layout import DEFAULT_PREFIX, InstallLayout

DEFAULT_PRODUCT = "PostgreSQL"
DEFAULT_VERSION = "9.6.24"

# Install directory overrides: env suffix -> InstallLayout field
LAYOUT_ENV = {
    "BINDIR": "bindir",
    "DOCDIR": "docdir",
    "HTMLDIR": "htmldir",
    "INCLUDEDIR": "includedir",
    "PKGINCLUDEDIR": "pkgincludedir",
    "INCLUDEDIR_SERVER": "includedir_server",
    "LIBDIR": "libdir",
    "PKGLIBDIR": "pkglibdir",
    "LOCALEDIR": "localedir",
    "MANDIR": "mandir",
    "SHAREDIR": "sharedir",
    "SYSCONFDIR": "sysconfdir",
}


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class BuildConfig:
    """
    Build-time values captured by the build system.

    Read from a generated JSON file (PGCONFIG_BUILD_FILE) and then from
    PGCONFIG_VAL_<NAME> environment variables, which take precedence.
    Absent values are reported as "not recorded".
    """

    def __init__(
        self,
        values: dict[str, str] | None = None,
        build_file: str | None = None,
    ) -> None:
        self.build_file = build_file or os.getenv("PGCONFIG_BUILD_FILE")
        self.values: dict[str, str] = {}

        if values is None:
            logger = get_logger().with_category(Category.BUILD)
            if self.build_file:
                self.values.update(self._read_build_file(self.build_file))
                logger.info(
                    "Build file loaded",
                    param("path", self.build_file),
                    param("keys", sorted(self.values)),
                )
            env_names = []
            for name in (*BUILD_FLAG_NAMES, "PRODUCT", "VERSION"):
                env_value = os.getenv(f"PGCONFIG_VAL_{name}")
                if env_value is not None:
                    self.values[name] = env_value
                    env_names.append(name)
            if env_names:
                logger.debug("Build values overridden from environment", param("keys", env_names))
        else:
            self.values.update(values)

        self.product = self.values.get("PRODUCT") or DEFAULT_PRODUCT
        self.version = self.values.get("VERSION") or DEFAULT_VERSION

    @staticmethod
    def _read_build_file(path: str) -> dict[str, str]:
        with open(path) as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"build file {path} must hold a JSON object")
        return {str(k): str(v) for k, v in data.items() if v is not None}

    def value(self, name: str) -> str:
        """Build flag value, or "not recorded" when it was not captured."""
        value = self.values.get(name)
        return NOT_RECORDED if value is None else value

    @property
    def version_string(self) -> str:
        return f"{self.product} {self.version}"


class LayoutConfig:
    """Install layout recorded at build time."""

    def __init__(self, prefix: str | None = None) -> None:
        self.prefix = prefix or os.getenv("PGCONFIG_PREFIX", DEFAULT_PREFIX)
        self.overrides = {
            attr: value
            for suffix, attr in LAYOUT_ENV.items()
            if (value := os.getenv(f"PGCONFIG_{suffix}"))
        }

    def layout(self) -> InstallLayout:
        return InstallLayout.from_prefix(self.prefix, **self.overrides)


class Settings:
    """Application settings."""

    def __init__(self) -> None:
        # Service info
        self.environment = os.getenv("ENVIRONMENT", "dev")
        self.service_name = os.getenv("SERVICE_NAME", "pgconfig")
        self.log_level = os.getenv("LOG_LEVEL", "info")
        self.log_to_postgres = _env_flag("PGCONFIG_LOG_TO_POSTGRES")

        # Path of the running server executable; set once at startup
        self.exec_path = os.getenv("PGCONFIG_EXEC_PATH") or os.path.abspath(sys.argv[0])

        self.build = BuildConfig()
        self.layout = LayoutConfig()
        self.postgres = PostgresConfig()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings, read once."""
    return Settings()
