"""Builds the (name, setting) table of install paths and build flags."""

from collections.abc import Callable

from pgconfig.config.settings import BuildConfig
from pgconfig.domain.config import BUILD_FLAG_NAMES, ConfigEntry, ConfigTable
from pgconfig.errors import ResultShapeError, UnsupportedContextError
from pgconfig.funcapi.resultset import ReturnSetInfo, SetReturnMode, TupleStore
from pgconfig.logger.logger import get_logger
from pgconfig.logger.types import Category, param
from pgconfig.paths.layout import InstallLayout
from pgconfig.paths.normalize import normalize_path
from pgconfig.util.strings import MAXPGPATH, bounded_append, buffer_text, new_buffer

PGXS_SUFFIX = "/pgxs/src/makefiles/pgxs.mk"


class ConfigReporter:
    """
    Reports where the server is installed and how it was built.

    The table is rebuilt on every call; nothing is cached between calls.
    """

    def __init__(
        self,
        layout: InstallLayout,
        build: BuildConfig,
        normalize: Callable[[str], str] = normalize_path,
    ) -> None:
        self.layout = layout
        self.build = build
        self.normalize = normalize
        self.logger = get_logger().with_category(Category.REPORT)

    def report(self, exec_path: str) -> ConfigTable:
        """
        Build the 22-entry config table for the executable at `exec_path`.

        Args:
            exec_path: Path of the running server executable

        Returns:
            ConfigTable in reporting order
        """
        if not exec_path:
            raise ValueError("executable path must not be empty")

        paths = self._paths(exec_path)
        entries = [ConfigEntry(name, self.normalize(value)) for name, value in paths]
        entries.extend(ConfigEntry(name, self.build.value(name)) for name in BUILD_FLAG_NAMES)
        entries.append(ConfigEntry("VERSION", self.build.version_string))

        self.logger.debug(
            "Config report built",
            param("exec_path", exec_path),
            param("entries", len(entries)),
        )
        return ConfigTable(entries)

    def materialize(self, rsinfo: ReturnSetInfo | None, exec_path: str) -> TupleStore:
        """
        Stream the report into the caller's result set.

        Raises:
            UnsupportedContextError: caller cannot take a materialized set
            ResultShapeError: caller expects something other than (text, text)
        """
        if rsinfo is None or not rsinfo.allows(SetReturnMode.MATERIALIZE):
            raise UnsupportedContextError()

        desc = rsinfo.expected_desc
        if desc is None or not desc.is_text_pair():
            raise ResultShapeError()

        table = self.report(exec_path)

        store = TupleStore(desc)
        for entry in table:
            store.put_row(entry.as_row())
        store.done_storing()

        rsinfo.return_mode = SetReturnMode.MATERIALIZE
        rsinfo.set_result = store
        rsinfo.set_desc = desc
        return store

    def _paths(self, exec_path: str) -> list[tuple[str, str]]:
        layout = self.layout
        pkglib = layout.get_pkglib_path(exec_path)
        return [
            ("BINDIR", bin_dir(exec_path)),
            ("DOCDIR", layout.get_doc_path(exec_path)),
            ("HTMLDIR", layout.get_html_path(exec_path)),
            ("INCLUDEDIR", layout.get_include_path(exec_path)),
            ("PKGINCLUDEDIR", layout.get_pkginclude_path(exec_path)),
            ("INCLUDEDIR-SERVER", layout.get_includeserver_path(exec_path)),
            ("LIBDIR", layout.get_lib_path(exec_path)),
            ("PKGLIBDIR", pkglib),
            ("LOCALEDIR", layout.get_locale_path(exec_path)),
            ("MANDIR", layout.get_man_path(exec_path)),
            ("SHAREDIR", layout.get_share_path(exec_path)),
            ("SYSCONFDIR", layout.get_etc_path(exec_path)),
            ("PGXS", self._pgxs_path(pkglib)),
        ]

    def _pgxs_path(self, pkglib: str) -> str:
        buf = new_buffer(pkglib, MAXPGPATH)
        needed = bounded_append(buf, PGXS_SUFFIX, MAXPGPATH)
        if needed >= MAXPGPATH:
            self.logger.warn(
                "PGXS path truncated",
                param("pkglibdir", pkglib),
                param("length", needed),
                param("capacity", MAXPGPATH),
            )
        return buffer_text(buf)


def bin_dir(exec_path: str) -> str:
    """Directory part of the executable path; '' for a bare name."""
    idx = exec_path.rfind("/")
    if idx < 0:
        return ""
    return exec_path[:idx]
