"""Platform path cleanup for reported install paths."""

import ctypes
import os

from pgconfig.logger.logger import get_logger
from pgconfig.logger.types import Category, param
from pgconfig.util.strings import MAXPGPATH


def normalize_path(path: str, platform: str | None = None) -> str:
    """
    Make a path safe for shell-invoked build recipes.

    On Windows the path is converted to its 8.3 short form (no spaces) and
    backslashes become forward slashes. On POSIX the path is returned as is.
    Never fails: a path that cannot be shortened is kept, which matters for
    directories such as sysconfdir that may not exist.
    """
    if (platform or os.name) != "nt":
        return path

    return _short_path_name(path).replace("\\", "/")


def _short_path_name(path: str) -> str:
    windll = getattr(ctypes, "windll", None)
    if windll is None:
        return path

    buf = ctypes.create_unicode_buffer(MAXPGPATH)
    length = windll.kernel32.GetShortPathNameW(path, buf, MAXPGPATH - 1)
    # 0 means failure (missing path, short names disabled); a length past the
    # buffer means it did not fit. Both keep the original path.
    if length == 0 or length >= MAXPGPATH - 1:
        get_logger().with_category(Category.PATHS).debug(
            "Short path name unavailable, keeping original",
            param("path", path),
        )
        return path
    return buf.value
