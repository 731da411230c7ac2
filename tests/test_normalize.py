"""Tests for platform path cleanup."""

from __future__ import annotations

import ctypes
from types import SimpleNamespace
from typing import Any

import pytest

from pgconfig.paths.normalize import normalize_path
from pgconfig.util.strings import MAXPGPATH

PATHS = [
    "/usr/local/pgsql/bin",
    "/opt/Program Files/pg/lib",
    "relative/dir",
    "",
]


class FakeKernel32:
    """Stands in for GetShortPathNameW with a fixed table of short names."""

    def __init__(self, short_names: dict[str, str], result: int | None = None) -> None:
        self.short_names = short_names
        self.result = result
        self.calls: list[tuple[str, int]] = []

    def GetShortPathNameW(self, path: str, buf: Any, size: int) -> int:  # noqa: N802
        self.calls.append((path, size))
        if self.result is not None:
            return self.result
        short = self.short_names.get(path)
        if short is None:
            return 0
        buf.value = short
        return len(short)


@pytest.fixture
def install_kernel32(monkeypatch: pytest.MonkeyPatch):
    def install(kernel32: FakeKernel32) -> FakeKernel32:
        monkeypatch.setattr(ctypes, "windll", SimpleNamespace(kernel32=kernel32), raising=False)
        return kernel32

    return install


@pytest.mark.parametrize("path", PATHS)
def test_posix_is_identity(path: str) -> None:
    assert normalize_path(path, platform="posix") == path


def test_windows_uses_short_name(install_kernel32) -> None:
    kernel32 = install_kernel32(
        FakeKernel32({r"C:\Program Files\PostgreSQL\lib": r"C:\PROGRA~1\POSTGR~1\lib"})
    )

    result = normalize_path(r"C:\Program Files\PostgreSQL\lib", platform="nt")

    assert result == "C:/PROGRA~1/POSTGR~1/lib"
    assert kernel32.calls == [(r"C:\Program Files\PostgreSQL\lib", MAXPGPATH - 1)]


def test_windows_missing_path_passes_through(install_kernel32) -> None:
    # short names fail for directories that do not exist, e.g. sysconfdir
    install_kernel32(FakeKernel32({}))

    assert normalize_path(r"C:\Program Files\pg\etc", platform="nt") == "C:/Program Files/pg/etc"


def test_windows_short_name_too_long_keeps_input(install_kernel32) -> None:
    install_kernel32(FakeKernel32({}, result=MAXPGPATH - 1))

    assert normalize_path(r"C:\pg\share\doc", platform="nt") == "C:/pg/share/doc"


def test_windows_without_win32_api_swaps_separators(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delattr(ctypes, "windll", raising=False)

    assert normalize_path(r"C:\pg\share\doc", platform="nt") == "C:/pg/share/doc"


@pytest.mark.parametrize("platform", ["posix", "nt"])
@pytest.mark.parametrize("path", [*PATHS, r"C:\a b\c", "C:/x\\y"])
def test_idempotent(install_kernel32, platform: str, path: str) -> None:
    install_kernel32(FakeKernel32({r"C:\a b\c": r"C:\AB~1\c"}))

    once = normalize_path(path, platform=platform)
    assert normalize_path(once, platform=platform) == once
