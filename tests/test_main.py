"""Tests for the command-line entry point."""

from __future__ import annotations

import io

import pytest

from pgconfig import main as main_module
from pgconfig.config.settings import Settings
from pgconfig.domain.config import CONFIG_NAMES


@pytest.fixture
def settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    for name in ("PGCONFIG_LOG_TO_POSTGRES", "PGCONFIG_BUILD_FILE", "PGCONFIG_PREFIX"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("PGCONFIG_EXEC_PATH", "/usr/local/pgsql/bin/postgres")
    return Settings()


def test_prints_report(settings: Settings) -> None:
    out = io.StringIO()

    assert main_module.main(settings, out) == 0

    lines = out.getvalue().splitlines()
    assert [line.split(" = ", 1)[0] for line in lines] == list(CONFIG_NAMES)
    assert lines[0] == "BINDIR = /usr/local/pgsql/bin"
    assert lines[12] == "PGXS = /usr/local/pgsql/lib/pgxs/src/makefiles/pgxs.mk"



def test_report_failure_exits_nonzero(settings: Settings) -> None:
    settings.exec_path = ""
    out = io.StringIO()

    assert main_module.main(settings, out) == 1
    assert out.getvalue() == ""
