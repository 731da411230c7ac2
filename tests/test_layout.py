"""Tests for install layout and relocatable path resolution."""

from __future__ import annotations

import pytest

from pgconfig.paths.layout import (
    InstallLayout,
    canonicalize_path,
    make_relative_path,
    trim_directory,
)


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("/usr/local/pgsql/", "/usr/local/pgsql"),
        ("/usr//local/./pgsql", "/usr/local/pgsql"),
        ("/usr/local/bin/../lib", "/usr/local/lib"),
        ("/..", "/"),
        ("../share", "../share"),
        ("a/..", "."),
        ("", ""),
    ],
)
def test_canonicalize_path(path: str, expected: str) -> None:
    assert canonicalize_path(path) == expected


def test_trim_directory() -> None:
    assert trim_directory("/usr/local/pgsql/bin/postgres") == "/usr/local/pgsql/bin"
    assert trim_directory("/postgres") == "/"
    assert trim_directory("postgres") == ""


def test_relative_path_follows_moved_install() -> None:
    result = make_relative_path(
        "/usr/local/pgsql/lib", "/usr/local/pgsql/bin", "/opt/pg/bin/postgres"
    )
    assert result == "/opt/pg/lib"


def test_relative_path_in_place_install() -> None:
    result = make_relative_path(
        "/usr/local/pgsql/share", "/usr/local/pgsql/bin", "/usr/local/pgsql/bin/postgres"
    )
    assert result == "/usr/local/pgsql/share"


def test_relative_path_multi_segment_tail() -> None:
    result = make_relative_path(
        "/usr/share/postgresql", "/usr/lib/postgresql/bin", "/srv/pg/lib/postgresql/bin/postgres"
    )
    assert result == "/srv/pg/share/postgresql"


def test_relative_path_falls_back_when_tail_does_not_match() -> None:
    result = make_relative_path(
        "/usr/local/pgsql/lib", "/usr/local/pgsql/bin", "/opt/pg/sbin/postgres"
    )
    assert result == "/usr/local/pgsql/lib"


def test_relative_path_requires_separator_boundary() -> None:
    # '/usr/lib' and '/usr/libexec' only share '/usr/'
    result = make_relative_path("/usr/lib", "/usr/libexec", "/opt/libexec/postgres")
    assert result == "/opt/lib"


def test_relative_path_bare_executable_name() -> None:
    result = make_relative_path("/usr/local/pgsql/lib", "/usr/local/pgsql/bin", "postgres")
    assert result == "/usr/local/pgsql/lib"


def test_layout_from_pgsql_prefix_has_no_subdir() -> None:
    layout = InstallLayout.from_prefix("/usr/local/pgsql")

    assert layout.bindir == "/usr/local/pgsql/bin"
    assert layout.docdir == "/usr/local/pgsql/share/doc"
    assert layout.htmldir == layout.docdir
    assert layout.pkgincludedir == "/usr/local/pgsql/include"
    assert layout.includedir_server == "/usr/local/pgsql/include/server"
    assert layout.pkglibdir == "/usr/local/pgsql/lib"
    assert layout.sharedir == "/usr/local/pgsql/share"
    assert layout.sysconfdir == "/usr/local/pgsql/etc"


def test_layout_from_generic_prefix_adds_subdir() -> None:
    layout = InstallLayout.from_prefix("/usr")

    assert layout.pkglibdir == "/usr/lib/postgresql"
    assert layout.pkgincludedir == "/usr/include/postgresql"
    assert layout.includedir_server == "/usr/include/postgresql/server"
    assert layout.sharedir == "/usr/share/postgresql"
    assert layout.sysconfdir == "/usr/etc/postgresql"
    assert layout.localedir == "/usr/share/locale"
    assert layout.mandir == "/usr/share/man"


def test_layout_overrides() -> None:
    layout = InstallLayout.from_prefix("/usr/local/pgsql", sysconfdir="/etc/postgresql")
    assert layout.sysconfdir == "/etc/postgresql"

    with pytest.raises(ValueError):
        InstallLayout.from_prefix("/usr/local/pgsql", nosuchdir="/x")


def test_layout_getters_resolve_against_executable() -> None:
    layout = InstallLayout.from_prefix("/usr/local/pgsql")
    exec_path = "/opt/pg/bin/postgres"

    assert layout.get_doc_path(exec_path) == "/opt/pg/share/doc"
    assert layout.get_includeserver_path(exec_path) == "/opt/pg/include/server"
    assert layout.get_etc_path(exec_path) == "/opt/pg/etc"
    assert layout.get_locale_path(exec_path) == "/opt/pg/share/locale"
