"""Configuration report domain models."""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

NOT_RECORDED = "not recorded"

# Reported keys, in display order.
CONFIG_NAMES: tuple[str, ...] = (
    "BINDIR",
    "DOCDIR",
    "HTMLDIR",
    "INCLUDEDIR",
    "PKGINCLUDEDIR",
    "INCLUDEDIR-SERVER",
    "LIBDIR",
    "PKGLIBDIR",
    "LOCALEDIR",
    "MANDIR",
    "SHAREDIR",
    "SYSCONFDIR",
    "PGXS",
    "CONFIGURE",
    "CC",
    "CPPFLAGS",
    "CFLAGS",
    "CFLAGS_SL",
    "LDFLAGS",
    "LDFLAGS_SL",
    "LIBS",
    "VERSION",
)

BUILD_FLAG_NAMES: tuple[str, ...] = (
    "CONFIGURE",
    "CC",
    "CPPFLAGS",
    "CFLAGS",
    "CFLAGS_SL",
    "LDFLAGS",
    "LDFLAGS_SL",
    "LIBS",
)


@dataclass(frozen=True)
class ConfigEntry:
    """Single reported setting."""

    name: str
    value: str

    def as_row(self) -> tuple[str, str]:
        return (self.name, self.value)


class ConfigTable:
    """
    Ordered, immutable set of config entries.

    Order is the reporting order; look entries up by name.
    """

    def __init__(self, entries: Sequence[ConfigEntry]) -> None:
        names = [e.name for e in entries]
        if any(not name for name in names):
            raise ValueError("config entry with empty name")
        if len(set(names)) != len(names):
            raise ValueError("duplicate config entry names")
        if any(e.value is None for e in entries):
            raise ValueError("config entry with null value")
        self._entries = tuple(entries)
        self._by_name = {e.name: e for e in self._entries}

    def __iter__(self) -> Iterator[ConfigEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, name: str) -> str:
        return self._by_name[name].value

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def get(self, name: str, default: str | None = None) -> str | None:
        entry = self._by_name.get(name)
        return entry.value if entry else default

    def names(self) -> list[str]:
        return [e.name for e in self._entries]

    def as_dict(self) -> dict[str, str]:
        return {e.name: e.value for e in self._entries}
