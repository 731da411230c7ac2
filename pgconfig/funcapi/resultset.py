"""Set-returning function protocol used by the host query layer."""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from enum import Flag, auto

TEXT = "text"


class SetReturnMode(Flag):
    """How a set-returning function may hand back its rows."""

    VALUE_PER_CALL = auto()
    MATERIALIZE = auto()


@dataclass(frozen=True)
class Column:
    name: str
    type_name: str = TEXT


@dataclass(frozen=True)
class TupleDesc:
    """Row type: ordered columns."""

    columns: tuple[Column, ...]

    @property
    def natts(self) -> int:
        return len(self.columns)

    @classmethod
    def text_pair(cls, first: str = "name", second: str = "setting") -> "TupleDesc":
        return cls((Column(first), Column(second)))

    def is_text_pair(self) -> bool:
        return self.natts == 2 and all(c.type_name == TEXT for c in self.columns)


class TupleStore:
    """Append-only in-memory row store handed back to the caller."""

    def __init__(self, desc: TupleDesc) -> None:
        self.desc = desc
        self._rows: list[tuple[str, ...]] = []
        self._done = False

    def put_row(self, values: Sequence[str]) -> None:
        if self._done:
            raise RuntimeError("tuple store is closed for writing")
        if len(values) != self.desc.natts:
            raise ValueError(
                f"row has {len(values)} values, row type has {self.desc.natts} columns"
            )
        self._rows.append(tuple(values))

    def done_storing(self) -> None:
        self._done = True

    @property
    def done(self) -> bool:
        return self._done

    def __iter__(self) -> Iterator[tuple[str, ...]]:
        return iter(self._rows)

    def __len__(self) -> int:
        return len(self._rows)


@dataclass
class ReturnSetInfo:
    """
    Caller-side result context.

    The caller fills in `allowed_modes` and `expected_desc`; the function
    sets `return_mode`, `set_result` and `set_desc`.
    """

    allowed_modes: SetReturnMode = SetReturnMode.MATERIALIZE
    expected_desc: TupleDesc = field(default_factory=TupleDesc.text_pair)
    return_mode: SetReturnMode | None = None
    set_result: TupleStore | None = None
    set_desc: TupleDesc | None = None

    def allows(self, mode: SetReturnMode) -> bool:
        return bool(self.allowed_modes & mode)
