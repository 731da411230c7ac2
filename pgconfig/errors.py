"""Errors raised to the host query layer."""

# SQLSTATE codes
ERRCODE_SYNTAX_ERROR = "42601"


class PgConfigError(Exception):
    """Base error; `code` is the SQLSTATE reported to the host."""

    code = ERRCODE_SYNTAX_ERROR

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    def __str__(self) -> str:
        return f"{self.message} (SQLSTATE {self.code})"


class PreconditionError(PgConfigError):
    """The calling context does not meet a requirement of the function."""


class UnsupportedContextError(PreconditionError):
    """The caller cannot accept a materialized result set."""

    def __init__(self) -> None:
        super().__init__("materialize mode required, but it is not allowed in this context")


class ResultShapeError(PgConfigError):
    """The caller expects a row type other than (text, text)."""

    def __init__(self) -> None:
        super().__init__(
            "query-specified return tuple and function return type are not compatible"
        )
