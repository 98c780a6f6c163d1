from __future__ import annotations

from enum import Enum

from sqlalchemy.exc import DBAPIError


class SeedErrorKind(Enum):
    SCHEMA = ("SchemaError", "SCHEMA_FAILED")
    INSERT = ("InsertError", "INSERT_FAILED")
    # Only raised internally; the revenue step recovers from it.
    BATCH_INSERT = ("BatchInsertError", "BATCH_INSERT_FAILED")
    HASHING = ("HashingError", "HASHING_FAILED")
    UNKNOWN = ("Error", "UNKNOWN")

    def __init__(self, error_name: str, default_code: str) -> None:
        self.error_name = error_name
        self.default_code = default_code


def _sqlstate(exc: BaseException) -> str | None:
    if not isinstance(exc, DBAPIError):
        return None
    # asyncpg's adapter exposes sqlstate on the wrapped error or its cause.
    for err in (exc.orig, getattr(exc.orig, "__cause__", None)):
        code = getattr(err, "sqlstate", None) or getattr(err, "pgcode", None)
        if code:
            return str(code)
    return None


def _message(exc: BaseException) -> str:
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        text = str(exc.orig)
    else:
        text = str(exc)
    return text.strip() or "Unknown error"


class SeedError(RuntimeError):
    """A failed seed step, typed at the point of failure."""

    def __init__(
        self,
        kind: SeedErrorKind,
        message: str,
        *,
        code: str | None = None,
        table: str | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.code = code or kind.default_code
        self.table = table

    @property
    def name(self) -> str:
        return self.kind.error_name

    @classmethod
    def from_exception(cls, kind: SeedErrorKind, exc: BaseException, *, table: str | None = None) -> SeedError:
        return cls(kind, _message(exc), code=_sqlstate(exc), table=table)

    @classmethod
    def unexpected(cls, exc: BaseException) -> SeedError:
        if isinstance(exc, SeedError):
            return exc
        return cls.from_exception(SeedErrorKind.UNKNOWN, exc)

    def to_payload(self) -> dict[str, str]:
        return {"message": self.message, "code": self.code, "name": self.name}
