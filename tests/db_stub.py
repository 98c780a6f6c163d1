from __future__ import annotations

import asyncio
import re
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any

from sqlalchemy.sql.elements import TextClause

from db.schema import CONFLICT_KEYS


_CREATE_RE = re.compile(r"CREATE TABLE IF NOT EXISTS (\w+)")
_COUNT_RE = re.compile(r"SELECT COUNT\(1\) FROM (\w+)")


@dataclass
class Call:
    kind: str  # "ddl" | "insert" | "select"
    table: str | None
    sql: str | None
    params: Any


class ResultStub:
    def __init__(self, value: Any) -> None:
        self._value = value

    def scalar_one(self) -> Any:
        return self._value


class ConnectionStub:
    def __init__(self, engine: EngineStub) -> None:
        self._engine = engine

    async def execute(self, stmt: Any, params: Any = None) -> ResultStub:
        return await self._engine.execute(stmt, params)


class EngineStub:
    """
    Stand-in for AsyncEngine in unit tests.

    Records every statement, emulates `ON CONFLICT DO NOTHING` by keeping rows keyed on
    each table's conflict key, and raises whatever `fail` returns for a given call.
    A failing batch stores nothing, like a rolled-back transaction. With `insert_delay`
    set, successful inserts yield to the event loop before they are stored, so
    concurrent inserts genuinely interleave.
    """

    def __init__(
        self,
        fail: Callable[[Call], BaseException | None] | None = None,
        *,
        insert_delay: float = 0.0,
    ) -> None:
        self.calls: list[Call] = []
        self.tables: dict[str, dict[Any, dict[str, Any]]] = {}
        self.disposed = False
        self._fail = fail
        self._insert_delay = insert_delay

    @asynccontextmanager
    async def begin(self) -> AsyncIterator[ConnectionStub]:
        yield ConnectionStub(self)

    @asynccontextmanager
    async def connect(self) -> AsyncIterator[ConnectionStub]:
        yield ConnectionStub(self)

    async def dispose(self) -> None:
        self.disposed = True

    def tables_touched(self) -> list[str]:
        out: list[str] = []
        for c in self.calls:
            if c.table and c.table not in out:
                out.append(c.table)
        return out

    def inserts(self, table: str) -> list[Call]:
        return [c for c in self.calls if c.kind == "insert" and c.table == table]

    async def execute(self, stmt: Any, params: Any) -> ResultStub:
        if isinstance(stmt, TextClause):
            sql = stmt.text
            if sql.lstrip().upper().startswith("SELECT"):
                call = Call("select", None, sql, params)
            else:
                created = _CREATE_RE.search(sql)
                call = Call("ddl", created.group(1) if created else None, sql, params)
        else:
            call = Call("insert", stmt.table.name, None, params)
        self.calls.append(call)

        if self._fail is not None:
            exc = self._fail(call)
            if exc is not None:
                raise exc

        if call.kind == "select":
            m = _COUNT_RE.search(call.sql or "")
            if m:
                return ResultStub(len(self.tables.get(m.group(1), {})))
            return ResultStub(1)
        if call.kind == "insert":
            if self._insert_delay:
                await asyncio.sleep(self._insert_delay)
            rows = params if isinstance(params, list) else [params]
            stored = self.tables.setdefault(call.table, {})
            key = CONFLICT_KEYS[call.table]
            for row in rows:
                stored.setdefault(row[key], dict(row))
        return ResultStub(None)
