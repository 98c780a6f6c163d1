from __future__ import annotations

import argparse
import asyncio
import hashlib
import json
import os
import time
import uuid
from collections.abc import Awaitable, Sequence
from dataclasses import asdict, dataclass, field, replace
from typing import Any

import bcrypt
import sqlalchemy as sa
import structlog
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from db import schema
from db.errors import SeedError, SeedErrorKind
from db.placeholder_data import DEFAULT_DATASET, Customer, Invoice, RevenueRecord, SeedDataset, User
from db.settings import SETTINGS


logger = structlog.get_logger()


@dataclass(frozen=True)
class StepResult:
    table: str
    records: int
    fallback: bool = False
    duration_ms: float = 0.0


@dataclass
class SeedReport:
    steps: list[StepResult] = field(default_factory=list)

    def counts(self) -> dict[str, int]:
        return {s.table: s.records for s in self.steps}

    def fallbacks(self) -> list[str]:
        return [s.table for s in self.steps if s.fallback]


def _det_uuid(*parts: str) -> uuid.UUID:
    h = hashlib.sha256("||".join(parts).encode("utf-8")).hexdigest()
    return uuid.UUID(h[:32])


def invoice_id(invoice: Invoice) -> uuid.UUID:
    # Stable per record so a re-run conflicts on id instead of duplicating.
    return _det_uuid("invoice", str(invoice.customer_id), str(invoice.amount), invoice.status, invoice.date.isoformat())


def hash_password(plaintext: str, rounds: int = 10) -> str:
    return bcrypt.hashpw(plaintext.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def _conflict_skip(table: sa.TableClause) -> Any:
    return pg_insert(table).on_conflict_do_nothing(index_elements=[schema.CONFLICT_KEYS[table.name]])


async def _ensure(engine: AsyncEngine, table: str, *ddl: sa.TextClause) -> None:
    try:
        async with engine.begin() as conn:
            for stmt in ddl:
                await conn.execute(stmt)
    except Exception as e:
        raise SeedError.from_exception(SeedErrorKind.SCHEMA, e, table=table) from e


async def _insert_one(engine: AsyncEngine, table: sa.TableClause, row: dict[str, Any]) -> None:
    try:
        async with engine.begin() as conn:
            await conn.execute(_conflict_skip(table), row)
    except Exception as e:
        raise SeedError.from_exception(SeedErrorKind.INSERT, e, table=table.name) from e


async def _fan_out(table: str, inserts: Sequence[Awaitable[None]]) -> int:
    """
    Run independent inserts concurrently and wait for every one of them to settle.

    Nothing is left running when this returns or raises; if any insert failed, the
    first failure (in input order) is raised after all siblings have finished.
    """
    results = await asyncio.gather(*inserts, return_exceptions=True)
    failures = [r for r in results if isinstance(r, BaseException)]
    if failures:
        if len(failures) > 1:
            logger.warning("seed_step_insert_failures", table=table, failed=len(failures), attempted=len(results))
        raise failures[0]
    return len(results)


async def seed_users(engine: AsyncEngine, users: Sequence[User], *, bcrypt_rounds: int = 10) -> StepResult:
    logger.info("seed_step_started", table="users")
    await _ensure(engine, "users", schema.UUID_EXTENSION, schema.CREATE_USERS)

    async def insert_user(user: User) -> None:
        try:
            hashed = await asyncio.to_thread(hash_password, user.password, bcrypt_rounds)
        except Exception as e:
            raise SeedError.from_exception(SeedErrorKind.HASHING, e, table="users") from e
        await _insert_one(engine, schema.users, user.row(hashed))

    n = await _fan_out("users", [insert_user(u) for u in users])
    logger.info("seed_step_finished", table="users", records=n)
    return StepResult(table="users", records=n)


async def seed_customers(engine: AsyncEngine, customers: Sequence[Customer]) -> StepResult:
    logger.info("seed_step_started", table="customers")
    await _ensure(engine, "customers", schema.UUID_EXTENSION, schema.CREATE_CUSTOMERS)
    n = await _fan_out("customers", [_insert_one(engine, schema.customers, c.row()) for c in customers])
    logger.info("seed_step_finished", table="customers", records=n)
    return StepResult(table="customers", records=n)


async def seed_invoices(engine: AsyncEngine, invoices: Sequence[Invoice]) -> StepResult:
    logger.info("seed_step_started", table="invoices")
    await _ensure(engine, "invoices", schema.UUID_EXTENSION, schema.CREATE_INVOICES)
    n = await _fan_out(
        "invoices",
        [_insert_one(engine, schema.invoices, inv.row(invoice_id(inv))) for inv in invoices],
    )
    logger.info("seed_step_finished", table="invoices", records=n)
    return StepResult(table="invoices", records=n)


async def _insert_revenue_batch(engine: AsyncEngine, rows: list[dict[str, Any]]) -> None:
    try:
        async with engine.begin() as conn:
            await conn.execute(_conflict_skip(schema.revenue), rows)
    except Exception as e:
        raise SeedError.from_exception(SeedErrorKind.BATCH_INSERT, e, table="revenue") from e


async def seed_revenue(engine: AsyncEngine, revenue: Sequence[RevenueRecord]) -> StepResult:
    """
    Insert revenue as one batch; if the batch fails for any reason, insert every
    record individually and sequentially with the same conflict-skip semantics.
    """
    logger.info("seed_step_started", table="revenue")
    await _ensure(engine, "revenue", schema.CREATE_REVENUE)

    rows = [r.row() for r in revenue]
    if not rows:
        logger.info("seed_step_finished", table="revenue", records=0)
        return StepResult(table="revenue", records=0)

    try:
        await _insert_revenue_batch(engine, rows)
    except SeedError as e:
        logger.warning("revenue_batch_insert_failed", code=e.code, error=e.message)
    else:
        logger.info("seed_step_finished", table="revenue", records=len(rows))
        return StepResult(table="revenue", records=len(rows))

    for row in rows:
        await _insert_one(engine, schema.revenue, row)
    logger.info("revenue_fallback_finished", table="revenue", records=len(rows))
    return StepResult(table="revenue", records=len(rows), fallback=True)


async def _timed(step: Awaitable[StepResult]) -> StepResult:
    start = time.perf_counter()
    result = await step
    return replace(result, duration_ms=(time.perf_counter() - start) * 1000)


async def run_seed(
    engine: AsyncEngine,
    dataset: SeedDataset = DEFAULT_DATASET,
    *,
    bcrypt_rounds: int = 10,
) -> SeedReport:
    """
    Run the seed sequence: users, customers, invoices, revenue.

    Steps run strictly in order and the first failure aborts the rest. Nothing
    wraps the whole sequence in a transaction, so rows from completed steps stay.
    """
    report = SeedReport()
    logger.info("seed_started")
    report.steps.append(await _timed(seed_users(engine, dataset.users, bcrypt_rounds=bcrypt_rounds)))
    report.steps.append(await _timed(seed_customers(engine, dataset.customers)))
    report.steps.append(await _timed(seed_invoices(engine, dataset.invoices)))
    report.steps.append(await _timed(seed_revenue(engine, dataset.revenue)))
    logger.info("seed_finished", counts=report.counts(), fallbacks=report.fallbacks())
    return report


async def table_counts(engine: AsyncEngine) -> dict[str, int]:
    counts = {}
    async with engine.connect() as conn:
        for table in schema.SEEDED_TABLES:
            counts[table] = (await conn.execute(sa.text(f"SELECT COUNT(1) FROM {table}"))).scalar_one()
    return counts


async def _seed_cli(database_url: str, bcrypt_rounds: int) -> dict[str, Any]:
    engine = create_async_engine(database_url, pool_pre_ping=True)
    try:
        report = await run_seed(engine, bcrypt_rounds=bcrypt_rounds)
        counts = await table_counts(engine)
    finally:
        await engine.dispose()
    return {"steps": [asdict(s) for s in report.steps], "counts": counts}


def main() -> None:
    parser = argparse.ArgumentParser(description="Create and populate the dashboard tables with placeholder data.")
    parser.add_argument("--database-url", default=os.getenv("DATABASE_URL") or SETTINGS.database_url)
    parser.add_argument("--bcrypt-rounds", type=int, default=SETTINGS.bcrypt_rounds)
    args = parser.parse_args()
    try:
        summary = asyncio.run(_seed_cli(args.database_url, args.bcrypt_rounds))
    except SeedError as e:
        print(json.dumps({"error": e.to_payload(), "table": e.table}, indent=2))
        raise SystemExit(1) from e
    print(json.dumps(summary, indent=2, default=str))


if __name__ == "__main__":
    main()
