from __future__ import annotations

import sqlalchemy as sa
from fastapi import Depends, FastAPI, Header, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncEngine

from db.errors import SeedError
from db.seed import run_seed
from services.seed.app import observability
from services.seed.app.db import get_engine
from services.seed.app.logging import configure_logging, logger, seed_run_context
from services.seed.app.schemas import SeedErrorDetail, SeedErrorResponse, SeedResponse
from services.seed.app.settings import SETTINGS


app = FastAPI(title="Dashboard Seed API", version="0.1.0")
configure_logging(SETTINGS.log_level)
if SETTINGS.tracing_enabled:
    observability.setup_tracing(app, service_name="seed")
observability.add_metrics_middleware(app, service_name="seed")


def _require_admin(x_admin_token: str | None) -> None:
    if SETTINGS.admin_token is None:
        return
    if not x_admin_token or x_admin_token != SETTINGS.admin_token:
        raise HTTPException(status_code=403, detail="forbidden")


@app.get("/healthz")
async def healthz(engine: AsyncEngine = Depends(get_engine)) -> dict:
    async with engine.connect() as conn:
        await conn.execute(sa.text("SELECT 1"))
    return {"ok": True}


@app.get(
    "/seed",
    response_model=SeedResponse,
    responses={500: {"model": SeedErrorResponse}},
)
async def seed(
    x_admin_token: str | None = Header(default=None),
    engine: AsyncEngine = Depends(get_engine),
) -> SeedResponse | JSONResponse:
    _require_admin(x_admin_token)
    with seed_run_context():
        try:
            report = await run_seed(engine, bcrypt_rounds=SETTINGS.bcrypt_rounds)
        except Exception as e:
            err = SeedError.unexpected(e)
            logger.error("seed_failed", kind=err.name, code=err.code, table=err.table, error=err.message)
            observability.record_seed_failure(err)
            body = SeedErrorResponse(error=SeedErrorDetail(**err.to_payload()))
            return JSONResponse(status_code=500, content=body.model_dump())

    observability.record_seed_report(report)
    return SeedResponse(counts=report.counts())
