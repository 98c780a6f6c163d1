from __future__ import annotations

import pytest
from testcontainers.postgres import PostgresContainer


@pytest.fixture(scope="session")
def postgres_url() -> str:
    # driver=None yields a plain postgresql:// URL; no sync driver is needed.
    with PostgresContainer("postgres:16", driver=None) as pg:
        yield pg.get_connection_url()


@pytest.fixture(scope="session")
def database_url(postgres_url: str) -> str:
    # Normalize testcontainers URL (may be postgresql:// or postgresql+psycopg2://).
    base = postgres_url.replace("postgresql+psycopg2://", "postgresql://")
    return base.replace("postgresql://", "postgresql+asyncpg://", 1)
