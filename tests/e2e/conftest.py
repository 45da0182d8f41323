import os
from pathlib import Path
from typing import Iterator

import pytest
from testcontainers.postgres import PostgresContainer
from alembic.config import Config
from alembic import command
from fastapi.testclient import TestClient

from userhub.db.users import PostgresUserStore


@pytest.fixture(scope="session")
def db_url() -> Iterator[str]:
    """Start a Postgres container, run migrations, and return the DB URL."""
    with PostgresContainer("postgres:16") as pg:
        raw_url = pg.get_connection_url()
        # Normalize to psycopg3-compatible URL if needed
        url = raw_url.replace("postgresql+psycopg2://", "postgresql://")
        os.environ["DATABASE_URL"] = url

        # Run Alembic migrations against this database
        root_dir = Path(__file__).resolve().parents[2]
        alembic_cfg = Config(str(root_dir / "alembic.ini"))
        command.upgrade(alembic_cfg, "head")

        yield url


@pytest.fixture(scope="session")
def pg_store(db_url: str) -> PostgresUserStore:
    return PostgresUserStore()


@pytest.fixture(scope="session")
def client(db_url: str) -> TestClient:
    """Unauthenticated client talking to the real database."""
    from userhub.app.app import app

    return TestClient(app)
