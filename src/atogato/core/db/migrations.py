"""Reusable migration runner."""

import asyncio

from alembic.config import Config

from alembic import command


def run_migrations_sync(config_path: str = "alembic.ini") -> None:
    """Run Alembic migrations up to head synchronously."""
    alembic_cfg = Config(config_path)
    command.upgrade(alembic_cfg, "head")


async def run_migrations_async(config_path: str = "alembic.ini") -> None:
    """Run Alembic migrations from async context.

    Alembic's env.py drives its own engine, so it runs in a worker thread.
    """
    await asyncio.to_thread(run_migrations_sync, config_path)
