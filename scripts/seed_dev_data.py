"""Seed dev catalog data from scripts/seed-data.json.

Loads institutions, topics and rebbeim (by name; existing rows are kept) so a
fresh database has something to create series against. Subscriber types are
seeded by the initial migration, not here.

Usage:
    uv run python -m scripts.seed_dev_data [path/to/seed-data.json]

Requires: DATABASE_URL and a migrated database (uv run alembic upgrade head).
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path

from dotenv import load_dotenv
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shiurbank.core.config import get_settings
from shiurbank.infrastructure.persistence import database
from shiurbank.infrastructure.persistence.models import Institution, Rebbi, Topic

DEFAULT_SEED_PATH = Path(__file__).resolve().parent / "seed-data.json"


async def _seed_named(session: AsyncSession, model: type, names: list[str]) -> int:
    """Insert rows of a single-name table that are not there yet; return count added."""
    result = await session.execute(select(model.name))
    existing = set(result.scalars().all())
    added = [model(name=n) for n in names if n not in existing]
    session.add_all(added)
    return len(added)


async def _seed_rebbeim(session: AsyncSession, rebbeim: list[dict]) -> int:
    result = await session.execute(select(Rebbi.fname, Rebbi.lname))
    existing = {(f, l) for f, l in result.all()}
    added = 0
    for r in rebbeim:
        key = (r["fname"], r["lname"])
        if key in existing:
            continue
        session.add(Rebbi(title=r.get("title"), fname=r["fname"], lname=r["lname"]))
        existing.add(key)
        added += 1
    return added


async def main() -> None:
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_SEED_PATH
    if not path.is_file():
        print(f"Seed file not found: {path}", file=sys.stderr)
        sys.exit(1)
    data = json.loads(path.read_text(encoding="utf-8"))

    load_dotenv()
    get_settings()
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        print("DATABASE_URL not configured", file=sys.stderr)
        sys.exit(1)

    async with database.AsyncSessionLocal() as session:
        async with session.begin():
            inst = await _seed_named(session, Institution, data.get("institutions", []))
            topics = await _seed_named(session, Topic, data.get("topics", []))
            rebbeim = await _seed_rebbeim(session, data.get("rebbeim", []))
    print(f"Seeded {inst} institutions, {topics} topics, {rebbeim} rebbeim")


if __name__ == "__main__":
    asyncio.run(main())
