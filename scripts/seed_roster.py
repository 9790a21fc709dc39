#!/usr/bin/env python3
"""
Seed a local DuckDB roster with a demo group.

Usage:
    python scripts/seed_roster.py
    python scripts/seed_roster.py --database data/roster.duckdb --group "Sunday 5-a-side"
"""

import argparse
import asyncio
from pathlib import Path

from team_balancer.repositories.duckdb_roster_store import DuckDBRosterStore

DEFAULT_DB_PATH = Path(__file__).parent.parent / "data" / "roster.duckdb"

# (name, positions, score)
DEMO_PLAYERS = [
    ("Omar", ["defender"], 7),
    ("Ismael", ["defender"], 5),
    ("Francis", ["midfielder"], 7),
    ("Assirem", ["forward"], 9),
    ("Massi", ["goalkeeper"], 7),
    ("Maro", ["midfielder"], 5),
    ("Billal", ["defender"], 5),
    ("Romain", ["defender", "midfielder"], 3),
    ("Hassan", ["midfielder"], 7),
    ("Anis", ["defender"], 5),
    ("Mike", ["goalkeeper"], 5),
    ("Seb", ["forward"], 7),
    ("M10", ["midfielder", "forward"], 9),
    ("Airwin", ["defender"], 3),
    ("Alex Ma", ["midfielder"], 5),
    ("Amin", ["forward"], 5),
    ("Pepito", ["forward"], 3),
    ("Chris", ["midfielder"], 5),
]


async def seed(database: Path, group_name: str) -> int:
    store = DuckDBRosterStore(database)
    group = store.create_group(group_name)
    for name, positions, score in DEMO_PLAYERS:
        await store.insert_player(
            {
                "name": name,
                "positions": positions,
                "score": float(score),
                "is_present": True,
                "group_id": group["id"],
            }
        )
    return len(DEMO_PLAYERS)


def main():
    parser = argparse.ArgumentParser(description="Seed a DuckDB roster with demo players")
    parser.add_argument("--database", type=Path, default=DEFAULT_DB_PATH,
                        help="DuckDB file to create or extend")
    parser.add_argument("--group", default="Demo", help="Name of the group to create")
    args = parser.parse_args()

    print(f"Seeding {args.database}")
    count = asyncio.run(seed(args.database, args.group))
    print(f"Added {count} players to group '{args.group}'")


if __name__ == "__main__":
    main()
