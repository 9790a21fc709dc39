"""DuckDB-based roster storage."""

import json
import logging
import uuid
from pathlib import Path
from typing import Optional

import duckdb
import pandas as pd

from team_balancer.exceptions import RosterStoreError

logger = logging.getLogger(__name__)

SCHEMA = [
    """
    CREATE TABLE IF NOT EXISTS roster_groups (
        id VARCHAR PRIMARY KEY,
        name VARCHAR NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS players (
        id VARCHAR PRIMARY KEY,
        name VARCHAR NOT NULL,
        positions VARCHAR NOT NULL,  -- JSON array of role tags
        score DOUBLE,
        is_present BOOLEAN NOT NULL DEFAULT TRUE,
        group_id VARCHAR NOT NULL
    )
    """,
]

PLAYER_COLUMNS = ["id", "name", "positions", "score", "is_present", "group_id"]


class DuckDBRosterStore:
    """Roster store backed by a local DuckDB file.

    Opens a connection per operation; tables are created on first use.
    """

    def __init__(self, database_path: str | Path):
        self._db_path = Path(database_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._execute_many(SCHEMA)
        logger.info(f"DuckDBRosterStore: Using {self._db_path}")

    def _connect(self) -> duckdb.DuckDBPyConnection:
        return duckdb.connect(str(self._db_path))

    def _execute_many(self, statements: list[str], params: Optional[list] = None) -> None:
        try:
            with self._connect() as conn:
                for statement in statements:
                    if params:
                        conn.execute(statement, params)
                    else:
                        conn.execute(statement)
        except duckdb.Error as e:
            logger.error(f"DuckDB write failed: {e}")
            raise RosterStoreError(f"DuckDB write failed: {e}") from e

    def _query(self, sql: str, params: Optional[list] = None) -> list[dict]:
        """Execute query and return list of dicts with nulls as None."""
        try:
            with self._connect() as conn:
                result = conn.execute(sql, params) if params else conn.execute(sql)
                df = result.df()
        except duckdb.Error as e:
            logger.error(f"DuckDB query failed: {e}")
            raise RosterStoreError(f"DuckDB query failed: {e}") from e

        # NaN -> None and numpy scalars -> native Python types
        df = df.astype(object).where(pd.notna(df), None)
        return df.to_dict(orient="records")

    @staticmethod
    def _decode_player(row: dict) -> dict:
        row["positions"] = json.loads(row["positions"]) if row["positions"] else []
        row["is_present"] = bool(row["is_present"])
        if row["score"] is not None:
            row["score"] = float(row["score"])
        return row

    @staticmethod
    def _encode_player(row: dict) -> list:
        return [
            str(row["id"]),
            row["name"],
            json.dumps(list(row.get("positions") or []), ensure_ascii=False),
            row.get("score"),
            bool(row.get("is_present", True)),
            str(row["group_id"]),
        ]

    def create_group(self, name: str, group_id: Optional[str] = None) -> dict:
        group = {"id": group_id or uuid.uuid4().hex, "name": name}
        self._execute_many(
            ["INSERT INTO roster_groups (id, name) VALUES (?, ?)"],
            [group["id"], group["name"]],
        )
        return group

    async def fetch_groups(self) -> list[dict]:
        return self._query("SELECT id, name FROM roster_groups ORDER BY name")

    async def fetch_players(self) -> list[dict]:
        rows = self._query(
            f"SELECT {', '.join(PLAYER_COLUMNS)} FROM players ORDER BY name"
        )
        return [self._decode_player(r) for r in rows]

    async def insert_player(self, row: dict) -> dict:
        stored = dict(row)
        stored["id"] = str(row.get("id") or uuid.uuid4().hex)
        self._execute_many(
            [f"INSERT INTO players ({', '.join(PLAYER_COLUMNS)}) VALUES (?, ?, ?, ?, ?, ?)"],
            self._encode_player(stored),
        )
        return stored

    async def upsert_players(self, rows: list[dict]) -> None:
        if not rows:
            return
        try:
            with self._connect() as conn:
                conn.executemany(
                    f"INSERT OR REPLACE INTO players ({', '.join(PLAYER_COLUMNS)}) "
                    "VALUES (?, ?, ?, ?, ?, ?)",
                    [self._encode_player(r) for r in rows],
                )
        except duckdb.Error as e:
            logger.error(f"DuckDB upsert failed: {e}")
            raise RosterStoreError(f"DuckDB upsert failed: {e}") from e

    async def update_presence(self, player_ids: list[str], is_present: bool) -> None:
        if not player_ids:
            return
        placeholders = ", ".join("?" for _ in player_ids)
        self._execute_many(
            [f"UPDATE players SET is_present = ? WHERE id IN ({placeholders})"],
            [is_present, *player_ids],
        )

    async def delete_player(self, player_id: str) -> None:
        self._execute_many(["DELETE FROM players WHERE id = ?"], [player_id])

    async def close(self) -> None:
        pass
