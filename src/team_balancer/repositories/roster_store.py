"""Roster store interface, in-memory implementation and backend factory.

A store is the snapshot-read / batch-write boundary for roster data. Rows are
plain dicts using the local column names::

    groups:  {"id", "name"}
    players: {"id", "name", "positions", "score", "is_present", "group_id"}
"""

import copy
import logging
import uuid
from typing import TYPE_CHECKING, Optional, Protocol

from team_balancer.exceptions import RosterStoreError

if TYPE_CHECKING:
    from team_balancer.config import Settings

logger = logging.getLogger(__name__)


class RosterStore(Protocol):
    """Async storage backend used by RosterService."""

    async def fetch_groups(self) -> list[dict]: ...

    async def fetch_players(self) -> list[dict]: ...

    async def insert_player(self, row: dict) -> dict: ...

    async def upsert_players(self, rows: list[dict]) -> None: ...

    async def update_presence(self, player_ids: list[str], is_present: bool) -> None: ...

    async def delete_player(self, player_id: str) -> None: ...

    async def close(self) -> None: ...


class MemoryRosterStore:
    """Process-local store for development and testing.

    Returns copies so callers never share rows with the store.
    """

    def __init__(
        self,
        groups: Optional[list[dict]] = None,
        players: Optional[list[dict]] = None,
    ):
        self._groups: dict[str, dict] = {str(g["id"]): dict(g) for g in groups or []}
        self._players: dict[str, dict] = {str(p["id"]): dict(p) for p in players or []}

    async def fetch_groups(self) -> list[dict]:
        return [dict(g) for g in self._groups.values()]

    async def fetch_players(self) -> list[dict]:
        return copy.deepcopy(list(self._players.values()))

    async def insert_player(self, row: dict) -> dict:
        if row.get("group_id") not in self._groups:
            raise RosterStoreError(f"Unknown group: {row.get('group_id')}")
        stored = copy.deepcopy(row)
        stored["id"] = str(row.get("id") or uuid.uuid4().hex)
        self._players[stored["id"]] = stored
        return copy.deepcopy(stored)

    async def upsert_players(self, rows: list[dict]) -> None:
        for row in rows:
            self._players[str(row["id"])] = copy.deepcopy(row)

    async def update_presence(self, player_ids: list[str], is_present: bool) -> None:
        for player_id in player_ids:
            if player_id in self._players:
                self._players[player_id]["is_present"] = is_present

    async def delete_player(self, player_id: str) -> None:
        self._players.pop(player_id, None)

    async def close(self) -> None:
        pass


def get_roster_store(settings: "Settings") -> RosterStore:
    """Factory function to get the configured roster store.

    Args:
        settings: Application settings (roster_backend selects the store)

    Returns:
        SupabaseRosterClient, DuckDBRosterStore or MemoryRosterStore
    """
    if settings.roster_backend == "supabase":
        if not settings.supabase_url or not settings.supabase_key:
            raise ValueError(
                "SUPABASE_URL and SUPABASE_KEY must be set for the supabase backend"
            )
        from team_balancer.clients.supabase_roster_client import SupabaseRosterClient

        logger.info(f"Using SupabaseRosterClient at {settings.supabase_url}")
        return SupabaseRosterClient(
            settings.supabase_url,
            settings.supabase_key,
            timeout=settings.request_timeout,
        )

    if settings.roster_backend == "duckdb":
        from team_balancer.repositories.duckdb_roster_store import DuckDBRosterStore

        logger.info(f"Using DuckDBRosterStore at {settings.database_path}")
        return DuckDBRosterStore(settings.database_path)

    logger.info("Using MemoryRosterStore")
    return MemoryRosterStore()
