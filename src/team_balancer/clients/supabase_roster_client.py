"""Supabase (PostgREST) client for the remote roster tables.

The remote schema uses French column names: players are stored with
``nom`` and ``est_present``. Rows are translated to the local names on the
way in and back on the way out.
"""

import logging
from typing import Any, Optional

import httpx

from team_balancer.exceptions import RosterStoreError

logger = logging.getLogger(__name__)


def _from_remote(row: dict) -> dict:
    return {
        "id": str(row["id"]),
        "name": row.get("nom", ""),
        "positions": list(row.get("positions") or []),
        "score": row.get("score"),
        "is_present": bool(row.get("est_present", False)),
        "group_id": str(row["group_id"]) if row.get("group_id") is not None else None,
    }


def _to_remote(row: dict, include_score: bool) -> dict:
    remote = {
        "nom": row["name"],
        "positions": list(row.get("positions") or []),
        "group_id": row["group_id"],
        "est_present": bool(row.get("is_present", True)),
    }
    if include_score:
        remote["score"] = row.get("score")
    if row.get("id") is not None:
        remote["id"] = row["id"]
    return remote


def _to_remote_batch(rows: list[dict]) -> list[dict]:
    """Translate rows for a bulk write.

    PostgREST requires every object of a batch to carry the same keys, and
    ``score`` is only sent when some row has one so tables without a score
    column keep accepting writes.
    """
    include_score = any(r.get("score") is not None for r in rows)
    return [_to_remote(r, include_score) for r in rows]


class SupabaseRosterClient:
    """Roster store backed by a Supabase project's REST API."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            base_url: Supabase project URL (https://<project>.supabase.co)
            api_key: Supabase anon or service key
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.rest_url = f"{base_url.rstrip('/')}/rest/v1"
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.rest_url,
                timeout=self.timeout,
                transport=self._transport,
                headers={
                    "apikey": self.api_key,
                    "Authorization": f"Bearer {self.api_key}",
                },
            )
        return self._client

    async def close(self):
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def _request(
        self,
        method: str,
        table: str,
        params: Optional[dict] = None,
        json: Any = None,
        prefer: Optional[str] = None,
    ) -> Any:
        headers = {"Prefer": prefer} if prefer else None
        try:
            client = await self._get_client()
            response = await client.request(
                method, f"/{table}", params=params, json=json, headers=headers
            )
            response.raise_for_status()
            if not response.content:
                return None
            return response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Supabase {method} {table} failed: {e}")
            raise RosterStoreError(f"Supabase {method} {table} failed: {e}") from e

    async def fetch_groups(self) -> list[dict]:
        data = await self._request("GET", "groups", params={"select": "*"})
        return [{"id": str(g["id"]), "name": g.get("name", "")} for g in data or []]

    async def fetch_players(self) -> list[dict]:
        data = await self._request("GET", "players", params={"select": "*"})
        return [_from_remote(p) for p in data or []]

    async def insert_player(self, row: dict) -> dict:
        data = await self._request(
            "POST", "players", json=_to_remote_batch([row]), prefer="return=representation"
        )
        if not data:
            raise RosterStoreError("Supabase insert returned no row")
        return _from_remote(data[0])

    async def upsert_players(self, rows: list[dict]) -> None:
        if not rows:
            return
        await self._request(
            "POST",
            "players",
            json=_to_remote_batch(rows),
            prefer="resolution=merge-duplicates,return=minimal",
        )

    async def update_presence(self, player_ids: list[str], is_present: bool) -> None:
        if not player_ids:
            return
        await self._request(
            "PATCH",
            "players",
            params={"id": f"in.({','.join(player_ids)})"},
            json={"est_present": is_present},
            prefer="return=minimal",
        )

    async def delete_player(self, player_id: str) -> None:
        await self._request("DELETE", "players", params={"id": f"eq.{player_id}"})
