"""Tests for the local roster stores and the store factory."""

import pytest

from team_balancer.config import Settings
from team_balancer.clients.supabase_roster_client import SupabaseRosterClient
from team_balancer.exceptions import RosterStoreError
from team_balancer.repositories.duckdb_roster_store import DuckDBRosterStore
from team_balancer.repositories.roster_store import MemoryRosterStore, get_roster_store

pytestmark = pytest.mark.anyio


@pytest.fixture
def duckdb_store(tmp_path):
    store = DuckDBRosterStore(tmp_path / "roster.duckdb")
    store.create_group("Sunday", group_id="g1")
    return store


def player_row(**overrides):
    row = {
        "name": "Omar",
        "positions": ["défenseur", "midfielder"],
        "score": 7.0,
        "is_present": True,
        "group_id": "g1",
    }
    row.update(overrides)
    return row


class TestDuckDBRosterStore:
    async def test_groups(self, duckdb_store):
        assert await duckdb_store.fetch_groups() == [{"id": "g1", "name": "Sunday"}]

    async def test_insert_and_fetch(self, duckdb_store):
        inserted = await duckdb_store.insert_player(player_row())
        players = await duckdb_store.fetch_players()

        assert len(players) == 1
        assert players[0]["id"] == inserted["id"]
        assert players[0]["positions"] == ["défenseur", "midfielder"]
        assert players[0]["score"] == 7.0
        assert players[0]["is_present"] is True

    async def test_null_score(self, duckdb_store):
        await duckdb_store.insert_player(player_row(score=None))
        players = await duckdb_store.fetch_players()
        assert players[0]["score"] is None

    async def test_upsert_replaces_rows(self, duckdb_store):
        inserted = await duckdb_store.insert_player(player_row())
        await duckdb_store.upsert_players(
            [
                {**inserted, "is_present": False},
                player_row(id="new", name="Seb", positions=["forward"]),
            ]
        )
        players = {p["id"]: p for p in await duckdb_store.fetch_players()}

        assert players[inserted["id"]]["is_present"] is False
        assert players["new"]["name"] == "Seb"

    async def test_update_presence_and_delete(self, duckdb_store):
        a = await duckdb_store.insert_player(player_row(name="A"))
        b = await duckdb_store.insert_player(player_row(name="B"))

        await duckdb_store.update_presence([a["id"]], False)
        await duckdb_store.delete_player(b["id"])
        players = await duckdb_store.fetch_players()

        assert [(p["name"], p["is_present"]) for p in players] == [("A", False)]

    async def test_duplicate_id_insert_raises_store_error(self, duckdb_store):
        await duckdb_store.insert_player(player_row(id="dup"))
        with pytest.raises(RosterStoreError):
            await duckdb_store.insert_player(player_row(id="dup"))

    async def test_data_survives_reopen(self, duckdb_store, tmp_path):
        await duckdb_store.insert_player(player_row())
        reopened = DuckDBRosterStore(tmp_path / "roster.duckdb")
        assert len(await reopened.fetch_players()) == 1


class TestMemoryRosterStore:
    async def test_returns_copies(self):
        store = MemoryRosterStore(groups=[{"id": "g1", "name": "Sunday"}])
        inserted = await store.insert_player(player_row())
        inserted["positions"].append("forward")

        players = await store.fetch_players()
        players[0]["name"] = "changed"

        fresh = await store.fetch_players()
        assert fresh[0]["name"] == "Omar"
        assert fresh[0]["positions"] == ["défenseur", "midfielder"]

    async def test_insert_into_unknown_group(self):
        store = MemoryRosterStore()
        with pytest.raises(RosterStoreError):
            await store.insert_player(player_row(group_id="missing"))


class TestGetRosterStore:
    def test_memory_default(self):
        assert isinstance(get_roster_store(Settings(_env_file=None)), MemoryRosterStore)

    def test_duckdb(self, tmp_path):
        settings = Settings(
            _env_file=None,
            roster_backend="duckdb",
            database_path=str(tmp_path / "r.duckdb"),
        )
        assert isinstance(get_roster_store(settings), DuckDBRosterStore)

    def test_supabase(self):
        settings = Settings(
            _env_file=None,
            roster_backend="supabase",
            supabase_url="https://demo.supabase.co",
            supabase_key="anon",
        )
        store = get_roster_store(settings)
        assert isinstance(store, SupabaseRosterClient)
        assert store.rest_url == "https://demo.supabase.co/rest/v1"

    def test_supabase_requires_credentials(self):
        settings = Settings(_env_file=None, roster_backend="supabase", supabase_url="")
        with pytest.raises(ValueError):
            get_roster_store(settings)
