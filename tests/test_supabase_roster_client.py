"""Tests for the Supabase roster client."""

import json

import httpx
import pytest

from team_balancer.clients.supabase_roster_client import SupabaseRosterClient
from team_balancer.exceptions import RosterStoreError

pytestmark = pytest.mark.anyio


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler):
        self.requests: list[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)


def make_client(handler) -> tuple[SupabaseRosterClient, RecordingTransport]:
    transport = RecordingTransport(handler)
    client = SupabaseRosterClient(
        "https://demo.supabase.co/", "anon-key", transport=transport
    )
    return client, transport


async def test_fetch_players_translates_columns():
    def handler(request):
        return httpx.Response(
            200,
            json=[
                {"id": 1, "nom": "Omar", "positions": ["Défenseur"],
                 "est_present": True, "group_id": 7},
                {"id": 2, "nom": "Massi", "positions": ["Gardien"],
                 "est_present": False, "group_id": 7, "score": 8},
            ],
        )

    client, transport = make_client(handler)
    players = await client.fetch_players()
    await client.close()

    assert players == [
        {"id": "1", "name": "Omar", "positions": ["Défenseur"], "score": None,
         "is_present": True, "group_id": "7"},
        {"id": "2", "name": "Massi", "positions": ["Gardien"], "score": 8,
         "is_present": False, "group_id": "7"},
    ]
    request = transport.requests[0]
    assert request.method == "GET"
    assert request.url.path == "/rest/v1/players"
    assert request.url.params["select"] == "*"
    assert request.headers["apikey"] == "anon-key"
    assert request.headers["authorization"] == "Bearer anon-key"


async def test_fetch_groups():
    client, _ = make_client(lambda r: httpx.Response(200, json=[{"id": 7, "name": "Sunday"}]))
    assert await client.fetch_groups() == [{"id": "7", "name": "Sunday"}]


async def test_insert_player_returns_representation():
    def handler(request):
        body = json.loads(request.content)
        return httpx.Response(201, json=[{**body[0], "id": "new-id"}])

    client, transport = make_client(handler)
    row = await client.insert_player(
        {"name": "Seb", "positions": ["forward"], "is_present": True, "group_id": "7"}
    )

    assert row["id"] == "new-id"
    assert row["name"] == "Seb"
    request = transport.requests[0]
    assert request.method == "POST"
    assert request.headers["prefer"] == "return=representation"
    assert json.loads(request.content) == [
        {"nom": "Seb", "positions": ["forward"], "group_id": "7", "est_present": True}
    ]


async def test_upsert_players_merges_duplicates():
    client, transport = make_client(lambda r: httpx.Response(201))
    await client.upsert_players(
        [{"id": "1", "name": "Omar", "positions": ["defender"], "score": 7.0,
          "is_present": False, "group_id": "7"}]
    )

    request = transport.requests[0]
    assert "resolution=merge-duplicates" in request.headers["prefer"]
    assert json.loads(request.content) == [
        {"id": "1", "nom": "Omar", "positions": ["defender"], "group_id": "7",
         "est_present": False, "score": 7.0}
    ]


async def test_upsert_without_scores_omits_score_column():
    client, transport = make_client(lambda r: httpx.Response(201))
    await client.upsert_players(
        [{"id": "1", "name": "Omar", "positions": ["defender"], "score": None,
          "is_present": True, "group_id": "7"}]
    )

    body = json.loads(transport.requests[0].content)
    assert "score" not in body[0]


async def test_mixed_batch_sends_score_on_every_row():
    client, transport = make_client(lambda r: httpx.Response(201))
    await client.upsert_players(
        [
            {"id": "1", "name": "Omar", "positions": ["defender"], "score": 7.0,
             "is_present": True, "group_id": "7"},
            {"id": "2", "name": "Seb", "positions": ["forward"], "score": None,
             "is_present": True, "group_id": "7"},
        ]
    )

    body = json.loads(transport.requests[0].content)
    assert [row["score"] for row in body] == [7.0, None]
    assert body[0].keys() == body[1].keys()


async def test_empty_batches_skip_requests():
    client, transport = make_client(lambda r: httpx.Response(200))
    await client.upsert_players([])
    await client.update_presence([], False)
    assert transport.requests == []


async def test_update_presence_filters_ids():
    client, transport = make_client(lambda r: httpx.Response(204))
    await client.update_presence(["a", "b"], False)

    request = transport.requests[0]
    assert request.method == "PATCH"
    assert request.url.params["id"] == "in.(a,b)"
    assert json.loads(request.content) == {"est_present": False}


async def test_delete_player():
    client, transport = make_client(lambda r: httpx.Response(204))
    await client.delete_player("a")

    request = transport.requests[0]
    assert request.method == "DELETE"
    assert request.url.params["id"] == "eq.a"


async def test_http_error_raises_store_error():
    client, _ = make_client(lambda r: httpx.Response(409, json={"message": "conflict"}))
    with pytest.raises(RosterStoreError, match="409"):
        await client.upsert_players(
            [{"id": "1", "name": "Omar", "positions": ["defender"], "group_id": "7"}]
        )


async def test_non_json_body_raises_store_error():
    client, _ = make_client(lambda r: httpx.Response(200, text="<html>gateway</html>"))
    with pytest.raises(RosterStoreError):
        await client.fetch_players()


async def test_transport_error_raises_store_error():
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    client, _ = make_client(handler)
    with pytest.raises(RosterStoreError):
        await client.fetch_players()
