"""REST endpoints for roster management."""

from typing import Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from team_balancer.exceptions import (
    GroupNotFoundError,
    PlayerNotFoundError,
    RosterStoreError,
)
from team_balancer.models.teams import SkillLevel
from team_balancer.services.roster_service import RosterService
from team_balancer.utils.role_normalizer import role_priority


router = APIRouter(prefix="/api/roster", tags=["roster"])


def get_roster_service(request: Request) -> RosterService:
    return request.app.state.roster_service


async def ensure_loaded(service: RosterService) -> None:
    """Fetch the roster once; a store failure surfaces as 502."""
    if service.is_loaded:
        return
    try:
        await service.load()
    except RosterStoreError as e:
        raise HTTPException(status_code=502, detail=str(e))


class AddPlayerRequest(BaseModel):
    name: str = Field(min_length=1)
    positions: list[str] = Field(min_length=1)
    score: Optional[float] = None
    level: Optional[SkillLevel] = None


class ActiveGroupRequest(BaseModel):
    group_id: str


@router.get("/groups")
async def list_groups(request: Request):
    """List groups with their player counts."""
    service = get_roster_service(request)
    await ensure_loaded(service)
    return {
        "active_group_id": service.active_group_id,
        "groups": [
            {
                "id": g.id,
                "name": g.name,
                "player_count": len(g.players),
                "present_count": len(g.present_players),
            }
            for g in service.groups
        ],
    }


@router.put("/groups/active")
async def switch_group(request: Request, body: ActiveGroupRequest):
    service = get_roster_service(request)
    await ensure_loaded(service)
    try:
        group = service.switch_group(body.group_id)
    except GroupNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"active_group_id": group.id, "name": group.name}


@router.get("/players")
async def list_players(request: Request):
    """Players of the active group, by role then name."""
    service = get_roster_service(request)
    await ensure_loaded(service)
    players = sorted(
        service.active_players,
        key=lambda p: (role_priority(p.positions[0]), p.name.lower()),
    )
    return {
        "group_id": service.active_group_id,
        "players": [p.to_dict() for p in players],
    }


@router.post("/players", status_code=201)
async def add_player(request: Request, body: AddPlayerRequest):
    service = get_roster_service(request)
    await ensure_loaded(service)

    # An explicit score wins over a level preset
    score = body.score
    if score is None and body.level is not None:
        score = float(body.level.value)

    try:
        player = await service.add_player(body.name, body.positions, score=score)
    except GroupNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except RosterStoreError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return player.to_dict()


@router.post("/players/{player_id}/presence")
async def toggle_presence(request: Request, player_id: str):
    """Flip a player's presence locally; persisted by /sync."""
    service = get_roster_service(request)
    await ensure_loaded(service)
    try:
        player = service.toggle_presence(player_id)
    except (GroupNotFoundError, PlayerNotFoundError) as e:
        raise HTTPException(status_code=404, detail=str(e))
    return player.to_dict()


@router.post("/presence/reset")
async def reset_presences(request: Request):
    service = get_roster_service(request)
    await ensure_loaded(service)
    try:
        await service.reset_presences()
    except GroupNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except RosterStoreError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return {"status": "reset", "group_id": service.active_group_id}


@router.post("/sync")
async def sync_roster(request: Request):
    """Persist the active group's players to the store."""
    service = get_roster_service(request)
    await ensure_loaded(service)
    try:
        count = await service.sync()
    except GroupNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except RosterStoreError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return {"status": "synced", "players": count}


@router.delete("/players/{player_id}")
async def delete_player(request: Request, player_id: str):
    service = get_roster_service(request)
    await ensure_loaded(service)
    try:
        await service.delete_player(player_id)
    except PlayerNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except RosterStoreError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return {"status": "deleted", "player_id": player_id}
