"""REST endpoint for generating teams."""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from team_balancer.api.routes.roster import ensure_loaded, get_roster_service
from team_balancer.config import settings
from team_balancer.exceptions import RosterStoreError, UnknownRoleError
from team_balancer.models.teams import BalanceMode, TeamAssignment, UnknownRolePolicy
from team_balancer.services.team_balancer_service import TeamBalancer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/teams", tags=["teams"])


class GenerateTeamsRequest(BaseModel):
    mode: Optional[BalanceMode] = None
    seed: Optional[int] = None  # Reproducible split
    refresh: bool = False  # Re-fetch the roster before balancing


@router.post("")
async def generate_teams(request: Request, body: Optional[GenerateTeamsRequest] = None):
    """Balance the active group's present players into two teams.

    Every call draws fresh randomness unless a seed is given, so repeated
    calls act as "reshuffle".
    """
    body = body or GenerateTeamsRequest()
    service = get_roster_service(request)

    if body.refresh:
        try:
            await service.load()
        except RosterStoreError as e:
            raise HTTPException(status_code=502, detail=str(e))
    else:
        await ensure_loaded(service)

    players = service.list_present_players()
    # Each request gets its own generator
    balancer = TeamBalancer(
        seed=body.seed,
        score_jitter=settings.score_jitter,
        unknown_role_policy=UnknownRolePolicy(settings.unknown_role_policy),
    )
    mode = body.mode
    if mode is None and settings.default_mode:
        mode = BalanceMode(settings.default_mode)

    try:
        assignment = balancer.balance(players, mode=mode)
    except UnknownRoleError as e:
        raise HTTPException(status_code=422, detail=str(e))

    logger.info(
        f"Generated teams for group {service.active_group_id}: "
        f"{len(assignment.team_a)} vs {len(assignment.team_b)} ({assignment.mode.value})"
    )
    return _serialize_assignment(assignment, service.active_group_id)


def _serialize_assignment(assignment: TeamAssignment, group_id: Optional[str]) -> dict:
    summary = assignment.summary()
    return {
        "group_id": group_id,
        "mode": assignment.mode.value,
        "team_a": {
            **summary["team_a"],
            "players": [p.to_dict() for p in assignment.team_a],
        },
        "team_b": {
            **summary["team_b"],
            "players": [p.to_dict() for p in assignment.team_b],
        },
        "excluded": [p.to_dict() for p in assignment.excluded],
    }
