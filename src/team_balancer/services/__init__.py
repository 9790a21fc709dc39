"""Business logic services."""

from team_balancer.services.roster_service import RosterService
from team_balancer.services.team_balancer_service import (
    TeamBalancer,
    balance,
    ensure_numeric_balance,
)

__all__ = [
    "RosterService",
    "TeamBalancer",
    "balance",
    "ensure_numeric_balance",
]
